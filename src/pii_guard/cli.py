"""CLI interface for pii-guard — designed to be called by a host process.

Usage:
    # Mask rows (stdin: JSON array of row objects, stdout: masked rows + counts)
    echo '[{"ssn":"123-45-6789","balance":"1042.50"}]' | \
        python -m pii_guard.cli filter-rows

    # Mask a single value for a column
    echo '4111 1111 1111 1111' | python -m pii_guard.cli mask-value --column notes

    # Safety-check a query (exit status 1 when unsafe)
    echo 'SELECT * FROM t; DROP TABLE t' | python -m pii_guard.cli check-query

    # Complexity report with warnings and recommendations
    echo 'SELECT a FROM t JOIN u ON ...' | python -m pii_guard.cli complexity

    # Column-name classification
    python -m pii_guard.cli is-sensitive bank_account_number

    # Summarize showplan XML
    python -m pii_guard.cli plan-summary < plan.xml
"""

from __future__ import annotations
import argparse
import json
import os
import sys

from .config import configure_logging, create_guard, load_config, load_from_yaml
from .exceptions import PiiGuardError
from .middleware import QueryGuard
from .plan import summarize_plan
from .query_complexity import complexity_warnings, cost_recommendations, evaluate_query_complexity
from .query_safety import evaluate_query_safety


DEFAULT_CONFIG = os.environ.get("PII_GUARD_CONFIG", "")
DEFAULT_LOG_LEVEL = os.environ.get("PII_GUARD_LOG_LEVEL", "WARNING")


def _build_guard(args: argparse.Namespace) -> QueryGuard:
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    if args.max_rows is not None:
        cfg["max_rows"] = args.max_rows
    return create_guard(cfg)


def _emit(data: object) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False, default=str)
    sys.stdout.write("\n")


def cmd_filter_rows(args: argparse.Namespace) -> int:
    """Mask rows given as a JSON array on stdin."""
    guard = _build_guard(args)
    rows = json.loads(sys.stdin.read())
    if not isinstance(rows, list):
        raise PiiGuardError("filter-rows expects a JSON array of objects")
    if guard.max_rows is not None:
        rows = rows[:guard.max_rows]
    _emit(guard.redactor.filter_rows(rows).to_dict())
    return 0


def cmd_mask_value(args: argparse.Namespace) -> int:
    """Mask one value from stdin as if it came from --column."""
    guard = _build_guard(args)
    value = sys.stdin.read().rstrip("\n")
    outcome = guard.redactor.mask_value(value, args.column)
    _emit({
        "column": args.column,
        "masked": outcome.masked,
        "was_masked": outcome.was_masked,
        "rule": outcome.rule,
    })
    return 0


def cmd_check_query(args: argparse.Namespace) -> int:
    """Safety-check query text on stdin."""
    verdict = evaluate_query_safety(sys.stdin.read())
    _emit(verdict.to_dict())
    return 0 if verdict.is_safe else 1


def cmd_complexity(args: argparse.Namespace) -> int:
    """Complexity report for query text on stdin."""
    query = sys.stdin.read()
    complexity = evaluate_query_complexity(query)
    _emit({
        **complexity.to_dict(),
        "warnings": complexity_warnings(complexity),
        "recommendations": cost_recommendations(query, complexity),
    })
    return 0


def cmd_is_sensitive(args: argparse.Namespace) -> int:
    """Classify a column name."""
    guard = _build_guard(args)
    column = guard.redactor.columns.classify(args.column)
    _emit({
        "column": args.column,
        "is_sensitive": column.is_sensitive,
        "is_monetary": column.is_monetary,
        "implied_kind": column.implied_kind.name if column.implied_kind else None,
    })
    return 0


def cmd_plan_summary(args: argparse.Namespace) -> int:
    """Summarize showplan XML on stdin."""
    _emit(summarize_plan(sys.stdin.read()).to_dict())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pii-guard",
        description="Sensitive-data masking and query safety checks",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="YAML config path")
    parser.add_argument("--max-rows", type=int, default=None, help="Row cap for filter-rows")
    parser.add_argument("--log-level", default=DEFAULT_LOG_LEVEL, help="Log level (stderr)")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("filter-rows", help="Mask rows (JSON array on stdin)")
    mask = sub.add_parser("mask-value", help="Mask a single value (stdin)")
    mask.add_argument("--column", required=True, help="Column the value came from")
    sub.add_parser("check-query", help="Safety-check a query (stdin)")
    sub.add_parser("complexity", help="Query complexity report (stdin)")
    sens = sub.add_parser("is-sensitive", help="Classify a column name")
    sens.add_argument("column")
    sub.add_parser("plan-summary", help="Summarize showplan XML (stdin)")

    args = parser.parse_args(argv)

    cmds = {
        "filter-rows": cmd_filter_rows,
        "mask-value": cmd_mask_value,
        "check-query": cmd_check_query,
        "complexity": cmd_complexity,
        "is-sensitive": cmd_is_sensitive,
        "plan-summary": cmd_plan_summary,
    }
    try:
        configure_logging(args.log_level)
        return cmds[args.command](args)
    except (PiiGuardError, ValueError) as e:
        # JSONDecodeError is a ValueError
        sys.stderr.write(f"pii-guard: {e}\n")
        return 2


if __name__ == "__main__":
    sys.exit(main())
