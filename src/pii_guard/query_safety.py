"""Query safety scan — decides whether query text may go near the database.

This is a text scan, not a parser.  Keyword matching is deliberately
loose: ``" UPDATE "`` anywhere in the upper-cased text counts as a write,
even inside a string literal.  Over-matching is preferred to letting a
write through.

Every check runs; violations and warnings are collected in full rather
than stopping at the first hit.
"""

from __future__ import annotations
import re

import structlog

from .exceptions import InvalidArgumentError, UnsafeQueryError
from .types import SafetyVerdict

logger = structlog.get_logger()

WRITE_OPERATIONS: tuple[str, ...] = (
    "INSERT", "UPDATE", "DELETE", "DROP", "CREATE", "ALTER", "TRUNCATE", "MERGE",
)

DANGEROUS_FUNCTIONS: tuple[str, ...] = (
    "xp_cmdshell", "sp_configure", "OPENROWSET", "OPENDATASOURCE",
)

# Smells only: recorded as warnings, never make a query unsafe
INJECTION_PATTERNS: tuple[str, ...] = (
    r";\s*(DROP|DELETE|INSERT|UPDATE)",
    r"UNION\s+SELECT",
    r"--\s*$",
    r"\/\*.*\*\/",
)
_INJECTION_RES = tuple(
    (p, re.compile(p, re.IGNORECASE)) for p in INJECTION_PATTERNS
)


def normalize_query(query: str) -> str:
    if not isinstance(query, str):
        raise InvalidArgumentError(
            f"query must be a string, got {type(query).__name__}"
        )
    return query.strip().upper()


def evaluate_query_safety(query: str) -> SafetyVerdict:
    """Scan query text for writes, dangerous functions and injection smells."""
    normalized = normalize_query(query)
    violations: list[str] = []
    warnings: list[str] = []
    has_write = False
    has_dangerous = False

    for op in WRITE_OPERATIONS:
        if normalized.startswith(op + " ") or f" {op} " in normalized:
            has_write = True
            violations.append(f"Query contains write operation: {op}")

    for fn in DANGEROUS_FUNCTIONS:
        if fn.upper() in normalized:
            has_dangerous = True
            violations.append(f"Query contains dangerous function: {fn}")

    for pattern, regex in _INJECTION_RES:
        if regex.search(normalized):
            warnings.append(f"Potential SQL injection pattern detected: {pattern}")

    return SafetyVerdict(
        violations=tuple(violations),
        warnings=tuple(warnings),
        contains_write_operation=has_write,
        contains_dangerous_function=has_dangerous,
    )


def ensure_query_safe(query: str) -> SafetyVerdict:
    """Return the verdict, or raise UnsafeQueryError if the query is unsafe.

    This is the gate plan, validate and cost-estimate callers go through
    before opening a database session.

    Raises:
        UnsafeQueryError: carrying the verdict and its violation list.
    """
    verdict = evaluate_query_safety(query)
    if not verdict.is_safe:
        logger.info("query_rejected", violations=list(verdict.violations))
        raise UnsafeQueryError(verdict)
    return verdict
