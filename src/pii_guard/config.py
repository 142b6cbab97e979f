"""YAML/dict config loader for pii-guard.

Supports loading from a YAML file or a plain dict (for embedding
in a larger host config).

Example YAML:

    pii_guard:
      enabled: true
      use_presidio: false
      language: en
      score_threshold: 0.35
      entities:
        - PERSON
        - LOCATION
      skip_kinds:
        - DELIMITED_ACCOUNT
      allow_list:
        - support@example.com
      max_rows: 1000
      vocabulary:
        extra_sensitive_columns: [tax_id, nin]
        extra_balance_columns: [exposure]
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Any

import structlog
import yaml

from .exceptions import ConfigError
from .middleware import QueryGuard
from .redactor import Redactor, RedactorConfig
from .types import EntityKind, RedactionOutcome
from .vocabulary import DEFAULT_TABLES


class _PassthroughRedactor(Redactor):
    """Redactor that never masks — used when the guard is disabled."""

    def _build_rules(self) -> tuple:
        return ()

    def mask_value(self, value: Any, column_name: str) -> RedactionOutcome:
        self.columns.classify(column_name)   # still rejects a non-string name
        return RedactionOutcome(value, value)


def _kinds(names: list[str]) -> set[EntityKind]:
    try:
        return {EntityKind[name.upper()] for name in names}
    except KeyError as e:
        raise ConfigError(f"Unknown entity kind in skip_kinds: {e.args[0]}") from e


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "pii_guard" key or flat
    if "pii_guard" in data:
        data = data["pii_guard"] or {}
    if not isinstance(data, dict):
        raise ConfigError(f"pii_guard config must be a mapping, got {type(data).__name__}")

    vocab = data.get("vocabulary") or {}
    if not isinstance(vocab, dict):
        raise ConfigError(f"vocabulary must be a mapping, got {type(vocab).__name__}")
    max_rows = data.get("max_rows")
    if max_rows is not None and (not isinstance(max_rows, int) or max_rows < 0):
        raise ConfigError(f"max_rows must be a non-negative integer, got {max_rows!r}")

    return {
        "enabled": data.get("enabled", True),
        "use_presidio": data.get("use_presidio", False),
        "language": data.get("language", "en"),
        "score_threshold": data.get("score_threshold", 0.35),
        "entities": data.get("entities"),
        "skip_kinds": _kinds(data.get("skip_kinds") or []),
        "allow_list": set(data.get("allow_list") or []),
        "max_rows": max_rows,
        "extra_sensitive_columns": list(vocab.get("extra_sensitive_columns") or []),
        "extra_balance_columns": list(vocab.get("extra_balance_columns") or []),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    try:
        with open(path) as f:
            return load_config(yaml.safe_load(f))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not load config from {path}: {e}") from e


def build_redactor_config(cfg: dict[str, Any]) -> RedactorConfig:
    tables = DEFAULT_TABLES.extended(
        sensitive_columns=cfg["extra_sensitive_columns"],
        balance_columns=cfg["extra_balance_columns"],
    )
    return RedactorConfig(
        tables=tables,
        use_presidio=cfg["use_presidio"],
        language=cfg["language"],
        score_threshold=cfg["score_threshold"],
        presidio_entities=cfg.get("entities"),
        skip_kinds=cfg["skip_kinds"],
        allow_list=cfg["allow_list"],
    )


def create_guard(config: dict[str, Any] | None = None) -> QueryGuard:
    """Create a fully configured QueryGuard from a config dict."""
    # Accept either a raw config or the output of load_config
    cfg = config if config and "extra_sensitive_columns" in config else load_config(config)

    if not cfg["enabled"]:
        # Queries are still safety-checked; rows pass through untouched
        return QueryGuard(redactor=_PassthroughRedactor(), max_rows=cfg["max_rows"])

    return QueryGuard(
        redactor=Redactor(build_redactor_config(cfg)),
        max_rows=cfg["max_rows"],
    )


def configure_logging(level: str = "WARNING") -> None:
    """Route structlog output to stderr, dropping events below ``level``."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigError(f"Unknown log level: {level}")
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
