"""pii-guard — value masking and query safety checks for tabular data access."""

from .columns import ColumnClassifier, is_column_sensitive, looks_monetary
from .config import create_guard, load_config, load_from_yaml
from .exceptions import ConfigError, InvalidArgumentError, PiiGuardError, UnsafeQueryError
from .masking import mask_as
from .middleware import QueryGuard
from .patterns import contains_pii
from .plan import PlanSummary, summarize_plan
from .query_complexity import evaluate_query_complexity
from .query_safety import ensure_query_safe, evaluate_query_safety
from .redactor import Redactor, RedactorConfig, filter_row, filter_rows, mask_value
from .streaming import StreamingRowFilter
from .types import (
    ColumnClassification, ComplexityTier, EntityKind, QueryComplexity,
    RedactionOutcome, RowSetResult, SafetyVerdict,
)
from .vocabulary import DEFAULT_TABLES, ClassificationTables

__all__ = [
    "Redactor", "RedactorConfig",
    "mask_value", "filter_row", "filter_rows", "mask_as",
    "ColumnClassifier", "is_column_sensitive", "looks_monetary", "contains_pii",
    "ClassificationTables", "DEFAULT_TABLES",
    "evaluate_query_safety", "ensure_query_safe", "evaluate_query_complexity",
    "summarize_plan", "PlanSummary",
    "QueryGuard", "StreamingRowFilter",
    "create_guard", "load_config", "load_from_yaml",
    "EntityKind", "ComplexityTier", "ColumnClassification", "RedactionOutcome",
    "RowSetResult", "SafetyVerdict", "QueryComplexity",
    "PiiGuardError", "InvalidArgumentError", "UnsafeQueryError", "ConfigError",
]
__version__ = "0.1.0"
