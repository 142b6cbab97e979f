"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EntityKind(Enum):
    """Closed set of sensitive entity kinds, one masking rule each."""
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    NATIONAL_ID = "SSN"
    PAYMENT_CARD = "CARD"
    BANK_ACCOUNT = "ACCOUNT"
    ROUTING_NUMBER = "ROUTING"
    DELIMITED_ACCOUNT = "DELIMITED_ACCOUNT"
    IBAN = "IBAN"
    PASSWORD = "PASSWORD"
    GENERIC = "GENERIC"

    @property
    def sentinel(self) -> str:
        """Fixed mask emitted when a value is too short for its rule."""
        if self is EntityKind.DELIMITED_ACCOUNT:
            return "[MASKED_ACCOUNT]"
        return f"[MASKED_{self.value}]"


class ComplexityTier(Enum):
    SIMPLE = "Simple"
    MEDIUM = "Medium"
    COMPLEX = "Complex"
    VERY_COMPLEX = "VeryComplex"


@dataclass(frozen=True, slots=True)
class ColumnClassification:
    """What a column name alone says about its contents."""
    is_monetary: bool
    is_sensitive: bool
    implied_kind: EntityKind | None = None   # set only when is_sensitive


@dataclass(frozen=True, slots=True)
class RedactionOutcome:
    """Result of running one value through the redaction policy."""
    original: Any
    masked: Any
    rule: str | None = None     # name of the rule that masked, if any

    @property
    def was_masked(self) -> bool:
        return self.original != self.masked


@dataclass(slots=True)
class RowSetResult:
    """Filtered rows plus how many of them had at least one masked value."""
    rows: list[dict[str, Any]] = field(default_factory=list)
    masked_row_count: int = 0

    @property
    def total_row_count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": self.rows,
            "masked_row_count": self.masked_row_count,
            "total_row_count": self.total_row_count,
        }


@dataclass(frozen=True, slots=True)
class SafetyVerdict:
    """Outcome of the query safety scan.  is_safe iff there are no violations."""
    violations: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    contains_write_operation: bool = False
    contains_dangerous_function: bool = False

    @property
    def is_safe(self) -> bool:
        return not self.violations

    @property
    def message(self) -> str:
        if not self.is_safe:
            return "Query contains unsafe operations"
        if self.warnings:
            return "Query passed safety check but has warnings"
        return "Query is safe to execute"

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_safe": self.is_safe,
            "message": self.message,
            "violations": list(self.violations),
            "warnings": list(self.warnings),
            "contains_write_operation": self.contains_write_operation,
            "contains_dangerous_function": self.contains_dangerous_function,
        }


@dataclass(frozen=True, slots=True)
class QueryComplexity:
    """Structural weight of a query.  A report, never mutated."""
    join_count: int = 0
    subquery_count: int = 0
    aggregate_count: int = 0
    has_window_functions: bool = False
    has_recursive_cte: bool = False

    @property
    def score(self) -> int:
        return (
            self.join_count * 2
            + self.subquery_count * 3
            + self.aggregate_count
            + (5 if self.has_window_functions else 0)
            + (10 if self.has_recursive_cte else 0)
        )

    @property
    def tier(self) -> ComplexityTier:
        score = self.score
        if score <= 3:
            return ComplexityTier.SIMPLE
        if score <= 8:
            return ComplexityTier.MEDIUM
        if score <= 15:
            return ComplexityTier.COMPLEX
        return ComplexityTier.VERY_COMPLEX

    def to_dict(self) -> dict[str, Any]:
        return {
            "join_count": self.join_count,
            "subquery_count": self.subquery_count,
            "aggregate_count": self.aggregate_count,
            "has_window_functions": self.has_window_functions,
            "has_recursive_cte": self.has_recursive_cte,
            "score": self.score,
            "tier": self.tier.value,
        }
