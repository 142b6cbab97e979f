"""Query guard middleware — drop-in for a host that runs SQL and returns rows.

Usage as a function wrapper:

    guard = QueryGuard.create()

    # Before touching the database
    guard.pre_execute(query)             # raises UnsafeQueryError if unsafe

    # After materializing rows
    safe_rows = guard.post_fetch(rows)

Or let the guard wrap the host's executor:

    result = guard.run(query, lambda q: cursor_rows(q), max_rows=1000)
"""

from __future__ import annotations
from dataclasses import dataclass
from itertools import islice
from typing import Any, Callable, Iterable, Mapping

from .query_complexity import complexity_warnings, evaluate_query_complexity
from .query_safety import ensure_query_safe, evaluate_query_safety
from .redactor import Redactor, RedactorConfig
from .types import RowSetResult, SafetyVerdict

Row = Mapping[str, Any]
Executor = Callable[[str], Iterable[Row]]


@dataclass
class QueryGuard:
    """Sits between the host's query tools and the database."""

    redactor: Redactor
    max_rows: int | None = None

    @classmethod
    def create(
        cls,
        *,
        config: RedactorConfig | None = None,
        max_rows: int | None = None,
    ) -> "QueryGuard":
        """Factory — creates a guard with its own redactor."""
        return cls(redactor=Redactor(config), max_rows=max_rows)

    def pre_execute(self, query: str) -> SafetyVerdict:
        """Safety-check a query before any session is opened."""
        return ensure_query_safe(query)

    def post_fetch(self, rows: Iterable[Row]) -> list[dict[str, Any]]:
        """Mask sensitive values in rows about to leave the host."""
        return self.redactor.filter_rows(rows).rows

    def analyze(self, query: str) -> dict[str, Any]:
        """Safety verdict plus complexity report, without executing anything."""
        verdict = evaluate_query_safety(query)
        complexity = evaluate_query_complexity(query)
        return {
            "safety": verdict.to_dict(),
            "complexity": complexity.to_dict(),
            "warnings": complexity_warnings(complexity),
        }

    def run(
        self,
        query: str,
        executor: Executor,
        *,
        max_rows: int | None = None,
    ) -> RowSetResult:
        """Check, execute via the host callable, cap, and mask."""
        self.pre_execute(query)
        limit = max_rows if max_rows is not None else self.max_rows
        rows = executor(query)
        if limit is not None:
            rows = islice(rows, limit)
        return self.redactor.filter_rows(rows)

    def is_column_sensitive(self, column_name: str) -> bool:
        return self.redactor.is_column_sensitive(column_name)

    @property
    def stats(self) -> dict:
        return {
            "rules": [rule.name for rule in self.redactor.rules],
            "max_rows": self.max_rows,
        }
