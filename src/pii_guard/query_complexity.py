"""Query complexity — a coarse structural weight used for warnings.

Counts are regex hits over upper-cased text, so keywords inside string
literals or comments count too.  The recursive-CTE flag is only a proxy
(``WITH`` and ``UNION`` both present); a plain CTE over a UNION trips it.
"""

from __future__ import annotations
import re

from .query_safety import normalize_query
from .types import ComplexityTier, QueryComplexity

AGGREGATE_FUNCTIONS: tuple[str, ...] = (
    "COUNT", "SUM", "AVG", "MIN", "MAX", "GROUP_CONCAT",
)

_JOIN_RE = re.compile(r"\bJOIN\b")
_SUBQUERY_RE = re.compile(r"\(\s*SELECT\b")
_AGGREGATE_RES = tuple(re.compile(rf"\b{fn}\s*\(") for fn in AGGREGATE_FUNCTIONS)
_WINDOW_RE = re.compile(r"\bOVER\s*\(")
_SELECT_STAR = "SELECT *"

# Advisory thresholds
MAX_JOINS_BEFORE_WARNING = 5
JOINS_NEEDING_INDEXES = 3
SUBQUERIES_NEEDING_REWRITE = 2


def evaluate_query_complexity(query: str) -> QueryComplexity:
    normalized = normalize_query(query)
    return QueryComplexity(
        join_count=len(_JOIN_RE.findall(normalized)),
        subquery_count=len(_SUBQUERY_RE.findall(normalized)),
        aggregate_count=sum(len(r.findall(normalized)) for r in _AGGREGATE_RES),
        has_window_functions=_WINDOW_RE.search(normalized) is not None,
        has_recursive_cte="WITH" in normalized and "UNION" in normalized,
    )


def complexity_warnings(complexity: QueryComplexity) -> list[str]:
    """Warnings attached to a validation report."""
    warnings: list[str] = []
    if complexity.tier is ComplexityTier.VERY_COMPLEX:
        warnings.append("Query is very complex and may have performance implications")
    if complexity.join_count > MAX_JOINS_BEFORE_WARNING:
        warnings.append(
            f"Query contains {complexity.join_count} joins which may impact performance"
        )
    return warnings


def cost_recommendations(query: str, complexity: QueryComplexity | None = None) -> list[str]:
    """Recommendations attached to a cost estimate."""
    complexity = complexity or evaluate_query_complexity(query)
    recs: list[str] = []
    if complexity.join_count > JOINS_NEEDING_INDEXES:
        recs.append("Consider adding appropriate indexes for join operations")
    if complexity.subquery_count > SUBQUERIES_NEEDING_REWRITE:
        recs.append("Consider rewriting subqueries as CTEs or joins for better performance")
    if _SELECT_STAR in normalize_query(query):
        recs.append("Avoid SELECT * and specify only required columns")
    return recs
