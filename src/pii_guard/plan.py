"""Plan summary — pulls cost and operators out of showplan XML text.

The XML comes from the host's plan collaborator; here it is just text.
Unparseable numbers become 0 rather than failing the whole summary.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

_SUBTREE_COST_RE = re.compile(r'StatementSubTreeCost="([^"]+)"')
_REL_OP_RE = re.compile(
    r'<RelOp.*?PhysicalOp="([^"]+)".*?EstimateCPU="([^"]+)".*?EstimateRows="([^"]+)"'
)

VERY_HIGH_COST_ADVICE = "Consider optimizing this query as it has a very high estimated cost"


@dataclass(frozen=True, slots=True)
class PlanOperator:
    operator_type: str
    estimated_cost: Decimal
    estimated_rows: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "operator_type": self.operator_type,
            "estimated_cost": str(self.estimated_cost),
            "estimated_rows": str(self.estimated_rows),
        }


@dataclass(frozen=True, slots=True)
class PlanSummary:
    estimated_cost: Decimal = Decimal(0)
    operators: tuple[PlanOperator, ...] = ()
    recommendations: tuple[str, ...] = field(default=())

    @property
    def resource_usage(self) -> str:
        return rate_cost(self.estimated_cost)

    def to_dict(self) -> dict[str, Any]:
        return {
            "estimated_cost": str(self.estimated_cost),
            "resource_usage": self.resource_usage,
            "operators": [op.to_dict() for op in self.operators],
            "recommendations": list(self.recommendations),
        }


def _decimal(text: str) -> Decimal:
    try:
        value = Decimal(text)
    except InvalidOperation:
        return Decimal(0)
    return value if value.is_finite() else Decimal(0)


def rate_cost(cost: Decimal) -> str:
    if cost < 1:
        return "Low"
    if cost < 10:
        return "Medium"
    if cost < 100:
        return "High"
    return "Very High"


def summarize_plan(plan_xml: str) -> PlanSummary:
    """Estimated cost plus one PlanOperator per <RelOp> element."""
    if not plan_xml:
        return PlanSummary()

    match = _SUBTREE_COST_RE.search(plan_xml)
    cost = _decimal(match.group(1)) if match else Decimal(0)

    operators = tuple(
        PlanOperator(
            operator_type=m.group(1),
            estimated_cost=_decimal(m.group(2)),
            estimated_rows=_decimal(m.group(3)),
        )
        for m in _REL_OP_RE.finditer(plan_xml)
    )

    recs = (VERY_HIGH_COST_ADVICE,) if rate_cost(cost) == "Very High" else ()
    return PlanSummary(estimated_cost=cost, operators=operators, recommendations=recs)
