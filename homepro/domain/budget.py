# homepro/domain/budget.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

APPROACHING_THRESHOLD = 80.0
EXCEEDED_THRESHOLD = 100.0

OPEN_ALERT_STATUSES = ("PENDING", "SENT")


class MaterialLike(Protocol):
    purchased: bool
    total_price: Optional[float]


class ToolLike(Protocol):
    purchased: bool
    owned: bool
    rental_cost: Optional[float]
    rental_days: Optional[int]
    purchase_cost: Optional[float]


def material_cost(materials: Iterable[MaterialLike]) -> float:
    return sum(float(m.total_price or 0) for m in materials if m.purchased)


def tool_cost(tools: Iterable[ToolLike]) -> float:
    """Purchased, non-owned tools: rental (daily rate x days) when both are set, else purchase cost."""
    total = 0.0
    for t in tools:
        if not t.purchased or t.owned:
            continue
        if t.rental_cost and t.rental_days:
            total += float(t.rental_cost) * int(t.rental_days)
        elif t.purchase_cost:
            total += float(t.purchase_cost)
    return total


def project_actual_cost(
    actual_cost: Optional[float],
    materials: Iterable[MaterialLike],
    tools: Iterable[ToolLike],
) -> float:
    # a stored actual cost wins; zero counts as unset
    if actual_cost:
        return float(actual_cost)
    return material_cost(materials) + tool_cost(tools)


def percent_used(spent: float, amount: float) -> float:
    if not amount:
        return 0.0
    return spent / amount * 100.0


def threshold_alert_type(pct: float) -> Optional[str]:
    """APPROACHING_LIMIT for [80, 100), EXCEEDED_LIMIT for >= 100, else None."""
    if pct >= EXCEEDED_THRESHOLD:
        return "EXCEEDED_LIMIT"
    if pct >= APPROACHING_THRESHOLD:
        return "APPROACHING_LIMIT"
    return None


def approaching_message(name: str, pct: float, remaining: float) -> str:
    return f'Budget "{name}" is {pct:.1f}% used. Only ${remaining:.2f} remaining.'


def exceeded_message(name: str, overage: float) -> str:
    return f'Budget "{name}" has been exceeded by ${overage:.2f}.'


def project_over_message(name: str, overage: float) -> str:
    return f'Project "{name}" has exceeded its budget by ${overage:.2f}.'


@dataclass(frozen=True)
class ProjectBudgetLine:
    budget: float
    actual_cost: float
    remaining: float
    percent_used: float
    is_over_budget: bool


def project_budget_line(budget: Optional[float], actual: float) -> ProjectBudgetLine:
    b = float(budget or 0)
    if b > 0:
        return ProjectBudgetLine(
            budget=b,
            actual_cost=actual,
            remaining=b - actual,
            percent_used=actual / b * 100.0,
            is_over_budget=actual > b,
        )
    return ProjectBudgetLine(budget=b, actual_cost=actual, remaining=0.0, percent_used=0.0, is_over_budget=False)
