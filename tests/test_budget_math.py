# tests/test_budget_math.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from homepro.domain.budget import (
    approaching_message,
    exceeded_message,
    percent_used,
    project_actual_cost,
    project_budget_line,
    threshold_alert_type,
    tool_cost,
)


@dataclass
class _Material:
    purchased: bool
    total_price: Optional[float]


@dataclass
class _Tool:
    purchased: bool
    owned: bool = False
    rental_cost: Optional[float] = None
    rental_days: Optional[int] = None
    purchase_cost: Optional[float] = None


def test_threshold_boundaries():
    assert threshold_alert_type(79.9) is None
    assert threshold_alert_type(80.0) == "APPROACHING_LIMIT"
    assert threshold_alert_type(99.99) == "APPROACHING_LIMIT"
    assert threshold_alert_type(100.0) == "EXCEEDED_LIMIT"
    assert threshold_alert_type(250.0) == "EXCEEDED_LIMIT"


def test_percent_used_with_zero_amount():
    assert percent_used(50, 0) == 0.0
    assert percent_used(50, 200) == 25.0


def test_tool_cost_prefers_rental_and_skips_owned():
    tools = [
        _Tool(purchased=True, rental_cost=25.0, rental_days=3, purchase_cost=400.0),
        _Tool(purchased=True, purchase_cost=60.0),
        _Tool(purchased=True, owned=True, purchase_cost=999.0),
        _Tool(purchased=False, purchase_cost=999.0),
    ]
    assert tool_cost(tools) == 135.0


def test_project_actual_cost_falls_back_to_line_items():
    materials = [_Material(True, 40.0), _Material(False, 100.0), _Material(True, None)]
    tools = [_Tool(purchased=True, purchase_cost=60.0)]
    assert project_actual_cost(None, materials, tools) == 100.0
    assert project_actual_cost(0, materials, tools) == 100.0
    assert project_actual_cost(250.0, materials, tools) == 250.0


def test_project_budget_line():
    line = project_budget_line(200.0, 250.0)
    assert line.is_over_budget
    assert line.remaining == -50.0
    assert line.percent_used == 125.0

    empty = project_budget_line(None, 80.0)
    assert empty.percent_used == 0.0
    assert not empty.is_over_budget


def test_alert_messages():
    assert approaching_message("Household", 85.0, 150.0) == 'Budget "Household" is 85.0% used. Only $150.00 remaining.'
    assert exceeded_message("Household", 20.5) == 'Budget "Household" has been exceeded by $20.50.'
