# homepro/services/dashboard.py
from __future__ import annotations

import math
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..domain.recurrence import add_months
from ..models import MaintenanceHistory, MaintenanceTask

WARRANTY_BUCKETS = ((30, "warrantiesExpiring30"), (60, "warrantiesExpiring60"), (90, "warrantiesExpiring90"))
ATTENTION_LIFESPAN_PCT = 80
UPCOMING_DAYS = 7
LIST_LIMIT = 10


def empty_dashboard() -> dict:
    return {
        "stats": {
            "totalTasks": 0,
            "activeTasks": 0,
            "upcomingTasks": 0,
            "overdueTasks": 0,
            "tasksDueToday": 0,
            "completedThisMonth": 0,
            "totalSpending": 0,
            "monthlySpending": 0,
            "yearlySpending": 0,
            "completionRate": 0,
        },
        "alerts": {
            "overdueTasks": [],
            "tasksDueToday": [],
            "warrantiesExpiring30": [],
            "warrantiesExpiring60": [],
            "warrantiesExpiring90": [],
            "itemsNeedingAttention": [],
        },
        "tasks": {"upcoming": [], "overdue": [], "dueToday": []},
        "spending": {"monthly": [], "yearly": [], "byCategory": []},
        "activity": [],
        "homes": [],
    }


def home_ref(h) -> Optional[dict]:
    if h is None:
        return None
    return {"id": h.id, "address": h.address, "city": h.city}


def _task_line(t: MaintenanceTask, *, due: bool = True, description: bool = False) -> dict:
    out = {"id": t.id, "name": t.name, "category": t.category, "priority": t.priority, "home": home_ref(t.home)}
    if description:
        out["description"] = t.description
    if due:
        out["nextDueDate" if description else "dueDate"] = t.next_due_date
    return out


def bucket_tasks(tasks: Iterable[MaintenanceTask], now: datetime) -> dict[str, list[MaintenanceTask]]:
    """Split open tasks into overdue (before today), due today and due within the next week."""
    today = datetime(now.year, now.month, now.day)
    tomorrow = today + timedelta(days=1)
    week = today + timedelta(days=UPCOMING_DAYS)

    out: dict[str, list[MaintenanceTask]] = {"overdue": [], "dueToday": [], "upcoming": []}
    for t in tasks:
        if t.completed:
            continue
        due = t.next_due_date
        if due < today:
            out["overdue"].append(t)
        else:
            if due < tomorrow:
                out["dueToday"].append(t)
            if due <= week:
                out["upcoming"].append(t)
    return out


def _cost_between(history: Iterable[MaintenanceHistory], start: datetime, end: datetime) -> float:
    return sum(float(h.cost or 0) for h in history if start <= h.service_date < end)


def spending_trends(history: list[MaintenanceHistory], now: datetime) -> dict:
    """Last 12 calendar months and last 5 calendar years of recorded service cost, oldest first."""
    first_of_month = datetime(now.year, now.month, 1)
    monthly = []
    for i in range(11, -1, -1):
        start = add_months(first_of_month, -i)
        monthly.append({"month": start.strftime("%b %Y"), "spending": _cost_between(history, start, add_months(start, 1))})

    yearly = []
    for year in range(now.year - 4, now.year + 1):
        spent = _cost_between(history, datetime(year, 1, 1), datetime(year + 1, 1, 1))
        yearly.append({"year": str(year), "spending": spent})
    return {"monthly": monthly, "yearly": yearly}


def _inventory_rows(homes) -> list[tuple[str, str, object]]:
    rows: list[tuple[str, str, object]] = []
    for h in homes:
        rows.extend(("appliance", a.appliance_type, a) for a in h.appliances)
        rows.extend(("exterior", f.feature_type, f) for f in h.exterior_features)
        rows.extend(("interior", f.feature_type, f) for f in h.interior_features)
    return rows


def warranty_alerts(homes, now: datetime) -> dict[str, list[dict]]:
    out: dict[str, list[dict]] = {key: [] for _, key in WARRANTY_BUCKETS}
    for kind, name, item in _inventory_rows(homes):
        if item.warranty_expiry is None:
            continue
        days = math.ceil((item.warranty_expiry - now).total_seconds() / 86400)
        if days < 0:
            continue
        for limit, key in WARRANTY_BUCKETS:
            if days <= limit:
                out[key].append({
                    "id": item.id,
                    "name": name,
                    "type": kind,
                    "brand": item.brand,
                    "model": getattr(item, "model", None),
                    "expiryDate": item.warranty_expiry,
                    "daysUntilExpiry": days,
                    "home": home_ref(item.home),
                })
                break
    return out


def items_needing_attention(homes, now: datetime) -> list[dict]:
    """Inventory and systems at or past 80% of their expected lifespan."""
    rows = _inventory_rows(homes)
    for h in homes:
        rows.extend(("system", s.system_type, s) for s in h.systems)

    out: list[dict] = []
    for kind, name, item in rows:
        if item.install_date is None or not item.expected_lifespan:
            continue
        age = (now - item.install_date).total_seconds() / (86400 * 365)
        pct = age / item.expected_lifespan * 100
        if pct >= ATTENTION_LIFESPAN_PCT:
            out.append({
                "id": item.id,
                "name": name,
                "type": kind,
                "brand": item.brand,
                "model": getattr(item, "model", None),
                "age": round(age),
                "expectedLifespan": item.expected_lifespan,
                "lifespanPercentage": round(pct),
                "home": home_ref(item.home),
            })
    return out


def recent_activity(completions, history, limit: int = LIST_LIMIT) -> list[dict]:
    items = [
        {
            "type": "task_completed",
            "title": c.task.name,
            "description": f"Completed {c.task.category} task",
            "date": c.completed_date,
            "home": home_ref(c.task.home),
            "cost": c.actual_cost,
        }
        for c in completions
    ]
    items.extend(
        {
            "type": "maintenance_recorded",
            "title": h.description,
            "description": f"{h.service_type} service",
            "date": h.service_date,
            "home": home_ref(h.home),
            "cost": h.cost,
        }
        for h in history
    )
    items.sort(key=lambda a: a["date"], reverse=True)
    return items[:limit]


def build_dashboard(
    *,
    homes,
    tasks: list[MaintenanceTask],
    history: list[MaintenanceHistory],
    recent_completions,
    now: datetime,
) -> dict:
    """
    Assemble the dashboard payload from already-loaded rows.

    tasks must exclude currently snoozed ones; homes need their inventory
    and systems loaded.
    """
    if not homes:
        return empty_dashboard()

    buckets = bucket_tasks(tasks, now)
    month_start = datetime(now.year, now.month, 1)
    year_start = datetime(now.year, 1, 1)

    completed_this_month = sum(
        1 for t in tasks
        if t.completed and t.completed_date is not None and month_start <= t.completed_date < add_months(month_start, 1)
    )
    completed = sum(1 for t in tasks if t.completed)
    total = len(tasks)

    by_category: dict[str, float] = defaultdict(float)
    for t in tasks:
        if t.cost_estimate:
            by_category[t.category] += float(t.cost_estimate)

    recent_history = sorted(history, key=lambda h: h.service_date, reverse=True)[:5]

    return {
        "stats": {
            "totalTasks": total,
            "activeTasks": total - completed,
            "upcomingTasks": len(buckets["upcoming"]),
            "overdueTasks": len(buckets["overdue"]),
            "tasksDueToday": len(buckets["dueToday"]),
            "completedThisMonth": completed_this_month,
            "totalSpending": sum(float(h.cost or 0) for h in history),
            "monthlySpending": _cost_between(history, month_start, add_months(month_start, 1)),
            "yearlySpending": _cost_between(history, year_start, datetime(now.year + 1, 1, 1)),
            "completionRate": round(completed / total * 100) if total else 0,
        },
        "alerts": {
            "overdueTasks": [_task_line(t) for t in buckets["overdue"][:LIST_LIMIT]],
            "tasksDueToday": [_task_line(t, due=False) for t in buckets["dueToday"][:LIST_LIMIT]],
            **warranty_alerts(homes, now),
            "itemsNeedingAttention": items_needing_attention(homes, now),
        },
        "tasks": {
            "upcoming": [_task_line(t, description=True) for t in buckets["upcoming"][:LIST_LIMIT]],
            "overdue": [_task_line(t, description=True) for t in buckets["overdue"][:LIST_LIMIT]],
            "dueToday": [_task_line(t, due=False, description=True) for t in buckets["dueToday"][:LIST_LIMIT]],
        },
        "spending": {
            **spending_trends(history, now),
            "byCategory": [{"category": k, "amount": v} for k, v in by_category.items()],
        },
        "activity": recent_activity(recent_completions, recent_history),
        "homes": [{"id": h.id, "address": h.address, "city": h.city, "state": h.state} for h in homes],
    }
