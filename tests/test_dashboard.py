# tests/test_dashboard.py
from __future__ import annotations

from datetime import datetime, timedelta
from types import SimpleNamespace

from homepro.services.dashboard import (
    bucket_tasks,
    build_dashboard,
    empty_dashboard,
    items_needing_attention,
    spending_trends,
    warranty_alerts,
)

NOW = datetime(2026, 5, 20, 15, 30)


def _home(**kw):
    base = dict(id=1, address="9 Birch Rd", city="Tulsa", state="OK", systems=[], appliances=[], exterior_features=[], interior_features=[])
    base.update(kw)
    return SimpleNamespace(**base)


def _task(id, due, *, completed=False, completed_date=None, cost=None, category="HVAC", home=None):
    return SimpleNamespace(
        id=id,
        name=f"task {id}",
        description=None,
        category=category,
        priority="MEDIUM",
        next_due_date=due,
        completed=completed,
        completed_date=completed_date,
        cost_estimate=cost,
        home=home,
    )


def _item(id, *, expiry=None, install=None, lifespan=None, home=None):
    return SimpleNamespace(
        id=id,
        appliance_type="FRIDGE",
        brand="LG",
        model="X1",
        warranty_expiry=expiry,
        install_date=install,
        expected_lifespan=lifespan,
        home=home,
    )


def test_buckets_split_on_calendar_days():
    tasks = [
        _task(1, NOW - timedelta(days=1)),
        _task(2, datetime(2026, 5, 20, 0, 0)),
        _task(3, datetime(2026, 5, 20, 23, 0)),
        _task(4, NOW + timedelta(days=3)),
        _task(5, NOW + timedelta(days=30)),
        _task(6, NOW - timedelta(days=10), completed=True),
    ]
    b = bucket_tasks(tasks, NOW)
    assert [t.id for t in b["overdue"]] == [1]
    assert [t.id for t in b["dueToday"]] == [2, 3]
    assert [t.id for t in b["upcoming"]] == [2, 3, 4]


def test_warranty_buckets_are_exclusive():
    home = _home()
    home.appliances = [
        _item(1, expiry=NOW + timedelta(days=10), home=home),
        _item(2, expiry=NOW + timedelta(days=45), home=home),
        _item(3, expiry=NOW + timedelta(days=80), home=home),
        _item(4, expiry=NOW + timedelta(days=200), home=home),
        _item(5, expiry=NOW - timedelta(days=3), home=home),
    ]
    out = warranty_alerts([home], NOW)
    assert [w["id"] for w in out["warrantiesExpiring30"]] == [1]
    assert [w["id"] for w in out["warrantiesExpiring60"]] == [2]
    assert [w["id"] for w in out["warrantiesExpiring90"]] == [3]
    assert out["warrantiesExpiring30"][0]["daysUntilExpiry"] == 10
    assert out["warrantiesExpiring30"][0]["type"] == "appliance"


def test_items_past_eighty_percent_of_lifespan():
    home = _home()
    home.appliances = [
        _item(1, install=NOW - timedelta(days=365 * 9), lifespan=10, home=home),
        _item(2, install=NOW - timedelta(days=365 * 2), lifespan=10, home=home),
        _item(3, install=None, lifespan=10, home=home),
    ]
    out = items_needing_attention([home], NOW)
    assert [i["id"] for i in out] == [1]
    assert out[0]["lifespanPercentage"] == 90
    assert out[0]["age"] == 9


def test_spending_trends_cover_twelve_months_and_five_years():
    history = [
        SimpleNamespace(cost=100.0, service_date=datetime(2026, 5, 2)),
        SimpleNamespace(cost=50.0, service_date=datetime(2025, 6, 1)),
        SimpleNamespace(cost=25.0, service_date=datetime(2022, 3, 1)),
    ]
    out = spending_trends(history, NOW)
    assert len(out["monthly"]) == 12
    assert out["monthly"][0] == {"month": "Jun 2025", "spending": 50.0}
    assert out["monthly"][-1] == {"month": "May 2026", "spending": 100.0}
    assert [y["year"] for y in out["yearly"]] == ["2022", "2023", "2024", "2025", "2026"]
    assert out["yearly"][0]["spending"] == 25.0


def test_build_dashboard_stats():
    home = _home()
    tasks = [
        _task(1, NOW - timedelta(days=2), cost=40.0, home=home),
        _task(2, NOW + timedelta(days=2), cost=60.0, category="PLUMBING", home=home),
        _task(3, NOW + timedelta(days=60), completed=True, completed_date=datetime(2026, 5, 5), home=home),
    ]
    history = [SimpleNamespace(cost=75.0, service_date=datetime(2026, 5, 1), description="Flush", service_type="maintenance", home=home)]

    out = build_dashboard(homes=[home], tasks=tasks, history=history, recent_completions=[], now=NOW)
    stats = out["stats"]
    assert stats["totalTasks"] == 3
    assert stats["activeTasks"] == 2
    assert stats["overdueTasks"] == 1
    assert stats["upcomingTasks"] == 1
    assert stats["completedThisMonth"] == 1
    assert stats["completionRate"] == 33
    assert stats["monthlySpending"] == 75.0
    assert stats["yearlySpending"] == 75.0
    assert out["alerts"]["overdueTasks"][0]["home"] == {"id": 1, "address": "9 Birch Rd", "city": "Tulsa"}
    assert {c["category"]: c["amount"] for c in out["spending"]["byCategory"]} == {"HVAC": 40.0, "PLUMBING": 60.0}
    assert out["activity"][0]["type"] == "maintenance_recorded"
    assert out["homes"] == [{"id": 1, "address": "9 Birch Rd", "city": "Tulsa", "state": "OK"}]


def test_no_homes_returns_zeroed_payload(client, headers):
    r = client.get("/api/dashboard", headers=headers())
    assert r.status_code == 200
    assert r.json() == empty_dashboard()
