# tests/test_budget_api.py
from __future__ import annotations

from datetime import datetime, timedelta


def _iso(dt: datetime) -> str:
    return dt.replace(microsecond=0).isoformat()


def _spend(client, h, home_id, amount: float) -> None:
    now = datetime.utcnow()
    task = client.post(
        "/api/tasks",
        json={
            "homeId": home_id,
            "name": "Service water heater",
            "description": "Flush tank",
            "category": "PLUMBING",
            "frequency": "ANNUAL",
            "nextDueDate": _iso(now),
        },
        headers=h,
    ).json()["task"]
    r = client.patch(
        "/api/tasks",
        json={"id": task["id"], "completed": True, "completedDate": _iso(now - timedelta(minutes=1)), "actualCost": amount},
        headers=h,
    )
    assert r.status_code == 200, r.text


def _plan(client, h, **overrides) -> dict:
    now = datetime.utcnow()
    body = {
        "name": "This month",
        "period": "MONTHLY",
        "amount": 1000,
        "startDate": _iso(now - timedelta(days=5)),
        "endDate": _iso(now + timedelta(days=25)),
    }
    body.update(overrides)
    r = client.post("/api/budget/plans", json=body, headers=h)
    assert r.status_code == 201, r.text
    return r.json()["budgetPlan"]


def test_overview_without_homes(client, headers):
    r = client.get("/api/budget", headers=headers())
    assert r.json() == {
        "totalSpent": 0,
        "totalEstimated": 0,
        "recentCompletions": [],
        "upcomingTasks": [],
        "monthlySpending": [],
    }


def test_overview_totals(client, headers, make_home):
    h = headers()
    home = make_home(h)
    _spend(client, h, home["id"], 120.0)

    body = client.get("/api/budget", headers=h).json()
    assert body["totalSpent"] == 120.0
    assert len(body["monthlySpending"]) == 12
    assert body["monthlySpending"][-1]["amount"] == 120.0
    assert body["recentCompletions"][0]["task"]["home"]["city"] == "Springfield"


def test_plan_window_must_be_ordered(client, headers):
    r = client.post(
        "/api/budget/plans",
        json={
            "name": "Backwards",
            "period": "MONTHLY",
            "amount": 100,
            "startDate": "2026-02-01T00:00:00",
            "endDate": "2026-01-01T00:00:00",
        },
        headers=headers(),
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Validation error"


def test_plan_detail_reports_spending(client, headers, make_home):
    h = headers()
    home = make_home(h)
    plan = _plan(client, h)
    _spend(client, h, home["id"], 250.0)

    detail = client.get(f"/api/budget/plans/{plan['id']}", headers=h).json()["budgetPlan"]
    assert detail["spending"]["totalSpent"] == 250.0
    assert detail["spending"]["remaining"] == 750.0
    assert detail["spending"]["percentUsed"] == 25.0
    assert detail["alerts"] == []


def test_user_alert_run_and_dismiss(client, headers, make_home):
    h = headers()
    home = make_home(h)
    _plan(client, h)
    _spend(client, h, home["id"], 900.0)

    r = client.post("/api/budget/alerts", headers=h)
    assert r.status_code == 200, r.text
    assert r.json() == {"success": True, "alertsChecked": 1, "alertsCreated": 1, "alertsSent": 0}

    alerts = client.get("/api/budget/alerts", headers=h).json()["alerts"]
    assert len(alerts) == 1
    assert alerts[0]["alertType"] == "APPROACHING_LIMIT"
    assert alerts[0]["budgetPlan"]["name"] == "This month"

    r = client.patch(f"/api/budget/alerts/{alerts[0]['id']}", json={"status": "DISMISSED"}, headers=h)
    assert r.json()["alert"]["status"] == "DISMISSED"
    assert r.json()["alert"]["dismissedAt"] is not None

    assert client.patch(f"/api/budget/alerts/{alerts[0]['id']}", json={"status": "SENT"}, headers=headers("other")).status_code == 404


def test_plan_patch_rejects_null_for_required_fields(client, headers):
    h = headers()
    plan = _plan(client, h)

    r = client.patch(f"/api/budget/plans/{plan['id']}", json={"amount": None}, headers=h)
    assert r.status_code == 400
    assert r.json()["error"] == "Validation error"

    # leaving a field out is still fine
    r = client.patch(f"/api/budget/plans/{plan['id']}", json={"name": "Renamed"}, headers=h)
    assert r.status_code == 200
    assert r.json()["budgetPlan"]["amount"] == 1000


def test_plan_patch_keeps_the_window_ordered(client, headers):
    h = headers()
    plan = _plan(client, h, startDate="2026-06-01T00:00:00", endDate="2026-06-30T23:59:59")

    r = client.patch(f"/api/budget/plans/{plan['id']}", json={"endDate": "2025-01-01T00:00:00Z"}, headers=h)
    assert r.status_code == 400
    assert r.json() == {"error": "endDate must not be before startDate"}

    stored = client.get(f"/api/budget/plans/{plan['id']}", headers=h).json()["budgetPlan"]
    assert stored["endDate"] == "2026-06-30T23:59:59"

    r = client.patch(f"/api/budget/plans/{plan['id']}", json={"startDate": "2026-05-01T00:00:00"}, headers=h)
    assert r.status_code == 200
    assert r.json()["budgetPlan"]["startDate"] == "2026-05-01T00:00:00"
