# tests/test_tasks_api.py
from __future__ import annotations


def _task(client, h, home_id, **overrides) -> dict:
    body = {
        "homeId": home_id,
        "name": "Replace furnace filter",
        "description": "Swap the 16x25 filter",
        "category": "HVAC",
        "frequency": "MONTHLY",
        "nextDueDate": "2026-01-15T00:00:00",
    }
    body.update(overrides)
    r = client.post("/api/tasks", json=body, headers=h)
    assert r.status_code == 201, r.text
    return r.json()["task"]


def test_create_and_list(client, headers, make_home):
    h = headers()
    home = make_home(h)
    task = _task(client, h, home["id"])
    assert task["recurrenceLabel"] == "Monthly"
    assert task["completed"] is False

    tasks = client.get("/api/tasks", headers=h).json()["tasks"]
    assert [t["id"] for t in tasks] == [task["id"]]
    assert tasks[0]["home"]["zipCode"] == "62701"


def test_custom_recurrence_label(client, headers, make_home):
    h = headers()
    home = make_home(h)
    task = _task(client, h, home["id"], customRecurrence={"interval": 2, "unit": "weeks"})
    assert task["recurrenceLabel"] == "Every 2 weeks"
    assert task["customRecurrence"] == {"interval": 2, "unit": "weeks"}


def test_completing_reschedules_and_records_history(client, headers, make_home):
    h = headers()
    home = make_home(h)
    task = _task(client, h, home["id"])

    r = client.patch(
        "/api/tasks",
        json={"id": task["id"], "completed": True, "completedDate": "2026-02-01T10:00:00", "actualCost": 25.5},
        headers=h,
    )
    assert r.status_code == 200, r.text
    updated = r.json()["task"]
    assert updated["completed"] is False
    assert updated["nextDueDate"] == "2026-03-01T10:00:00"

    history = client.get(f"/api/tasks/{task['id']}/history", headers=h).json()["history"]
    assert len(history) == 1
    assert history[0]["actualCost"] == 25.5
    assert history[0]["completedDate"] == "2026-02-01T10:00:00"


def test_patch_requires_id(client, headers):
    r = client.patch("/api/tasks", json={"completed": True}, headers=headers())
    assert r.status_code == 400
    assert r.json() == {"error": "Task id is required"}


def test_patch_foreign_task_is_denied(client, headers, make_home):
    owner = headers("owner")
    task = _task(client, owner, make_home(owner)["id"])
    make_home(headers("other"))

    r = client.patch("/api/tasks", json={"id": task["id"], "notes": "mine now"}, headers=headers("other"))
    assert r.status_code == 403
    assert r.json() == {"error": "Access denied"}


def test_create_for_foreign_home_is_not_found(client, headers, make_home):
    home = make_home(headers("owner"))
    r = client.post(
        "/api/tasks",
        json={
            "homeId": home["id"],
            "name": "x",
            "description": "y",
            "category": "OTHER",
            "frequency": "ANNUAL",
            "nextDueDate": "2026-05-01T00:00:00",
        },
        headers=headers("other"),
    )
    assert r.status_code == 404
    assert r.json() == {"error": "Home not found"}


def test_snoozed_tasks_are_hidden(client, headers, make_home):
    h = headers()
    home = make_home(h)
    _task(client, h, home["id"], snoozedUntil="2999-01-01T00:00:00")
    assert client.get("/api/tasks", headers=h).json()["tasks"] == []
