# tests/test_notifications_api.py
from __future__ import annotations

from datetime import datetime, timedelta


def test_subscribe_status_unsubscribe(client, headers):
    h = headers()
    assert client.get("/api/notifications/push/status", headers=h).json() == {"subscribed": False, "devices": 0}

    r = client.post("/api/notifications/push/subscribe", json={"playerId": " device-1 "}, headers=h)
    assert r.status_code == 200
    assert r.json()["playerId"] == "device-1"
    # re-subscribing the same device does not add a second row
    client.post("/api/notifications/push/subscribe", json={"playerId": "device-1"}, headers=h)
    assert client.get("/api/notifications/push/status", headers=h).json() == {"subscribed": True, "devices": 1}

    r = client.delete("/api/notifications/push/subscribe", headers=h)
    assert r.json() == {"success": True, "deactivated": 1}
    assert client.get("/api/notifications/push/status", headers=h).json()["subscribed"] is False


def test_subscribe_requires_player_id(client, headers):
    r = client.post("/api/notifications/push/subscribe", json={}, headers=headers())
    assert r.status_code == 400
    assert r.json() == {"error": "Player ID is required"}


def test_push_send_uses_oldest_device(client, headers, make_home, push):
    h = headers()
    home = make_home(h)
    due = (datetime.utcnow() + timedelta(days=3)).replace(microsecond=0).isoformat()
    task = client.post(
        "/api/tasks",
        json={
            "homeId": home["id"],
            "name": "Clean gutters",
            "description": "Front and back",
            "category": "EXTERIOR",
            "frequency": "SEASONAL",
            "nextDueDate": due,
        },
        headers=h,
    ).json()["task"]
    client.post("/api/notifications/push/subscribe", json={"playerId": "first"}, headers=h)
    client.post("/api/notifications/push/subscribe", json={"playerId": "second"}, headers=h)

    r = client.post("/api/notifications/push/send", json={"type": "task_reminder", "taskId": task["id"]}, headers=h)
    assert r.status_code == 200, r.text
    assert r.json() == {"success": True, "delivered": True}
    assert push.sent[0][0] == ["first"]


def test_push_send_without_device(client, headers):
    r = client.post("/api/notifications/push/send", json={"type": "task_reminder", "taskId": 1}, headers=headers())
    assert r.status_code == 404
    assert r.json() == {"error": "User push subscription not found"}


def test_send_reminders_without_homes(client, headers, email):
    r = client.post("/api/notifications/send-reminders", json={}, headers=headers())
    assert r.status_code == 200
    assert r.json() == {"sent": 0, "message": "No homes found", "tasks": []}
    assert email.sent == []
