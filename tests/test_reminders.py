# tests/test_reminders.py
from __future__ import annotations

from datetime import datetime, timedelta

from homepro.db import SessionLocal
from homepro.models import Home, MaintenanceTask, User
from homepro.services.reminders import days_until_due, send_task_reminders

NOW = datetime(2026, 4, 1, 9, 0)


def _seed(due_offsets: list[float]) -> int:
    db = SessionLocal()
    try:
        user = User(external_id="ext_r", email="r@example.com")
        db.add(user)
        db.flush()
        home = Home(user_id=user.id, address="7 Pine Ln", city="Denver", state="CO", zip_code="80202")
        db.add(home)
        db.flush()
        for i, days in enumerate(due_offsets):
            db.add(
                MaintenanceTask(
                    home_id=home.id,
                    name=f"Task {i}",
                    description="Check it",
                    category="OTHER",
                    frequency="ANNUAL",
                    next_due_date=NOW + timedelta(days=days),
                )
            )
        db.commit()
        return int(user.id)
    finally:
        db.close()


def _send(uid: int, email, days_ahead=(30, 14, 7)):
    db = SessionLocal()
    try:
        return send_task_reminders(db, user_id=uid, to="r@example.com", email=email, days_ahead=days_ahead, now=NOW)
    finally:
        db.close()


def test_days_until_due_rounds_up():
    assert days_until_due(NOW + timedelta(hours=3), NOW) == 1
    assert days_until_due(NOW + timedelta(days=7), NOW) == 7
    assert days_until_due(NOW + timedelta(days=6, hours=1), NOW) == 7


def test_only_exact_day_matches_are_sent(email):
    uid = _seed([7, 14, 14, 10, 30, 31])
    out = _send(uid, email)

    assert out["sent"] == 4
    assert out["message"] == "Sent reminders for 4 tasks"
    assert len(out["tasks"]) == 4
    # one email per matching day: 30, 14 (bulk), 7
    assert len(email.sent) == 3


def test_single_task_message_is_singular(email):
    uid = _seed([7])
    out = _send(uid, email)
    assert out["message"] == "Sent reminders for 1 task"


def test_no_homes(email):
    db = SessionLocal()
    try:
        user = User(external_id="ext_none", email="none@example.com")
        db.add(user)
        db.commit()
        uid = int(user.id)
    finally:
        db.close()
    assert _send(uid, email) == {"sent": 0, "message": "No homes found", "tasks": []}


def test_failed_email_is_not_counted(email):
    uid = _seed([7])
    email.ok = False
    out = _send(uid, email)
    assert out["sent"] == 0
    assert out["tasks"] == []
