# tests/test_budget_alerts.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import select

from homepro.db import SessionLocal
from homepro.models import (
    BudgetAlert,
    BudgetPlan,
    CompletedTask,
    DiyProject,
    Home,
    MaintenanceTask,
    PushSubscription,
    User,
)
from homepro.services.budget_alerts import check_budget_alerts

NOW = datetime(2026, 6, 15, 12, 0)


def _seed(spent: float, *, subscribed: bool = True) -> int:
    db = SessionLocal()
    try:
        user = User(external_id="ext_1", email="owner@example.com")
        db.add(user)
        db.flush()
        home = Home(user_id=user.id, address="1 Elm St", city="Peoria", state="IL", zip_code="61602")
        db.add(home)
        db.flush()
        task = MaintenanceTask(
            home_id=home.id,
            name="Replace HVAC filter",
            category="HVAC",
            frequency="MONTHLY",
            next_due_date=datetime(2026, 7, 10),
        )
        db.add(task)
        db.flush()
        db.add(CompletedTask(task_id=task.id, user_id=user.id, completed_date=datetime(2026, 6, 10), actual_cost=spent))
        db.add(
            BudgetPlan(
                user_id=user.id,
                name="June",
                period="MONTHLY",
                amount=1000.0,
                start_date=datetime(2026, 6, 1),
                end_date=datetime(2026, 6, 30, 23, 59),
            )
        )
        if subscribed:
            db.add(PushSubscription(user_id=user.id, player_id="player-1", is_active=True))
        db.commit()
        return int(user.id)
    finally:
        db.close()


def _alerts() -> list[BudgetAlert]:
    db = SessionLocal()
    try:
        return list(db.scalars(select(BudgetAlert).order_by(BudgetAlert.id)).all())
    finally:
        db.close()


def _scan(email, push, **kw):
    db = SessionLocal()
    try:
        return check_budget_alerts(db, push=push, email=email, now=NOW, **kw)
    finally:
        db.close()


def test_exactly_eighty_percent_creates_approaching_alert_and_notifies(email, push):
    _seed(800.0)
    result = _scan(email, push)

    assert result.to_dict() == {"alertsChecked": 1, "alertsCreated": 1, "alertsSent": 1}
    alerts = _alerts()
    assert len(alerts) == 1
    assert alerts[0].alert_type == "APPROACHING_LIMIT"
    assert alerts[0].status == "SENT"
    assert alerts[0].sent_at == NOW
    assert alerts[0].threshold_percent == 80.0
    assert alerts[0].message == 'Budget "June" is 80.0% used. Only $200.00 remaining.'
    assert push.sent[0][0] == ["player-1"]
    assert email.sent[0][0] == "owner@example.com"


def test_just_below_threshold_creates_nothing(email, push):
    _seed(799.0)
    result = _scan(email, push)
    assert result.alerts_checked == 1
    assert result.alerts_created == 0
    assert _alerts() == []


def test_at_limit_is_exceeded(email, push):
    _seed(1000.0)
    _scan(email, push)
    alerts = _alerts()
    assert [a.alert_type for a in alerts] == ["EXCEEDED_LIMIT"]
    assert alerts[0].message == 'Budget "June" has been exceeded by $0.00.'


def test_second_scan_does_not_duplicate_open_alert(email, push):
    _seed(900.0)
    _scan(email, push)
    again = _scan(email, push)
    assert again.alerts_created == 0
    assert len(_alerts()) == 1


def test_alert_without_device_stays_pending(email, push):
    _seed(850.0, subscribed=False)
    result = _scan(email, push)
    assert result.alerts_created == 1
    assert result.alerts_sent == 0
    assert _alerts()[0].status == "PENDING"
    assert push.sent == []


def test_user_scope_skips_other_users(email, push):
    _seed(900.0)
    result = _scan(email, push, user_id=999)
    assert result.alerts_checked == 0
    assert _alerts() == []


def test_project_over_budget(email, push):
    uid = _seed(0.0)
    db = SessionLocal()
    try:
        home_id = db.scalar(select(Home.id).where(Home.user_id == uid))
        db.add(
            DiyProject(
                user_id=uid,
                home_id=home_id,
                name="Deck stain",
                category="EXTERIOR",
                status="IN_PROGRESS",
                budget=100.0,
                actual_cost=150.0,
            )
        )
        db.commit()
    finally:
        db.close()

    result = _scan(email, push)
    assert result.alerts_created == 1
    alert = _alerts()[0]
    assert alert.alert_type == "PROJECT_OVER_BUDGET"
    assert alert.message == 'Project "Deck stain" has exceeded its budget by $50.00.'
