# homepro/services/budget_alerts.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..domain.budget import (
    APPROACHING_THRESHOLD,
    EXCEEDED_THRESHOLD,
    OPEN_ALERT_STATUSES,
    approaching_message,
    exceeded_message,
    project_actual_cost,
    project_over_message,
    threshold_alert_type,
)
from ..models import BudgetAlert, BudgetPlan, DiyProject, User
from ..notifications.base import EmailSender, PushMessage, PushSender
from ..notifications.emails import BudgetAlertData, budget_alert_email
from ..notifications.push import budget_alert_push, project_over_budget_push
from .budget_spending import plan_spending
from .subscriptions import first_player_id

log = logging.getLogger(__name__)

ACTIVE_PROJECT_STATUSES = ("PLANNING", "IN_PROGRESS")


@dataclass
class AlertScanResult:
    alerts_checked: int = 0
    alerts_created: int = 0
    alerts_sent: int = 0

    def to_dict(self) -> dict:
        return {
            "alertsChecked": self.alerts_checked,
            "alertsCreated": self.alerts_created,
            "alertsSent": self.alerts_sent,
        }


def _open_alert_exists(
    db: Session, *, alert_type: str, plan_id: Optional[int] = None, project_id: Optional[int] = None
) -> bool:
    q = select(BudgetAlert.id).where(BudgetAlert.alert_type == alert_type, BudgetAlert.status.in_(OPEN_ALERT_STATUSES))
    if plan_id is not None:
        q = q.where(BudgetAlert.budget_plan_id == plan_id)
    if project_id is not None:
        q = q.where(BudgetAlert.project_id == project_id)
    return db.scalar(q.limit(1)) is not None


def _push(db: Session, push: PushSender, alert: BudgetAlert, message: PushMessage, now: datetime) -> bool:
    player_id = first_player_id(db, alert.user_id)
    if not player_id:
        return False
    try:
        result = push.send([player_id], message)
    except Exception:
        log.exception("budget alert push failed", extra={"user_id": alert.user_id})
        return False
    if not result.ok:
        return False

    alert.status = "SENT"
    alert.sent_at = now
    db.commit()
    return True


def _check_plan(
    db: Session, plan: BudgetPlan, *, push: PushSender, email: EmailSender, now: datetime, result: AlertScanResult
) -> None:
    spending = plan_spending(db, plan)
    pct = spending.percent_used
    alert_type = threshold_alert_type(pct)
    if alert_type is None:
        return
    if _open_alert_exists(db, alert_type=alert_type, plan_id=plan.id):
        return

    if alert_type == "EXCEEDED_LIMIT":
        message = exceeded_message(plan.name, spending.total_spent - spending.amount)
        threshold = EXCEEDED_THRESHOLD
    else:
        message = approaching_message(plan.name, pct, spending.remaining)
        threshold = APPROACHING_THRESHOLD

    alert = BudgetAlert(
        user_id=plan.user_id,
        budget_plan_id=plan.id,
        alert_type=alert_type,
        status="PENDING",
        threshold_percent=threshold,
        message=message,
    )
    db.add(alert)
    db.commit()
    db.refresh(alert)
    result.alerts_created += 1
    log.info("budget_alert_created", extra={"user_id": plan.user_id, "plan_id": plan.id})

    if _push(db, push, alert, budget_alert_push(plan.name, plan.id, alert_type, message), now):
        result.alerts_sent += 1

    user = db.get(User, plan.user_id)
    if user is None or not user.email:
        return
    try:
        email.send(
            user.email,
            budget_alert_email(
                BudgetAlertData(
                    plan_name=plan.name,
                    amount=spending.amount,
                    spent=spending.total_spent,
                    remaining=spending.remaining,
                    percent_used=pct,
                    alert_type=alert_type,
                )
            ),
        )
    except Exception:
        log.exception("budget alert email failed", extra={"user_id": plan.user_id, "plan_id": plan.id})


def _check_project(
    db: Session, project: DiyProject, *, push: PushSender, now: datetime, result: AlertScanResult
) -> None:
    budget = float(project.budget or 0)
    actual = project_actual_cost(project.actual_cost, project.materials, project.tools)
    if actual <= budget:
        return
    if _open_alert_exists(db, alert_type="PROJECT_OVER_BUDGET", project_id=project.id):
        return

    message = project_over_message(project.name, actual - budget)
    alert = BudgetAlert(
        user_id=project.user_id,
        project_id=project.id,
        alert_type="PROJECT_OVER_BUDGET",
        status="PENDING",
        message=message,
    )
    db.add(alert)
    db.commit()
    db.refresh(alert)
    result.alerts_created += 1
    log.info("budget_alert_created", extra={"user_id": project.user_id, "project_id": project.id})

    if _push(db, push, alert, project_over_budget_push(project.name, project.id, message), now):
        result.alerts_sent += 1


def check_budget_alerts(
    db: Session,
    *,
    push: PushSender,
    email: EmailSender,
    now: Optional[datetime] = None,
    user_id: Optional[int] = None,
) -> AlertScanResult:
    """
    Scan active plans (is_active and now within [start, end]) and planning /
    in-progress projects with a budget, creating at most one open alert per
    (plan or project, alert type). Notification failures never abort the scan.

    user_id narrows the scan to one user; None scans everyone.
    """
    now = now or datetime.utcnow()
    result = AlertScanResult()

    pq = select(BudgetPlan).where(
        BudgetPlan.is_active.is_(True), BudgetPlan.start_date <= now, BudgetPlan.end_date >= now
    )
    if user_id is not None:
        pq = pq.where(BudgetPlan.user_id == user_id)
    plans = db.scalars(pq.order_by(BudgetPlan.id)).all()
    result.alerts_checked = len(plans)

    for plan in plans:
        try:
            _check_plan(db, plan, push=push, email=email, now=now, result=result)
        except Exception:
            db.rollback()
            log.exception("budget plan check failed", extra={"plan_id": plan.id})

    jq = (
        select(DiyProject)
        .options(selectinload(DiyProject.materials), selectinload(DiyProject.tools))
        .where(DiyProject.budget.is_not(None), DiyProject.status.in_(ACTIVE_PROJECT_STATUSES))
    )
    if user_id is not None:
        jq = jq.where(DiyProject.user_id == user_id)

    for project in db.scalars(jq.order_by(DiyProject.id)).all():
        try:
            _check_project(db, project, push=push, now=now, result=result)
        except Exception:
            db.rollback()
            log.exception("project budget check failed", extra={"project_id": project.id})

    return result
