# homepro/notifications/push.py
from __future__ import annotations

from .base import PushMessage


def _days(n: int) -> str:
    return f"{n} day{'s' if n != 1 else ''}"


def task_reminder_push(task_name: str, days_until_due: int, task_id: int, home_address: str) -> PushMessage:
    if days_until_due < 0:
        title = "⚠️ Overdue Task"
        message = f"{task_name} is {_days(abs(days_until_due))} overdue at {home_address}"
    elif days_until_due == 0:
        title = "⏰ Task Due Today"
        message = f"{task_name} is due today at {home_address}"
    else:
        title = "📋 Task Reminder"
        message = f"{task_name} is due in {_days(days_until_due)} at {home_address}"

    return PushMessage(
        title=title,
        message=message,
        url=f"/tasks?id={task_id}",
        data={"type": "task_reminder", "taskId": task_id, "daysUntilDue": days_until_due},
    )


def warranty_expiration_push(item_name: str, days_until_expiry: int, item_id: int, home_address: str) -> PushMessage:
    title = "🔴 Warranty Expiring Soon" if days_until_expiry <= 7 else "⚠️ Warranty Expiring"
    return PushMessage(
        title=title,
        message=f"{item_name} warranty expires in {_days(days_until_expiry)} at {home_address}",
        url="/warranties",
        data={"type": "warranty_expiration", "warrantyId": item_id, "daysUntilExpiry": days_until_expiry},
    )


def budget_alert_push(plan_name: str, plan_id: int, alert_type: str, message: str) -> PushMessage:
    title = f"🚨 Budget Exceeded: {plan_name}" if alert_type == "EXCEEDED_LIMIT" else f"⚠️ Budget Alert: {plan_name}"
    return PushMessage(
        title=title,
        message=message,
        url="/budget",
        data={"type": "budget_alert", "budgetPlanId": plan_id},
    )


def project_over_budget_push(project_name: str, project_id: int, message: str) -> PushMessage:
    return PushMessage(
        title=f"🚨 Project Over Budget: {project_name}",
        message=message,
        url=f"/diy-projects/{project_id}",
        data={"type": "project_budget_alert", "projectId": project_id},
    )
