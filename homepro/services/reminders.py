# homepro/services/reminders.py
from __future__ import annotations

import logging
import math
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from ..models import MaintenanceTask
from ..notifications.base import EmailSender
from ..notifications.emails import TaskReminderData, bulk_task_reminder_email, task_reminder_email
from .ownership import owned_home_ids

log = logging.getLogger(__name__)

DEFAULT_DAYS_AHEAD = (30, 14, 7)


def days_until_due(due: datetime, now: datetime) -> int:
    """Ceiling of the fractional day count, so anything later today is 1."""
    return int(math.ceil((due - now).total_seconds() / 86400))


def _reminder(task: MaintenanceTask, days: int) -> TaskReminderData:
    h = task.home
    return TaskReminderData(
        task_name=task.name,
        task_description=task.description or "",
        due_date=task.next_due_date,
        home_address=f"{h.address}, {h.city}, {h.state}",
        category=task.category,
        priority=task.priority or None,
        days_until_due=days,
    )


def send_task_reminders(
    db: Session,
    *,
    user_id: int,
    to: str,
    email: EmailSender,
    days_ahead: Sequence[int] = DEFAULT_DAYS_AHEAD,
    now: Optional[datetime] = None,
) -> dict:
    """
    Email the caller about incomplete tasks whose days-until-due is exactly
    one of `days_ahead`; one email per matching day (bulk when several).
    """
    now = now or datetime.utcnow()
    windows = sorted({int(d) for d in days_ahead if int(d) >= 0}, reverse=True)

    homes = owned_home_ids(db, user_id=user_id)
    if not homes:
        return {"sent": 0, "message": "No homes found", "tasks": []}
    if not windows:
        return {"sent": 0, "message": "Sent reminders for 0 tasks", "tasks": []}

    tasks = db.scalars(
        select(MaintenanceTask)
        .options(joinedload(MaintenanceTask.home))
        .where(
            MaintenanceTask.home_id.in_(homes),
            MaintenanceTask.completed.is_(False),
            MaintenanceTask.next_due_date >= now,
            MaintenanceTask.next_due_date <= now + timedelta(days=max(windows)),
        )
        .order_by(MaintenanceTask.next_due_date)
    ).all()

    by_days: dict[int, list[MaintenanceTask]] = defaultdict(list)
    for t in tasks:
        d = days_until_due(t.next_due_date, now)
        if d in windows:
            by_days[d].append(t)

    sent = 0
    sent_ids: list[int] = []
    for d in windows:
        group = by_days.get(d) or []
        if not group:
            continue
        data = [_reminder(t, d) for t in group]
        message = task_reminder_email(data[0]) if len(data) == 1 else bulk_task_reminder_email(data)
        try:
            result = email.send(to, message)
        except Exception:
            log.exception("task reminder email failed", extra={"user_id": user_id})
            continue
        if result.ok:
            sent += len(group)
            sent_ids.extend(t.id for t in group)

    return {
        "sent": sent,
        "message": f"Sent reminders for {sent} task{'s' if sent != 1 else ''}",
        "tasks": sent_ids,
    }
