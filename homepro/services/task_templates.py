# homepro/services/task_templates.py
from __future__ import annotations

import logging

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from ..domain.task_templates import SYSTEM_TEMPLATES
from ..models import TaskTemplate

log = logging.getLogger(__name__)


def seed_system_templates(db: Session) -> int:
    """Insert built-in templates missing by name. Returns how many were added."""
    have = set(db.scalars(select(TaskTemplate.name).where(TaskTemplate.user_id.is_(None))).all())
    added = [TaskTemplate(**t) for t in SYSTEM_TEMPLATES if t["name"] not in have]
    if added:
        db.add_all(added)
        db.commit()
        log.info("task_templates_seeded", extra={"count": len(added)})
    return len(added)


def visible_templates(db: Session, *, user_id: int) -> list[TaskTemplate]:
    """Active built-in templates first, then the user's own; each by category and name."""
    rows = db.scalars(
        select(TaskTemplate).where(
            TaskTemplate.is_active.is_(True),
            or_(TaskTemplate.user_id.is_(None), TaskTemplate.user_id == user_id),
        )
    ).all()
    return sorted(rows, key=lambda t: (t.user_id is not None, t.category, t.name))
