# homepro/routers/dashboard.py
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import desc, or_, select
from sqlalchemy.orm import Session, joinedload, selectinload

from ..auth import get_principal
from ..db import get_db
from ..models import CompletedTask, Home, MaintenanceHistory, MaintenanceTask
from ..services.dashboard import build_dashboard, empty_dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
def dashboard(db: Session = Depends(get_db), p=Depends(get_principal)):
    """Top-of-app rollup across every home the caller owns."""
    now = datetime.utcnow()

    homes = db.scalars(
        select(Home)
        .options(
            selectinload(Home.systems),
            selectinload(Home.appliances),
            selectinload(Home.exterior_features),
            selectinload(Home.interior_features),
        )
        .where(Home.user_id == p.user_id)
        .order_by(Home.id)
    ).all()
    if not homes:
        return empty_dashboard()

    home_ids = [h.id for h in homes]

    tasks = db.scalars(
        select(MaintenanceTask)
        .options(joinedload(MaintenanceTask.home))
        .where(
            MaintenanceTask.home_id.in_(home_ids),
            or_(MaintenanceTask.snoozed_until.is_(None), MaintenanceTask.snoozed_until < now),
        )
        .order_by(MaintenanceTask.next_due_date, MaintenanceTask.id)
    ).all()

    history = db.scalars(
        select(MaintenanceHistory)
        .options(joinedload(MaintenanceHistory.home))
        .where(MaintenanceHistory.home_id.in_(home_ids))
    ).all()

    recent_completions = db.scalars(
        select(CompletedTask)
        .options(joinedload(CompletedTask.task).joinedload(MaintenanceTask.home))
        .where(CompletedTask.user_id == p.user_id)
        .order_by(desc(CompletedTask.completed_date))
        .limit(5)
    ).all()

    return build_dashboard(
        homes=homes,
        tasks=list(tasks),
        history=list(history),
        recent_completions=recent_completions,
        now=now,
    )
