# homepro/routers/tasks.py
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import desc, or_, select
from sqlalchemy.orm import Session, joinedload

from ..auth import get_principal
from ..db import get_db
from ..domain.compliance import applicable_regulations, compliance_task_drafts
from ..domain.recurrence import calculate_next_due_date, format_recurrence
from ..models import CompletedTask, Home, MaintenanceTask
from ..schemas import CompletedTaskOut, GenerateComplianceIn, TaskCreate, TaskOut, TaskUpdate, dump, dump_all
from ..services.ownership import must_own, owned_home_ids

log = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _home_summary(h: Home) -> dict:
    return {
        "id": h.id,
        "address": h.address,
        "city": h.city,
        "state": h.state,
        "zipCode": h.zip_code,
        "yearBuilt": h.year_built,
        "homeType": h.home_type,
    }


def task_view(t: MaintenanceTask) -> dict:
    out = dump(TaskOut, t)
    out["recurrenceLabel"] = format_recurrence(t.frequency, out.get("customRecurrence"))
    return out


@router.get("")
def list_tasks(
    home_id: Optional[int] = Query(default=None, alias="homeId"),
    completed: Optional[bool] = Query(default=None),
    category: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    homes = owned_home_ids(db, user_id=p.user_id)
    if not homes:
        return {"tasks": []}

    now = datetime.utcnow()
    q = (
        select(MaintenanceTask)
        .options(joinedload(MaintenanceTask.home))
        .where(
            MaintenanceTask.home_id.in_(homes),
            or_(MaintenanceTask.snoozed_until.is_(None), MaintenanceTask.snoozed_until < now),
        )
    )
    if home_id is not None:
        q = q.where(MaintenanceTask.home_id == home_id)
    if completed is not None:
        q = q.where(MaintenanceTask.completed.is_(completed))
    if category:
        q = q.where(MaintenanceTask.category == category)

    out = []
    for t in db.scalars(q.order_by(MaintenanceTask.next_due_date, MaintenanceTask.id)).all():
        row = task_view(t)
        row["home"] = _home_summary(t.home)
        out.append(row)
    return {"tasks": out}


@router.post("", status_code=201)
def create_task(payload: TaskCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "home", payload.home_id, user_id=p.user_id)

    fields = payload.model_dump(exclude={"custom_recurrence"})
    task = MaintenanceTask(**fields)
    if payload.custom_recurrence is not None:
        task.custom_recurrence_json = json.dumps(payload.custom_recurrence.model_dump())

    db.add(task)
    db.commit()
    db.refresh(task)
    log.info("task_created", extra={"user_id": p.user_id, "home_id": payload.home_id})
    return {"task": task_view(task)}


@router.post("/generate-compliance", status_code=201)
def generate_compliance_tasks(
    payload: GenerateComplianceIn,
    response: Response,
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    """
    Creates tasks for the local regulations that apply to a home.

    A regulation whose title already names a task in the home (case-insensitive)
    is skipped, so repeated calls only add what is missing.
    """
    if payload.home_id is None:
        raise HTTPException(status_code=400, detail="homeId is required")
    home = must_own(db, "home", payload.home_id, user_id=p.user_id)

    regs = applicable_regulations(home.city, home.state, year_built=home.year_built, home_type=home.home_type)
    drafts = compliance_task_drafts(regs)
    if not drafts:
        response.status_code = 200
        return {"message": "No compliance tasks required for this location", "tasks": []}

    names = {d.name.lower() for d in drafts}
    existing = [
        t for t in db.scalars(select(MaintenanceTask).where(MaintenanceTask.home_id == home.id)).all()
        if t.name.lower() in names
    ]
    taken = {t.name.lower() for t in existing}
    fresh = [d for d in drafts if d.name.lower() not in taken]
    if not fresh:
        response.status_code = 200
        return {"message": "All compliance tasks already exist", "tasks": [task_view(t) for t in existing]}

    created = [
        MaintenanceTask(
            home_id=home.id,
            name=d.name,
            description=d.description,
            category=d.category,
            frequency=d.frequency,
            next_due_date=d.next_due_date,
            priority=d.priority,
            notes=d.notes,
        )
        for d in fresh
    ]
    db.add_all(created)
    db.commit()
    for t in created:
        db.refresh(t)
    log.info("compliance_tasks_generated", extra={"user_id": p.user_id, "home_id": home.id})

    return {
        "message": f"Generated {len(created)} compliance tasks",
        "tasks": [task_view(t) for t in created],
        "totalComplianceTasks": len(drafts),
        "newTasks": len(created),
        "existingTasks": len(existing),
    }


@router.patch("")
def update_task(payload: TaskUpdate, db: Session = Depends(get_db), p=Depends(get_principal)):
    """
    Partial update addressed by body id.

    Moving a task to completed records a CompletedTask and immediately
    reschedules it: nextDueDate is recomputed from the completion date and
    `completed` goes back to false.
    """
    if payload.id is None:
        raise HTTPException(status_code=400, detail="Task id is required")

    task = db.get(MaintenanceTask, payload.id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    if task.home_id not in owned_home_ids(db, user_id=p.user_id):
        raise HTTPException(status_code=403, detail="Access denied")

    was_completed = task.completed
    sent = payload.model_fields_set
    for k in ("next_due_date", "cost_estimate", "priority", "notes", "snoozed_until"):
        if k in sent:
            setattr(task, k, getattr(payload, k))
    if "custom_recurrence" in sent:
        cr = payload.custom_recurrence
        task.custom_recurrence_json = json.dumps(cr.model_dump()) if cr is not None else None

    if payload.completed and not was_completed:
        done_at = payload.completed_date or datetime.utcnow()
        db.add(
            CompletedTask(
                task_id=task.id,
                user_id=p.user_id,
                completed_date=done_at,
                actual_cost=payload.actual_cost,
                notes=payload.notes,
                photos_json=json.dumps(payload.photos),
                contractor_used=payload.contractor_used,
            )
        )
        custom = json.loads(task.custom_recurrence_json) if task.custom_recurrence_json else None
        task.next_due_date = calculate_next_due_date(task.frequency, done_at, custom)
        task.completed = False
        task.completed_date = None
        log.info("task_completed", extra={"user_id": p.user_id, "home_id": task.home_id})
    elif payload.completed is False:
        task.completed = False
        task.completed_date = None

    db.commit()
    db.refresh(task)
    return {"task": task_view(task)}


@router.delete("/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    task = must_own(db, "task", task_id, user_id=p.user_id)
    db.delete(task)
    db.commit()
    return {"success": True}


@router.get("/{task_id}/history")
def task_history(task_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "task", task_id, user_id=p.user_id)
    rows = db.scalars(
        select(CompletedTask)
        .where(CompletedTask.task_id == task_id)
        .order_by(desc(CompletedTask.completed_date), desc(CompletedTask.id))
    ).all()
    return {"history": dump_all(CompletedTaskOut, rows)}
