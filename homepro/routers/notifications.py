# homepro/routers/notifications.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, joinedload

from ..auth import get_cron_or_principal, get_principal
from ..db import get_db
from ..deps import get_email_sender, get_push_sender
from ..models import MaintenanceTask
from ..notifications.push import task_reminder_push
from ..schemas import PushSendIn, PushSubscribeIn, SendRemindersIn
from ..services.ownership import must_own
from ..services.reminders import days_until_due, send_task_reminders
from ..services.subscriptions import active_player_ids, first_player_id, subscribe, unsubscribe

log = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("/push/subscribe")
def push_subscribe(payload: PushSubscribeIn, db: Session = Depends(get_db), p=Depends(get_principal)):
    player_id = (payload.player_id or "").strip()
    if not player_id:
        raise HTTPException(status_code=400, detail="Player ID is required")
    subscribe(db, user_id=p.user_id, player_id=player_id)
    log.info("push_subscribed", extra={"user_id": p.user_id})
    return {
        "success": True,
        "message": "Successfully subscribed to push notifications",
        "playerId": player_id,
    }


@router.delete("/push/subscribe")
def push_unsubscribe(
    player_id: Optional[str] = Query(default=None, alias="playerId"),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    n = unsubscribe(db, user_id=p.user_id, player_id=player_id)
    return {"success": True, "deactivated": n}


@router.get("/push/status")
def push_status(db: Session = Depends(get_db), p=Depends(get_principal)):
    ids = active_player_ids(db, p.user_id)
    return {"subscribed": bool(ids), "devices": len(ids)}


@router.post("/push/send")
def push_send(
    payload: PushSendIn,
    db: Session = Depends(get_db),
    caller=Depends(get_cron_or_principal),
    push=Depends(get_push_sender),
):
    """
    Send one task reminder push. An explicit playerId wins; otherwise a
    signed-in caller's oldest active device is used. Cron callers must name
    the playerId.
    """
    if not payload.player_id and caller is None:
        raise HTTPException(status_code=400, detail="Player ID or user ID is required")

    player_id = payload.player_id
    if not player_id:
        player_id = first_player_id(db, caller.user_id)
        if not player_id:
            raise HTTPException(status_code=404, detail="User push subscription not found")

    if payload.type != "task_reminder" or payload.task_id is None:
        raise HTTPException(status_code=400, detail="Invalid request")

    if caller is not None:
        must_own(db, "task", payload.task_id, user_id=caller.user_id)
    task = db.get(MaintenanceTask, payload.task_id, options=[joinedload(MaintenanceTask.home)])
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")

    message = task_reminder_push(
        task.name,
        days_until_due(task.next_due_date, datetime.utcnow()),
        task.id,
        f"{task.home.address}, {task.home.city}",
    )
    result = push.send([player_id], message)
    return {"success": True, "delivered": result.ok}


@router.post("/send-reminders")
def send_reminders(
    payload: SendRemindersIn,
    db: Session = Depends(get_db),
    p=Depends(get_principal),
    email=Depends(get_email_sender),
):
    return send_task_reminders(db, user_id=p.user_id, to=p.email, email=email, days_ahead=payload.days_ahead)
