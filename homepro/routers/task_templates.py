# homepro/routers/task_templates.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_principal
from ..db import get_db
from ..models import TaskTemplate
from ..schemas import TaskTemplateCreate, TaskTemplateOut, dump, dump_all
from ..services.task_templates import visible_templates

log = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks/templates", tags=["tasks"])


@router.get("")
def list_templates(db: Session = Depends(get_db), p=Depends(get_principal)):
    return {"templates": dump_all(TaskTemplateOut, visible_templates(db, user_id=p.user_id))}


@router.post("", status_code=201)
def create_template(payload: TaskTemplateCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    template = TaskTemplate(user_id=p.user_id, **payload.model_dump())
    db.add(template)
    db.commit()
    db.refresh(template)
    log.info("task_template_created", extra={"user_id": p.user_id})
    return {"template": dump(TaskTemplateOut, template)}
