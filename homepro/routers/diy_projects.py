# homepro/routers/diy_projects.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session, joinedload, selectinload

from ..auth import get_principal
from ..db import get_db
from ..deps import get_upload_storage
from ..domain.tools import find_owned_tool
from ..models import DiyProject, ProjectMaterial, ProjectPhoto, ProjectStep, ProjectTool, ToolInventory
from ..schemas import (
    MaterialCreate,
    MaterialOut,
    MaterialUpdate,
    ProjectCreate,
    ProjectDetailOut,
    ProjectPhotoOut,
    ProjectToolCreate,
    ProjectToolOut,
    ProjectToolUpdate,
    ProjectUpdate,
    StepCreate,
    StepOut,
    StepUpdate,
    dump,
    dump_all,
)
from ..services.ownership import must_own
from ..services.storage import UploadRequest, UploadStorage

log = logging.getLogger(__name__)

router = APIRouter(prefix="/diy-projects", tags=["diy-projects"])


def _with_children():
    return select(DiyProject).options(
        joinedload(DiyProject.home),
        selectinload(DiyProject.steps),
        selectinload(DiyProject.materials),
        selectinload(DiyProject.tools),
        selectinload(DiyProject.photos),
    )


def project_view(pr: DiyProject) -> dict:
    out = dump(ProjectDetailOut, pr)
    out["photos"].sort(key=lambda ph: ph["uploadedAt"], reverse=True)
    h = pr.home
    out["home"] = {"id": h.id, "address": h.address, "city": h.city, "state": h.state} if h is not None else None
    return out


def _child(db: Session, model, child_id: int, project_id: int, label: str):
    row = db.scalar(select(model).where(model.id == child_id, model.project_id == project_id))
    if row is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return row


# -------------------- Projects --------------------

@router.get("")
def list_projects(
    home_id: Optional[int] = Query(default=None, alias="homeId"),
    status: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    q = _with_children().where(DiyProject.user_id == p.user_id)
    if home_id is not None:
        q = q.where(DiyProject.home_id == home_id)
    if status and status != "all":
        q = q.where(DiyProject.status == status)
    if category and category != "all":
        q = q.where(DiyProject.category == category)
    rows = db.scalars(q.order_by(desc(DiyProject.created_at), desc(DiyProject.id))).all()
    return {"projects": [project_view(pr) for pr in rows]}


@router.post("", status_code=201)
def create_project(payload: ProjectCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "home", payload.home_id, user_id=p.user_id)

    pr = DiyProject(user_id=p.user_id, status="NOT_STARTED", **payload.model_dump())
    db.add(pr)
    db.commit()
    log.info("project_created", extra={"user_id": p.user_id, "project_id": pr.id})
    return {"project": project_view(db.scalar(_with_children().where(DiyProject.id == pr.id)))}


@router.get("/{project_id}")
def get_project(project_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "project", project_id, user_id=p.user_id)
    return {"project": project_view(db.scalar(_with_children().where(DiyProject.id == project_id)))}


@router.patch("/{project_id}")
def update_project(project_id: int, payload: ProjectUpdate, db: Session = Depends(get_db), p=Depends(get_principal)):
    pr = must_own(db, "project", project_id, user_id=p.user_id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(pr, k, v)
    db.commit()
    return {"project": project_view(db.scalar(_with_children().where(DiyProject.id == project_id)))}


@router.delete("/{project_id}")
def delete_project(project_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    pr = must_own(db, "project", project_id, user_id=p.user_id)
    db.delete(pr)
    db.commit()
    return {"success": True}


# -------------------- Steps --------------------

@router.get("/{project_id}/steps")
def list_steps(project_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "project", project_id, user_id=p.user_id)
    rows = db.scalars(
        select(ProjectStep).where(ProjectStep.project_id == project_id).order_by(ProjectStep.step_number, ProjectStep.id)
    ).all()
    return {"steps": dump_all(StepOut, rows)}


@router.post("/{project_id}/steps", status_code=201)
def create_step(project_id: int, payload: StepCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "project", project_id, user_id=p.user_id)
    if payload.depends_on_step_id is not None:
        _child(db, ProjectStep, payload.depends_on_step_id, project_id, "Step")

    step = ProjectStep(project_id=project_id, status="not_started", **payload.model_dump())
    db.add(step)
    db.commit()
    db.refresh(step)
    return {"step": dump(StepOut, step)}


@router.patch("/{project_id}/steps/{step_id}")
def update_step(
    project_id: int, step_id: int, payload: StepUpdate, db: Session = Depends(get_db), p=Depends(get_principal)
):
    """
    completed stamps completedAt, any other status clears it. New actual
    hours roll up into the project's actualHours (sum over its steps).
    """
    pr = must_own(db, "project", project_id, user_id=p.user_id)
    step = _child(db, ProjectStep, step_id, project_id, "Step")

    sent = payload.model_fields_set
    if "status" in sent and payload.status is not None:
        step.status = payload.status
        step.completed_at = datetime.utcnow() if payload.status == "completed" else None
    if "actual_hours" in sent:
        step.actual_hours = payload.actual_hours
    if "notes" in sent:
        step.notes = payload.notes
    db.flush()

    if "actual_hours" in sent:
        total = db.scalar(
            select(func.coalesce(func.sum(ProjectStep.actual_hours), 0.0)).where(ProjectStep.project_id == project_id)
        )
        pr.actual_hours = float(total or 0.0)

    db.commit()
    db.refresh(step)
    return {"step": dump(StepOut, step)}


@router.delete("/{project_id}/steps/{step_id}")
def delete_step(project_id: int, step_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "project", project_id, user_id=p.user_id)
    step = _child(db, ProjectStep, step_id, project_id, "Step")
    db.delete(step)
    db.commit()
    return {"success": True}


# -------------------- Materials --------------------

@router.get("/{project_id}/materials")
def list_materials(project_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "project", project_id, user_id=p.user_id)
    rows = db.scalars(
        select(ProjectMaterial).where(ProjectMaterial.project_id == project_id).order_by(ProjectMaterial.id)
    ).all()
    return {"materials": dump_all(MaterialOut, rows)}


@router.post("/{project_id}/materials", status_code=201)
def create_material(project_id: int, payload: MaterialCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "project", project_id, user_id=p.user_id)

    fields = payload.model_dump()
    if fields["total_price"] is None and fields["unit_price"] is not None:
        fields["total_price"] = fields["quantity"] * fields["unit_price"]

    m = ProjectMaterial(project_id=project_id, **fields)
    db.add(m)
    db.commit()
    db.refresh(m)
    return {"material": dump(MaterialOut, m)}


@router.patch("/{project_id}/materials/{material_id}")
def update_material(
    project_id: int, material_id: int, payload: MaterialUpdate, db: Session = Depends(get_db), p=Depends(get_principal)
):
    must_own(db, "project", project_id, user_id=p.user_id)
    m = _child(db, ProjectMaterial, material_id, project_id, "Material")

    if payload.purchased is not None:
        m.purchased = payload.purchased
        m.purchased_at = (payload.purchased_at or datetime.utcnow()) if payload.purchased else None
    elif "purchased_at" in payload.model_fields_set:
        m.purchased_at = payload.purchased_at

    db.commit()
    db.refresh(m)
    return {"material": dump(MaterialOut, m)}


@router.delete("/{project_id}/materials/{material_id}")
def delete_material(project_id: int, material_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "project", project_id, user_id=p.user_id)
    m = _child(db, ProjectMaterial, material_id, project_id, "Material")
    db.delete(m)
    db.commit()
    return {"success": True}


# -------------------- Tools --------------------

@router.get("/{project_id}/tools")
def list_tools(project_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "project", project_id, user_id=p.user_id)
    rows = db.scalars(select(ProjectTool).where(ProjectTool.project_id == project_id).order_by(ProjectTool.id)).all()
    return {"tools": dump_all(ProjectToolOut, rows)}


@router.post("/{project_id}/tools", status_code=201)
def create_tool(project_id: int, payload: ProjectToolCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "project", project_id, user_id=p.user_id)

    owned = bool(payload.owned)
    if not owned:
        inventory = db.scalars(select(ToolInventory).where(ToolInventory.user_id == p.user_id)).all()
        owned = find_owned_tool(payload.name, inventory) is not None

    t = ProjectTool(project_id=project_id, **payload.model_dump(exclude={"owned"}), owned=owned)
    db.add(t)
    db.commit()
    db.refresh(t)
    return {"tool": dump(ProjectToolOut, t)}


@router.patch("/{project_id}/tools/{tool_id}")
def update_tool(
    project_id: int, tool_id: int, payload: ProjectToolUpdate, db: Session = Depends(get_db), p=Depends(get_principal)
):
    must_own(db, "project", project_id, user_id=p.user_id)
    t = _child(db, ProjectTool, tool_id, project_id, "Tool")
    if payload.purchased is not None:
        t.purchased = payload.purchased
    db.commit()
    db.refresh(t)
    return {"tool": dump(ProjectToolOut, t)}


@router.delete("/{project_id}/tools/{tool_id}")
def delete_tool(project_id: int, tool_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "project", project_id, user_id=p.user_id)
    t = _child(db, ProjectTool, tool_id, project_id, "Tool")
    db.delete(t)
    db.commit()
    return {"success": True}


# -------------------- Photos --------------------

@router.get("/{project_id}/photos")
def list_photos(project_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "project", project_id, user_id=p.user_id)
    rows = db.scalars(
        select(ProjectPhoto)
        .where(ProjectPhoto.project_id == project_id)
        .order_by(desc(ProjectPhoto.uploaded_at), desc(ProjectPhoto.id))
    ).all()
    return {"photos": dump_all(ProjectPhotoOut, rows)}


@router.post("/{project_id}/photos", status_code=201)
def upload_photo(
    project_id: int,
    image: Optional[UploadFile] = File(default=None),
    caption: Optional[str] = Form(default=None),
    step_id: Optional[int] = Form(default=None, alias="stepId"),
    is_before: Optional[str] = Form(default=None, alias="isBefore"),
    is_after: Optional[str] = Form(default=None, alias="isAfter"),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
    storage: UploadStorage = Depends(get_upload_storage),
):
    must_own(db, "project", project_id, user_id=p.user_id)
    if image is None:
        raise HTTPException(status_code=400, detail="No image file provided")
    if step_id is not None:
        _child(db, ProjectStep, step_id, project_id, "Step")

    data = image.file.read()
    stored = storage.store(
        UploadRequest(
            data=data,
            filename=image.filename or "photo",
            content_type=image.content_type or "application/octet-stream",
            user_id=p.user_id,
            kind="project-photo",
        )
    )

    photo = ProjectPhoto(
        project_id=project_id,
        step_id=step_id,
        url=stored.url,
        caption=caption or None,
        is_before=is_before == "true",
        is_after=is_after == "true",
    )
    db.add(photo)
    db.commit()
    db.refresh(photo)
    return {"photo": dump(ProjectPhotoOut, photo)}
