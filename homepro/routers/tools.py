# homepro/routers/tools.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import desc, or_, select
from sqlalchemy.orm import Session

from ..auth import get_principal
from ..db import get_db
from ..domain.tools import tool_ownership
from ..models import ToolInventory
from ..schemas import CheckOwnedIn, ToolCreate, ToolOut, ToolUpdate, dump, dump_all
from ..services.ownership import must_own

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("/inventory")
def list_tools(
    category: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    q = select(ToolInventory).where(ToolInventory.user_id == p.user_id)
    if category:
        q = q.where(ToolInventory.category == category)
    if search:
        like = f"%{search.strip().lower()}%"
        q = q.where(
            or_(
                ToolInventory.name.ilike(like),
                ToolInventory.description.ilike(like),
                ToolInventory.brand.ilike(like),
            )
        )
    rows = db.scalars(q.order_by(desc(ToolInventory.created_at), desc(ToolInventory.id))).all()
    return {"tools": dump_all(ToolOut, rows)}


@router.post("/inventory", status_code=201)
def create_tool(payload: ToolCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    tool = ToolInventory(user_id=p.user_id, **payload.model_dump())
    db.add(tool)
    db.commit()
    db.refresh(tool)
    return {"tool": dump(ToolOut, tool)}


@router.get("/inventory/{tool_id}")
def get_tool(tool_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    return {"tool": dump(ToolOut, must_own(db, "tool", tool_id, user_id=p.user_id))}


@router.patch("/inventory/{tool_id}")
def update_tool(tool_id: int, payload: ToolUpdate, db: Session = Depends(get_db), p=Depends(get_principal)):
    tool = must_own(db, "tool", tool_id, user_id=p.user_id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(tool, k, v)
    db.commit()
    db.refresh(tool)
    return {"tool": dump(ToolOut, tool)}


@router.delete("/inventory/{tool_id}")
def delete_tool(tool_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    tool = must_own(db, "tool", tool_id, user_id=p.user_id)
    db.delete(tool)
    db.commit()
    return {"success": True}


@router.post("/check-owned")
def check_owned(payload: CheckOwnedIn, db: Session = Depends(get_db), p=Depends(get_principal)):
    if not isinstance(payload.tool_names, list):
        raise HTTPException(status_code=400, detail="toolNames must be an array")
    names = [str(n) for n in payload.tool_names]
    inventory = db.scalars(select(ToolInventory).where(ToolInventory.user_id == p.user_id)).all()
    return {"toolOwnership": tool_ownership(names, inventory)}
