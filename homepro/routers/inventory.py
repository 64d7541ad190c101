# homepro/routers/inventory.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from ..auth import get_principal
from ..db import get_db
from ..models import Appliance, ExteriorFeature, InteriorFeature
from ..schemas import (
    ApplianceOut,
    ApplianceUpdate,
    ExteriorFeatureOut,
    ExteriorFeatureUpdate,
    InteriorFeatureOut,
    InteriorFeatureUpdate,
    InventoryCreate,
    dump,
    dump_all,
)
from ..services.ownership import must_own

router = APIRouter(prefix="/inventory", tags=["inventory"])

# path segment -> (ownership resource, update schema, output schema)
_KINDS = {
    "appliances": ("appliance", ApplianceUpdate, ApplianceOut),
    "exterior-features": ("exterior_feature", ExteriorFeatureUpdate, ExteriorFeatureOut),
    "interior-features": ("interior_feature", InteriorFeatureUpdate, InteriorFeatureOut),
}


def _kind(kind: str):
    entry = _KINDS.get(kind)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Unknown inventory kind: {kind}")
    return entry


@router.get("")
def list_inventory(
    home_id: Optional[int] = Query(default=None, alias="homeId"),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    if home_id is None:
        raise HTTPException(status_code=400, detail="homeId is required")
    must_own(db, "home", home_id, user_id=p.user_id)

    def newest(model):
        return db.scalars(
            select(model).where(model.home_id == home_id).order_by(desc(model.created_at), desc(model.id))
        ).all()

    return {
        "appliances": dump_all(ApplianceOut, newest(Appliance)),
        "exteriorFeatures": dump_all(ExteriorFeatureOut, newest(ExteriorFeature)),
        "interiorFeatures": dump_all(InteriorFeatureOut, newest(InteriorFeature)),
    }


@router.post("", status_code=201)
def create_inventory(payload: InventoryCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "home", payload.home_id, user_id=p.user_id)

    appliances = [Appliance(home_id=payload.home_id, **a.model_dump()) for a in payload.appliances]
    exterior = [ExteriorFeature(home_id=payload.home_id, **f.model_dump()) for f in payload.exterior_features]
    interior = [InteriorFeature(home_id=payload.home_id, **f.model_dump()) for f in payload.interior_features]

    db.add_all([*appliances, *exterior, *interior])
    db.commit()
    for row in (*appliances, *exterior, *interior):
        db.refresh(row)

    return {
        "appliances": dump_all(ApplianceOut, appliances),
        "exteriorFeatures": dump_all(ExteriorFeatureOut, exterior),
        "interiorFeatures": dump_all(InteriorFeatureOut, interior),
    }


@router.patch("/{kind}/{item_id}")
def update_item(
    kind: str,
    item_id: int,
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    resource, update_cls, out_cls = _kind(kind)
    row = must_own(db, resource, item_id, user_id=p.user_id)

    try:
        data = update_cls.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors())
    for k, v in data.model_dump(exclude_unset=True).items():
        setattr(row, k, v)
    db.commit()
    db.refresh(row)
    return {"item": dump(out_cls, row)}


@router.delete("/{kind}/{item_id}")
def delete_item(kind: str, item_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    resource, _update_cls, _out_cls = _kind(kind)
    row = must_own(db, resource, item_id, user_id=p.user_id)
    db.delete(row)
    db.commit()
    return {"success": True}
