# homepro/routers/maintenance_history.py
from __future__ import annotations

import json
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from ..auth import get_principal
from ..db import get_db
from ..models import Appliance, ExteriorFeature, HomeSystem, InteriorFeature, MaintenanceHistory
from ..schemas import HistoryCreate, HistoryOut, dump, dump_all
from ..services.ownership import must_own

router = APIRouter(prefix="/maintenance/history", tags=["maintenance"])

# payload attribute -> (model, 404 label)
_REFERENCES = (
    ("appliance_id", Appliance, "Appliance"),
    ("exterior_feature_id", ExteriorFeature, "Exterior feature"),
    ("interior_feature_id", InteriorFeature, "Interior feature"),
    ("system_id", HomeSystem, "System"),
)


@router.get("")
def list_history(
    home_id: Optional[int] = Query(default=None, alias="homeId"),
    appliance_id: Optional[int] = Query(default=None, alias="applianceId"),
    exterior_feature_id: Optional[int] = Query(default=None, alias="exteriorFeatureId"),
    interior_feature_id: Optional[int] = Query(default=None, alias="interiorFeatureId"),
    system_id: Optional[int] = Query(default=None, alias="systemId"),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    if home_id is None:
        raise HTTPException(status_code=400, detail="homeId is required")
    must_own(db, "home", home_id, user_id=p.user_id)

    q = select(MaintenanceHistory).where(MaintenanceHistory.home_id == home_id)
    if appliance_id is not None:
        q = q.where(MaintenanceHistory.appliance_id == appliance_id)
    if exterior_feature_id is not None:
        q = q.where(MaintenanceHistory.exterior_feature_id == exterior_feature_id)
    if interior_feature_id is not None:
        q = q.where(MaintenanceHistory.interior_feature_id == interior_feature_id)
    if system_id is not None:
        q = q.where(MaintenanceHistory.system_id == system_id)

    rows = db.scalars(q.order_by(desc(MaintenanceHistory.service_date), desc(MaintenanceHistory.id))).all()
    return {"history": dump_all(HistoryOut, rows)}


@router.post("", status_code=201)
def create_history(payload: HistoryCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    """
    Record a service event. Referenced items must sit on the same home; the
    first referenced inventory item gets its lastServiceDate moved to the
    service date, and a referenced system its lastInspection.
    """
    must_own(db, "home", payload.home_id, user_id=p.user_id)

    referenced = {}
    for attr, model, label in _REFERENCES:
        rid = getattr(payload, attr)
        if rid is None:
            continue
        item = db.get(model, rid)
        if item is None or item.home_id != payload.home_id:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        referenced[attr] = item

    row = MaintenanceHistory(
        **payload.model_dump(exclude={"photos", "receipts"}),
        photos_json=json.dumps(payload.photos),
        receipts_json=json.dumps(payload.receipts),
    )
    db.add(row)

    for attr in ("appliance_id", "exterior_feature_id", "interior_feature_id"):
        if attr in referenced:
            referenced[attr].last_service_date = payload.service_date
            break
    if "system_id" in referenced:
        referenced["system_id"].last_inspection = payload.service_date

    db.commit()
    db.refresh(row)
    return {"history": dump(HistoryOut, row)}
