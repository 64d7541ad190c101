# homepro/routers/predictive.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..auth import get_principal
from ..db import get_db
from ..domain.lifespan import predict, sort_by_urgency
from ..services.ownership import must_own

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@router.get("/predictive")
def predictive_maintenance(
    home_id: Optional[int] = Query(default=None, alias="homeId"),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    """Replacement forecasts for every system and inventory item in a home, most urgent first."""
    if home_id is None:
        raise HTTPException(status_code=400, detail="homeId is required")
    home = must_own(db, "home", home_id, user_id=p.user_id)

    now = datetime.utcnow()
    rows = [("system", s.system_type, s) for s in home.systems]
    rows += [("appliance", a.appliance_type, a) for a in home.appliances]
    rows += [("exteriorFeature", f.feature_type, f) for f in home.exterior_features]
    rows += [("interiorFeature", f.feature_type, f) for f in home.interior_features]

    predictions = [predict(item, item_type=kind, item_name=name, now=now) for kind, name, item in rows]
    return {"predictions": sort_by_urgency(predictions)}
