# homepro/routers/warranties.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_principal, require_cron
from ..db import get_db
from ..deps import get_email_sender
from ..services.warranty_scan import check_expiring_warranties, expiring_for_user

router = APIRouter(prefix="/warranties", tags=["warranties"])


@router.post("/check-expiring", dependencies=[Depends(require_cron)])
def check_expiring(db: Session = Depends(get_db), email=Depends(get_email_sender)):
    return check_expiring_warranties(db, email=email).to_dict()


@router.get("/check-expiring")
def my_expiring(db: Session = Depends(get_db), p=Depends(get_principal)):
    items = expiring_for_user(db, user_id=p.user_id)
    return {"expiringWarranties": [w.to_dict() for w in items], "count": len(items)}
