# homepro/routers/homes.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..auth import get_principal
from ..db import get_db
from ..domain.address import AddressKey, estimate_climate_zone, find_matching, normalize_state, normalize_zip, street_line
from ..models import Home, HomeSystem
from ..schemas import AddSystemsIn, HomeCreate, HomeDetailOut, HomeOut, HomeSystemOut, HomeUpdate, dump, dump_all
from ..services.ownership import must_own

log = logging.getLogger(__name__)

router = APIRouter(prefix="/homes", tags=["homes"])


def _normalize_location(fields: dict) -> dict:
    if fields.get("address") is not None:
        fields["address"] = street_line(fields["address"])
    if fields.get("zip_code") is not None:
        fields["zip_code"] = normalize_zip(fields["zip_code"])
    if fields.get("state") is not None:
        fields["state"] = normalize_state(fields["state"])
    if fields.get("city") is not None:
        fields["city"] = fields["city"].strip()
    return fields


def _load_home(db: Session, home_id: int) -> Home:
    return db.scalar(
        select(Home)
        .where(Home.id == home_id)
        .options(
            selectinload(Home.systems),
            selectinload(Home.appliances),
            selectinload(Home.exterior_features),
            selectinload(Home.interior_features),
        )
    )


@router.get("")
def list_homes(db: Session = Depends(get_db), p=Depends(get_principal)):
    homes = db.scalars(
        select(Home).where(Home.user_id == p.user_id).options(selectinload(Home.systems)).order_by(Home.id)
    ).all()
    return {"homes": dump_all(HomeOut, homes)}


@router.post("", status_code=201)
def upsert_home(payload: HomeCreate, response: Response, db: Session = Depends(get_db), p=Depends(get_principal)):
    """
    Create a home, or update the caller's existing home at the same
    normalized address (systems replaced), so onboarding can be re-run.
    """
    fields = _normalize_location(payload.model_dump(exclude={"systems"}))
    if not fields.get("climate_zone"):
        fields["climate_zone"] = estimate_climate_zone(fields["state"])

    existing = db.scalars(
        select(Home).where(Home.user_id == p.user_id).options(selectinload(Home.systems))
    ).all()
    key = AddressKey.of(fields["address"], fields["city"], fields["state"], fields["zip_code"])
    home = find_matching(key, list(existing))

    systems = [HomeSystem(**s.model_dump()) for s in payload.systems]

    if home is not None:
        for k, v in fields.items():
            setattr(home, k, v)
        home.systems = systems
        db.commit()
        response.status_code = 200
        log.info("home_updated", extra={"user_id": p.user_id, "home_id": home.id})
        is_update = True
    else:
        home = Home(user_id=p.user_id, **fields)
        home.systems = systems
        db.add(home)
        db.commit()
        log.info("home_created", extra={"user_id": p.user_id, "home_id": home.id})
        is_update = False

    db.refresh(home)
    return {
        "home": dump(HomeOut, home),
        "isUpdate": is_update,
        "message": "Home updated successfully" if is_update else "Home created successfully",
    }


@router.get("/{home_id}")
def get_home(home_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "home", home_id, user_id=p.user_id)
    return {"home": dump(HomeDetailOut, _load_home(db, home_id))}


@router.patch("/{home_id}")
def update_home(home_id: int, payload: HomeUpdate, db: Session = Depends(get_db), p=Depends(get_principal)):
    home = must_own(db, "home", home_id, user_id=p.user_id)
    for k, v in _normalize_location(payload.model_dump(exclude_unset=True)).items():
        setattr(home, k, v)
    db.commit()
    return {"home": dump(HomeDetailOut, _load_home(db, home_id))}


@router.delete("/{home_id}")
def delete_home(home_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    home = must_own(db, "home", home_id, user_id=p.user_id)
    db.delete(home)
    db.commit()
    log.info("home_deleted", extra={"user_id": p.user_id, "home_id": home_id})
    return {"success": True}


@router.get("/{home_id}/systems")
def list_systems(home_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "home", home_id, user_id=p.user_id)
    rows = db.scalars(select(HomeSystem).where(HomeSystem.home_id == home_id).order_by(HomeSystem.id)).all()
    return {"systems": dump_all(HomeSystemOut, rows)}


@router.post("/{home_id}/systems", status_code=201)
def add_systems(home_id: int, payload: AddSystemsIn, db: Session = Depends(get_db), p=Depends(get_principal)):
    must_own(db, "home", home_id, user_id=p.user_id)
    rows = [HomeSystem(home_id=home_id, **s.model_dump()) for s in payload.systems]
    db.add_all(rows)
    db.commit()
    for r in rows:
        db.refresh(r)
    return {
        "success": True,
        "systems": dump_all(HomeSystemOut, rows),
        "message": f"Successfully added {len(rows)} system(s)",
    }
