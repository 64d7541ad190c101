# homepro/routers/lookups.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_property_lookup
from ..domain.address import LocationError, validate_state, validate_zip
from ..domain.climate import climate_recommendations, estimate_climate
from ..domain.compliance import compliance_recommendations, permit_requirements, summary_messages
from ..schemas import ClimateLookupIn, ComplianceLookupIn, PropertyLookupIn
from ..services.caches import get_cached_zip, set_cached_zip
from ..services.property_enrichment import Address, PropertyLookupService

log = logging.getLogger(__name__)

# Lookups are address-only and carry no user data, so they are not behind get_principal.
router = APIRouter(tags=["lookups"])


def _location_error(e: LocationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=e.as_dict())


@router.post("/climate/lookup")
def climate_lookup(payload: ClimateLookupIn, db: Session = Depends(get_db)):
    if not (payload.city and payload.state and payload.zip_code):
        raise HTTPException(status_code=400, detail="City, state, and zipCode are required")
    try:
        zip_code = validate_zip(payload.zip_code)
        state = validate_state(payload.state)
    except LocationError as e:
        return _location_error(e)
    city = payload.city.strip()

    cached = get_cached_zip(db, zip_code)
    if cached and cached.get("climateData"):
        data = cached["climateData"]
        from_cache = True
    else:
        data = estimate_climate(state).to_dict()
        set_cached_zip(db, zip_code, city=city, state=state, climate_data=data, source="climate-estimate")
        from_cache = False

    return {
        "success": True,
        "data": data,
        "recommendations": climate_recommendations(data),
        "cached": from_cache,
    }


@router.post("/compliance/lookup")
def compliance_lookup(payload: ComplianceLookupIn):
    if not (payload.city and payload.state and payload.zip_code):
        raise HTTPException(status_code=400, detail="City, state, and zipCode are required")
    try:
        validate_zip(payload.zip_code)
        state = validate_state(payload.state)
    except LocationError as e:
        return _location_error(e)
    city = payload.city.strip()

    compliance = compliance_recommendations(
        city,
        state,
        year_built=payload.year_built,
        home_type=payload.home_type,
        county=payload.county,
    )
    permit = None
    if payload.task_category and payload.task_name:
        permit = permit_requirements(payload.task_category, payload.task_name)

    return {
        "success": True,
        "compliance": compliance,
        "permitInfo": permit.to_dict() if permit is not None else None,
        "recommendations": summary_messages(compliance["summary"], permit),
    }


@router.post("/property/lookup")
def property_lookup(
    payload: PropertyLookupIn,
    db: Session = Depends(get_db),
    service: PropertyLookupService = Depends(get_property_lookup),
):
    """
    Enrichment chain first (cache, public records, geocoder); listing
    search and the opt-in scraper only when enrichment finds no core fields.
    """
    if not (payload.address and payload.city and payload.state and payload.zip_code):
        raise HTTPException(status_code=400, detail="Address, city, state, and zipCode are required")
    try:
        zip_code = validate_zip(payload.zip_code)
        state = validate_state(payload.state)
    except LocationError as e:
        return _location_error(e)

    addr = Address(address=payload.address.strip(), city=payload.city.strip(), state=state, zip_code=zip_code)
    out = service.lookup_response(db, addr)
    log.info("property_lookup", extra={"provider": ",".join(out.get("sources") or []) or "none"})
    return out
