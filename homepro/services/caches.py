# homepro/services/caches.py
from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timedelta
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..models import PropertyCache, ZipCodeCache

log = logging.getLogger(__name__)


# Cache reads and writes are best-effort: a database error is logged, the
# session rolled back, and the caller carries on as if it were a miss.


def property_cache_key(address: str, city: str, state: str, zip_code: str) -> str:
    key = f"{address.strip().lower()}|{city.strip().lower()}|{state.strip().upper()}|{zip_code.strip()}"
    return re.sub(r"\s+", " ", key)


def zip_cache_key(zip_code: str) -> str:
    return re.sub(r"\s+", "", zip_code or "")[:5]


def get_cached_property(
    db: Session, *, address: str, city: str, state: str, zip_code: str, now: Optional[datetime] = None
) -> Optional[dict[str, Any]]:
    now = now or datetime.utcnow()
    try:
        row = db.scalar(select(PropertyCache).where(PropertyCache.cache_key == property_cache_key(address, city, state, zip_code)))
        if row is None:
            return None
        if row.expires_at < now:
            db.delete(row)
            db.commit()
            return None
        return json.loads(row.property_data_json)
    except (SQLAlchemyError, ValueError):
        db.rollback()
        log.warning("property cache read failed", exc_info=True)
        return None


def set_cached_property(
    db: Session,
    *,
    address: str,
    city: str,
    state: str,
    zip_code: str,
    data: dict[str, Any],
    source: str = "unknown",
    now: Optional[datetime] = None,
) -> None:
    now = now or datetime.utcnow()
    key = property_cache_key(address, city, state, zip_code)
    expires = now + timedelta(days=settings.property_cache_days)
    try:
        row = db.scalar(select(PropertyCache).where(PropertyCache.cache_key == key))
        if row is None:
            row = PropertyCache(
                cache_key=key,
                address=address.strip(),
                city=city.strip(),
                state=state.strip().upper(),
                zip_code=zip_code.strip(),
            )
            db.add(row)
        row.property_data_json = json.dumps(data, default=str)
        row.source = source
        row.expires_at = expires
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        log.warning("property cache write failed", exc_info=True)


def get_cached_zip(db: Session, zip_code: str, *, now: Optional[datetime] = None) -> Optional[dict[str, Any]]:
    """{climateData, weatherData, city, state} for a 5-digit ZIP, or None."""
    now = now or datetime.utcnow()
    try:
        row = db.scalar(select(ZipCodeCache).where(ZipCodeCache.zip_code == zip_cache_key(zip_code)))
        if row is None:
            return None
        if row.expires_at < now:
            db.delete(row)
            db.commit()
            return None
        return {
            "city": row.city,
            "state": row.state,
            "climateData": json.loads(row.climate_data_json) if row.climate_data_json else None,
            "weatherData": json.loads(row.weather_data_json) if row.weather_data_json else None,
        }
    except (SQLAlchemyError, ValueError):
        db.rollback()
        log.warning("zip cache read failed", exc_info=True)
        return None


def set_cached_zip(
    db: Session,
    zip_code: str,
    *,
    city: Optional[str] = None,
    state: Optional[str] = None,
    climate_data: Optional[dict[str, Any]] = None,
    weather_data: Optional[dict[str, Any]] = None,
    source: str = "unknown",
    now: Optional[datetime] = None,
) -> None:
    now = now or datetime.utcnow()
    key = zip_cache_key(zip_code)
    try:
        row = db.scalar(select(ZipCodeCache).where(ZipCodeCache.zip_code == key))
        if row is None:
            row = ZipCodeCache(zip_code=key)
            db.add(row)
        if city:
            row.city = city
        if state:
            row.state = state.upper()
        if climate_data is not None:
            row.climate_data_json = json.dumps(climate_data)
        if weather_data is not None:
            row.weather_data_json = json.dumps(weather_data)
        row.source = source
        row.expires_at = now + timedelta(days=settings.zip_cache_days)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        log.warning("zip cache write failed", exc_info=True)
