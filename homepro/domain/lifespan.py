# homepro/domain/lifespan.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Optional

from .recurrence import add_months

URGENCY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3}

_TYPE_SIGNS = (
    ("HVAC", ("Reduced efficiency", "Frequent repairs", "Unusual noises")),
    ("ROOF", ("Missing or damaged shingles", "Leaks or water stains", "Sagging or warping")),
)
_APPLIANCE_SIGNS = ("Frequent breakdowns", "Increased energy consumption", "Unusual sounds or vibrations")


def age_in_years(install_date: Optional[datetime], now: datetime) -> Optional[int]:
    """Whole years since install; the current year counts once its month is reached."""
    if install_date is None:
        return None
    age = now.year - install_date.year
    if now.month < install_date.month:
        age -= 1
    return age


def lifespan_used(age: Optional[int], expected: Optional[int]) -> Optional[int]:
    if not age or not expected:
        return None
    return min(100, round(age / expected * 100))


def replacement_urgency(used: Optional[int], age: Optional[int], expected: Optional[int]) -> str:
    if used:
        if used >= 90:
            return "critical"
        if used >= 75:
            return "high"
        if used >= 60:
            return "medium"
        return "low"

    if not age or not expected:
        return "low"
    remaining = expected - age
    if remaining < 1:
        return "critical"
    if remaining < 3:
        return "high"
    if remaining < 5:
        return "medium"
    return "low"


def replacement_date(install_date: Optional[datetime], expected: Optional[int]) -> Optional[str]:
    if install_date is None or not expected:
        return None
    return add_months(install_date, expected * 12).date().isoformat()


def warning_signs(item_name: str, item_type: str, urgency: str) -> list[str]:
    signs: list[str] = []
    if urgency in ("critical", "high"):
        signs += ["Approaching or past expected lifespan", "Increased maintenance frequency needed"]

    name = (item_name or "").upper()
    for needle, extra in _TYPE_SIGNS:
        if needle in name:
            return signs + list(extra)
    if item_type == "appliance":
        signs += list(_APPLIANCE_SIGNS)
    return signs


def predict(item: Any, *, item_type: str, item_name: str, now: datetime) -> dict:
    """One replacement forecast for an inventory row or home system."""
    age = age_in_years(item.install_date, now)
    used = lifespan_used(age, item.expected_lifespan)
    urgency = replacement_urgency(used, age, item.expected_lifespan)

    out = {"itemId": item.id, "itemName": item_name, "itemType": item_type}
    if item_type in ("system", "appliance"):
        out["brand"] = item.brand
        out["model"] = item.model
    else:
        out["material"] = item.material
    if item_type == "interiorFeature":
        out["room"] = item.room

    out.update({
        "currentAge": age,
        "expectedLifespan": item.expected_lifespan,
        "lifespanUsed": used,
        "replacementUrgency": urgency,
        "recommendedReplacementDate": replacement_date(item.install_date, item.expected_lifespan),
        "warningSigns": warning_signs(item_name, item_type, urgency),
    })
    return out


def sort_by_urgency(predictions: Iterable[dict]) -> list[dict]:
    # stable, so items keep their inventory order within a level
    return sorted(predictions, key=lambda p: URGENCY_ORDER[p["replacementUrgency"]])
