# homepro/domain/auto_populate.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

# Suggestions are shaped like the homes API bodies (HomeSystemIn / ApplianceIn),
# so a client can post them back unchanged after the owner confirms.

_ROOF_MATERIALS = (
    (("asphalt", "shingle"), "asphalt", 20),
    (("metal",), "metal", 40),
    (("tile",), "tile", 50),
)


def _compact(d: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


def _home_age(year_built: Optional[int], now: datetime) -> Optional[int]:
    if not year_built:
        return None
    return now.year - int(year_built)


def _over(age: Optional[int], years: float) -> bool:
    return bool(age) and age > years


def suggested_systems(data: Mapping[str, Any], *, now: Optional[datetime] = None) -> list[dict[str, Any]]:
    """
    Home systems implied by enriched property data.

    Lifespan and condition are rough guesses from the home's age; unknown
    age reads as a newer home.
    """
    now = now or datetime.utcnow()
    year_built = data.get("yearBuilt")
    age = _home_age(year_built, now)
    out: list[dict[str, Any]] = []

    heating, cooling, heating_fuel = data.get("heatingType"), data.get("coolingType"), data.get("heatingFuel")
    if heating or cooling:
        notes = []
        if heating:
            notes.append(f"Heating: {heating}")
        if heating_fuel:
            notes.append(f"Fuel: {heating_fuel}")
        if cooling:
            notes.append(f"Cooling: {cooling}")
        out.append({
            "systemType": "HVAC",
            "notes": ", ".join(notes),
            "expectedLifespan": 10 if _over(age, 15) else 15,
            "condition": "fair" if _over(age, 20) else "good" if _over(age, 10) else "excellent",
        })

    wh_type, wh_fuel = data.get("waterHeaterType"), data.get("waterHeaterFuel")
    if wh_type or wh_fuel:
        notes = []
        if wh_type:
            notes.append(f"Type: {wh_type}")
        if wh_fuel:
            notes.append(f"Fuel: {wh_fuel}")
        tankless = "tankless" in str(wh_type or "").lower()
        out.append({
            "systemType": "WATER_HEATER",
            "notes": ", ".join(notes),
            "expectedLifespan": 20 if tankless else 10,
            "condition": "fair" if _over(age, 10) else "good",
        })

    roof = data.get("roofType")
    if roof:
        kind = str(roof).lower()
        material, lifespan = None, None
        for needles, name, years in _ROOF_MATERIALS:
            if any(n in kind for n in needles):
                material, lifespan = name, years
                break
        out.append(_compact({
            "systemType": "ROOF",
            "material": material,
            "notes": f"Type: {roof}",
            "expectedLifespan": lifespan,
            "condition": "fair" if _over(age, (lifespan or 20) * 0.7) else "good",
        }))

    construction = data.get("constructionType")
    if construction:
        out.append({
            "systemType": "PLUMBING",
            "notes": f"Construction: {construction}",
            "expectedLifespan": 50,
            "condition": "fair" if _over(age, 40) else "good",
        })

    if age is not None:
        out.append({
            "systemType": "ELECTRICAL",
            "notes": f"Home built in {year_built}",
            "expectedLifespan": 50,
            "condition": "fair" if age > 40 else "good" if age > 20 else "excellent",
        })

    return out


def _mentions(features: Any, *words: str) -> bool:
    if not isinstance(features, list):
        return False
    return any(w in str(f).lower() for f in features for w in words)


def suggested_appliances(data: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Range, washer and dryer implied by fuel types and interior features."""
    features = data.get("interiorFeatures")
    out: list[dict[str, Any]] = []

    stove = data.get("stoveFuel")
    if stove:
        out.append({"applianceType": "RANGE", "notes": f"{stove} stove/range"})

    washer = data.get("washerType")
    if washer or _mentions(features, "washer", "laundry"):
        out.append({"applianceType": "WASHER", "notes": f"Type: {washer}" if washer else "Washer"})

    dryer = data.get("dryerFuel")
    if dryer or _mentions(features, "dryer", "laundry"):
        out.append({"applianceType": "DRYER", "notes": f"{dryer} dryer" if dryer else "Dryer"})

    return out
