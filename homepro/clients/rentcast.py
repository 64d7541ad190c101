# homepro/clients/rentcast.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from ..config import settings

SQFT_PER_ACRE = 43560.0


@dataclass(frozen=True)
class PropertyRecord:
    data: dict[str, Any]
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return bool(self.data)


def _int(v: Any) -> Optional[int]:
    if v is None or v == "":
        return None
    try:
        return int(float(v))
    except (TypeError, ValueError):
        return None


def _num(v: Any) -> Optional[float]:
    if isinstance(v, (int, float)):
        return float(v)
    if isinstance(v, str) and v.strip():
        try:
            return float(v.replace(",", ""))
        except ValueError:
            return None
    return None


def _first(d: dict[str, Any], *keys: str) -> Any:
    for k in keys:
        v = d.get(k)
        if v not in (None, ""):
            return v
    return None


def map_property_record(p: dict[str, Any]) -> dict[str, Any]:
    """
    RentCast /properties item -> enrichment fields (camelCase).
    Lot sizes above 1 are square feet and get converted to acres.
    """
    lot = _num(p.get("lotSize"))
    if lot is not None and lot > 1:
        lot = lot / SQFT_PER_ACRE

    features = _feature_list(p.get("interiorFeatures"))

    zillow_url = p.get("zillowUrl")
    if not zillow_url and p.get("zpid"):
        zillow_url = f"https://www.zillow.com/homedetails/{p['zpid']}_zpid/"

    out = {
        "yearBuilt": _int(p.get("yearBuilt")),
        "squareFootage": _int(_first(p, "squareFootage", "livingArea")),
        "lotSize": lot,
        "bedrooms": _int(p.get("bedrooms")),
        "bathrooms": _num(p.get("bathrooms")),
        "propertyType": _first(p, "propertyType", "homeType"),
        "stories": _int(p.get("stories")),
        "garageSpaces": _int(_first(p, "garageSpaces", "garage")),
        "assessedValue": _num(p.get("assessedValue")),
        "marketValue": _num(_first(p, "marketValue", "estimatedValue")),
        "taxAmount": _num(_first(p, "taxAmount", "annualTaxAmount")),
        "taxYear": _int(p.get("taxYear")),
        "ownerName": p.get("ownerName"),
        "lastSaleDate": p.get("lastSaleDate"),
        "lastSalePrice": _num(p.get("lastSalePrice")),
        "constructionType": p.get("constructionType"),
        "roofType": p.get("roofType"),
        "foundationType": p.get("foundationType"),
        "heatingType": _first(p, "heatingType", "heating"),
        "heatingFuel": _first(p, "heatingFuel", "heatingFuelType"),
        "coolingType": _first(p, "coolingType", "cooling"),
        "waterHeaterType": _first(p, "waterHeaterType", "waterHeater"),
        "waterHeaterFuel": _first(p, "waterHeaterFuel", "waterHeaterFuelType"),
        "stoveFuel": _first(p, "stoveFuel", "rangeFuel", "ovenFuel") or _fuel_from_features(features, "stove", "range"),
        "dryerFuel": _first(p, "dryerFuel", "dryerFuelType") or _fuel_from_features(features, "dryer"),
        "washerType": p.get("washerType"),
        "interiorFeatures": features or None,
        "latitude": _num(p.get("latitude")),
        "longitude": _num(p.get("longitude")),
        "county": p.get("county"),
        "zillowUrl": zillow_url,
        "redfinUrl": p.get("redfinUrl"),
        "propertyImageUrl": _first(p, "imageUrl", "photoUrl"),
    }
    return {k: v for k, v in out.items() if v is not None}


def _feature_list(v: Any) -> list[str]:
    if isinstance(v, str):
        v = [v]
    if not isinstance(v, list):
        return []
    return [str(x) for x in v if x]


def _fuel_from_features(features: list[str], *appliances: str) -> Optional[str]:
    """Fuel named next to an appliance in the feature list ("gas range" -> "Gas")."""
    text = " ".join(features).lower()
    for fuel in ("gas", "electric"):
        if any(f"{fuel} {a}" in text for a in appliances):
            return fuel.capitalize()
    return None


def map_property_type_to_home_type(property_type: Optional[str]) -> Optional[str]:
    if not property_type:
        return None
    t = property_type.lower()
    if "town" in t:
        return "townhouse"
    if "condo" in t:
        return "condo"
    if "apartment" in t or "multi" in t:
        return "apartment"
    if "mobile" in t or "manufactured" in t:
        return "mobile-home"
    if "single" in t or "house" in t:
        return "single-family"
    return "other"


class RentcastClient:
    """Public property records (year built, size, tax, sale history)."""

    def __init__(self) -> None:
        self.base = settings.rentcast_base_url.rstrip("/")
        self.api_key = settings.rentcast_api_key

    def enabled(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> dict[str, str]:
        return {"X-Api-Key": self.api_key or "", "Accept": "application/json"}

    def property_record(self, *, address: str, city: str, state: str, zip_code: str) -> PropertyRecord:
        if not self.api_key:
            return PropertyRecord({}, {"error": "rentcast_api_key not set"})

        url = f"{self.base}/properties"
        street = address.strip()
        # most specific first
        formats = [
            f"{street}, {city}, {state} {zip_code}",
            f"{street}, {city}, {state}",
            street,
        ]

        try:
            with httpx.Client(timeout=20.0) as client:
                data: Any = None
                for q in formats:
                    r = client.get(url, params={"address": q}, headers=self._headers())
                    if r.status_code == 404:
                        continue
                    r.raise_for_status()
                    data = r.json()
                    if data:
                        break

                if not data:
                    # address search missed; fall back to the area
                    r = client.get(url, params={"city": city, "state": state, "limit": 1}, headers=self._headers())
                    if r.status_code != 404:
                        r.raise_for_status()
                        data = r.json()
        except Exception as e:
            return PropertyRecord({}, {"error": str(e), "endpoint": url})

        item = data[0] if isinstance(data, list) and data else data
        if not isinstance(item, dict):
            return PropertyRecord({}, {"response": data})

        return PropertyRecord(map_property_record(item), item)
