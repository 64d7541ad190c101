# homepro/clients/census_geocoder.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ..config import settings


@dataclass(frozen=True)
class GeocodeResult:
    latitude: Optional[float]
    longitude: Optional[float]
    county: Optional[str]
    fips_code: Optional[str]
    census_tract: Optional[str]
    raw: dict[str, Any]

    @property
    def found(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def to_dict(self) -> dict[str, Any]:
        out = {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "county": self.county,
            "fipsCode": self.fips_code,
            "censusTract": self.census_tract,
        }
        return {k: v for k, v in out.items() if v is not None}


def _obj(v: Any) -> dict[str, Any]:
    return v if isinstance(v, dict) else {}


def _first(v: Any) -> dict[str, Any]:
    return _obj(v[0]) if isinstance(v, list) and v else {}


class CensusGeocoderClient:
    """US Census geocoder. Free and keyless, so always enabled."""

    def __init__(self, transport: Optional[httpx.BaseTransport] = None) -> None:
        self.url = settings.census_geocoder_url
        self.transport = transport

    def enabled(self) -> bool:
        return bool(self.url)

    def geocode(self, *, street: str, city: str, state: str, zip_code: str) -> GeocodeResult:
        params = {
            "street": street,
            "city": city,
            "state": state,
            "zip": zip_code,
            "benchmark": "Public_AR_Current",
            "format": "json",
        }
        try:
            with httpx.Client(timeout=20.0, transport=self.transport) as client:
                r = client.get(self.url, params=params)
                r.raise_for_status()
                data = r.json()
        except Exception as e:
            return GeocodeResult(None, None, None, None, None, {"error": str(e), "url": self.url})

        # anything but the documented object shape counts as no match
        body = _obj(data)
        m = _first(_obj(body.get("result")).get("addressMatches"))
        if not m:
            return GeocodeResult(None, None, None, None, None, body)

        coords = _obj(m.get("coordinates"))
        tract = _first(_obj(m.get("geographies")).get("Census Tracts"))

        fips = None
        if tract.get("STATE") and tract.get("COUNTY"):
            fips = f"{tract['STATE']}{tract['COUNTY']}"

        lat = coords.get("y")
        lon = coords.get("x")
        return GeocodeResult(
            latitude=float(lat) if isinstance(lat, (int, float)) else None,
            longitude=float(lon) if isinstance(lon, (int, float)) else None,
            county=tract.get("NAME"),
            fips_code=fips,
            census_tract=tract.get("TRACT"),
            raw=body,
        )
