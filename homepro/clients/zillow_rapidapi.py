# homepro/clients/zillow_rapidapi.py
from __future__ import annotations

from typing import Any, Optional

import httpx

from ..config import settings
from .rentcast import PropertyRecord


def _map_search_result(p: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {
        "yearBuilt": p.get("yearBuilt"),
        "squareFootage": p.get("livingArea"),
        "lotSize": p.get("lotAreaValue") or p.get("lotSizeValue"),
        "bedrooms": p.get("bedrooms"),
        "bathrooms": p.get("bathrooms"),
        "propertyType": p.get("homeType") or p.get("propertyType"),
        "propertyImageUrl": p.get("imgSrc"),
    }
    if p.get("zpid"):
        out["zillowUrl"] = f"https://www.zillow.com/homedetails/{p['zpid']}_zpid/"
    return {k: v for k, v in out.items() if v not in (None, "")}


class ZillowRapidApiClient:
    """Zillow listing search through RapidAPI."""

    source = "zillow"

    def __init__(self) -> None:
        self.api_key = settings.rapidapi_key
        self.host = settings.rapidapi_zillow_host

    def enabled(self) -> bool:
        return bool(self.api_key and self.host)

    def search(self, *, location: str) -> PropertyRecord:
        if not self.enabled():
            return PropertyRecord({}, {"error": "rapidapi_key not set"})

        url = f"https://{self.host}/propertyExtendedSearch"
        headers = {"X-RapidAPI-Key": self.api_key or "", "X-RapidAPI-Host": self.host}

        try:
            with httpx.Client(timeout=20.0) as client:
                r = client.get(url, params={"location": location}, headers=headers)
                r.raise_for_status()
                data = r.json()
        except Exception as e:
            return PropertyRecord({}, {"error": str(e), "endpoint": url})

        item: Optional[dict] = None
        if isinstance(data, dict):
            results = data.get("props") or data.get("results")
            if isinstance(results, list) and results:
                item = results[0]
            elif data.get("zpid"):
                # exact address hits come back as a single property
                item = data

        if not isinstance(item, dict):
            return PropertyRecord({}, data if isinstance(data, dict) else {"response": data})

        return PropertyRecord(_map_search_result(item), item)
