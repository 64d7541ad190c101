# homepro/services/property_enrichment.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy.orm import Session

from ..clients.census_geocoder import CensusGeocoderClient
from ..clients.rentcast import PropertyRecord, RentcastClient
from ..clients.scraper import PropertyScraper
from ..clients.zillow_rapidapi import ZillowRapidApiClient
from ..domain.address import street_line
from ..domain.auto_populate import suggested_appliances, suggested_systems
from .caches import get_cached_property, set_cached_property

log = logging.getLogger(__name__)

# fields returned to the client when enrichment found the property
ENRICHED_FIELDS = (
    "yearBuilt", "squareFootage", "lotSize", "bedrooms", "bathrooms", "propertyType",
    "stories", "garageSpaces", "assessedValue", "marketValue", "taxAmount",
    "constructionType", "roofType", "foundationType", "heatingType", "coolingType",
    "latitude", "longitude", "county", "propertyImageUrl", "zillowUrl", "redfinUrl",
    "heatingFuel", "waterHeaterType", "waterHeaterFuel", "stoveFuel", "dryerFuel", "washerType",
    "interiorFeatures",
)

CORE_FIELDS = ("yearBuilt", "squareFootage", "bedrooms")

NOT_CONFIGURED_MESSAGE = (
    "Property lookup APIs are not configured. Please enter property details manually. "
    "To enable automatic lookup, configure a property data API key or enable web scraping."
)
NOT_FOUND_MESSAGE = "Property information not found for this address. Please enter details manually."


@dataclass
class EnrichedProperty:
    data: dict[str, Any] = field(default_factory=dict)
    sources: list[str] = field(default_factory=list)
    cached: bool = False

    def has_core_fields(self) -> bool:
        return any(self.data.get(k) for k in CORE_FIELDS)

    def cacheable(self) -> bool:
        return bool(self.sources) and (self.has_core_fields() or self.data.get("latitude") is not None)

    def to_response_data(self) -> dict[str, Any]:
        out = {k: self.data.get(k) for k in ENRICHED_FIELDS}
        out["sources"] = list(self.sources)
        return out


@dataclass(frozen=True)
class Address:
    address: str
    city: str
    state: str
    zip_code: str

    @property
    def street(self) -> str:
        return street_line(self.address)

    def one_line(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.zip_code}"


class PropertyLookupService:
    """
    Two ordered chains:
      enrich(): property cache -> public records -> census geocoder
      lookup(): listing search API -> opt-in scraper
    Each provider failure is logged and the next one is tried.
    """

    def __init__(
        self,
        *,
        records: Optional[RentcastClient] = None,
        geocoder: Optional[CensusGeocoderClient] = None,
        listings: Optional[ZillowRapidApiClient] = None,
        scraper: Optional[PropertyScraper] = None,
    ) -> None:
        self.records = records or RentcastClient()
        self.geocoder = geocoder or CensusGeocoderClient()
        self.listings = listings or ZillowRapidApiClient()
        self.scraper = scraper or PropertyScraper.from_settings()

    def enrich(self, db: Session, addr: Address) -> EnrichedProperty:
        cached = get_cached_property(db, address=addr.address, city=addr.city, state=addr.state, zip_code=addr.zip_code)
        if cached:
            sources = cached.pop("sources", None) or []
            return EnrichedProperty(data=cached, sources=list(sources), cached=True)

        out = EnrichedProperty()

        if self.records.enabled():
            rec = self.records.property_record(
                address=addr.street, city=addr.city, state=addr.state, zip_code=addr.zip_code
            )
            if rec.found:
                out.data.update(rec.data)
                out.sources.append("property-records")
            elif rec.raw.get("error"):
                log.warning("property records lookup failed: %s", rec.raw["error"], extra={"provider": "rentcast"})

        if self.geocoder.enabled():
            geo = self.geocoder.geocode(street=addr.street, city=addr.city, state=addr.state, zip_code=addr.zip_code)
            if geo.found:
                out.data.update(geo.to_dict())
                out.sources.append("geocoding")
            elif geo.raw.get("error"):
                log.warning("geocoding failed: %s", geo.raw["error"], extra={"provider": "census"})

        if out.cacheable():
            set_cached_property(
                db,
                address=addr.address,
                city=addr.city,
                state=addr.state,
                zip_code=addr.zip_code,
                data={**out.data, "sources": out.sources},
                source=out.sources[0],
            )
        return out

    def lookup_available(self) -> bool:
        return self.listings.enabled() or self.scraper.enabled()

    def lookup(self, addr: Address) -> Optional[tuple[dict[str, Any], str]]:
        """(data, source) from the first provider that found the property."""
        attempts: list[tuple[str, Any]] = []
        if self.listings.enabled():
            attempts.append((self.listings.source, lambda: self.listings.search(location=addr.one_line())))
        if self.scraper.enabled():
            attempts.append((
                self.scraper.source,
                lambda: self.scraper.scrape(address=addr.street, city=addr.city, state=addr.state, zip_code=addr.zip_code),
            ))

        for source, attempt in attempts:
            try:
                rec: PropertyRecord = attempt()
            except Exception:
                log.warning("property lookup provider failed: %s", source, exc_info=True, extra={"provider": source})
                continue
            if rec.found:
                return rec.data, source
        return None

    def lookup_response(self, db: Session, addr: Address) -> dict[str, Any]:
        enriched = self.enrich(db, addr)
        if enriched.has_core_fields():
            return _found(enriched.to_response_data(), enriched.sources)

        if not self.lookup_available():
            return {"found": False, "requiresApiKey": True, "message": NOT_CONFIGURED_MESSAGE}

        hit = self.lookup(addr)
        if hit is None:
            return {"found": False, "requiresApiKey": False, "message": NOT_FOUND_MESSAGE}

        data, source = hit
        data = {**enriched.data, **data}
        data.setdefault("zillowUrl", None)
        data.setdefault("redfinUrl", None)
        return _found(data, [source])


def _found(data: dict[str, Any], sources: list[str]) -> dict[str, Any]:
    """Found response, with the systems and appliances the record implies for the owner to confirm."""
    return {
        "found": True,
        "data": data,
        "sources": sources,
        "suggestedSystems": suggested_systems(data),
        "suggestedAppliances": suggested_appliances(data),
    }
