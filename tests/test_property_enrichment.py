# tests/test_property_enrichment.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import pytest

from homepro.clients.census_geocoder import GeocodeResult
from homepro.clients.rentcast import PropertyRecord
from homepro.db import SessionLocal
from homepro.services.property_enrichment import (
    NOT_CONFIGURED_MESSAGE,
    NOT_FOUND_MESSAGE,
    Address,
    PropertyLookupService,
)

ADDR = Address(address="42 Lake Dr", city="Madison", state="WI", zip_code="53703")


@dataclass
class FakeRecords:
    data: dict[str, Any] = field(default_factory=dict)
    calls: int = 0

    def enabled(self) -> bool:
        return True

    def property_record(self, **kw) -> PropertyRecord:
        self.calls += 1
        return PropertyRecord(data=dict(self.data))


@dataclass
class FakeGeocoder:
    lat: Optional[float] = None

    def enabled(self) -> bool:
        return self.lat is not None

    def geocode(self, **kw) -> GeocodeResult:
        return GeocodeResult(latitude=self.lat, longitude=-89.4, county="Dane", fips_code=None, census_tract=None, raw={})


@dataclass
class FakeProvider:
    source: str
    on: bool = True
    data: dict[str, Any] = field(default_factory=dict)
    fail: bool = False

    def enabled(self) -> bool:
        return self.on

    def _result(self) -> PropertyRecord:
        if self.fail:
            raise RuntimeError("provider down")
        return PropertyRecord(data=dict(self.data))

    def search(self, **kw) -> PropertyRecord:
        return self._result()

    def scrape(self, **kw) -> PropertyRecord:
        return self._result()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _service(records=None, geocoder=None, listings=None, scraper=None) -> PropertyLookupService:
    return PropertyLookupService(
        records=records or FakeRecords(),
        geocoder=geocoder or FakeGeocoder(),
        listings=listings or FakeProvider("zillow", on=False),
        scraper=scraper or FakeProvider("scraper", on=False),
    )


def test_public_records_hit_is_returned_and_cached(db):
    records = FakeRecords({"yearBuilt": 1962, "squareFootage": 1400})
    svc = _service(records=records, geocoder=FakeGeocoder(lat=43.07))

    out = svc.lookup_response(db, ADDR)
    assert out["found"] is True
    assert out["sources"] == ["property-records", "geocoding"]
    assert out["data"]["yearBuilt"] == 1962
    assert out["data"]["county"] == "Dane"

    again = svc.lookup_response(db, ADDR)
    assert again["data"]["yearBuilt"] == 1962
    assert records.calls == 1


def test_no_providers_configured(db):
    out = _service().lookup_response(db, ADDR)
    assert out == {"found": False, "requiresApiKey": True, "message": NOT_CONFIGURED_MESSAGE}


def test_falls_through_failed_listing_search_to_scraper(db):
    svc = _service(
        geocoder=FakeGeocoder(lat=43.07),
        listings=FakeProvider("zillow", fail=True),
        scraper=FakeProvider("scraper", data={"bedrooms": 3}),
    )
    out = svc.lookup_response(db, ADDR)
    assert out["found"] is True
    assert out["sources"] == ["scraper"]
    # geocoder data is merged under the listing hit
    assert out["data"]["bedrooms"] == 3
    assert out["data"]["latitude"] == 43.07
    assert out["data"]["zillowUrl"] is None


def test_nothing_found(db):
    svc = _service(listings=FakeProvider("zillow"))
    out = svc.lookup_response(db, ADDR)
    assert out == {"found": False, "requiresApiKey": False, "message": NOT_FOUND_MESSAGE}


def test_one_line_uses_street_only():
    assert Address("7 Elm St, Apt 2", "Reno", "NV", "89501").one_line() == "7 Elm St, Reno, NV 89501"


def test_found_response_suggests_systems_and_appliances(db):
    records = FakeRecords({"yearBuilt": 2015, "squareFootage": 1800, "coolingType": "Central", "stoveFuel": "Gas"})
    out = _service(records=records).lookup_response(db, ADDR)

    assert out["found"] is True
    assert out["data"]["stoveFuel"] == "Gas"
    assert [s["systemType"] for s in out["suggestedSystems"]] == ["HVAC", "ELECTRICAL"]
    assert out["suggestedAppliances"] == [{"applianceType": "RANGE", "notes": "Gas stove/range"}]
