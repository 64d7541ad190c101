# tests/test_lookups_api.py
from __future__ import annotations

import pytest

from homepro.deps import get_property_lookup


class FakeLookup:
    def __init__(self, response: dict) -> None:
        self.response = response
        self.calls = []

    def lookup_response(self, db, addr):
        self.calls.append(addr)
        return self.response


@pytest.fixture
def lookup(app):
    fake = FakeLookup({"found": True, "data": {"yearBuilt": 1978, "squareFootage": 1850}, "sources": ["fake"]})
    app.dependency_overrides[get_property_lookup] = lambda: fake
    return fake


def test_climate_lookup_caches_by_zip(client):
    body = {"city": "Miami", "state": "fl", "zipCode": "33101"}
    first = client.post("/api/climate/lookup", json=body)
    assert first.status_code == 200, first.text
    assert first.json()["success"] is True
    assert first.json()["cached"] is False
    assert "stormFrequency" in first.json()["data"]
    assert isinstance(first.json()["recommendations"], list)

    second = client.post("/api/climate/lookup", json={**body, "zipCode": "33101-1234"})
    assert second.json()["cached"] is True
    assert second.json()["data"] == first.json()["data"]


def test_climate_lookup_requires_fields(client):
    r = client.post("/api/climate/lookup", json={"city": "Miami"})
    assert r.status_code == 400
    assert r.json() == {"error": "City, state, and zipCode are required"}


def test_invalid_zip_reports_what_was_received(client):
    r = client.post("/api/climate/lookup", json={"city": "Miami", "state": "FL", "zipCode": "331 0"})
    assert r.status_code == 400
    assert r.json() == {
        "error": "Invalid ZIP code format",
        "message": 'ZIP code "3310" does not match required format. Expected: 12345 or 12345-6789',
        "received": "3310",
    }


def test_invalid_state(client):
    r = client.post("/api/compliance/lookup", json={"city": "Austin", "state": "Texas", "zipCode": "73301"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid state format"
    assert r.json()["received"] == "TEXAS"


def test_compliance_with_permit_question(client):
    r = client.post(
        "/api/compliance/lookup",
        json={
            "city": "Austin",
            "state": "TX",
            "zipCode": "73301",
            "yearBuilt": 1995,
            "taskCategory": "ELECTRICAL",
            "taskName": "Add outlet",
        },
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert set(body["compliance"]) == {"regulations", "complianceTasks", "summary"}
    assert body["permitInfo"]["requiresPermit"] is True
    assert body["permitInfo"]["permitType"] == "Electrical Permit"
    assert any("Electrical Permit" in m for m in body["recommendations"])


def test_compliance_without_task_has_no_permit_info(client):
    r = client.post("/api/compliance/lookup", json={"city": "Austin", "state": "TX", "zipCode": "73301"})
    assert r.json()["permitInfo"] is None


def test_property_lookup_normalizes_before_calling_service(client, lookup):
    r = client.post(
        "/api/property/lookup",
        json={"address": " 12 Oak St ", "city": "Boise ", "state": "id", "zipCode": "83702"},
    )
    assert r.status_code == 200, r.text
    assert r.json()["found"] is True
    addr = lookup.calls[0]
    assert (addr.address, addr.city, addr.state, addr.zip_code) == ("12 Oak St", "Boise", "ID", "83702")


def test_property_lookup_requires_fields(client, lookup):
    r = client.post("/api/property/lookup", json={"address": "12 Oak St", "city": "Boise", "state": "ID"})
    assert r.status_code == 400
    assert r.json() == {"error": "Address, city, state, and zipCode are required"}
    assert lookup.calls == []
