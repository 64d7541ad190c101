# tests/test_inventory_api.py
from __future__ import annotations


def _inventory(client, h, home_id) -> dict:
    r = client.post(
        "/api/inventory",
        json={
            "homeId": home_id,
            "appliances": [{"applianceType": "DISHWASHER", "brand": "Bosch"}],
            "exteriorFeatures": [{"featureType": "DECK", "material": "Cedar"}],
            "interiorFeatures": [{"featureType": "CARPET", "room": "Bedroom"}],
        },
        headers=h,
    )
    assert r.status_code == 201, r.text
    return r.json()


def test_create_and_list(client, headers, make_home):
    h = headers()
    home = make_home(h)
    _inventory(client, h, home["id"])

    body = client.get("/api/inventory", params={"homeId": home["id"]}, headers=h).json()
    assert [a["brand"] for a in body["appliances"]] == ["Bosch"]
    assert body["exteriorFeatures"][0]["material"] == "Cedar"
    assert body["interiorFeatures"][0]["room"] == "Bedroom"


def test_list_requires_home_id(client, headers):
    r = client.get("/api/inventory", headers=headers())
    assert r.status_code == 400
    assert r.json() == {"error": "homeId is required"}


def test_update_validates_against_item_kind(client, headers, make_home):
    h = headers()
    created = _inventory(client, h, make_home(h)["id"])
    appliance_id = created["appliances"][0]["id"]

    ok = client.patch(f"/api/inventory/appliances/{appliance_id}", json={"model": "SHX88"}, headers=h)
    assert ok.status_code == 200, ok.text
    assert ok.json()["item"]["model"] == "SHX88"
    assert ok.json()["item"]["brand"] == "Bosch"

    bad = client.patch(f"/api/inventory/appliances/{appliance_id}", json={"applianceType": "DECK"}, headers=h)
    assert bad.status_code == 400
    assert bad.json()["error"] == "Validation error"

    cleared = client.patch(f"/api/inventory/appliances/{appliance_id}", json={"applianceType": None}, headers=h)
    assert cleared.status_code == 400
    assert cleared.json()["error"] == "Validation error"


def test_unknown_kind(client, headers):
    r = client.delete("/api/inventory/gadgets/1", headers=headers())
    assert r.status_code == 404
    assert r.json() == {"error": "Unknown inventory kind: gadgets"}


def test_foreign_item_is_not_found(client, headers, make_home):
    owner = headers("owner")
    created = _inventory(client, owner, make_home(owner)["id"])
    deck_id = created["exteriorFeatures"][0]["id"]

    r = client.delete(f"/api/inventory/exterior-features/{deck_id}", headers=headers("other"))
    assert r.status_code == 404
    assert r.json() == {"error": "Exterior feature not found"}


def test_history_updates_last_service_date(client, headers, make_home):
    h = headers()
    home = make_home(h)
    appliance_id = _inventory(client, h, home["id"])["appliances"][0]["id"]

    r = client.post(
        "/api/maintenance/history",
        json={
            "homeId": home["id"],
            "applianceId": appliance_id,
            "serviceDate": "2026-03-04T09:00:00",
            "serviceType": "repair",
            "description": "Replaced drain pump",
            "cost": 180,
            "receipts": ["https://example.com/r.pdf"],
        },
        headers=h,
    )
    assert r.status_code == 201, r.text
    assert r.json()["history"]["receipts"] == ["https://example.com/r.pdf"]

    listed = client.get("/api/maintenance/history", params={"homeId": home["id"], "applianceId": appliance_id}, headers=h)
    assert len(listed.json()["history"]) == 1

    inv = client.get("/api/inventory", params={"homeId": home["id"]}, headers=h).json()
    assert inv["appliances"][0]["lastServiceDate"] == "2026-03-04T09:00:00"


def test_history_rejects_item_from_another_home(client, headers, make_home):
    h = headers()
    first = make_home(h)
    second = make_home(h, address="9 Side Rd", zipCode="62702")
    appliance_id = _inventory(client, h, first["id"])["appliances"][0]["id"]

    r = client.post(
        "/api/maintenance/history",
        json={
            "homeId": second["id"],
            "applianceId": appliance_id,
            "serviceDate": "2026-03-04T09:00:00",
            "serviceType": "maintenance",
            "description": "Clean filter",
        },
        headers=h,
    )
    assert r.status_code == 404
    assert r.json() == {"error": "Appliance not found"}
