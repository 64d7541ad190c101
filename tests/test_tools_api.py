# tests/test_tools_api.py
from __future__ import annotations


def _tool(client, h, **body) -> dict:
    r = client.post("/api/tools/inventory", json=body, headers=h)
    assert r.status_code == 201, r.text
    return r.json()["tool"]


def test_inventory_crud_and_search(client, headers):
    h = headers()
    drill = _tool(client, h, name="Cordless Drill", brand="DeWalt", category="power")
    _tool(client, h, name="Tape Measure", category="hand")

    found = client.get("/api/tools/inventory", params={"search": "dewalt"}, headers=h).json()["tools"]
    assert [t["id"] for t in found] == [drill["id"]]

    r = client.patch(f"/api/tools/inventory/{drill['id']}", json={"location": "Garage"}, headers=h)
    assert r.json()["tool"]["location"] == "Garage"

    assert client.delete(f"/api/tools/inventory/{drill['id']}", headers=h).json() == {"success": True}
    assert client.get(f"/api/tools/inventory/{drill['id']}", headers=h).status_code == 404


def test_check_owned(client, headers):
    h = headers()
    hammer = _tool(client, h, name="Hammer")
    saw = _tool(client, h, name="Circular Saw")

    r = client.post("/api/tools/check-owned", json={"toolNames": ["hammer", "Saw", "Level"]}, headers=h)
    assert r.status_code == 200
    assert r.json()["toolOwnership"] == [
        {"toolName": "hammer", "isOwned": True, "toolId": hammer["id"]},
        {"toolName": "Saw", "isOwned": False, "toolId": saw["id"]},
        {"toolName": "Level", "isOwned": False, "toolId": None},
    ]


def test_check_owned_requires_list(client, headers):
    r = client.post("/api/tools/check-owned", json={"toolNames": "Hammer"}, headers=headers())
    assert r.status_code == 400
    assert r.json() == {"error": "toolNames must be an array"}


def test_tools_are_private(client, headers):
    tool = _tool(client, headers("owner"), name="Ladder")
    r = client.get(f"/api/tools/inventory/{tool['id']}", headers=headers("other"))
    assert r.status_code == 404
    assert r.json() == {"error": "Tool not found"}
    assert client.get("/api/tools/inventory", headers=headers("other")).json()["tools"] == []


def test_patch_rejects_null_name(client, headers):
    h = headers()
    tool = _tool(client, h, name="Hammer")
    r = client.patch(f"/api/tools/inventory/{tool['id']}", json={"name": None}, headers=h)
    assert r.status_code == 400
    assert client.get(f"/api/tools/inventory/{tool['id']}", headers=h).json()["tool"]["name"] == "Hammer"
