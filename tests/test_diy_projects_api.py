# tests/test_diy_projects_api.py
from __future__ import annotations


def _project(client, h, home_id, **overrides) -> dict:
    body = {"name": "Tile backsplash", "category": "INTERIOR", "difficulty": "MEDIUM", "homeId": home_id, "budget": 300}
    body.update(overrides)
    r = client.post("/api/diy-projects", json=body, headers=h)
    assert r.status_code == 201, r.text
    return r.json()["project"]


def test_create_project_with_children(client, headers, make_home):
    h = headers()
    home = make_home(h)
    pr = _project(client, h, home["id"])
    assert pr["status"] == "NOT_STARTED"
    assert pr["home"]["city"] == "Springfield"
    pid = pr["id"]

    first = client.post(f"/api/diy-projects/{pid}/steps", json={"stepNumber": 1, "name": "Prep wall"}, headers=h)
    assert first.status_code == 201, first.text
    step_id = first.json()["step"]["id"]
    second = client.post(
        f"/api/diy-projects/{pid}/steps",
        json={"stepNumber": 2, "name": "Set tile", "dependsOnStepId": step_id},
        headers=h,
    )
    assert second.status_code == 201, second.text

    mat = client.post(
        f"/api/diy-projects/{pid}/materials",
        json={"name": "Subway tile", "quantity": 30, "unit": "sqft", "unitPrice": 4.5},
        headers=h,
    )
    assert mat.status_code == 201, mat.text
    assert mat.json()["material"]["totalPrice"] == 135.0

    detail = client.get(f"/api/diy-projects/{pid}", headers=h).json()["project"]
    assert [s["name"] for s in detail["steps"]] == ["Prep wall", "Set tile"]
    assert len(detail["materials"]) == 1


def test_step_completion_and_hours_rollup(client, headers, make_home):
    h = headers()
    pid = _project(client, h, make_home(h)["id"])["id"]
    a = client.post(f"/api/diy-projects/{pid}/steps", json={"stepNumber": 1, "name": "A"}, headers=h).json()["step"]
    b = client.post(f"/api/diy-projects/{pid}/steps", json={"stepNumber": 2, "name": "B"}, headers=h).json()["step"]

    r = client.patch(f"/api/diy-projects/{pid}/steps/{a['id']}", json={"status": "completed", "actualHours": 2}, headers=h)
    assert r.status_code == 200, r.text
    assert r.json()["step"]["completedAt"] is not None
    client.patch(f"/api/diy-projects/{pid}/steps/{b['id']}", json={"actualHours": 1.5}, headers=h)

    project = client.get(f"/api/diy-projects/{pid}", headers=h).json()["project"]
    assert project["actualHours"] == 3.5

    r = client.patch(f"/api/diy-projects/{pid}/steps/{a['id']}", json={"status": "in_progress"}, headers=h)
    assert r.json()["step"]["completedAt"] is None


def test_dependency_must_be_in_same_project(client, headers, make_home):
    h = headers()
    home_id = make_home(h)["id"]
    one = _project(client, h, home_id)["id"]
    two = _project(client, h, home_id, name="Other")["id"]
    step = client.post(f"/api/diy-projects/{one}/steps", json={"stepNumber": 1, "name": "A"}, headers=h).json()["step"]

    r = client.post(
        f"/api/diy-projects/{two}/steps",
        json={"stepNumber": 1, "name": "B", "dependsOnStepId": step["id"]},
        headers=h,
    )
    assert r.status_code == 404
    assert r.json() == {"error": "Step not found"}


def test_project_tool_marked_owned_from_inventory(client, headers, make_home):
    h = headers()
    pid = _project(client, h, make_home(h)["id"])["id"]
    client.post("/api/tools/inventory", json={"name": "Tile Cutter"}, headers=h)

    owned = client.post(f"/api/diy-projects/{pid}/tools", json={"name": "tile cutter"}, headers=h).json()["tool"]
    rented = client.post(
        f"/api/diy-projects/{pid}/tools", json={"name": "Wet Saw", "rentalCost": 40, "rentalDays": 2}, headers=h
    ).json()["tool"]
    assert owned["owned"] is True
    assert rented["owned"] is False


def test_material_purchase_stamps_time(client, headers, make_home):
    h = headers()
    pid = _project(client, h, make_home(h)["id"])["id"]
    m = client.post(
        f"/api/diy-projects/{pid}/materials", json={"name": "Grout", "quantity": 1, "unit": "bag"}, headers=h
    ).json()["material"]

    r = client.patch(f"/api/diy-projects/{pid}/materials/{m['id']}", json={"purchased": True}, headers=h)
    assert r.json()["material"]["purchased"] is True
    assert r.json()["material"]["purchasedAt"] is not None

    r = client.patch(f"/api/diy-projects/{pid}/materials/{m['id']}", json={"purchased": False}, headers=h)
    assert r.json()["material"]["purchasedAt"] is None


def test_foreign_project_is_not_found(client, headers, make_home):
    owner = headers("owner")
    pid = _project(client, owner, make_home(owner)["id"])["id"]
    r = client.get(f"/api/diy-projects/{pid}", headers=headers("other"))
    assert r.status_code == 404
    assert r.json() == {"error": "Project not found"}
