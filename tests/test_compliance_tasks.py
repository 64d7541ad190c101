# tests/test_compliance_tasks.py
from __future__ import annotations

from datetime import datetime

from homepro.domain.compliance import Regulation, applicable_regulations, compliance_task_drafts

NOW = datetime(2025, 3, 31, 9, 0)


def test_drafts_follow_regulation_schedule_and_weight():
    regs = [
        Regulation("inspection", "Boiler Inspection", "Annual boiler check.", True, "annual", "Fines", "City DOB"),
        Regulation("code", "Facade Inspection", "Facade survey.", True, "every-5-years"),
        Regulation("environmental", "Radon Testing", "Test for radon.", False, "on-sale", None, "TREC"),
        Regulation("safety", "Window Guards", "Guards on windows.", True, "on-installation"),
        Regulation("safety", "Pool Fence", "Fence the pool.", False, None),
    ]
    drafts = {d.name: d for d in compliance_task_drafts(regs, now=NOW)}

    assert set(drafts) == {"Boiler Inspection", "Facade Inspection", "Radon Testing", "Window Guards"}

    boiler = drafts["Boiler Inspection"]
    assert (boiler.category, boiler.frequency, boiler.priority) == ("SAFETY", "ANNUAL", "high")
    assert boiler.next_due_date == datetime(2026, 3, 31, 9, 0)
    assert boiler.description == "Annual boiler check. Penalty: Fines (Source: City DOB) Required frequency: annual"
    assert boiler.notes == "⚠️ LEGALLY REQUIRED: City DOB"

    facade = drafts["Facade Inspection"]
    assert (facade.category, facade.frequency) == ("STRUCTURAL", "ANNUAL")
    assert facade.notes == "⚠️ LEGALLY REQUIRED: Local regulation"

    radon = drafts["Radon Testing"]
    assert (radon.category, radon.frequency, radon.priority) == ("OTHER", "AS_NEEDED", "medium")
    assert radon.next_due_date == datetime(2035, 3, 31, 9, 0)
    assert radon.notes is None

    guards = drafts["Window Guards"]
    assert (guards.priority, guards.next_due_date) == ("critical", NOW)


def test_biannual_rules_fall_due_in_six_months():
    (draft,) = compliance_task_drafts(
        [Regulation("inspection", "4-Point Inspection", "Insurance check.", True, "biannual")], now=NOW
    )
    assert draft.frequency == "BIANNUAL"
    assert draft.next_due_date == datetime(2025, 9, 30, 9, 0)


def test_first_rule_with_a_title_wins():
    regs = applicable_regulations("Springfield", "IL", year_built=1990, home_type="single-family", now=NOW)
    drafts = compliance_task_drafts(regs, now=NOW)

    assert [d.name for d in drafts] == [
        "Smoke Detector Requirements",
        "Carbon Monoxide Detector Requirements",
        "Asbestos Disclosure",
    ]
    assert drafts[0].source == "State building codes"


def test_no_regulations_no_drafts():
    assert compliance_task_drafts([], now=NOW) == []


def test_generate_creates_tasks_once(client, headers, make_home):
    h = headers()
    home = make_home(h)

    r = client.post("/api/tasks/generate-compliance", json={"homeId": home["id"]}, headers=h)
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["message"] == "Generated 3 compliance tasks"
    assert (body["totalComplianceTasks"], body["newTasks"], body["existingTasks"]) == (3, 3, 0)

    by_name = {t["name"]: t for t in body["tasks"]}
    smoke = by_name["Smoke Detector Requirements"]
    assert (smoke["category"], smoke["frequency"], smoke["priority"]) == ("SAFETY", "AS_NEEDED", "critical")
    assert smoke["notes"] == "⚠️ LEGALLY REQUIRED: State building codes"
    assert by_name["Asbestos Disclosure"]["category"] == "OTHER"

    again = client.post("/api/tasks/generate-compliance", json={"homeId": home["id"]}, headers=h)
    assert again.status_code == 200
    assert again.json()["message"] == "All compliance tasks already exist"
    assert len(again.json()["tasks"]) == 3

    listed = client.get("/api/tasks", params={"homeId": home["id"]}, headers=h).json()["tasks"]
    assert len(listed) == 3


def test_generate_skips_tasks_the_owner_already_has(client, headers, make_home):
    h = headers()
    home = make_home(h)
    r = client.post(
        "/api/tasks",
        json={
            "homeId": home["id"],
            "name": "smoke detector requirements",
            "description": "Test every alarm",
            "category": "SAFETY",
            "frequency": "ANNUAL",
            "nextDueDate": "2026-01-15T00:00:00",
        },
        headers=h,
    )
    assert r.status_code == 201, r.text

    body = client.post("/api/tasks/generate-compliance", json={"homeId": home["id"]}, headers=h).json()
    assert body["message"] == "Generated 2 compliance tasks"
    assert (body["newTasks"], body["existingTasks"]) == (2, 1)
    assert sorted(t["name"] for t in body["tasks"]) == ["Asbestos Disclosure", "Carbon Monoxide Detector Requirements"]


def test_generate_requires_an_owned_home(client, headers, make_home):
    home = make_home(headers("owner"))

    missing = client.post("/api/tasks/generate-compliance", json={}, headers=headers())
    assert missing.status_code == 400
    assert missing.json() == {"error": "homeId is required"}

    foreign = client.post("/api/tasks/generate-compliance", json={"homeId": home["id"]}, headers=headers())
    assert foreign.status_code == 404
    assert foreign.json() == {"error": "Home not found"}
