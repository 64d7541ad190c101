# tests/test_task_templates.py
from __future__ import annotations

from homepro.db import SessionLocal
from homepro.domain.task_templates import SYSTEM_TEMPLATES
from homepro.services.task_templates import seed_system_templates


def _seed() -> int:
    with SessionLocal() as db:
        return seed_system_templates(db)


def test_seeding_is_idempotent():
    assert _seed() == len(SYSTEM_TEMPLATES)
    assert _seed() == 0


def test_built_in_templates_come_first_then_own(client, headers):
    _seed()
    h = headers()

    r = client.post(
        "/api/tasks/templates",
        json={
            "name": "Flush Radiators",
            "description": "Bleed air from every radiator",
            "category": "HVAC",
            "baseFrequency": "ANNUAL",
            "costRangeMax": 25,
        },
        headers=h,
    )
    assert r.status_code == 201, r.text
    mine = r.json()["template"]
    assert mine["userId"] is not None
    assert mine["isActive"] is True

    client.post(
        "/api/tasks/templates",
        json={"name": "Someone else's", "description": "x", "category": "OTHER", "baseFrequency": "MONTHLY"},
        headers=headers("other"),
    )

    templates = client.get("/api/tasks/templates", headers=h).json()["templates"]
    assert len(templates) == len(SYSTEM_TEMPLATES) + 1
    assert templates[-1]["id"] == mine["id"]
    assert all(t["userId"] is None for t in templates[:-1])

    built_in = [(t["category"], t["name"]) for t in templates[:-1]]
    assert built_in == sorted(built_in)
    assert built_in[0] == ("APPLIANCE", "Clean Dryer Vent")


def test_create_validates_body(client, headers):
    r = client.post(
        "/api/tasks/templates",
        json={"name": "", "description": "x", "category": "GARDEN", "baseFrequency": "ANNUAL", "costRangeMin": -1},
        headers=headers(),
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Validation error"
    bad = {tuple(d["loc"][-1:]) for d in r.json()["details"]}
    assert {("name",), ("category",), ("costRangeMin",)} <= bad
