# tests/test_auto_populate.py
from __future__ import annotations

from datetime import datetime

from homepro.clients.rentcast import map_property_record
from homepro.domain.auto_populate import suggested_appliances, suggested_systems

NOW = datetime(2025, 6, 1)


def _by_type(items, key="systemType"):
    return {i[key]: i for i in items}


def test_old_home_systems_are_marked_for_attention():
    data = {
        "yearBuilt": 1980,
        "heatingType": "Forced Air",
        "heatingFuel": "Gas",
        "coolingType": "Central",
        "waterHeaterType": "Tank",
        "waterHeaterFuel": "Gas",
        "roofType": "Asphalt Shingle",
        "constructionType": "Frame",
    }
    systems = _by_type(suggested_systems(data, now=NOW))

    assert list(systems) == ["HVAC", "WATER_HEATER", "ROOF", "PLUMBING", "ELECTRICAL"]
    assert systems["HVAC"] == {
        "systemType": "HVAC",
        "notes": "Heating: Forced Air, Fuel: Gas, Cooling: Central",
        "expectedLifespan": 10,
        "condition": "fair",
    }
    assert systems["WATER_HEATER"]["expectedLifespan"] == 10
    assert systems["WATER_HEATER"]["notes"] == "Type: Tank, Fuel: Gas"
    assert systems["ROOF"]["material"] == "asphalt"
    assert systems["ROOF"]["expectedLifespan"] == 20
    assert systems["ROOF"]["condition"] == "fair"
    assert systems["PLUMBING"]["condition"] == "fair"
    assert systems["ELECTRICAL"] == {
        "systemType": "ELECTRICAL",
        "notes": "Home built in 1980",
        "expectedLifespan": 50,
        "condition": "fair",
    }


def test_newer_home_systems():
    data = {"yearBuilt": 2020, "coolingType": "Central", "waterHeaterType": "Tankless", "roofType": "Metal"}
    systems = _by_type(suggested_systems(data, now=NOW))

    assert systems["HVAC"]["expectedLifespan"] == 15
    assert systems["HVAC"]["condition"] == "excellent"
    assert systems["HVAC"]["notes"] == "Cooling: Central"
    assert systems["WATER_HEATER"]["expectedLifespan"] == 20
    assert systems["WATER_HEATER"]["condition"] == "good"
    assert systems["ROOF"]["material"] == "metal"
    assert systems["ROOF"]["expectedLifespan"] == 40
    assert systems["ROOF"]["condition"] == "good"
    assert systems["ELECTRICAL"]["condition"] == "excellent"
    assert "PLUMBING" not in systems


def test_unknown_roof_material_and_age():
    systems = suggested_systems({"roofType": "Slate"}, now=NOW)

    assert systems == [{"systemType": "ROOF", "notes": "Type: Slate", "condition": "good"}]


def test_no_data_suggests_nothing():
    assert suggested_systems({}, now=NOW) == []
    assert suggested_appliances({}) == []


def test_appliances_from_fuel_fields():
    apps = _by_type(
        suggested_appliances({"stoveFuel": "Gas", "dryerFuel": "Electric", "washerType": "Front Load"}),
        key="applianceType",
    )
    assert apps == {
        "RANGE": {"applianceType": "RANGE", "notes": "Gas stove/range"},
        "WASHER": {"applianceType": "WASHER", "notes": "Type: Front Load"},
        "DRYER": {"applianceType": "DRYER", "notes": "Electric dryer"},
    }


def test_laundry_feature_implies_washer_and_dryer():
    apps = suggested_appliances({"interiorFeatures": ["Hardwood Floors", "Laundry Room"]})

    assert apps == [
        {"applianceType": "WASHER", "notes": "Washer"},
        {"applianceType": "DRYER", "notes": "Dryer"},
    ]


def test_record_mapping_reads_fuel_from_features():
    data = map_property_record({
        "yearBuilt": 1999,
        "interiorFeatures": ["Gas Range", "Electric Dryer Hookup"],
        "waterHeater": "Tank",
    })

    assert data["stoveFuel"] == "Gas"
    assert data["dryerFuel"] == "Electric"
    assert data["waterHeaterType"] == "Tank"
    assert data["interiorFeatures"] == ["Gas Range", "Electric Dryer Hookup"]
    assert "washerType" not in data
