# tests/test_census_geocoder.py
from __future__ import annotations

import httpx

from homepro.clients.census_geocoder import CensusGeocoderClient


def _client(body) -> CensusGeocoderClient:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    return CensusGeocoderClient(transport=httpx.MockTransport(handler))


def _geocode(client: CensusGeocoderClient):
    return client.geocode(street="1 Elm St", city="Peoria", state="IL", zip_code="61602")


def test_parses_first_match():
    body = {
        "result": {
            "addressMatches": [
                {
                    "coordinates": {"x": -89.59, "y": 40.69},
                    "geographies": {
                        "Census Tracts": [{"STATE": "17", "COUNTY": "143", "NAME": "Census Tract 1", "TRACT": "000100"}]
                    },
                }
            ]
        }
    }
    res = _geocode(_client(body))
    assert res.found
    assert res.to_dict() == {
        "latitude": 40.69,
        "longitude": -89.59,
        "county": "Census Tract 1",
        "fipsCode": "17143",
        "censusTract": "000100",
    }


def test_no_matches_is_not_found():
    res = _geocode(_client({"result": {"addressMatches": []}}))
    assert not res.found
    assert res.to_dict() == {}


def test_non_object_json_is_not_found():
    for body in (["unexpected"], "oops", {"result": ["x"]}, {"result": {"addressMatches": ["x"]}}):
        res = _geocode(_client(body))
        assert not res.found
        assert res.to_dict() == {}


def test_http_error_is_reported_in_raw():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="down")

    res = _geocode(CensusGeocoderClient(transport=httpx.MockTransport(handler)))
    assert not res.found
    assert "error" in res.raw
