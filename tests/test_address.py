# tests/test_address.py
from __future__ import annotations

from dataclasses import dataclass

import pytest

from homepro.domain.address import (
    AddressKey,
    LocationError,
    estimate_climate_zone,
    find_matching,
    normalize_state,
    normalize_zip,
    street_line,
    validate_state,
    validate_zip,
)


@dataclass
class _Home:
    address: str
    city: str
    state: str
    zip_code: str


def test_validate_zip_accepts_five_and_nine_digit_forms():
    assert validate_zip(" 62701 ") == "62701"
    assert validate_zip("62701-1234") == "62701-1234"
    assert validate_zip("627 01") == "62701"


def test_validate_zip_rejects_bad_format():
    with pytest.raises(LocationError) as e:
        validate_zip("6270")
    body = e.value.as_dict()
    assert body["error"] == "Invalid ZIP code format"
    assert body["received"] == "6270"
    assert "12345 or 12345-6789" in body["message"]


def test_validate_state():
    assert validate_state(" il ") == "IL"
    with pytest.raises(LocationError) as e:
        validate_state("Illinois")
    assert e.value.as_dict()["error"] == "Invalid state format"
    assert e.value.received == "ILLINOIS"


def test_lenient_normalizers():
    assert normalize_zip("627011234") == "62701-1234"
    assert normalize_zip("62701 ") == "62701"
    assert normalize_state(" i.l. ") == "IL"
    assert street_line("123 Main St, Springfield, IL") == "123 Main St"


def test_climate_zone_lookup():
    assert estimate_climate_zone("fl") == "9-11"
    assert estimate_climate_zone("ZZ") == "5-7"


def test_address_match_ignores_case_suffix_and_containment():
    a = AddressKey.of("123 Main St", "Springfield", "il", "62701")
    assert a.matches(AddressKey.of("123  main street", "springfield", "IL", "62701"))
    assert a.matches(AddressKey.of("123 Main", "Springfield", "IL", "62701"))
    assert not a.matches(AddressKey.of("123 Main St", "Springfield", "IL", "62702"))
    assert not a.matches(AddressKey.of("456 Oak Ave", "Springfield", "IL", "62701"))


def test_find_matching_returns_first_hit():
    homes = [_Home("9 Elm Rd", "Peoria", "IL", "61602"), _Home("123 Main St", "Springfield", "IL", "62701")]
    key = AddressKey.of("123 main st", "SPRINGFIELD", "IL", "62701")
    assert find_matching(key, homes) is homes[1]
    assert find_matching(AddressKey.of("1 Nowhere", "X", "IL", "62701"), homes) is None
