# homepro/domain/address.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

ZIP_RE = re.compile(r"^\d{5}(-\d{4})?$")

_STREET_WORDS = re.compile(r"\b(st|street|ave|avenue|rd|road|blvd|boulevard|dr|drive|ln|lane|ct|court|pl|place)\b", re.I)

# rough USDA hardiness ranges by state
CLIMATE_ZONES: dict[str, str] = {
    "FL": "9-11", "CA": "7-10", "TX": "7-9", "AZ": "8-10", "NV": "6-9",
    "GA": "7-9", "SC": "7-9", "NC": "7-8", "VA": "6-8", "MD": "6-7",
    "DE": "7", "NJ": "6-7", "NY": "5-7", "MA": "5-7", "CT": "6",
    "RI": "6", "NH": "5", "VT": "5", "ME": "4-5", "MN": "3-5",
    "WI": "4-5", "MI": "5-6", "IL": "5-6", "IN": "5-6", "OH": "5-6",
    "PA": "5-7", "WA": "6-9", "OR": "6-9", "ID": "5-7", "MT": "4-6",
    "WY": "4-6", "CO": "5-7", "NM": "6-8", "UT": "5-7", "ND": "3-4",
    "SD": "4-5", "NE": "5", "KS": "5-6", "OK": "6-7", "AR": "7-8",
    "LA": "8-9", "MS": "8-9", "AL": "7-9", "TN": "6-8", "KY": "6-7",
    "WV": "6", "MO": "5-7", "IA": "5",
}
DEFAULT_CLIMATE_ZONE = "5-7"


class LocationError(ValueError):
    """Raised when a ZIP code or state fails strict validation."""

    def __init__(self, error: str, message: str, received: object) -> None:
        super().__init__(message)
        self.error = error
        self.message = message
        self.received = received

    def as_dict(self) -> dict:
        return {"error": self.error, "message": self.message, "received": self.received}


def street_line(address: str) -> str:
    """'123 Main St, Springfield, IL' -> '123 Main St'"""
    return (address or "").split(",", 1)[0].strip()


def normalize_zip(raw: object) -> str:
    """Lenient ZIP cleanup used when saving a home."""
    z = re.sub(r"[^\d-]", "", str(raw or "").strip())
    if len(z) == 9 and "-" not in z:
        z = f"{z[:5]}-{z[5:]}"
    if len(z) > 5 and "-" not in z:
        z = z[:5]
    return z


def normalize_state(raw: object) -> str:
    """Lenient state cleanup: letters only, upper-cased, first two."""
    return re.sub(r"[^A-Z]", "", str(raw or "").strip().upper())[:2]


def validate_zip(raw: object) -> str:
    """Strict ZIP check for lookups: whitespace stripped, then 12345 or 12345-6789."""
    z = re.sub(r"\s+", "", str(raw or "").strip())
    if not ZIP_RE.match(z):
        raise LocationError(
            "Invalid ZIP code format",
            f'ZIP code "{z}" does not match required format. Expected: 12345 or 12345-6789',
            z,
        )
    return z


def validate_state(raw: object) -> str:
    """Strict state check for lookups: trimmed, upper-cased, exactly two characters."""
    s = str(raw or "").strip().upper()
    if len(s) != 2:
        raise LocationError(
            "Invalid state format",
            f'State must be exactly 2 characters. Received: "{s}"',
            s,
        )
    return s


def estimate_climate_zone(state: str) -> str:
    return CLIMATE_ZONES.get((state or "").upper(), DEFAULT_CLIMATE_ZONE)


def _squash(s: str) -> str:
    return re.sub(r"\s+", " ", (s or "").strip().lower())


@dataclass(frozen=True)
class AddressKey:
    address: str
    city: str
    state: str
    zip_code: str

    @classmethod
    def of(cls, address: str, city: str, state: str, zip_code: str) -> "AddressKey":
        return cls(_squash(address), _squash(city), (state or "").strip().upper(), (zip_code or "").strip())

    def matches(self, other: "AddressKey") -> bool:
        """
        Same ZIP and state, and address/city equal or one containing the
        other. Street suffixes (St, Ave, ...) are ignored in the address.
        """
        if self.zip_code != other.zip_code or self.state != other.state:
            return False

        a, b = self.address, other.address
        address_match = (
            a == b
            or a in b
            or b in a
            or _STREET_WORDS.sub("", a).strip() == _STREET_WORDS.sub("", b).strip()
        )
        c, d = self.city, other.city
        city_match = c == d or c in d or d in c
        return address_match and city_match


def find_matching(key: AddressKey, candidates: list, *, attrs=("address", "city", "state", "zip_code")) -> Optional[object]:
    for row in candidates:
        other = AddressKey.of(*(getattr(row, a) for a in attrs))
        if key.matches(other):
            return row
    return None
