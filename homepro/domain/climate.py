# homepro/domain/climate.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

StormFrequency = Literal["low", "moderate", "high", "severe"]

HURRICANE_STATES = frozenset({"FL", "LA", "TX", "NC", "SC", "GA", "AL", "MS"})
TORNADO_STATES = frozenset({"TX", "OK", "KS", "NE", "IA", "MO", "AR", "MS", "AL", "TN", "KY", "IL", "IN", "OH"})
MODERATE_STATES = frozenset({"CA", "NY", "NJ", "PA", "VA", "MD", "DE", "CT", "MA", "RI", "NH", "ME", "VT"})

# narrower lists used for the per-hazard flags
TORNADO_RISK_STATES = frozenset({"TX", "OK", "KS", "NE", "IA", "MO", "AR", "MS", "AL", "TN"})
HAIL_RISK_STATES = frozenset({"TX", "OK", "KS", "NE", "CO", "WY"})

# inches per year
RAINFALL = {
    "FL": 54, "LA": 60, "AL": 56, "MS": 56, "GA": 50, "SC": 49, "NC": 50,
    "NY": 42, "PA": 42, "NJ": 45, "MA": 47, "CT": 50, "RI": 47,
    "WA": 38, "OR": 28, "AZ": 13, "NV": 9, "UT": 15, "NM": 14,
    "IL": 39, "IN": 41, "OH": 39, "MI": 32, "WI": 32, "MN": 27,
    "TX": 28, "OK": 36, "KS": 28, "NE": 23, "CO": 17, "WY": 13,
    "MT": 15, "ID": 18, "CA": 22,
}
DEFAULT_RAINFALL = 30

SNOWFALL = {
    "ME": 77, "VT": 89, "NH": 71, "NY": 61, "MI": 60, "WI": 46, "MN": 54,
    "CO": 67, "UT": 51, "WY": 47, "MT": 48, "ID": 47, "MA": 43, "CT": 37,
    "PA": 38, "OH": 28, "IN": 25, "IL": 26, "FL": 0, "CA": 0, "AZ": 0,
    "NV": 0, "TX": 2, "LA": 0, "GA": 1, "SC": 1, "NC": 5,
}
DEFAULT_SNOWFALL = 10

WIND_ZONES = {
    "FL": "Zone 3 (High wind)",
    "LA": "Zone 3 (High wind)",
    "TX": "Zone 2 (Moderate wind)",
    "CA": "Zone 2 (Moderate wind)",
    "CO": "Zone 2 (Moderate wind)",
    "WY": "Zone 2 (Moderate wind)",
}
DEFAULT_WIND_ZONE = "Zone 1 (Standard)"


@dataclass(frozen=True)
class ClimateEstimate:
    storm_frequency: StormFrequency
    average_rainfall: float
    average_snowfall: float
    wind_zone: str
    hurricane_risk: bool
    tornado_risk: bool
    hail_risk: bool
    source: str = "location-based-estimate"

    def to_dict(self) -> dict:
        return {
            "stormFrequency": self.storm_frequency,
            "averageRainfall": self.average_rainfall,
            "averageSnowfall": self.average_snowfall,
            "windZone": self.wind_zone,
            "hurricaneRisk": self.hurricane_risk,
            "tornadoRisk": self.tornado_risk,
            "hailRisk": self.hail_risk,
            "source": self.source,
        }


def estimate_storm_frequency(state: str) -> StormFrequency:
    st = (state or "").upper()
    if st in HURRICANE_STATES or st in TORNADO_STATES:
        return "severe" if st in ("FL", "LA") else "high"
    if st in MODERATE_STATES:
        return "moderate"
    return "low"


def estimate_climate(state: str) -> ClimateEstimate:
    st = (state or "").upper()
    return ClimateEstimate(
        storm_frequency=estimate_storm_frequency(st),
        average_rainfall=float(RAINFALL.get(st, DEFAULT_RAINFALL)),
        average_snowfall=float(SNOWFALL.get(st, DEFAULT_SNOWFALL)),
        wind_zone=WIND_ZONES.get(st, DEFAULT_WIND_ZONE),
        hurricane_risk=st in HURRICANE_STATES,
        tornado_risk=st in TORNADO_RISK_STATES,
        hail_risk=st in HAIL_RISK_STATES,
    )


def climate_recommendations(data: dict) -> list[str]:
    """Maintenance hints for a climate payload (camelCase dict, cached or fresh)."""
    out: list[str] = []
    storm = data.get("stormFrequency")
    rain = float(data.get("averageRainfall") or 0)
    snow = float(data.get("averageSnowfall") or 0)

    if storm in ("severe", "high"):
        out.append("⚠️ High storm risk area - Consider quarterly roof inspections")
        out.append("⚠️ More frequent gutter cleaning recommended (monthly during storm season)")
    if data.get("hurricaneRisk"):
        out.append("🌀 Hurricane-prone area - Ensure roof is wind-rated and properly secured")
        out.append("🌀 Prepare storm shutters and emergency supplies")
    if data.get("tornadoRisk"):
        out.append("🌪️ Tornado-prone area - Ensure safe room/basement is prepared")
    if rain > 45:
        out.append("🌧️ High rainfall area - More frequent gutter maintenance needed")
    if snow > 40:
        out.append("❄️ Heavy snowfall area - More frequent roof inspections for snow load")
        out.append("❄️ Ensure proper insulation and heating system maintenance")
    return out
