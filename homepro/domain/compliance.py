# homepro/domain/compliance.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from .recurrence import add_months


@dataclass(frozen=True)
class Regulation:
    type: str  # inspection|permit|code|safety|environmental
    title: str
    description: str
    required: bool
    frequency: Optional[str] = None
    penalty: Optional[str] = None
    source: Optional[str] = None
    applies_to: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["appliesTo"] = list(d.pop("applies_to"))
        return d


@dataclass(frozen=True)
class PermitInfo:
    requires_permit: bool
    permit_type: Optional[str] = None
    description: Optional[str] = None
    source: Optional[str] = None

    def to_dict(self) -> dict:
        if not self.requires_permit:
            return {"requiresPermit": False}
        return {
            "requiresPermit": True,
            "permitType": self.permit_type,
            "description": self.description,
            "source": self.source,
        }


_CA_HEALTH = "California Health and Safety Code"
_LOCAL_CODES = "Local building codes"

STATE_RULES: dict[str, list[Regulation]] = {
    "CA": [
        Regulation(
            "safety", "Smoke Detector Requirements",
            "California requires smoke detectors in every bedroom, outside each sleeping area, and on every level "
            "including basements. Must be interconnected and hardwired.",
            True, "on-installation", "Fines up to $200 per violation", _CA_HEALTH,
        ),
        Regulation(
            "safety", "Carbon Monoxide Detector Requirements",
            "Required in all single-family homes with attached garages, fireplaces, or fossil fuel-burning appliances.",
            True, "on-installation", "Fines up to $200 per violation", _CA_HEALTH,
        ),
        Regulation(
            "safety", "Water Heater Seismic Straps",
            "Water heaters must be strapped to prevent tipping during earthquakes. Required for all installations.",
            True, "on-installation", "Code violation, potential insurance issues", "California Building Code",
        ),
        Regulation(
            "environmental", "Lead Paint Disclosure",
            "Homes built before 1978 require lead paint disclosure when selling or renting.",
            True, "on-sale", "Legal liability", "Federal and California law", ("pre-1978",),
        ),
    ],
    "FL": [
        Regulation(
            "safety", "Hurricane Shutters/Impact Windows",
            "Required in coastal areas. Must meet Miami-Dade County wind resistance standards.",
            True, "on-installation", "Code violation, insurance issues", "Florida Building Code", ("coastal",),
        ),
        Regulation(
            "inspection", "4-Point Insurance Inspection",
            "Required every 2 years for homes over 30 years old for insurance purposes.",
            True, "biannual", "Insurance denial", "Florida insurance requirements", ("30+ years old",),
        ),
    ],
    "NY": [
        Regulation(
            "inspection", "Lead Paint Inspection",
            "Required for rental properties built before 1960. Must be performed by certified inspector.",
            True, "annual", "Fines up to $2,500 per violation", "NYC Local Law 1", ("pre-1960", "rental"),
        ),
        Regulation(
            "safety", "Window Guards",
            "Required in all rental units with children under 10 years old.",
            True, "on-installation", "Fines and legal liability", "NYC Health Code", ("rental",),
        ),
    ],
    "TX": [
        Regulation(
            "environmental", "Radon Testing",
            "Recommended in all homes. Required disclosure when selling.",
            False, "on-sale", None, "Texas Real Estate Commission",
        ),
    ],
}

# applied in every state after the state-specific rules
GENERAL_STATE_RULES: list[Regulation] = [
    Regulation(
        "safety", "Smoke Detector Requirements",
        "Most states require smoke detectors on every level and in every bedroom.",
        True, "on-installation", None, "State building codes",
    ),
    Regulation(
        "safety", "Carbon Monoxide Detector Requirements",
        "Required in most states for homes with attached garages or fuel-burning appliances.",
        True, "on-installation", None, "State building codes",
    ),
]

FEDERAL_RULES: list[Regulation] = [
    Regulation(
        "environmental", "Lead Paint Disclosure",
        "Federal law requires disclosure of lead paint hazards in homes built before 1978 when selling or renting.",
        True, "on-sale", "Fines up to $11,000 per violation", "EPA Lead Disclosure Rule", ("pre-1978",),
    ),
    Regulation(
        "environmental", "Asbestos Disclosure",
        "Must disclose known asbestos when selling property.",
        True, "on-sale", "Legal liability", "EPA regulations",
    ),
    Regulation(
        "safety", "Smoke Detector Requirements",
        "Federal recommendations require smoke detectors on every level and in every bedroom.",
        True, "on-installation", None, "NFPA 72",
    ),
]


def _city_rules(city: str, state: str, county: Optional[str]) -> list[Regulation]:
    c = (city or "").lower()
    out: list[Regulation] = []

    if "san francisco" in c and state == "CA":
        out.append(Regulation(
            "inspection", "Mandatory Soft Story Retrofit",
            "Buildings with 3+ units and soft-story construction must be retrofitted for earthquakes.",
            True, "one-time", "Fines and potential condemnation", "SF Building Code", ("multi-unit", "soft-story"),
        ))
    if "los angeles" in c and state == "CA":
        out.append(Regulation(
            "inspection", "Earthquake Brace and Bolt Program",
            "State program for retrofitting older homes. May be required for insurance.",
            False, "one-time", None, "California Earthquake Authority", ("pre-1980",),
        ))
    if "new york" in c and state == "NY":
        out.append(Regulation(
            "inspection", "Local Law 11/98 - Facade Inspection",
            "Buildings over 6 stories must have facade inspected every 5 years.",
            True, "every-5-years", "Fines up to $25,000", "NYC Local Law 11", ("6+ stories",),
        ))
        out.append(Regulation(
            "inspection", "Boiler Inspection",
            "Annual boiler inspection required for buildings with central heating.",
            True, "annual", "Fines and shutdown", "NYC Department of Buildings", ("central-heating",),
        ))
    if "chicago" in c and state == "IL":
        out.append(Regulation(
            "inspection", "Point of Sale Inspection",
            "Required inspection before selling property. Checks for code violations.",
            True, "on-sale", "Cannot complete sale", "Chicago Building Code",
        ))
    if "seattle" in c and state == "WA":
        out.append(Regulation(
            "environmental", "Rental Registration and Inspection",
            "Rental properties must be registered and inspected every 3-5 years.",
            True, "every-3-5-years", "Fines and rental license revocation", "Seattle Rental Registration", ("rental",),
        ))
    if ("miami" in c or "dade" in (county or "").lower()) and state == "FL":
        out.append(Regulation(
            "safety", "Hurricane Impact Windows",
            "All windows must meet Miami-Dade County wind resistance standards.",
            True, "on-installation", "Code violation", "Miami-Dade Building Code",
        ))
    return out


def local_regulations(city: str, state: str, county: Optional[str] = None) -> list[Regulation]:
    """State rules, then city/county rules, then federal rules."""
    st = (state or "").upper()
    return [
        *STATE_RULES.get(st, []),
        *GENERAL_STATE_RULES,
        *_city_rules(city, st, county),
        *FEDERAL_RULES,
    ]


def applies_to_home(reg: Regulation, *, year_built: int, home_type: str, now: Optional[datetime] = None) -> bool:
    # tags without a rule here (coastal, soft-story, 6+ stories, ...) pass
    if not reg.applies_to:
        return True
    tags = set(reg.applies_to)
    age = (now or datetime.utcnow()).year - year_built

    if "pre-1978" in tags and year_built >= 1978:
        return False
    if "pre-1960" in tags and year_built >= 1960:
        return False
    if "30+ years old" in tags and age < 30:
        return False
    if "rental" in tags and home_type != "rental":
        return False
    if "multi-unit" in tags and home_type == "single-family":
        return False
    return True


def compliance_tasks(regs: Iterable[Regulation]) -> list[dict]:
    return [
        {
            "taskName": r.title,
            "category": "SAFETY" if r.type == "safety" else "OTHER",
            "regulation": r.to_dict(),
            "priority": "critical" if r.required else "high",
        }
        for r in regs
    ]
def applicable_regulations(
    city: str,
    state: str,
    *,
    year_built: Optional[int] = None,
    home_type: Optional[str] = None,
    county: Optional[str] = None,
    now: Optional[datetime] = None,
) -> list[Regulation]:
    now = now or datetime.utcnow()
    yb = int(year_built or now.year)
    ht = home_type or "single-family"
    return [r for r in local_regulations(city, state, county) if applies_to_home(r, year_built=yb, home_type=ht, now=now)]


def compliance_recommendations(
    city: str,
    state: str,
    *,
    year_built: Optional[int] = None,
    home_type: Optional[str] = None,
    county: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict:
    regs = applicable_regulations(city, state, year_built=year_built, home_type=home_type, county=county, now=now)

    return {
        "regulations": [r.to_dict() for r in regs],
        "complianceTasks": compliance_tasks(regs),
        "summary": {
            "required": sum(1 for r in regs if r.required),
            "recommended": sum(1 for r in regs if not r.required),
            "critical": sum(1 for r in regs if r.required and r.type == "safety"),
        },
    }


# regulation frequency -> (task frequency, months until first due)
_TASK_SCHEDULE = {
    "annual": ("ANNUAL", 12),
    "biannual": ("BIANNUAL", 6),
    "every-3-5-years": ("ANNUAL", 12),
    "every-5-years": ("ANNUAL", 12),
    "on-sale": ("AS_NEEDED", 120),
    "on-rental": ("AS_NEEDED", 120),
    "on-installation": ("AS_NEEDED", 0),
    "one-time": ("AS_NEEDED", 0),
}
_TASK_CATEGORY = {"inspection": "SAFETY", "environmental": "OTHER", "code": "STRUCTURAL"}


@dataclass(frozen=True)
class ComplianceTaskDraft:
    name: str
    description: str
    category: str
    frequency: str
    next_due_date: datetime
    priority: str
    legally_required: bool
    source: Optional[str] = None

    @property
    def notes(self) -> Optional[str]:
        if not self.legally_required:
            return None
        return f"⚠️ LEGALLY REQUIRED: {self.source or 'Local regulation'}"


def compliance_task_drafts(regs: Iterable[Regulation], *, now: Optional[datetime] = None) -> list[ComplianceTaskDraft]:
    """
    Maintenance tasks for regulations that are required or carry a schedule.

    Unknown frequencies are treated as annual. Sale and rental triggers fall
    due in ten years; installation and one-time rules are due now. When two
    rules share a title the first one wins.
    """
    now = now or datetime.utcnow()
    out: list[ComplianceTaskDraft] = []
    seen: set[str] = set()
    for r in regs:
        if not r.required and not r.frequency:
            continue
        if r.title.lower() in seen:
            continue
        seen.add(r.title.lower())

        frequency, months = _TASK_SCHEDULE.get(r.frequency or "", ("ANNUAL", 12))
        if r.required and r.type == "safety":
            priority = "critical"
        elif r.required:
            priority = "high"
        else:
            priority = "medium"

        description = r.description
        if r.penalty:
            description += f" Penalty: {r.penalty}"
        if r.source:
            description += f" (Source: {r.source})"
        if r.frequency:
            description += f" Required frequency: {r.frequency.replace('-', ' ')}"

        out.append(ComplianceTaskDraft(
            name=r.title,
            description=description,
            category=_TASK_CATEGORY.get(r.type, "SAFETY"),
            frequency=frequency,
            next_due_date=add_months(now, months),
            priority=priority,
            legally_required=r.required,
            source=r.source,
        ))
    return out


def permit_requirements(task_category: str, task_name: str) -> PermitInfo:
    name = (task_name or "").lower()
    cat = (task_category or "").lower()

    if cat == "electrical":
        return PermitInfo(
            True, "Electrical Permit",
            "Most electrical work requires a permit. Check with local building department.", _LOCAL_CODES,
        )
    if cat == "plumbing" and any(w in name for w in ("replace", "install", "repair")):
        return PermitInfo(
            True, "Plumbing Permit",
            "Plumbing installations and major repairs typically require permits.", _LOCAL_CODES,
        )
    if cat == "structural" or "foundation" in name or "load-bearing" in name:
        return PermitInfo(
            True, "Building Permit", "Structural work requires a building permit and inspection.", _LOCAL_CODES,
        )
    if cat == "hvac" and ("install" in name or "replace" in name):
        return PermitInfo(
            True, "HVAC Permit", "HVAC installation and replacement typically requires permits.", _LOCAL_CODES,
        )
    if "roof" in name and "replace" in name:
        return PermitInfo(
            True, "Roofing Permit", "Roof replacement typically requires a permit in most jurisdictions.", _LOCAL_CODES,
        )
    return PermitInfo(False)


def summary_messages(summary: dict, permit: Optional[PermitInfo]) -> list[str]:
    out: list[str] = []
    if summary.get("required", 0) > 0:
        out.append(
            f"⚠️ You have {summary['required']} required compliance item(s). "
            "These are legally required and may result in fines if not completed."
        )
    if summary.get("critical", 0) > 0:
        out.append(f"🔴 {summary['critical']} critical safety requirement(s) must be addressed immediately.")
    if permit is not None and permit.requires_permit:
        out.append(
            f"📋 This task requires a {permit.permit_type}. Check with your local building department before starting."
        )
    return out
