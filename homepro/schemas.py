# homepro/schemas.py
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def _to_naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    # columns are naive UTC
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


UtcDateTime = Annotated[datetime, AfterValidator(_to_naive_utc)]


class CamelModel(BaseModel):
    """snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PatchModel(CamelModel):
    """
    Partial update body. Fields listed in `not_null` back NOT NULL columns:
    they may be left out but not sent as null.
    """

    not_null: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _no_explicit_nulls(self):
        for name in self.not_null:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self


def dump(model_cls: type[CamelModel], row: Any) -> dict:
    return model_cls.model_validate(row).model_dump(by_alias=True)


def dump_all(model_cls: type[CamelModel], rows) -> list[dict]:
    return [dump(model_cls, r) for r in rows]


def _as_dict(data: Any) -> Any:
    mapper = getattr(type(data), "__mapper__", None)
    if mapper is None:
        return data
    return {attr.key: getattr(data, attr.key) for attr in mapper.column_attrs}


def _json_field(data: Any, src: str, dst: str, default: Any) -> Any:
    """Lift a *_json text column into a parsed field for from_attributes models."""
    data = _as_dict(data)
    if not isinstance(data, dict) or dst in data or src not in data:
        return data

    out = dict(data)
    raw = out.pop(src)
    try:
        out[dst] = json.loads(raw) if isinstance(raw, str) and raw else default
    except ValueError:
        out[dst] = default
    return out


def _check_year_built(v: Optional[int]) -> Optional[int]:
    if v is None:
        return v
    latest = datetime.utcnow().year + 1
    if v < 1800 or v > latest:
        raise ValueError(f"yearBuilt must be between 1800 and {latest}")
    return v


# -------------------- Enumerations --------------------

TaskCategory = Literal["HVAC", "PLUMBING", "EXTERIOR", "STRUCTURAL", "LANDSCAPING", "APPLIANCE", "SAFETY", "ELECTRICAL", "OTHER"]
TaskFrequency = Literal["WEEKLY", "MONTHLY", "QUARTERLY", "BIANNUAL", "ANNUAL", "SEASONAL", "AS_NEEDED"]
SystemType = Literal[
    "HVAC", "ROOF", "WATER_HEATER", "PLUMBING", "ELECTRICAL", "APPLIANCE",
    "EXTERIOR", "LANDSCAPING", "POOL", "DECK", "FENCE", "OTHER",
]
ApplianceType = Literal[
    "REFRIGERATOR", "DISHWASHER", "WASHER", "DRYER", "OVEN", "RANGE", "MICROWAVE",
    "GARBAGE_DISPOSAL", "GARBAGE_COMPACTOR", "ICE_MAKER", "WINE_COOLER", "OTHER",
]
ExteriorFeatureType = Literal[
    "DECK", "FENCE", "POOL", "SPRINKLER_SYSTEM", "DRIVEWAY", "PATIO", "SIDING",
    "GUTTERS", "WINDOWS", "DOORS", "GARAGE_DOOR", "FOUNDATION", "OTHER",
]
InteriorFeatureType = Literal[
    "CARPET", "HARDWOOD_FLOOR", "TILE_FLOOR", "LAMINATE_FLOOR", "VINYL_FLOOR", "WINDOWS",
    "DOORS", "CABINETS", "COUNTERTOPS", "PAINT", "WALLPAPER", "OTHER",
]
ProjectCategory = Literal[
    "HVAC", "PLUMBING", "ELECTRICAL", "EXTERIOR", "INTERIOR", "LANDSCAPING", "APPLIANCE", "STRUCTURAL", "OTHER",
]
ProjectStatus = Literal["NOT_STARTED", "PLANNING", "IN_PROGRESS", "ON_HOLD", "COMPLETED", "CANCELLED"]
ProjectDifficulty = Literal["EASY", "MEDIUM", "HARD", "EXPERT"]
StepStatus = Literal["not_started", "in_progress", "completed"]
BudgetPeriod = Literal["MONTHLY", "QUARTERLY", "ANNUAL"]
BudgetAlertType = Literal["APPROACHING_LIMIT", "EXCEEDED_LIMIT", "PROJECT_OVER_BUDGET"]
BudgetAlertStatus = Literal["PENDING", "SENT", "DISMISSED"]
Condition = Literal["excellent", "good", "fair", "poor"]
HomeType = Literal["single-family", "townhouse", "condo", "apartment", "mobile-home", "other"]
StormFrequency = Literal["low", "moderate", "high", "severe"]
ServiceType = Literal["maintenance", "repair", "replacement", "inspection"]
UsageFrequency = Literal["daily", "weekly", "monthly", "occasional"]
RecurrenceUnit = Literal["days", "weeks", "months"]


# -------------------- Homes --------------------

class HomeSystemIn(CamelModel):
    system_type: SystemType
    brand: Optional[str] = None
    model: Optional[str] = None
    install_date: Optional[UtcDateTime] = None
    expected_lifespan: Optional[int] = Field(default=None, gt=0)
    material: Optional[str] = None
    capacity: Optional[str] = None
    condition: Optional[Condition] = None
    last_inspection: Optional[UtcDateTime] = None
    storm_resistance: Optional[str] = None
    notes: Optional[str] = None


class HomeSystemOut(HomeSystemIn):
    id: int
    home_id: int
    system_type: str
    condition: Optional[str] = None
    created_at: datetime


class HomeCreate(CamelModel):
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    year_built: Optional[int] = None
    square_footage: Optional[int] = Field(default=None, gt=0)
    lot_size: Optional[float] = Field(default=None, gt=0)
    home_type: Optional[HomeType] = None

    climate_zone: Optional[str] = None
    heating_degree_days: Optional[int] = None
    cooling_degree_days: Optional[int] = None
    average_rainfall: Optional[float] = Field(default=None, gt=0)
    average_snowfall: Optional[float] = Field(default=None, ge=0)
    storm_frequency: Optional[StormFrequency] = None
    wind_zone: Optional[str] = None

    systems: List[HomeSystemIn] = Field(default_factory=list)

    @field_validator("year_built")
    @classmethod
    def _year_built_range(cls, v: Optional[int]) -> Optional[int]:
        return _check_year_built(v)


class HomeUpdate(PatchModel):
    not_null = ("address", "city", "state", "zip_code")

    address: Optional[str] = Field(default=None, min_length=1)
    city: Optional[str] = Field(default=None, min_length=1)
    state: Optional[str] = Field(default=None, min_length=1)
    zip_code: Optional[str] = Field(default=None, min_length=1)
    year_built: Optional[int] = None
    square_footage: Optional[int] = Field(default=None, gt=0)
    lot_size: Optional[float] = Field(default=None, gt=0)
    home_type: Optional[HomeType] = None
    climate_zone: Optional[str] = None
    heating_degree_days: Optional[int] = None
    cooling_degree_days: Optional[int] = None
    average_rainfall: Optional[float] = Field(default=None, gt=0)
    average_snowfall: Optional[float] = Field(default=None, ge=0)
    storm_frequency: Optional[StormFrequency] = None
    wind_zone: Optional[str] = None

    @field_validator("year_built")
    @classmethod
    def _year_built_range(cls, v: Optional[int]) -> Optional[int]:
        return _check_year_built(v)


class AddSystemsIn(CamelModel):
    systems: List[HomeSystemIn] = Field(min_length=1)


class HomeOut(CamelModel):
    id: int
    user_id: int
    address: str
    city: str
    state: str
    zip_code: str
    year_built: Optional[int] = None
    square_footage: Optional[int] = None
    lot_size: Optional[float] = None
    home_type: Optional[str] = None
    climate_zone: Optional[str] = None
    heating_degree_days: Optional[int] = None
    cooling_degree_days: Optional[int] = None
    average_rainfall: Optional[float] = None
    average_snowfall: Optional[float] = None
    storm_frequency: Optional[str] = None
    wind_zone: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    systems: List[HomeSystemOut] = Field(default_factory=list)


class HomeDetailOut(HomeOut):
    appliances: List["ApplianceOut"] = Field(default_factory=list)
    exterior_features: List["ExteriorFeatureOut"] = Field(default_factory=list)
    interior_features: List["InteriorFeatureOut"] = Field(default_factory=list)


# -------------------- Inventory --------------------

class _InventoryItemIn(CamelModel):
    brand: Optional[str] = None
    install_date: Optional[UtcDateTime] = None
    warranty_expiry: Optional[UtcDateTime] = None
    expected_lifespan: Optional[int] = Field(default=None, gt=0)
    last_service_date: Optional[UtcDateTime] = None
    notes: Optional[str] = None


class ApplianceIn(_InventoryItemIn):
    appliance_type: ApplianceType
    model: Optional[str] = None
    serial_number: Optional[str] = None
    usage_frequency: Optional[UsageFrequency] = None


class ExteriorFeatureIn(_InventoryItemIn):
    feature_type: ExteriorFeatureType
    material: Optional[str] = None
    square_footage: Optional[int] = Field(default=None, gt=0)


class InteriorFeatureIn(_InventoryItemIn):
    feature_type: InteriorFeatureType
    material: Optional[str] = None
    square_footage: Optional[int] = Field(default=None, gt=0)
    room: Optional[str] = None


class ApplianceUpdate(_InventoryItemIn, PatchModel):
    not_null = ("appliance_type",)

    appliance_type: Optional[ApplianceType] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    usage_frequency: Optional[UsageFrequency] = None


class ExteriorFeatureUpdate(_InventoryItemIn, PatchModel):
    not_null = ("feature_type",)

    feature_type: Optional[ExteriorFeatureType] = None
    material: Optional[str] = None
    square_footage: Optional[int] = Field(default=None, gt=0)


class InteriorFeatureUpdate(_InventoryItemIn, PatchModel):
    not_null = ("feature_type",)

    feature_type: Optional[InteriorFeatureType] = None
    material: Optional[str] = None
    square_footage: Optional[int] = Field(default=None, gt=0)
    room: Optional[str] = None


class InventoryCreate(CamelModel):
    home_id: int
    appliances: List[ApplianceIn] = Field(default_factory=list)
    exterior_features: List[ExteriorFeatureIn] = Field(default_factory=list)
    interior_features: List[InteriorFeatureIn] = Field(default_factory=list)


class ApplianceOut(ApplianceIn):
    id: int
    home_id: int
    appliance_type: str
    usage_frequency: Optional[str] = None
    created_at: datetime


class ExteriorFeatureOut(ExteriorFeatureIn):
    id: int
    home_id: int
    feature_type: str
    created_at: datetime


class InteriorFeatureOut(InteriorFeatureIn):
    id: int
    home_id: int
    feature_type: str
    created_at: datetime


HomeDetailOut.model_rebuild()


# -------------------- Maintenance history --------------------

class HistoryCreate(CamelModel):
    home_id: int
    appliance_id: Optional[int] = None
    exterior_feature_id: Optional[int] = None
    interior_feature_id: Optional[int] = None
    system_id: Optional[int] = None

    service_date: UtcDateTime
    service_type: ServiceType
    description: str = Field(min_length=1)
    cost: Optional[float] = Field(default=None, gt=0)
    contractor_name: Optional[str] = None
    contractor_phone: Optional[str] = None
    photos: List[str] = Field(default_factory=list)
    receipts: List[str] = Field(default_factory=list)
    warranty_info: Optional[str] = None
    notes: Optional[str] = None
    next_service_due: Optional[UtcDateTime] = None

    @field_validator("photos", "receipts")
    @classmethod
    def _urls(cls, v: List[str]) -> List[str]:
        for u in v:
            if not (u.startswith("http://") or u.startswith("https://") or u.startswith("data:")):
                raise ValueError(f"not a URL: {u[:60]}")
        return v


class HistoryOut(CamelModel):
    id: int
    home_id: int
    appliance_id: Optional[int] = None
    exterior_feature_id: Optional[int] = None
    interior_feature_id: Optional[int] = None
    system_id: Optional[int] = None
    service_date: datetime
    service_type: str
    description: str
    cost: Optional[float] = None
    contractor_name: Optional[str] = None
    contractor_phone: Optional[str] = None
    photos: List[str] = Field(default_factory=list)
    receipts: List[str] = Field(default_factory=list)
    warranty_info: Optional[str] = None
    notes: Optional[str] = None
    next_service_due: Optional[datetime] = None
    created_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _parse_json_lists(cls, data: Any) -> Any:
        data = _json_field(data, "photos_json", "photos", [])
        return _json_field(data, "receipts_json", "receipts", [])


# -------------------- Tasks --------------------

class CustomRecurrenceIn(CamelModel):
    interval: int = Field(gt=0)
    unit: RecurrenceUnit


class TaskCreate(CamelModel):
    home_id: int
    template_id: Optional[str] = None
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: TaskCategory
    frequency: TaskFrequency
    next_due_date: UtcDateTime
    cost_estimate: Optional[float] = Field(default=None, gt=0)
    priority: Optional[str] = None
    notes: Optional[str] = None
    snoozed_until: Optional[UtcDateTime] = None
    custom_recurrence: Optional[CustomRecurrenceIn] = None


class TaskUpdate(PatchModel):
    not_null = ("next_due_date",)

    id: Optional[int] = None
    completed: Optional[bool] = None
    completed_date: Optional[UtcDateTime] = None
    next_due_date: Optional[UtcDateTime] = None
    cost_estimate: Optional[float] = Field(default=None, gt=0)
    priority: Optional[str] = None
    notes: Optional[str] = None
    snoozed_until: Optional[UtcDateTime] = None
    custom_recurrence: Optional[CustomRecurrenceIn] = None

    # completion details, recorded on the CompletedTask row
    actual_cost: Optional[float] = Field(default=None, gt=0)
    photos: List[str] = Field(default_factory=list)
    contractor_used: Optional[str] = None


class GenerateComplianceIn(CamelModel):
    home_id: Optional[int] = None


class TaskOut(CamelModel):
    id: int
    home_id: int
    template_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    category: str
    frequency: str
    next_due_date: datetime
    completed: bool
    completed_date: Optional[datetime] = None
    cost_estimate: Optional[float] = None
    priority: Optional[str] = None
    notes: Optional[str] = None
    snoozed_until: Optional[datetime] = None
    custom_recurrence: Optional[dict] = None
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _parse_recurrence(cls, data: Any) -> Any:
        return _json_field(data, "custom_recurrence_json", "custom_recurrence", None)


class TaskTemplateCreate(CamelModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: TaskCategory
    base_frequency: TaskFrequency
    diy_difficulty: Optional[str] = None
    cost_range_min: Optional[float] = Field(default=None, gt=0)
    cost_range_max: Optional[float] = Field(default=None, gt=0)
    importance: Optional[str] = None
    season: Optional[str] = None


class TaskTemplateOut(CamelModel):
    id: str
    user_id: Optional[int] = None
    name: str
    description: str
    category: str
    base_frequency: str
    diy_difficulty: Optional[str] = None
    cost_range_min: Optional[float] = None
    cost_range_max: Optional[float] = None
    importance: Optional[str] = None
    season: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CompletedTaskOut(CamelModel):
    id: int
    task_id: int
    user_id: int
    completed_date: datetime
    actual_cost: Optional[float] = None
    notes: Optional[str] = None
    photos: List[str] = Field(default_factory=list)
    contractor_used: Optional[str] = None
    created_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _parse_photos(cls, data: Any) -> Any:
        return _json_field(data, "photos_json", "photos", [])


# -------------------- Budget --------------------

class BudgetPlanCreate(CamelModel):
    name: str = Field(min_length=1)
    period: BudgetPeriod
    amount: float = Field(gt=0)
    start_date: UtcDateTime
    end_date: UtcDateTime
    category: Optional[TaskCategory] = None
    home_id: Optional[int] = None

    @model_validator(mode="after")
    def _window(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class BudgetPlanUpdate(PatchModel):
    not_null = ("name", "amount", "start_date", "end_date", "is_active")

    name: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, gt=0)
    start_date: Optional[UtcDateTime] = None
    end_date: Optional[UtcDateTime] = None
    is_active: Optional[bool] = None


class BudgetPlanOut(CamelModel):
    id: int
    user_id: int
    home_id: Optional[int] = None
    name: str
    period: str
    amount: float
    start_date: datetime
    end_date: datetime
    category: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class BudgetAlertOut(CamelModel):
    id: int
    user_id: int
    budget_plan_id: Optional[int] = None
    project_id: Optional[int] = None
    alert_type: str
    status: str
    threshold_percent: Optional[float] = None
    message: str
    sent_at: Optional[datetime] = None
    dismissed_at: Optional[datetime] = None
    created_at: datetime


class BudgetAlertUpdate(CamelModel):
    status: BudgetAlertStatus


# -------------------- DIY projects --------------------

class ProjectCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    category: ProjectCategory
    difficulty: ProjectDifficulty
    home_id: int
    estimated_hours: Optional[float] = Field(default=None, gt=0)
    estimated_cost: Optional[float] = Field(default=None, gt=0)
    budget: Optional[float] = Field(default=None, gt=0)
    target_start_date: Optional[UtcDateTime] = None
    target_end_date: Optional[UtcDateTime] = None
    linked_system_id: Optional[int] = None
    linked_appliance_id: Optional[int] = None
    linked_exterior_feature_id: Optional[int] = None
    linked_interior_feature_id: Optional[int] = None
    permit_required: bool = False
    permit_info: Optional[str] = None
    template_id: Optional[str] = None


class ProjectUpdate(PatchModel):
    not_null = ("name", "status")

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    estimated_hours: Optional[float] = Field(default=None, gt=0)
    actual_hours: Optional[float] = Field(default=None, gt=0)
    estimated_cost: Optional[float] = Field(default=None, gt=0)
    actual_cost: Optional[float] = Field(default=None, gt=0)
    budget: Optional[float] = Field(default=None, gt=0)
    target_start_date: Optional[UtcDateTime] = None
    target_end_date: Optional[UtcDateTime] = None
    actual_start_date: Optional[UtcDateTime] = None
    actual_end_date: Optional[UtcDateTime] = None
    satisfaction_rating: Optional[int] = Field(default=None, ge=1, le=5)
    would_do_again: Optional[bool] = None
    notes: Optional[str] = None
    lessons_learned: Optional[str] = None


class StepCreate(CamelModel):
    step_number: int = Field(gt=0)
    name: str = Field(min_length=1)
    description: str = ""
    instructions: str = ""
    estimated_hours: Optional[float] = Field(default=None, gt=0)
    depends_on_step_id: Optional[int] = None


class StepUpdate(CamelModel):
    status: Optional[StepStatus] = None
    actual_hours: Optional[float] = Field(default=None, gt=0)
    notes: Optional[str] = None


class StepOut(CamelModel):
    id: int
    project_id: int
    step_number: int
    name: str
    description: Optional[str] = None
    instructions: Optional[str] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    status: str
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
    depends_on_step_id: Optional[int] = None
    created_at: datetime


class MaterialCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    quantity: float = Field(gt=0)
    unit: str = Field(min_length=1)
    unit_price: Optional[float] = Field(default=None, gt=0)
    total_price: Optional[float] = Field(default=None, gt=0)
    vendor: Optional[str] = None
    vendor_url: Optional[str] = None

    @field_validator("vendor_url")
    @classmethod
    def _blank_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        if not (v.startswith("http://") or v.startswith("https://")):
            raise ValueError("vendorUrl must be a URL")
        return v


class MaterialUpdate(CamelModel):
    purchased: Optional[bool] = None
    purchased_at: Optional[UtcDateTime] = None


class MaterialOut(CamelModel):
    id: int
    project_id: int
    name: str
    description: Optional[str] = None
    quantity: float
    unit: Optional[str] = None
    unit_price: Optional[float] = None
    total_price: Optional[float] = None
    vendor: Optional[str] = None
    vendor_url: Optional[str] = None
    purchased: bool
    purchased_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime


class ProjectToolCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    owned: Optional[bool] = None
    rental_cost: Optional[float] = Field(default=None, gt=0)
    rental_days: Optional[int] = Field(default=None, gt=0)
    purchase_cost: Optional[float] = Field(default=None, gt=0)


class ProjectToolUpdate(CamelModel):
    purchased: Optional[bool] = None


class ProjectToolOut(CamelModel):
    id: int
    project_id: int
    name: str
    description: Optional[str] = None
    owned: bool
    rental_cost: Optional[float] = None
    rental_days: Optional[int] = None
    purchase_cost: Optional[float] = None
    purchased: bool
    notes: Optional[str] = None
    created_at: datetime


class ProjectPhotoOut(CamelModel):
    id: int
    project_id: int
    step_id: Optional[int] = None
    url: str
    caption: Optional[str] = None
    is_before: bool
    is_after: bool
    uploaded_at: datetime


class ProjectOut(CamelModel):
    id: int
    user_id: int
    home_id: int
    name: str
    description: Optional[str] = None
    category: str
    status: str
    difficulty: Optional[str] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    estimated_cost: Optional[float] = None
    actual_cost: Optional[float] = None
    budget: Optional[float] = None
    target_start_date: Optional[datetime] = None
    target_end_date: Optional[datetime] = None
    actual_start_date: Optional[datetime] = None
    actual_end_date: Optional[datetime] = None
    linked_system_id: Optional[int] = None
    linked_appliance_id: Optional[int] = None
    linked_exterior_feature_id: Optional[int] = None
    linked_interior_feature_id: Optional[int] = None
    permit_required: bool
    permit_info: Optional[str] = None
    satisfaction_rating: Optional[int] = None
    would_do_again: Optional[bool] = None
    notes: Optional[str] = None
    lessons_learned: Optional[str] = None
    template_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProjectDetailOut(ProjectOut):
    steps: List[StepOut] = Field(default_factory=list)
    materials: List[MaterialOut] = Field(default_factory=list)
    tools: List[ProjectToolOut] = Field(default_factory=list)
    photos: List[ProjectPhotoOut] = Field(default_factory=list)


# -------------------- Tool inventory --------------------

class ToolCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    purchase_date: Optional[UtcDateTime] = None
    purchase_price: Optional[float] = None
    condition: Optional[Condition] = None
    location: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("purchase_price", mode="before")
    @classmethod
    def _price(cls, v: Any) -> Any:
        # forms send the price as text
        if isinstance(v, str):
            v = v.strip().replace("$", "").replace(",", "")
            return float(v) if v else None
        return v


class ToolUpdate(PatchModel):
    not_null = ("name",)

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    purchase_date: Optional[UtcDateTime] = None
    purchase_price: Optional[float] = Field(default=None, gt=0)
    condition: Optional[Condition] = None
    location: Optional[str] = None
    notes: Optional[str] = None


class ToolOut(CamelModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    purchase_date: Optional[datetime] = None
    purchase_price: Optional[float] = None
    condition: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CheckOwnedIn(CamelModel):
    tool_names: Any = None


# -------------------- Notifications --------------------

class PushSubscribeIn(CamelModel):
    player_id: Optional[str] = None


class PushSendIn(CamelModel):
    type: str
    task_id: Optional[int] = None
    player_id: Optional[str] = None


class SendRemindersIn(CamelModel):
    days_ahead: List[int] = Field(default_factory=lambda: [30, 14, 7])


# -------------------- Lookups --------------------

class ClimateLookupIn(CamelModel):
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None


class ComplianceLookupIn(CamelModel):
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    year_built: Optional[int] = None
    home_type: Optional[str] = None
    county: Optional[str] = None
    task_category: Optional[str] = None
    task_name: Optional[str] = None


class PropertyLookupIn(CamelModel):
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
