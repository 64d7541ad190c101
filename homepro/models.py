# homepro/models.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


# -----------------------------
# Users / push
# -----------------------------
class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # subject id issued by the external identity provider
    external_id: Mapped[str] = mapped_column(String(120), nullable=False, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    subscription_tier: Mapped[str] = mapped_column(String(30), nullable=False, default="free")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    homes: Mapped[List["Home"]] = relationship(back_populates="user", cascade="all, delete-orphan")
    push_subscriptions: Mapped[List["PushSubscription"]] = relationship(back_populates="user", cascade="all, delete-orphan")


class PushSubscription(Base):
    __tablename__ = "push_subscriptions"
    __table_args__ = (UniqueConstraint("user_id", "player_id", name="uq_push_subscriptions_user_player"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    player_id: Mapped[str] = mapped_column(String(120), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    user: Mapped["User"] = relationship(back_populates="push_subscriptions")


# -----------------------------
# Homes + inventory
# -----------------------------
class Home(Base):
    __tablename__ = "homes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False)
    state: Mapped[str] = mapped_column(String(2), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(10), nullable=False)

    year_built: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    square_footage: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    lot_size: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    home_type: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    climate_zone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    heating_degree_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    cooling_degree_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    average_rainfall: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    average_snowfall: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    storm_frequency: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)  # low|moderate|high|severe
    wind_zone: Mapped[Optional[str]] = mapped_column(String(60), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    user: Mapped["User"] = relationship(back_populates="homes")
    systems: Mapped[List["HomeSystem"]] = relationship(back_populates="home", cascade="all, delete-orphan")
    appliances: Mapped[List["Appliance"]] = relationship(back_populates="home", cascade="all, delete-orphan")
    exterior_features: Mapped[List["ExteriorFeature"]] = relationship(back_populates="home", cascade="all, delete-orphan")
    interior_features: Mapped[List["InteriorFeature"]] = relationship(back_populates="home", cascade="all, delete-orphan")
    tasks: Mapped[List["MaintenanceTask"]] = relationship(back_populates="home", cascade="all, delete-orphan")
    history: Mapped[List["MaintenanceHistory"]] = relationship(back_populates="home", cascade="all, delete-orphan")


class HomeSystem(Base):
    __tablename__ = "home_systems"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    home_id: Mapped[int] = mapped_column(Integer, ForeignKey("homes.id", ondelete="CASCADE"), nullable=False, index=True)

    system_type: Mapped[str] = mapped_column(String(30), nullable=False)
    brand: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    model: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    install_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    expected_lifespan: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # years
    capacity: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    condition: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    last_inspection: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    material: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    storm_resistance: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    home: Mapped["Home"] = relationship(back_populates="systems")


class Appliance(Base):
    __tablename__ = "appliances"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    home_id: Mapped[int] = mapped_column(Integer, ForeignKey("homes.id", ondelete="CASCADE"), nullable=False, index=True)

    appliance_type: Mapped[str] = mapped_column(String(40), nullable=False)
    brand: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    model: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    serial_number: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    install_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    warranty_expiry: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)
    expected_lifespan: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    last_service_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    usage_frequency: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    home: Mapped["Home"] = relationship(back_populates="appliances")


class ExteriorFeature(Base):
    __tablename__ = "exterior_features"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    home_id: Mapped[int] = mapped_column(Integer, ForeignKey("homes.id", ondelete="CASCADE"), nullable=False, index=True)

    feature_type: Mapped[str] = mapped_column(String(40), nullable=False)
    material: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    brand: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    install_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    warranty_expiry: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)
    expected_lifespan: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    last_service_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    square_footage: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    home: Mapped["Home"] = relationship(back_populates="exterior_features")


class InteriorFeature(Base):
    __tablename__ = "interior_features"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    home_id: Mapped[int] = mapped_column(Integer, ForeignKey("homes.id", ondelete="CASCADE"), nullable=False, index=True)

    feature_type: Mapped[str] = mapped_column(String(40), nullable=False)
    material: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    brand: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    install_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    warranty_expiry: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)
    expected_lifespan: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    last_service_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    square_footage: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    room: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    home: Mapped["Home"] = relationship(back_populates="interior_features")


class MaintenanceHistory(Base):
    __tablename__ = "maintenance_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    home_id: Mapped[int] = mapped_column(Integer, ForeignKey("homes.id", ondelete="CASCADE"), nullable=False, index=True)

    appliance_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("appliances.id", ondelete="SET NULL"), nullable=True)
    exterior_feature_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("exterior_features.id", ondelete="SET NULL"), nullable=True
    )
    interior_feature_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("interior_features.id", ondelete="SET NULL"), nullable=True
    )
    system_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("home_systems.id", ondelete="SET NULL"), nullable=True)

    service_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    service_type: Mapped[str] = mapped_column(String(20), nullable=False)  # maintenance|repair|replacement|inspection
    description: Mapped[str] = mapped_column(Text, nullable=False)
    cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    contractor_name: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    contractor_phone: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)

    # JSON lists of URLs serialized to text
    photos_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    receipts_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    warranty_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    next_service_due: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    home: Mapped["Home"] = relationship(back_populates="history")


# -----------------------------
# Tasks
# -----------------------------
class MaintenanceTask(Base):
    __tablename__ = "maintenance_tasks"
    __table_args__ = (Index("ix_maintenance_tasks_home_due", "home_id", "next_due_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    home_id: Mapped[int] = mapped_column(Integer, ForeignKey("homes.id", ondelete="CASCADE"), nullable=False, index=True)
    template_id: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    frequency: Mapped[str] = mapped_column(String(20), nullable=False)

    next_due_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    cost_estimate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    priority: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    snoozed_until: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # {"interval": int, "unit": "days"|"weeks"|"months"} serialized to text
    custom_recurrence_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    home: Mapped["Home"] = relationship(back_populates="tasks")
    completions: Mapped[List["CompletedTask"]] = relationship(back_populates="task", cascade="all, delete-orphan")


class CompletedTask(Base):
    __tablename__ = "completed_tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    task_id: Mapped[int] = mapped_column(Integer, ForeignKey("maintenance_tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    completed_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    actual_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    photos_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    contractor_used: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    task: Mapped["MaintenanceTask"] = relationship(back_populates="completions")


class TaskTemplate(Base):
    """Reusable task definition. Rows without a user are the built-in catalog."""

    __tablename__ = "task_templates"

    id: Mapped[str] = mapped_column(String(80), primary_key=True, default=lambda: uuid.uuid4().hex)
    user_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    base_frequency: Mapped[str] = mapped_column(String(20), nullable=False)
    diy_difficulty: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    cost_range_min: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    cost_range_max: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    importance: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    season: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)


# -----------------------------
# Tools
# -----------------------------
class ToolInventory(Base):
    __tablename__ = "tool_inventory"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(160), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    brand: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    model: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    purchase_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    purchase_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    condition: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)  # excellent|good|fair|poor
    location: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)


# -----------------------------
# DIY projects
# -----------------------------
class DiyProject(Base):
    __tablename__ = "diy_projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    home_id: Mapped[int] = mapped_column(Integer, ForeignKey("homes.id", ondelete="CASCADE"), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="NOT_STARTED")
    difficulty: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    estimated_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    actual_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    estimated_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    actual_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    budget: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    target_start_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    target_end_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    actual_start_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    actual_end_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    linked_appliance_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("appliances.id", ondelete="SET NULL"), nullable=True)
    linked_exterior_feature_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("exterior_features.id", ondelete="SET NULL"), nullable=True
    )
    linked_interior_feature_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("interior_features.id", ondelete="SET NULL"), nullable=True
    )
    linked_system_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("home_systems.id", ondelete="SET NULL"), nullable=True)

    permit_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    permit_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    satisfaction_rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # 1..5
    would_do_again: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    lessons_learned: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    template_id: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    home: Mapped["Home"] = relationship()
    steps: Mapped[List["ProjectStep"]] = relationship(
        back_populates="project", cascade="all, delete-orphan", order_by="ProjectStep.step_number"
    )
    materials: Mapped[List["ProjectMaterial"]] = relationship(back_populates="project", cascade="all, delete-orphan")
    tools: Mapped[List["ProjectTool"]] = relationship(back_populates="project", cascade="all, delete-orphan")
    photos: Mapped[List["ProjectPhoto"]] = relationship(back_populates="project", cascade="all, delete-orphan")


class ProjectStep(Base):
    __tablename__ = "project_steps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(Integer, ForeignKey("diy_projects.id", ondelete="CASCADE"), nullable=False, index=True)

    step_number: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    estimated_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    actual_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="not_started")
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    depends_on_step_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("project_steps.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    project: Mapped["DiyProject"] = relationship(back_populates="steps")


class ProjectMaterial(Base):
    __tablename__ = "project_materials"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(Integer, ForeignKey("diy_projects.id", ondelete="CASCADE"), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    quantity: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    unit: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    unit_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    total_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    vendor: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    vendor_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    purchased: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    purchased_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    project: Mapped["DiyProject"] = relationship(back_populates="materials")


class ProjectTool(Base):
    __tablename__ = "project_tools"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(Integer, ForeignKey("diy_projects.id", ondelete="CASCADE"), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(160), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    owned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rental_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # per day
    rental_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    purchase_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    purchased: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    project: Mapped["DiyProject"] = relationship(back_populates="tools")


class ProjectPhoto(Base):
    __tablename__ = "project_photos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(Integer, ForeignKey("diy_projects.id", ondelete="CASCADE"), nullable=False, index=True)
    step_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("project_steps.id", ondelete="SET NULL"), nullable=True)

    url: Mapped[str] = mapped_column(Text, nullable=False)
    caption: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_before: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_after: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    project: Mapped["DiyProject"] = relationship(back_populates="photos")


# -----------------------------
# Budget
# -----------------------------
class BudgetPlan(Base):
    __tablename__ = "budget_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    home_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("homes.id", ondelete="SET NULL"), nullable=True)

    name: Mapped[str] = mapped_column(String(160), nullable=False)
    period: Mapped[str] = mapped_column(String(20), nullable=False)  # MONTHLY|QUARTERLY|ANNUAL
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    alerts: Mapped[List["BudgetAlert"]] = relationship(back_populates="budget_plan", cascade="all, delete-orphan")


class BudgetAlert(Base):
    __tablename__ = "budget_alerts"
    __table_args__ = (Index("ix_budget_alerts_user_status", "user_id", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    budget_plan_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("budget_plans.id", ondelete="CASCADE"), nullable=True, index=True
    )
    project_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("diy_projects.id", ondelete="CASCADE"), nullable=True, index=True
    )

    alert_type: Mapped[str] = mapped_column(String(30), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="PENDING")
    threshold_percent: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    sent_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    dismissed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    budget_plan: Mapped[Optional["BudgetPlan"]] = relationship(back_populates="alerts")


# -----------------------------
# Lookup caches
# -----------------------------
class PropertyCache(Base):
    __tablename__ = "property_cache"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    cache_key: Mapped[str] = mapped_column(String(400), nullable=False, unique=True, index=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False)
    state: Mapped[str] = mapped_column(String(2), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(10), nullable=False)
    property_data_json: Mapped[str] = mapped_column(Text, nullable=False)
    source: Mapped[str] = mapped_column(String(60), nullable=False, default="unknown")
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)


class ZipCodeCache(Base):
    __tablename__ = "zip_code_cache"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    zip_code: Mapped[str] = mapped_column(String(10), nullable=False, unique=True, index=True)
    city: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(2), nullable=True)
    climate_data_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    weather_data_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    source: Mapped[str] = mapped_column(String(60), nullable=False, default="unknown")
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
