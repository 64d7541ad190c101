"""init schema

Revision ID: 0001_init
Revises:
Create Date: 2026-10-01
"""
from alembic import op
import sqlalchemy as sa


revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("external_id", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column("subscription_tier", sa.String(length=30), nullable=False, server_default="free"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_users_external_id", "users", ["external_id"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "push_subscriptions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("player_id", sa.String(length=120), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("user_id", "player_id", name="uq_push_subscriptions_user_player"),
    )
    op.create_index("ix_push_subscriptions_user_id", "push_subscriptions", ["user_id"])

    op.create_table(
        "homes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=120), nullable=False),
        sa.Column("state", sa.String(length=2), nullable=False),
        sa.Column("zip_code", sa.String(length=10), nullable=False),
        sa.Column("year_built", sa.Integer(), nullable=True),
        sa.Column("square_footage", sa.Integer(), nullable=True),
        sa.Column("lot_size", sa.Float(), nullable=True),
        sa.Column("home_type", sa.String(length=30), nullable=True),
        sa.Column("climate_zone", sa.String(length=30), nullable=True),
        sa.Column("heating_degree_days", sa.Integer(), nullable=True),
        sa.Column("cooling_degree_days", sa.Integer(), nullable=True),
        sa.Column("average_rainfall", sa.Float(), nullable=True),
        sa.Column("average_snowfall", sa.Float(), nullable=True),
        sa.Column("storm_frequency", sa.String(length=20), nullable=True),
        sa.Column("wind_zone", sa.String(length=60), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_homes_user_id", "homes", ["user_id"])

    op.create_table(
        "home_systems",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("home_id", sa.Integer(), sa.ForeignKey("homes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("system_type", sa.String(length=30), nullable=False),
        sa.Column("brand", sa.String(length=120), nullable=True),
        sa.Column("model", sa.String(length=120), nullable=True),
        sa.Column("install_date", sa.DateTime(), nullable=True),
        sa.Column("expected_lifespan", sa.Integer(), nullable=True),
        sa.Column("capacity", sa.String(length=80), nullable=True),
        sa.Column("condition", sa.String(length=20), nullable=True),
        sa.Column("last_inspection", sa.DateTime(), nullable=True),
        sa.Column("material", sa.String(length=120), nullable=True),
        sa.Column("storm_resistance", sa.String(length=120), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_home_systems_home_id", "home_systems", ["home_id"])

    op.create_table(
        "appliances",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("home_id", sa.Integer(), sa.ForeignKey("homes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("appliance_type", sa.String(length=40), nullable=False),
        sa.Column("brand", sa.String(length=120), nullable=True),
        sa.Column("model", sa.String(length=120), nullable=True),
        sa.Column("serial_number", sa.String(length=120), nullable=True),
        sa.Column("install_date", sa.DateTime(), nullable=True),
        sa.Column("warranty_expiry", sa.DateTime(), nullable=True),
        sa.Column("expected_lifespan", sa.Integer(), nullable=True),
        sa.Column("last_service_date", sa.DateTime(), nullable=True),
        sa.Column("usage_frequency", sa.String(length=20), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_appliances_home_id", "appliances", ["home_id"])
    op.create_index("ix_appliances_warranty_expiry", "appliances", ["warranty_expiry"])

    for table in ("exterior_features", "interior_features"):
        extra = [sa.Column("room", sa.String(length=80), nullable=True)] if table == "interior_features" else []
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("home_id", sa.Integer(), sa.ForeignKey("homes.id", ondelete="CASCADE"), nullable=False),
            sa.Column("feature_type", sa.String(length=40), nullable=False),
            sa.Column("material", sa.String(length=120), nullable=True),
            sa.Column("brand", sa.String(length=120), nullable=True),
            sa.Column("install_date", sa.DateTime(), nullable=True),
            sa.Column("warranty_expiry", sa.DateTime(), nullable=True),
            sa.Column("expected_lifespan", sa.Integer(), nullable=True),
            sa.Column("last_service_date", sa.DateTime(), nullable=True),
            sa.Column("square_footage", sa.Integer(), nullable=True),
            *extra,
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
        )
        op.create_index(f"ix_{table}_home_id", table, ["home_id"])
        op.create_index(f"ix_{table}_warranty_expiry", table, ["warranty_expiry"])

    op.create_table(
        "maintenance_history",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("home_id", sa.Integer(), sa.ForeignKey("homes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("appliance_id", sa.Integer(), sa.ForeignKey("appliances.id", ondelete="SET NULL"), nullable=True),
        sa.Column(
            "exterior_feature_id", sa.Integer(), sa.ForeignKey("exterior_features.id", ondelete="SET NULL"), nullable=True
        ),
        sa.Column(
            "interior_feature_id", sa.Integer(), sa.ForeignKey("interior_features.id", ondelete="SET NULL"), nullable=True
        ),
        sa.Column("system_id", sa.Integer(), sa.ForeignKey("home_systems.id", ondelete="SET NULL"), nullable=True),
        sa.Column("service_date", sa.DateTime(), nullable=False),
        sa.Column("service_type", sa.String(length=20), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("cost", sa.Float(), nullable=True),
        sa.Column("contractor_name", sa.String(length=160), nullable=True),
        sa.Column("contractor_phone", sa.String(length=40), nullable=True),
        sa.Column("photos_json", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("receipts_json", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("warranty_info", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("next_service_due", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_maintenance_history_home_id", "maintenance_history", ["home_id"])

    op.create_table(
        "maintenance_tasks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("home_id", sa.Integer(), sa.ForeignKey("homes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("template_id", sa.String(length=80), nullable=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("frequency", sa.String(length=20), nullable=False),
        sa.Column("next_due_date", sa.DateTime(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("completed_date", sa.DateTime(), nullable=True),
        sa.Column("cost_estimate", sa.Float(), nullable=True),
        sa.Column("priority", sa.String(length=20), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("snoozed_until", sa.DateTime(), nullable=True),
        sa.Column("custom_recurrence_json", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_maintenance_tasks_home_id", "maintenance_tasks", ["home_id"])
    op.create_index("ix_maintenance_tasks_home_due", "maintenance_tasks", ["home_id", "next_due_date"])

    op.create_table(
        "completed_tasks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("task_id", sa.Integer(), sa.ForeignKey("maintenance_tasks.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("completed_date", sa.DateTime(), nullable=False),
        sa.Column("actual_cost", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("photos_json", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("contractor_used", sa.String(length=160), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_completed_tasks_task_id", "completed_tasks", ["task_id"])
    op.create_index("ix_completed_tasks_user_id", "completed_tasks", ["user_id"])

    op.create_table(
        "tool_inventory",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=80), nullable=True),
        sa.Column("brand", sa.String(length=120), nullable=True),
        sa.Column("model", sa.String(length=120), nullable=True),
        sa.Column("purchase_date", sa.DateTime(), nullable=True),
        sa.Column("purchase_price", sa.Float(), nullable=True),
        sa.Column("condition", sa.String(length=20), nullable=True),
        sa.Column("location", sa.String(length=120), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_tool_inventory_user_id", "tool_inventory", ["user_id"])

    op.create_table(
        "diy_projects",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("home_id", sa.Integer(), sa.ForeignKey("homes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="NOT_STARTED"),
        sa.Column("difficulty", sa.String(length=20), nullable=True),
        sa.Column("estimated_hours", sa.Float(), nullable=True),
        sa.Column("actual_hours", sa.Float(), nullable=True),
        sa.Column("estimated_cost", sa.Float(), nullable=True),
        sa.Column("actual_cost", sa.Float(), nullable=True),
        sa.Column("budget", sa.Float(), nullable=True),
        sa.Column("target_start_date", sa.DateTime(), nullable=True),
        sa.Column("target_end_date", sa.DateTime(), nullable=True),
        sa.Column("actual_start_date", sa.DateTime(), nullable=True),
        sa.Column("actual_end_date", sa.DateTime(), nullable=True),
        sa.Column("linked_appliance_id", sa.Integer(), sa.ForeignKey("appliances.id", ondelete="SET NULL"), nullable=True),
        sa.Column(
            "linked_exterior_feature_id",
            sa.Integer(),
            sa.ForeignKey("exterior_features.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "linked_interior_feature_id",
            sa.Integer(),
            sa.ForeignKey("interior_features.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("linked_system_id", sa.Integer(), sa.ForeignKey("home_systems.id", ondelete="SET NULL"), nullable=True),
        sa.Column("permit_required", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("permit_info", sa.Text(), nullable=True),
        sa.Column("satisfaction_rating", sa.Integer(), nullable=True),
        sa.Column("would_do_again", sa.Boolean(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("lessons_learned", sa.Text(), nullable=True),
        sa.Column("template_id", sa.String(length=80), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_diy_projects_user_id", "diy_projects", ["user_id"])
    op.create_index("ix_diy_projects_home_id", "diy_projects", ["home_id"])

    op.create_table(
        "project_steps",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("diy_projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("step_number", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("estimated_hours", sa.Float(), nullable=True),
        sa.Column("actual_hours", sa.Float(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="not_started"),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "depends_on_step_id", sa.Integer(), sa.ForeignKey("project_steps.id", ondelete="SET NULL"), nullable=True
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_project_steps_project_id", "project_steps", ["project_id"])

    op.create_table(
        "project_materials",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("diy_projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("quantity", sa.Float(), nullable=False, server_default="1"),
        sa.Column("unit", sa.String(length=40), nullable=True),
        sa.Column("unit_price", sa.Float(), nullable=True),
        sa.Column("total_price", sa.Float(), nullable=True),
        sa.Column("vendor", sa.String(length=160), nullable=True),
        sa.Column("vendor_url", sa.String(length=500), nullable=True),
        sa.Column("purchased", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("purchased_at", sa.DateTime(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_project_materials_project_id", "project_materials", ["project_id"])

    op.create_table(
        "project_tools",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("diy_projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("owned", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("rental_cost", sa.Float(), nullable=True),
        sa.Column("rental_days", sa.Integer(), nullable=True),
        sa.Column("purchase_cost", sa.Float(), nullable=True),
        sa.Column("purchased", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_project_tools_project_id", "project_tools", ["project_id"])

    op.create_table(
        "project_photos",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("diy_projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("step_id", sa.Integer(), sa.ForeignKey("project_steps.id", ondelete="SET NULL"), nullable=True),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("caption", sa.String(length=500), nullable=True),
        sa.Column("is_before", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_after", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("uploaded_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_project_photos_project_id", "project_photos", ["project_id"])

    op.create_table(
        "budget_plans",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("home_id", sa.Integer(), sa.ForeignKey("homes.id", ondelete="SET NULL"), nullable=True),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("period", sa.String(length=20), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=False),
        sa.Column("category", sa.String(length=20), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_budget_plans_user_id", "budget_plans", ["user_id"])

    op.create_table(
        "budget_alerts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("budget_plan_id", sa.Integer(), sa.ForeignKey("budget_plans.id", ondelete="CASCADE"), nullable=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("diy_projects.id", ondelete="CASCADE"), nullable=True),
        sa.Column("alert_type", sa.String(length=30), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="PENDING"),
        sa.Column("threshold_percent", sa.Float(), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("sent_at", sa.DateTime(), nullable=True),
        sa.Column("dismissed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_budget_alerts_budget_plan_id", "budget_alerts", ["budget_plan_id"])
    op.create_index("ix_budget_alerts_project_id", "budget_alerts", ["project_id"])
    op.create_index("ix_budget_alerts_user_status", "budget_alerts", ["user_id", "status"])

    op.create_table(
        "property_cache",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("cache_key", sa.String(length=400), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=120), nullable=False),
        sa.Column("state", sa.String(length=2), nullable=False),
        sa.Column("zip_code", sa.String(length=10), nullable=False),
        sa.Column("property_data_json", sa.Text(), nullable=False),
        sa.Column("source", sa.String(length=60), nullable=False, server_default="unknown"),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_property_cache_cache_key", "property_cache", ["cache_key"], unique=True)
    op.create_index("ix_property_cache_expires_at", "property_cache", ["expires_at"])

    op.create_table(
        "zip_code_cache",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("zip_code", sa.String(length=10), nullable=False),
        sa.Column("city", sa.String(length=120), nullable=True),
        sa.Column("state", sa.String(length=2), nullable=True),
        sa.Column("climate_data_json", sa.Text(), nullable=True),
        sa.Column("weather_data_json", sa.Text(), nullable=True),
        sa.Column("source", sa.String(length=60), nullable=False, server_default="unknown"),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_zip_code_cache_zip_code", "zip_code_cache", ["zip_code"], unique=True)
    op.create_index("ix_zip_code_cache_expires_at", "zip_code_cache", ["expires_at"])


def downgrade():
    op.drop_table("zip_code_cache")
    op.drop_table("property_cache")
    op.drop_table("budget_alerts")
    op.drop_table("budget_plans")
    op.drop_table("project_photos")
    op.drop_table("project_tools")
    op.drop_table("project_materials")
    op.drop_table("project_steps")
    op.drop_table("diy_projects")
    op.drop_table("tool_inventory")
    op.drop_table("completed_tasks")
    op.drop_table("maintenance_tasks")
    op.drop_table("maintenance_history")
    op.drop_table("interior_features")
    op.drop_table("exterior_features")
    op.drop_table("appliances")
    op.drop_table("home_systems")
    op.drop_table("homes")
    op.drop_table("push_subscriptions")
    op.drop_table("users")
