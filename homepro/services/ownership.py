# homepro/services/ownership.py
from __future__ import annotations

from typing import Any, Callable

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import (
    Appliance,
    BudgetPlan,
    DiyProject,
    ExteriorFeature,
    Home,
    HomeSystem,
    InteriorFeature,
    MaintenanceHistory,
    MaintenanceTask,
    ProjectMaterial,
    ProjectStep,
    ProjectTool,
    ToolInventory,
)


def _via_home(model) -> Callable[[int, int], Any]:
    return lambda rid, uid: select(model).join(Home, model.home_id == Home.id).where(model.id == rid, Home.user_id == uid)


def _via_project(model) -> Callable[[int, int], Any]:
    return lambda rid, uid: (
        select(model).join(DiyProject, model.project_id == DiyProject.id).where(model.id == rid, DiyProject.user_id == uid)
    )


def _direct(model) -> Callable[[int, int], Any]:
    return lambda rid, uid: select(model).where(model.id == rid, model.user_id == uid)


# resource -> (label used in 404 detail, query builder)
_RESOURCES: dict[str, tuple[str, Callable[[int, int], Any]]] = {
    "home": ("Home", _direct(Home)),
    "system": ("System", _via_home(HomeSystem)),
    "appliance": ("Appliance", _via_home(Appliance)),
    "exterior_feature": ("Exterior feature", _via_home(ExteriorFeature)),
    "interior_feature": ("Interior feature", _via_home(InteriorFeature)),
    "task": ("Task", _via_home(MaintenanceTask)),
    "maintenance_record": ("Maintenance record", _via_home(MaintenanceHistory)),
    "project": ("Project", _direct(DiyProject)),
    "step": ("Step", _via_project(ProjectStep)),
    "material": ("Material", _via_project(ProjectMaterial)),
    "project_tool": ("Tool", _via_project(ProjectTool)),
    "budget_plan": ("Budget plan", _direct(BudgetPlan)),
    "tool": ("Tool", _direct(ToolInventory)),
}


def must_own(db: Session, resource: str, resource_id: int, *, user_id: int):
    """
    Load `resource_id` if the caller owns it through its owning chain
    (home.user_id, project.user_id or the row's own user_id).
    Missing and foreign rows are indistinguishable: both 404.
    """
    label, query = _RESOURCES[resource]
    row = db.scalar(query(int(resource_id), int(user_id)))
    if row is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return row


def owned_home_ids(db: Session, *, user_id: int) -> list[int]:
    return list(db.scalars(select(Home.id).where(Home.user_id == user_id)).all())
