# homepro/services/budget_spending.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from ..domain.budget import percent_used
from ..models import BudgetPlan, CompletedTask, DiyProject, MaintenanceTask
from .ownership import owned_home_ids


@dataclass(frozen=True)
class PlanSpending:
    task_spending: float
    project_spending: float
    completed_tasks: int
    diy_projects: int
    amount: float

    @property
    def total_spent(self) -> float:
        return self.task_spending + self.project_spending

    @property
    def remaining(self) -> float:
        return self.amount - self.total_spent

    @property
    def percent_used(self) -> float:
        return percent_used(self.total_spent, self.amount)

    def to_dict(self) -> dict:
        return {
            "totalSpent": self.total_spent,
            "remaining": self.remaining,
            "percentUsed": self.percent_used,
            "taskSpending": self.task_spending,
            "projectSpending": self.project_spending,
            "completedTasks": self.completed_tasks,
            "diyProjects": self.diy_projects,
        }


def plan_home_ids(db: Session, plan: BudgetPlan) -> list[int]:
    if plan.home_id is not None:
        return [plan.home_id]
    return owned_home_ids(db, user_id=plan.user_id)


def plan_spending(db: Session, plan: BudgetPlan, *, home_ids: Optional[list[int]] = None) -> PlanSpending:
    """
    Completed-task costs and DIY project costs that fall inside the plan's
    window and scope (home, category).
    """
    homes = plan_home_ids(db, plan) if home_ids is None else home_ids
    start, end = plan.start_date, plan.end_date

    task_count = 0
    task_total = 0.0
    if homes:
        conds = [
            CompletedTask.user_id == plan.user_id,
            MaintenanceTask.home_id.in_(homes),
            CompletedTask.completed_date >= start,
            CompletedTask.completed_date <= end,
        ]
        if plan.category:
            conds.append(MaintenanceTask.category == plan.category)
        task_count, task_sum = db.execute(
            select(func.count(CompletedTask.id), func.coalesce(func.sum(CompletedTask.actual_cost), 0.0))
            .join(MaintenanceTask, CompletedTask.task_id == MaintenanceTask.id)
            .where(*conds)
        ).one()
        task_total = float(task_sum or 0.0)

    pconds = [
        DiyProject.user_id == plan.user_id,
        or_(
            and_(DiyProject.actual_start_date >= start, DiyProject.actual_start_date <= end),
            and_(DiyProject.actual_end_date >= start, DiyProject.actual_end_date <= end),
        ),
    ]
    if plan.home_id is not None:
        pconds.append(DiyProject.home_id == plan.home_id)
    if plan.category:
        pconds.append(DiyProject.category == plan.category)
    project_count, project_sum = db.execute(
        select(func.count(DiyProject.id), func.coalesce(func.sum(DiyProject.actual_cost), 0.0)).where(*pconds)
    ).one()

    return PlanSpending(
        task_spending=task_total,
        project_spending=float(project_sum or 0.0),
        completed_tasks=int(task_count or 0),
        diy_projects=int(project_count or 0),
        amount=float(plan.amount),
    )
