# homepro/routers/budget.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import desc, select
from sqlalchemy.orm import Session, joinedload, selectinload

from ..auth import get_cron_or_principal, get_principal
from ..db import get_db
from ..deps import get_email_sender, get_push_sender
from ..domain.budget import project_actual_cost, project_budget_line
from ..domain.recurrence import add_months
from ..models import BudgetAlert, BudgetPlan, CompletedTask, DiyProject, MaintenanceTask
from ..schemas import BudgetAlertOut, BudgetAlertUpdate, BudgetPlanCreate, BudgetPlanOut, BudgetPlanUpdate, dump, dump_all
from ..services.budget_alerts import check_budget_alerts
from ..services.budget_spending import plan_spending
from ..services.ownership import must_own, owned_home_ids

log = logging.getLogger(__name__)

router = APIRouter(prefix="/budget", tags=["budget"])


def _home_line(h) -> dict:
    return {"address": h.address, "city": h.city, "state": h.state}


def monthly_spending(completions: list[CompletedTask], now: datetime, months: int = 12) -> list[dict]:
    """Trailing calendar months, oldest first, labelled like 'Jan 2026'."""
    first_of_month = datetime(now.year, now.month, 1)
    out: list[dict] = []
    for i in range(months - 1, -1, -1):
        start = add_months(first_of_month, -i)
        end = add_months(start, 1)
        amount = sum(float(c.actual_cost or 0) for c in completions if start <= c.completed_date < end)
        out.append({"month": start.strftime("%b %Y"), "amount": amount})
    return out


@router.get("")
def budget_overview(db: Session = Depends(get_db), p=Depends(get_principal)):
    homes = owned_home_ids(db, user_id=p.user_id)
    if not homes:
        return {
            "totalSpent": 0,
            "totalEstimated": 0,
            "recentCompletions": [],
            "upcomingTasks": [],
            "monthlySpending": [],
        }

    completions = db.scalars(
        select(CompletedTask)
        .join(MaintenanceTask, CompletedTask.task_id == MaintenanceTask.id)
        .options(joinedload(CompletedTask.task).joinedload(MaintenanceTask.home))
        .where(CompletedTask.user_id == p.user_id, MaintenanceTask.home_id.in_(homes))
        .order_by(desc(CompletedTask.completed_date))
    ).all()

    upcoming = db.scalars(
        select(MaintenanceTask)
        .options(joinedload(MaintenanceTask.home))
        .where(
            MaintenanceTask.home_id.in_(homes),
            MaintenanceTask.completed.is_(False),
            MaintenanceTask.cost_estimate.is_not(None),
        )
        .order_by(MaintenanceTask.next_due_date)
        .limit(20)
    ).all()

    recent = []
    for c in completions[:10]:
        recent.append({
            "id": c.id,
            "completedDate": c.completed_date,
            "actualCost": c.actual_cost,
            "task": {
                "id": c.task.id,
                "name": c.task.name,
                "category": c.task.category,
                "homeId": c.task.home_id,
                "home": _home_line(c.task.home),
            },
        })

    return {
        "totalSpent": sum(float(c.actual_cost or 0) for c in completions),
        "totalEstimated": sum(float(t.cost_estimate or 0) for t in upcoming),
        "recentCompletions": recent,
        "upcomingTasks": [
            {
                "id": t.id,
                "name": t.name,
                "category": t.category,
                "nextDueDate": t.next_due_date,
                "costEstimate": t.cost_estimate,
                "home": _home_line(t.home),
            }
            for t in upcoming
        ],
        "monthlySpending": monthly_spending(list(completions), datetime.utcnow()),
    }


@router.get("/projects")
def project_budgets(db: Session = Depends(get_db), p=Depends(get_principal)):
    projects = db.scalars(
        select(DiyProject)
        .options(joinedload(DiyProject.home), selectinload(DiyProject.materials), selectinload(DiyProject.tools))
        .where(DiyProject.user_id == p.user_id)
        .order_by(desc(DiyProject.created_at), desc(DiyProject.id))
    ).all()

    rows = []
    for pr in projects:
        line = project_budget_line(pr.budget, project_actual_cost(pr.actual_cost, pr.materials, pr.tools))
        rows.append({
            "id": pr.id,
            "name": pr.name,
            "category": pr.category,
            "status": pr.status,
            "budget": line.budget,
            "estimatedCost": pr.estimated_cost,
            "actualCost": line.actual_cost,
            "remaining": line.remaining,
            "percentUsed": line.percent_used,
            "isOverBudget": line.is_over_budget,
            "home": _home_line(pr.home),
            "createdAt": pr.created_at,
        })

    n = len(rows)
    total_budget = sum(r["budget"] for r in rows)
    total_spent = sum(r["actualCost"] for r in rows)
    return {
        "projects": rows,
        "summary": {
            "totalProjects": n,
            "totalBudget": total_budget,
            "totalSpent": total_spent,
            "totalRemaining": total_budget - total_spent,
            "projectsOverBudget": sum(1 for r in rows if r["isOverBudget"]),
            "averageBudget": total_budget / n if n else 0,
            "averageSpent": total_spent / n if n else 0,
        },
    }


# -------------------- Plans --------------------

@router.get("/plans")
def list_plans(
    period: Optional[str] = Query(default=None),
    is_active: Optional[bool] = Query(default=None, alias="isActive"),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    q = select(BudgetPlan).where(BudgetPlan.user_id == p.user_id)
    if period:
        q = q.where(BudgetPlan.period == period)
    if is_active is not None:
        q = q.where(BudgetPlan.is_active.is_(is_active))
    rows = db.scalars(q.order_by(desc(BudgetPlan.start_date), desc(BudgetPlan.id))).all()
    return {"budgetPlans": dump_all(BudgetPlanOut, rows)}


@router.post("/plans", status_code=201)
def create_plan(payload: BudgetPlanCreate, db: Session = Depends(get_db), p=Depends(get_principal)):
    if payload.home_id is not None:
        must_own(db, "home", payload.home_id, user_id=p.user_id)
    plan = BudgetPlan(user_id=p.user_id, **payload.model_dump())
    db.add(plan)
    db.commit()
    db.refresh(plan)
    log.info("budget_plan_created", extra={"user_id": p.user_id, "plan_id": plan.id})
    return {"budgetPlan": dump(BudgetPlanOut, plan)}


@router.get("/plans/{plan_id}")
def get_plan(plan_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    plan = must_own(db, "budget_plan", plan_id, user_id=p.user_id)
    alerts = db.scalars(
        select(BudgetAlert).where(BudgetAlert.budget_plan_id == plan.id).order_by(desc(BudgetAlert.created_at), desc(BudgetAlert.id))
    ).all()

    out = dump(BudgetPlanOut, plan)
    out["alerts"] = dump_all(BudgetAlertOut, alerts)
    out["spending"] = plan_spending(db, plan).to_dict()
    return {"budgetPlan": out}


@router.patch("/plans/{plan_id}")
def update_plan(plan_id: int, payload: BudgetPlanUpdate, db: Session = Depends(get_db), p=Depends(get_principal)):
    plan = must_own(db, "budget_plan", plan_id, user_id=p.user_id)
    changes = payload.model_dump(exclude_unset=True)
    start = changes.get("start_date", plan.start_date)
    end = changes.get("end_date", plan.end_date)
    if end < start:
        raise HTTPException(status_code=400, detail="endDate must not be before startDate")
    for k, v in changes.items():
        setattr(plan, k, v)
    db.commit()
    db.refresh(plan)
    return {"budgetPlan": dump(BudgetPlanOut, plan)}


@router.delete("/plans/{plan_id}")
def delete_plan(plan_id: int, db: Session = Depends(get_db), p=Depends(get_principal)):
    plan = must_own(db, "budget_plan", plan_id, user_id=p.user_id)
    db.delete(plan)
    db.commit()
    return {"success": True}


# -------------------- Alerts --------------------

@router.get("/alerts")
def list_alerts(
    status: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    p=Depends(get_principal),
):
    q = select(BudgetAlert).options(joinedload(BudgetAlert.budget_plan)).where(BudgetAlert.user_id == p.user_id)
    if status:
        q = q.where(BudgetAlert.status == status)
    rows = db.scalars(q.order_by(desc(BudgetAlert.created_at), desc(BudgetAlert.id)).limit(50)).all()

    out = []
    for a in rows:
        d = dump(BudgetAlertOut, a)
        bp = a.budget_plan
        d["budgetPlan"] = {"name": bp.name, "amount": bp.amount, "period": bp.period} if bp is not None else None
        out.append(d)
    return {"alerts": out}


@router.post("/alerts")
def run_alert_check(
    db: Session = Depends(get_db),
    caller=Depends(get_cron_or_principal),
    push=Depends(get_push_sender),
    email=Depends(get_email_sender),
):
    """Cron callers scan every user; a signed-in user scans only their own plans and projects."""
    user_id = caller.user_id if caller is not None else None
    result = check_budget_alerts(db, push=push, email=email, user_id=user_id)
    return {"success": True, **result.to_dict()}


@router.patch("/alerts/{alert_id}")
def update_alert(alert_id: int, payload: BudgetAlertUpdate, db: Session = Depends(get_db), p=Depends(get_principal)):
    alert = db.scalar(select(BudgetAlert).where(BudgetAlert.id == alert_id, BudgetAlert.user_id == p.user_id))
    if alert is None:
        raise HTTPException(status_code=404, detail="Budget alert not found")

    alert.status = payload.status
    alert.dismissed_at = datetime.utcnow() if payload.status == "DISMISSED" else None
    db.commit()
    db.refresh(alert)
    return {"alert": dump(BudgetAlertOut, alert)}
