from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from timeledger.api import deps
from timeledger.db.session import get_db
from timeledger.schemas.goal import (
    GoalProgress,
    MonthlyGoalCreate,
    MonthlyGoalPublic,
    WeeklyGoalCreate,
    WeeklyGoalPublic,
)
from timeledger.services import goals as goals_service

router = APIRouter()


@router.get("/monthly", response_model=list[MonthlyGoalPublic])
def list_monthly_goals(
    year: int,
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[MonthlyGoalPublic]:
    return goals_service.list_monthly_goals(db, owner_id, year, month)


@router.post("/monthly", response_model=MonthlyGoalPublic)
def upsert_monthly_goal(
    payload: MonthlyGoalCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> MonthlyGoalPublic:
    return goals_service.upsert_monthly_goal(db, owner_id, payload)


@router.delete("/monthly/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_monthly_goal(
    goal_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> None:
    goals_service.delete_monthly_goal(db, owner_id, goal_id)


@router.get("/monthly/progress", response_model=list[GoalProgress])
def get_monthly_progress(
    year: int,
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[GoalProgress]:
    return goals_service.monthly_progress(db, owner_id, year, month, date.today())


@router.get("/weekly", response_model=list[WeeklyGoalPublic])
def list_weekly_goals(
    year: int,
    week_number: int = Query(..., ge=1, le=53),
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[WeeklyGoalPublic]:
    return goals_service.list_weekly_goals(db, owner_id, year, week_number)


@router.post("/weekly", response_model=WeeklyGoalPublic)
def upsert_weekly_goal(
    payload: WeeklyGoalCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> WeeklyGoalPublic:
    return goals_service.upsert_weekly_goal(db, owner_id, payload)


@router.delete("/weekly/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_weekly_goal(
    goal_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> None:
    goals_service.delete_weekly_goal(db, owner_id, goal_id)


@router.get("/weekly/progress", response_model=list[GoalProgress])
def get_weekly_progress(
    year: int,
    week_number: int = Query(..., ge=1, le=53),
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[GoalProgress]:
    return goals_service.weekly_progress(db, owner_id, year, week_number, date.today())
