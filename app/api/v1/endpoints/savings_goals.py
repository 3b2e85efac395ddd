"""
Savings goal API endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import announce, get_category_or_404, get_or_404
from app.core.redis_client import RedisClient, get_redis
from app.crud.finance import savings_goal as crud_savings_goal
from app.db.session import get_db
from app.schemas.finance import SavingsGoalCreate, SavingsGoalResponse, SavingsGoalUpdate
from app.services.schema_registry import CategoryType

router = APIRouter()


@router.get("/", response_model=List[SavingsGoalResponse])
def get_savings_goals(
    db: Session = Depends(get_db),
    category_id: Optional[int] = Query(None),
):
    """
    Get savings goals, nearest target date first
    """
    return crud_savings_goal.get_multi(db=db, category_id=category_id)


@router.get("/{goal_id}", response_model=SavingsGoalResponse)
def get_savings_goal(goal_id: int, db: Session = Depends(get_db)):
    return get_or_404(crud_savings_goal, db, goal_id, "Savings goal")


@router.post("/",
    response_model=SavingsGoalResponse,
    status_code=status.HTTP_201_CREATED
    )
def create_savings_goal(
    goal_in: SavingsGoalCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    get_category_or_404(db, goal_in.category_id, [CategoryType.FINANCE])
    goal = crud_savings_goal.create(db=db, obj_in=goal_in)
    announce(background_tasks, redis, "savings_goals")
    return goal


@router.put("/{goal_id}", response_model=SavingsGoalResponse)
def update_savings_goal(
    goal_id: int,
    goal_in: SavingsGoalUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Update savings goal, e.g. record a new deposit in current_amount
    """
    goal = get_or_404(crud_savings_goal, db, goal_id, "Savings goal")
    goal = crud_savings_goal.update(db=db, db_obj=goal, obj_in=goal_in)
    announce(background_tasks, redis, "savings_goals")
    return goal


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_savings_goal(
    goal_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    get_or_404(crud_savings_goal, db, goal_id, "Savings goal")
    crud_savings_goal.delete(db=db, id=goal_id)
    announce(background_tasks, redis, "savings_goals")
    return None
