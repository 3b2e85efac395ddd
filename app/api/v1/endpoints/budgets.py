"""
Budget API endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import announce, get_category_or_404, get_or_404
from app.core.redis_client import RedisClient, get_redis
from app.crud.finance import budget as crud_budget
from app.db.session import get_db
from app.schemas.finance import BudgetCreate, BudgetResponse, BudgetUpdate
from app.services.schema_registry import CategoryType

router = APIRouter()


@router.get("/", response_model=List[BudgetResponse])
def get_budgets(
    db: Session = Depends(get_db),
    category_id: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1970, le=9999),
):
    """
    Get budgets, latest period first

    - **month** / **year**: Optional filter by budget period
    """
    return crud_budget.get_multi(db=db, category_id=category_id, month=month, year=year)


@router.get("/{budget_id}", response_model=BudgetResponse)
def get_budget(budget_id: int, db: Session = Depends(get_db)):
    return get_or_404(crud_budget, db, budget_id, "Budget")


@router.post("/",
    response_model=BudgetResponse,
    status_code=status.HTTP_201_CREATED
    )
def create_budget(
    budget_in: BudgetCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Set a monthly spending limit for an expense category
    """
    get_category_or_404(db, budget_in.category_id, [CategoryType.FINANCE])
    budget = crud_budget.create(db=db, obj_in=budget_in)
    announce(background_tasks, redis, "budgets")
    return budget


@router.put("/{budget_id}", response_model=BudgetResponse)
def update_budget(
    budget_id: int,
    budget_in: BudgetUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    budget = get_or_404(crud_budget, db, budget_id, "Budget")
    budget = crud_budget.update(db=db, db_obj=budget, obj_in=budget_in)
    announce(background_tasks, redis, "budgets")
    return budget


@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_budget(
    budget_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    get_or_404(crud_budget, db, budget_id, "Budget")
    crud_budget.delete(db=db, id=budget_id)
    announce(background_tasks, redis, "budgets")
    return None
