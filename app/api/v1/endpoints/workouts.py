"""
Workout log API endpoints
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import announce, get_category_or_404, get_or_404
from app.core.config import settings
from app.core.redis_client import RedisClient, get_redis
from app.crud.workout import workout as crud_workout
from app.db.session import get_db
from app.schemas.stats import FitnessCharts, FitnessSummary
from app.schemas.workout import WorkoutCreate, WorkoutResponse, WorkoutUpdate
from app.services.fitness_stats import WORKOUT_TYPES, fitness_charts, fitness_summary
from app.services.schema_registry import CategoryType

logger = logging.getLogger(__name__)

router = APIRouter()

FITNESS = [CategoryType.FITNESS]


def monthly_targets() -> dict:
    return {
        "workouts": settings.monthly_workout_target,
        "calories": settings.monthly_calorie_target,
        "active_hours": settings.monthly_active_hours_target,
    }


@router.get("/", response_model=List[WorkoutResponse])
def get_workouts(
    db: Session = Depends(get_db),
    category_id: Optional[int] = Query(None, description="Only logs of this category"),
):
    """
    Get workout logs, most recent first
    """
    return crud_workout.get_multi(db=db, category_id=category_id)


@router.get("/summary", response_model=FitnessSummary)
def get_fitness_summary(
    category_id: int = Query(..., description="Fitness category"),
    as_of: Optional[date] = Query(None, description="Reference day, defaults to today"),
    db: Session = Depends(get_db),
):
    """
    Headline stats and monthly goal progress
    """
    get_category_or_404(db, category_id, FITNESS)
    workouts = crud_workout.by_category(db, category_id)
    return fitness_summary(
        workouts,
        as_of or date.today(),
        weekly_goal=settings.weekly_workout_goal,
        targets=monthly_targets(),
    )


@router.get("/charts", response_model=FitnessCharts)
def get_fitness_charts(
    category_id: int = Query(..., description="Fitness category"),
    as_of: Optional[date] = Query(None, description="Reference day, defaults to today"),
    db: Session = Depends(get_db),
):
    """
    Daily, weekly and workout-type chart series
    """
    get_category_or_404(db, category_id, FITNESS)
    return fitness_charts(crud_workout.by_category(db, category_id), as_of or date.today())


@router.get("/types", response_model=List[str])
def get_workout_types():
    """
    Workout types offered by the log form
    """
    return WORKOUT_TYPES


@router.get("/{workout_id}", response_model=WorkoutResponse)
def get_workout(workout_id: int, db: Session = Depends(get_db)):
    """
    Get specific workout log by ID
    """
    return get_or_404(crud_workout, db, workout_id, "Workout")


@router.post("/",
    response_model=WorkoutResponse,
    status_code=status.HTTP_201_CREATED
    )
def create_workout(
    workout_in: WorkoutCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Log a workout in a fitness category
    """
    get_category_or_404(db, workout_in.category_id, FITNESS)
    workout = crud_workout.create(db=db, obj_in=workout_in)
    logger.info(f"Workout logged: {workout.id} ({workout.workout_type})")
    announce(background_tasks, redis, "workout_logs")
    return workout


@router.put("/{workout_id}", response_model=WorkoutResponse)
def update_workout(
    workout_id: int,
    workout_in: WorkoutUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Update workout log
    """
    workout = get_or_404(crud_workout, db, workout_id, "Workout")
    workout = crud_workout.update(db=db, db_obj=workout, obj_in=workout_in)
    announce(background_tasks, redis, "workout_logs")
    return workout


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workout(
    workout_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Delete workout log
    """
    get_or_404(crud_workout, db, workout_id, "Workout")
    crud_workout.delete(db=db, id=workout_id)
    announce(background_tasks, redis, "workout_logs")
    return None
