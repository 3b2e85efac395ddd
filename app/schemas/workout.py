"""
Workout log Pydantic schemas for request/response validation
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from app.services.fitness_stats import workout_volume


class Exercise(BaseModel):
    """One exercise inside a workout; has no identity of its own"""
    name: str = Field(..., max_length=100)
    sets: int = Field(3, ge=0)
    reps: int = Field(10, ge=0)
    weight: Optional[float] = Field(None, ge=0, description="Weight in kg")
    rest_seconds: Optional[int] = Field(None, ge=0)


class WorkoutBase(BaseModel):
    """Base schema with common fields"""
    workout_date: date
    workout_type: str = Field("Strength", min_length=1, max_length=50)
    exercises: List[Exercise] = Field(default_factory=list)
    duration_minutes: Optional[int] = Field(None, ge=0)
    calories_burned: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    rpe: Optional[int] = Field(None, ge=1, le=10, description="Perceived exertion")
    sleep_quality: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("exercises")
    @classmethod
    def drop_unnamed_exercises(cls, v: List[Exercise]) -> List[Exercise]:
        """Blank exercise rows are not stored"""
        return [exercise for exercise in v if exercise.name.strip()]


class WorkoutCreate(WorkoutBase):
    """Schema for logging a workout"""
    category_id: int


class WorkoutUpdate(BaseModel):
    """Schema for updating a workout (all fields optional)"""
    workout_date: Optional[date] = None
    workout_type: Optional[str] = Field(None, min_length=1, max_length=50)
    exercises: Optional[List[Exercise]] = None
    duration_minutes: Optional[int] = Field(None, ge=0)
    calories_burned: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    rpe: Optional[int] = Field(None, ge=1, le=10)
    sleep_quality: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("exercises")
    @classmethod
    def drop_unnamed_exercises(cls, v: Optional[List[Exercise]]) -> Optional[List[Exercise]]:
        if v is None:
            return v
        return [exercise for exercise in v if exercise.name.strip()]


class WorkoutResponse(WorkoutBase):
    """Schema for API response"""
    id: int
    category_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def volume(self) -> float:
        return workout_volume(self)
