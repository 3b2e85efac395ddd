"""
CRUD operations for WorkoutLog model
"""
from typing import List

from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.workout import WorkoutLog
from app.schemas.workout import WorkoutCreate, WorkoutUpdate


class CRUDWorkout(CRUDBase[WorkoutLog, WorkoutCreate, WorkoutUpdate]):
    """CRUD operations for WorkoutLog"""

    order_by = (WorkoutLog.workout_date.desc(), WorkoutLog.created_at.desc(), WorkoutLog.id.desc())

    def by_category(self, db: Session, category_id: int) -> List[WorkoutLog]:
        return self.get_multi(db, category_id=category_id)


workout = CRUDWorkout(WorkoutLog)
