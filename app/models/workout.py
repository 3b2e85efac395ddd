"""
Workout log model
"""
from typing import Any, Dict, List, TYPE_CHECKING
from datetime import date

from sqlalchemy import String, ForeignKey, Index, JSON, Date, Integer, SmallInteger, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.category import Category


class WorkoutLog(Base, TimestampMixin):
    """
    Workout log model

    Exercises are stored inline as an ordered JSON list and replaced
    wholesale on edit.
    """
    __tablename__ = "workout_logs"

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    workout_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    workout_type: Mapped[str] = mapped_column(String(50), nullable=False)
    exercises: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)

    duration_minutes: Mapped[int | None] = mapped_column(Integer)
    calories_burned: Mapped[int | None] = mapped_column(Integer)
    notes: Mapped[str | None] = mapped_column(Text)

    rpe: Mapped[int | None] = mapped_column(SmallInteger, comment="Perceived exertion 1-10")
    sleep_quality: Mapped[int | None] = mapped_column(SmallInteger, comment="1-5")

    # Relationships
    category: Mapped["Category"] = relationship("Category", back_populates="workout_logs")

    __table_args__ = (
        Index("idx_workout_category_date", "category_id", "workout_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<WorkoutLog(id={self.id}, type={self.workout_type}, "
            f"date={self.workout_date})>"
        )
