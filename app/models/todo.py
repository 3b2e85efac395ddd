"""
Todo model
"""
from datetime import date
from enum import Enum

from sqlalchemy import String, Boolean, Date, Text, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin


class TodoPriority(str, Enum):
    """Todo priority enum"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Todo(Base, TimestampMixin):
    """Todo model"""
    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    priority: Mapped[TodoPriority] = mapped_column(
        SQLEnum(TodoPriority, values_callable=lambda enum: [member.value for member in enum]),
        default=TodoPriority.MEDIUM,
        nullable=False,
    )
    due_date: Mapped[date | None] = mapped_column(Date)

    def __repr__(self) -> str:
        return f"<Todo(id={self.id}, title={self.title}, done={self.is_completed})>"
