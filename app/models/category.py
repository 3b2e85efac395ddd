"""
Category model for dashboard sections
"""
from typing import List, TYPE_CHECKING

from sqlalchemy import String, Index, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin
from app.services.schema_registry import CategoryType

if TYPE_CHECKING:
    from app.models.item import Item
    from app.models.workout import WorkoutLog
    from app.models.finance import Transaction, Budget, SavingsGoal


class Category(Base, TimestampMixin):
    """
    Category model

    The type decides what the category holds:
    - generic image items with schema-typed metadata
    - workout logs (fitness)
    - transactions, budgets and savings goals (finance)
    - nothing of its own (todos live in their own list)
    """
    __tablename__ = "categories"

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Category info
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[CategoryType] = mapped_column(
        SQLEnum(CategoryType, values_callable=lambda enum: [member.value for member in enum]),
        nullable=False,
        default=CategoryType.GENERAL,
    )

    # Visual customization
    icon: Mapped[str] = mapped_column(
        String(50),
        default="folder",
        comment="Icon tag"
    )

    # Relationships
    items: Mapped[List["Item"]] = relationship(
        "Item",
        back_populates="category",
        cascade="all, delete-orphan",
    )
    workout_logs: Mapped[List["WorkoutLog"]] = relationship(
        "WorkoutLog",
        back_populates="category",
        cascade="all, delete-orphan",
    )
    transactions: Mapped[List["Transaction"]] = relationship(
        "Transaction",
        back_populates="category",
        cascade="all, delete-orphan",
    )
    budgets: Mapped[List["Budget"]] = relationship(
        "Budget",
        back_populates="category",
        cascade="all, delete-orphan",
    )
    savings_goals: Mapped[List["SavingsGoal"]] = relationship(
        "SavingsGoal",
        back_populates="category",
        cascade="all, delete-orphan",
    )

    # Indexes
    __table_args__ = (
        Index("idx_category_type", "type"),
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name}, type={self.type})>"
