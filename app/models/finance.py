"""
Finance models: transactions, monthly budgets and savings goals
"""
from typing import List, TYPE_CHECKING
from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    String,
    ForeignKey,
    Index,
    Numeric,
    Date,
    Boolean,
    JSON,
    SmallInteger,
    Text,
    Enum as SQLEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.category import Category


class TransactionType(str, Enum):
    """Transaction type enum"""
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class Transaction(Base, TimestampMixin):
    """
    Transaction model

    Represents money coming in, going out, or moving between accounts
    """
    __tablename__ = "transactions"

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    type: Mapped[TransactionType] = mapped_column(
        SQLEnum(TransactionType, values_callable=lambda enum: [member.value for member in enum]),
        nullable=False,
        comment="Income, expense or transfer"
    )

    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        comment="Transaction amount (always positive)"
    )

    description: Mapped[str] = mapped_column(String(500), nullable=False)

    transaction_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        index=True,
        comment="Date of transaction"
    )

    category_name: Mapped[str | None] = mapped_column(String(100), comment="Spending category label")
    payment_method: Mapped[str | None] = mapped_column(String(50))
    is_recurring: Mapped[bool] = mapped_column(Boolean, default=False)
    recurring_frequency: Mapped[str | None] = mapped_column(String(20))
    tags: Mapped[List[str]] = mapped_column(JSON, default=list)
    notes: Mapped[str | None] = mapped_column(Text)

    # Relationships
    category: Mapped["Category"] = relationship("Category", back_populates="transactions")

    # Indexes for common queries
    __table_args__ = (
        Index("idx_transaction_category_date", "category_id", "transaction_date"),
        Index("idx_transaction_type", "type"),
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, type={self.type}, "
            f"amount={self.amount}, date={self.transaction_date})>"
        )


class Budget(Base, TimestampMixin):
    """
    Monthly spending ceiling for one spending category label

    One budget per (category_id, budget_category, month, year) is expected
    but not enforced.
    """
    __tablename__ = "budgets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    budget_category: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)
    month: Mapped[int] = mapped_column(SmallInteger, nullable=False, comment="1-12")
    year: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    category: Mapped["Category"] = relationship("Category", back_populates="budgets")

    __table_args__ = (
        Index("idx_budget_period", "category_id", "year", "month"),
    )

    def __repr__(self) -> str:
        return f"<Budget(id={self.id}, category={self.budget_category}, period={self.month}/{self.year})>"


class SavingsGoal(Base, TimestampMixin):
    """Savings target with the amount saved so far"""
    __tablename__ = "savings_goals"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    target_amount: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)
    current_amount: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), default=Decimal("0"))
    target_date: Mapped[date | None] = mapped_column(Date)
    icon: Mapped[str | None] = mapped_column(String(50))
    color: Mapped[str | None] = mapped_column(String(7), comment="Hex color code")

    category: Mapped["Category"] = relationship("Category", back_populates="savings_goals")

    def __repr__(self) -> str:
        return f"<SavingsGoal(id={self.id}, name={self.name})>"
