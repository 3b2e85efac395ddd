"""
Finance Pydantic schemas: transactions, budgets and savings goals
"""
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.finance import TransactionType


# === TRANSACTIONS ===

class TransactionBase(BaseModel):
    """Base schema with common fields"""
    type: TransactionType = TransactionType.EXPENSE
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    description: str = Field(..., min_length=1, max_length=500)
    transaction_date: date
    category_name: Optional[str] = Field(None, max_length=100)
    payment_method: Optional[str] = Field(None, max_length=50)
    is_recurring: bool = False
    recurring_frequency: Optional[str] = Field(None, max_length=20)
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = None


class TransactionCreate(TransactionBase):
    """Schema for creating a transaction"""
    category_id: int


class TransactionUpdate(BaseModel):
    """Schema for updating a transaction (all fields optional)"""
    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    transaction_date: Optional[date] = None
    category_name: Optional[str] = Field(None, max_length=100)
    payment_method: Optional[str] = Field(None, max_length=50)
    is_recurring: Optional[bool] = None
    recurring_frequency: Optional[str] = Field(None, max_length=20)
    tags: Optional[List[str]] = None
    notes: Optional[str] = None


class TransactionResponse(TransactionBase):
    """Schema for API response"""
    id: int
    category_id: int
    tags: Optional[List[str]] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# === BUDGETS ===

class BudgetBase(BaseModel):
    budget_category: str = Field(..., min_length=1, max_length=100)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1970, le=9999)


class BudgetCreate(BudgetBase):
    category_id: int


class BudgetUpdate(BaseModel):
    budget_category: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=1970, le=9999)


class BudgetResponse(BudgetBase):
    id: int
    category_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# === SAVINGS GOALS ===

class SavingsGoalBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    target_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    current_amount: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    target_date: Optional[date] = None
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, pattern="^#[0-9A-Fa-f]{6}$", description="Color in hex format")


class SavingsGoalCreate(SavingsGoalBase):
    category_id: int


class SavingsGoalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    target_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    current_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    target_date: Optional[date] = None
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, pattern="^#[0-9A-Fa-f]{6}$")


class SavingsGoalResponse(SavingsGoalBase):
    id: int
    category_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
