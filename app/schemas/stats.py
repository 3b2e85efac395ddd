"""
Derived statistics schemas for dashboard responses
"""
from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel, Field


# === FINANCE ===

class FinanceStats(BaseModel):
    """Current-month totals"""
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_savings: Decimal = Decimal("0")
    last_month_expenses: Decimal = Decimal("0")
    expense_change: float = Field(0.0, description="Month-over-month expense change in percent")
    expense_by_category: Dict[str, Decimal] = Field(default_factory=dict)
    transaction_count: int = 0


class ExpenseSlice(BaseModel):
    name: str
    value: Decimal
    color: str


class MonthBucket(BaseModel):
    month: str
    year: int
    month_number: int
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    savings: Decimal = Decimal("0")


class BudgetStatus(BaseModel):
    budget_id: int | None = None
    category: str
    budget: Decimal
    spent: Decimal
    percentage: float = Field(..., description="Spent share of the budget, clamped to 100")
    remaining: Decimal
    over: bool


class SavingsGoalProgress(BaseModel):
    goal_id: int | None = None
    name: str
    target_amount: Decimal
    current_amount: Decimal
    percentage: float


class SavingsOverview(BaseModel):
    total_saved: Decimal = Decimal("0")
    total_target: Decimal = Decimal("0")
    goals: List[SavingsGoalProgress] = Field(default_factory=list)


class FinanceSummary(BaseModel):
    stats: FinanceStats
    breakdown: List[ExpenseSlice]
    monthly: List[MonthBucket]
    budgets: List[BudgetStatus]
    savings: SavingsOverview


# === FITNESS ===

class FitnessStats(BaseModel):
    workouts_this_week: int = 0
    workouts_this_month: int = 0
    total_calories: int = 0
    total_duration: int = 0
    avg_rpe: float = 0.0
    avg_sleep: float = 0.0
    current_streak: int = 0
    type_breakdown: Dict[str, int] = Field(default_factory=dict)
    total_volume: int = 0
    avg_duration: int = 0
    weekly_goal: int = 4
    weekly_goal_progress: float = 0.0


class DayBucket(BaseModel):
    date: str
    label: str
    workouts: int = 0
    calories: int = 0
    duration: int = 0
    rpe: float = 0.0
    sleep: float = 0.0


class WeekBucket(BaseModel):
    week: str
    start: str
    workouts: int = 0
    total_calories: int = 0
    total_duration: int = 0
    total_volume: float = 0.0


class BalancePoint(BaseModel):
    type: str
    value: int
    count: int


class GoalProgress(BaseModel):
    name: str
    current: float
    target: float
    percentage: float


class FitnessCharts(BaseModel):
    daily: List[DayBucket]
    weekly: List[WeekBucket]
    balance: List[BalancePoint]


class FitnessSummary(BaseModel):
    stats: FitnessStats
    goals: List[GoalProgress]
