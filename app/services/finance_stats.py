"""
Finance statistics

Pure folds over transactions, budgets and savings goals. Each function
recomputes from the full collection it is given; `now` is always passed in.
"""
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from app.schemas.stats import (
    BudgetStatus,
    ExpenseSlice,
    FinanceStats,
    FinanceSummary,
    MonthBucket,
    SavingsGoalProgress,
    SavingsOverview,
)
from app.services.periods import DateLike, as_date, months_back, previous_month, same_month

INCOME = "income"
EXPENSE = "expense"
UNCATEGORIZED = "Other"
BREAKDOWN_LIMIT = 8

CHART_COLORS = ["#22c55e", "#3b82f6", "#f97316", "#8b5cf6", "#06b6d4", "#ec4899", "#eab308", "#64748b"]

EXPENSE_CATEGORIES = [
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Personal Care",
    "Other",
]

PAYMENT_METHODS = ["Cash", "Debit Card", "Credit Card", "Bank Transfer", "Mobile Payment", "Other"]

ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _kind(transaction) -> str:
    kind = transaction.type
    return getattr(kind, "value", kind)


def _total(transactions: Iterable, kind: str) -> Decimal:
    return sum((to_decimal(t.amount) for t in transactions if _kind(t) == kind), ZERO)


def in_month(transactions: Iterable, month: int, year: int) -> List:
    """Transactions dated in the given calendar month"""
    return [t for t in transactions if same_month(t.transaction_date, month, year)]


def expense_change(this_month: Decimal, last_month: Decimal) -> float:
    """Month-over-month change in percent; 0 when last month had no expenses"""
    if last_month <= 0:
        return 0.0
    return float((this_month - last_month) / last_month * 100)


def expenses_by_category(transactions: Iterable) -> Dict[str, Decimal]:
    """Sum expenses per category label; unlabeled expenses go to 'Other'"""
    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for t in transactions:
        if _kind(t) != EXPENSE:
            continue
        totals[t.category_name or UNCATEGORIZED] += to_decimal(t.amount)
    return dict(totals)


def monthly_stats(transactions: Sequence, now: DateLike) -> FinanceStats:
    """Income, expenses and savings of the current calendar month"""
    today = as_date(now)
    this_month = in_month(transactions, today.month, today.year)
    last_month, last_year = previous_month(today)
    last = in_month(transactions, last_month, last_year)

    total_income = _total(this_month, INCOME)
    total_expenses = _total(this_month, EXPENSE)
    last_month_expenses = _total(last, EXPENSE)

    return FinanceStats(
        total_income=total_income,
        total_expenses=total_expenses,
        net_savings=total_income - total_expenses,
        last_month_expenses=last_month_expenses,
        expense_change=expense_change(total_expenses, last_month_expenses),
        expense_by_category=expenses_by_category(this_month),
        transaction_count=len(this_month),
    )


def expense_breakdown(expense_by_category: Dict[str, Decimal], limit: int = BREAKDOWN_LIMIT) -> List[ExpenseSlice]:
    """
    Largest expense categories for the pie and bar charts

    Only the top `limit` categories are returned; the rest are dropped.
    """
    ranked = sorted(expense_by_category.items(), key=lambda entry: entry[1], reverse=True)[:limit]
    return [
        ExpenseSlice(name=name, value=value, color=CHART_COLORS[index % len(CHART_COLORS)])
        for index, (name, value) in enumerate(ranked)
    ]


def monthly_series(transactions: Sequence, now: DateLike, months: int = 6) -> List[MonthBucket]:
    """Income, expenses and savings per calendar month, oldest first"""
    buckets = []
    for first in months_back(now, months):
        month_transactions = in_month(transactions, first.month, first.year)
        income = _total(month_transactions, INCOME)
        expenses = _total(month_transactions, EXPENSE)
        buckets.append(MonthBucket(
            month=first.strftime("%b"),
            year=first.year,
            month_number=first.month,
            income=income,
            expenses=expenses,
            savings=income - expenses,
        ))
    return buckets


def budget_status(budget, spent: Decimal) -> BudgetStatus:
    amount = to_decimal(budget.amount)
    percentage = float(spent / amount * 100) if amount > 0 else 0.0
    return BudgetStatus(
        budget_id=getattr(budget, "id", None),
        category=budget.budget_category,
        budget=amount,
        spent=spent,
        percentage=min(percentage, 100.0),
        remaining=max(amount - spent, ZERO),
        over=spent > amount,
    )


def budget_comparison(
    budgets: Iterable,
    expense_by_category: Dict[str, Decimal],
    now: DateLike,
) -> List[BudgetStatus]:
    """Budget vs actual for the budgets of the current month"""
    today = as_date(now)
    return [
        budget_status(budget, expense_by_category.get(budget.budget_category, ZERO))
        for budget in budgets
        if budget.month == today.month and budget.year == today.year
    ]


def goal_progress(goal) -> SavingsGoalProgress:
    target = to_decimal(goal.target_amount)
    current = to_decimal(goal.current_amount)
    percentage = float(current / target * 100) if target > 0 else 0.0
    return SavingsGoalProgress(
        goal_id=getattr(goal, "id", None),
        name=goal.name,
        target_amount=target,
        current_amount=current,
        percentage=max(0.0, min(percentage, 100.0)),
    )


def savings_progress(goals: Sequence) -> SavingsOverview:
    progress = [goal_progress(goal) for goal in goals]
    return SavingsOverview(
        total_saved=sum((p.current_amount for p in progress), ZERO),
        total_target=sum((p.target_amount for p in progress), ZERO),
        goals=progress,
    )


def finance_summary(
    transactions: Sequence,
    budgets: Sequence,
    goals: Sequence,
    now: DateLike,
    breakdown_limit: Optional[int] = None,
) -> FinanceSummary:
    """Everything the finance dashboard shows, computed in one pass"""
    stats = monthly_stats(transactions, now)
    return FinanceSummary(
        stats=stats,
        breakdown=expense_breakdown(stats.expense_by_category, breakdown_limit or BREAKDOWN_LIMIT),
        monthly=monthly_series(transactions, now),
        budgets=budget_comparison(budgets, stats.expense_by_category, now),
        savings=savings_progress(goals),
    )
