"""
Finance dashboard API endpoints
"""
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_category_or_404
from app.core.config import settings
from app.crud.finance import budget as crud_budget
from app.crud.finance import savings_goal as crud_savings_goal
from app.crud.finance import transaction as crud_transaction
from app.db.session import get_db
from app.schemas.stats import FinanceSummary
from app.services.finance_stats import EXPENSE_CATEGORIES, PAYMENT_METHODS, finance_summary
from app.services.schema_registry import CategoryType

router = APIRouter()


@router.get("/summary", response_model=FinanceSummary)
def get_finance_summary(
    category_id: int = Query(..., description="Finance category"),
    as_of: Optional[date] = Query(None, description="Reference day, defaults to today"),
    db: Session = Depends(get_db),
):
    """
    Monthly totals, expense breakdown, six-month series, budget
    comparison and savings progress for one finance category
    """
    get_category_or_404(db, category_id, [CategoryType.FINANCE])
    today = as_of or date.today()
    return finance_summary(
        crud_transaction.by_category(db, category_id),
        crud_budget.for_period(db, category_id, today.month, today.year),
        crud_savings_goal.by_category(db, category_id),
        today,
        breakdown_limit=settings.expense_breakdown_limit,
    )


@router.get("/options", response_model=Dict[str, List[str]])
def get_finance_options():
    """
    Expense categories and payment methods offered by the transaction form
    """
    return {
        "expense_categories": EXPENSE_CATEGORIES,
        "payment_methods": PAYMENT_METHODS,
    }
