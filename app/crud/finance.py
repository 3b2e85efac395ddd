"""
CRUD operations for finance models
"""
from typing import List

from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.finance import Budget, SavingsGoal, Transaction
from app.schemas.finance import (
    BudgetCreate,
    BudgetUpdate,
    SavingsGoalCreate,
    SavingsGoalUpdate,
    TransactionCreate,
    TransactionUpdate,
)


class CRUDTransaction(CRUDBase[Transaction, TransactionCreate, TransactionUpdate]):
    """CRUD operations for Transaction"""

    order_by = (Transaction.transaction_date.desc(), Transaction.created_at.desc(), Transaction.id.desc())

    def by_category(self, db: Session, category_id: int) -> List[Transaction]:
        return self.get_multi(db, category_id=category_id)


class CRUDBudget(CRUDBase[Budget, BudgetCreate, BudgetUpdate]):
    """CRUD operations for Budget"""

    order_by = (Budget.year.desc(), Budget.month.desc(), Budget.budget_category.asc())

    def by_category(self, db: Session, category_id: int) -> List[Budget]:
        return self.get_multi(db, category_id=category_id)

    def for_period(self, db: Session, category_id: int, month: int, year: int) -> List[Budget]:
        return self.get_multi(db, category_id=category_id, month=month, year=year)


class CRUDSavingsGoal(CRUDBase[SavingsGoal, SavingsGoalCreate, SavingsGoalUpdate]):
    """CRUD operations for SavingsGoal"""

    order_by = (SavingsGoal.target_date.asc().nulls_last(), SavingsGoal.id.asc())

    def by_category(self, db: Session, category_id: int) -> List[SavingsGoal]:
        return self.get_multi(db, category_id=category_id)


transaction = CRUDTransaction(Transaction)
budget = CRUDBudget(Budget)
savings_goal = CRUDSavingsGoal(SavingsGoal)
