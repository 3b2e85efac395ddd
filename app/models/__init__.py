"""
Database models
"""
from app.db.base import Base
from app.models.category import Category, CategoryType
from app.models.item import Item
from app.models.workout import WorkoutLog
from app.models.finance import Transaction, TransactionType, Budget, SavingsGoal
from app.models.todo import Todo, TodoPriority

__all__ = [
    "Base",
    "Category",
    "CategoryType",
    "Item",
    "WorkoutLog",
    "Transaction",
    "TransactionType",
    "Budget",
    "SavingsGoal",
    "Todo",
    "TodoPriority",
]
