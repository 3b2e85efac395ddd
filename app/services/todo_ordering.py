"""
Todo list ordering
"""
from typing import List, Sequence, Tuple

from app.services.periods import DateLike, as_date

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def _priority(todo) -> str:
    return getattr(todo.priority, "value", todo.priority)


def is_overdue(todo, now: DateLike) -> bool:
    """Due before today and still open"""
    if todo.is_completed or not todo.due_date:
        return False
    return as_date(todo.due_date) < as_date(now)


def split_todos(todos: Sequence) -> Tuple[List, List]:
    """(open todos by priority high to low, completed todos)"""
    incomplete = [todo for todo in todos if not todo.is_completed]
    completed = [todo for todo in todos if todo.is_completed]
    incomplete.sort(key=lambda todo: PRIORITY_ORDER.get(_priority(todo), len(PRIORITY_ORDER)))
    return incomplete, completed
