"""
Todo Pydantic schemas for request/response validation
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.todo import TodoPriority


class TodoBase(BaseModel):
    """Base schema with common fields"""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    priority: TodoPriority = TodoPriority.MEDIUM
    due_date: Optional[date] = None


class TodoCreate(TodoBase):
    """Schema for creating a todo"""
    pass


class TodoUpdate(BaseModel):
    """Schema for updating a todo (all fields optional)"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    priority: Optional[TodoPriority] = None
    due_date: Optional[date] = None
    is_completed: Optional[bool] = None


class TodoResponse(TodoBase):
    """Schema for API response"""
    id: int
    is_completed: bool
    is_overdue: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TodoListResponse(BaseModel):
    active: List[TodoResponse]
    completed: List[TodoResponse]
