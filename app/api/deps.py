"""
Shared helpers for API endpoints
"""
from typing import Iterable, Optional

from fastapi import BackgroundTasks, HTTPException, status
from sqlalchemy.orm import Session

from app.core.redis_client import RedisClient
from app.crud.category import category as crud_category
from app.models.category import Category
from app.services.schema_registry import CategoryType


def get_category_or_404(
    db: Session,
    category_id: int,
    allowed_types: Optional[Iterable[CategoryType]] = None,
) -> Category:
    """
    Load a category, optionally requiring one of the given types

    Raises:
        HTTPException: 404 if missing, 400 if the type does not hold this record kind
    """
    category = crud_category.get(db=db, id=category_id)
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found"
        )

    if allowed_types is not None:
        allowed = set(allowed_types)
        if category.type not in allowed:
            names = ", ".join(sorted(t.value for t in allowed))
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Category '{category.name}' is not of type {names}"
            )
    return category


def get_or_404(crud, db: Session, id: int, name: str):
    db_obj = crud.get(db=db, id=id)
    if not db_obj:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{name} not found"
        )
    return db_obj


def announce(background_tasks: BackgroundTasks, redis: RedisClient, *tables: str) -> None:
    """Publish change signals once the response has been sent"""
    for table in tables:
        background_tasks.add_task(redis.publish_change, table)
