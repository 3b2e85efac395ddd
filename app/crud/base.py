"""
Generic CRUD operations shared by all record kinds
"""
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    CRUD operations for one model

    Subclasses set `order_by` to the list ordering their collection uses.
    """

    order_by: tuple = ()

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, id: int) -> Optional[ModelType]:
        """Get record by ID"""
        return db.get(self.model, id)

    def query(self, db: Session):
        return db.query(self.model).order_by(*self.order_by)

    def get_multi(
        self,
        db: Session,
        skip: int = 0,
        limit: Optional[int] = None,
        **filters: Any
    ) -> List[ModelType]:
        """Get records in collection order with optional equality filters"""
        query = self.query(db)
        for field, value in filters.items():
            if value is not None:
                query = query.filter(getattr(self.model, field) == value)
        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def create(
        self,
        db: Session,
        obj_in: Union[CreateSchemaType, Dict[str, Any]],
        **extra: Any
    ) -> ModelType:
        """Create new record"""
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_obj = self.model(**data, **extra)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(
        self,
        db: Session,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """Update record with the fields that were set"""
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            setattr(db_obj, field, value)

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, id: int) -> Optional[ModelType]:
        """Delete record"""
        db_obj = self.get(db=db, id=id)
        if db_obj:
            db.delete(db_obj)
            db.commit()
        return db_obj
