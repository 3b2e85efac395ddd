"""
CRUD operations for Category model
"""
from typing import List

from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.category import Category
from app.models.item import Item
from app.schemas.category import CategoryCreate, CategoryUpdate


class CRUDCategory(CRUDBase[Category, CategoryCreate, CategoryUpdate]):
    """CRUD operations for Category"""

    order_by = (Category.created_at.asc(), Category.id.asc())

    def image_urls(self, db: Session, category_id: int) -> List[str]:
        """Image URLs of all items in a category"""
        rows = db.query(Item.image_url).filter(Item.category_id == category_id).all()
        return [row.image_url for row in rows]


# Create instance
category = CRUDCategory(Category)
