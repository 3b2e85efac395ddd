"""
CRUD operations for Item model
"""
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.item import Item
from app.schemas.item import ItemUpdate


class CRUDItem(CRUDBase[Item, ItemUpdate, ItemUpdate]):
    """CRUD operations for Item"""

    order_by = (Item.created_at.desc(), Item.id.desc())

    def by_category(self, db: Session, category_id: Optional[int] = None) -> List[Item]:
        return self.get_multi(db, category_id=category_id)

    def create_with_image(
        self,
        db: Session,
        category_id: int,
        name: str,
        image_url: str,
        metadata: Dict[str, Any],
        rank: Optional[int] = None,
    ) -> Item:
        return self.create(db, {
            "category_id": category_id,
            "name": name,
            "type": "image",
            "image_url": image_url,
            "metadata_": metadata,
            "rank": rank,
        })


item = CRUDItem(Item)
