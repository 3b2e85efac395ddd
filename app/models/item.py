"""
Item model for image-backed category entries
"""
from typing import Any, Dict, TYPE_CHECKING

from sqlalchemy import String, ForeignKey, Index, JSON, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.category import Category


class Item(Base, TimestampMixin):
    """
    Item model

    Metadata is a sparse bag whose meaningful keys are the fields of the
    owning category's schema. Every item owns exactly one stored image.
    """
    __tablename__ = "items"

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(20), default="image")
    image_url: Mapped[str] = mapped_column(String(1000), nullable=False)

    # "metadata" is reserved on declarative classes
    metadata_: Mapped[Dict[str, Any]] = mapped_column("metadata", JSON, default=dict, nullable=False)

    rank: Mapped[int | None] = mapped_column(
        SmallInteger,
        comment="1-100, only for top-N list categories"
    )

    # Relationships
    category: Mapped["Category"] = relationship("Category", back_populates="items")

    __table_args__ = (
        Index("idx_item_category_created", "category_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, name={self.name}, category_id={self.category_id})>"
