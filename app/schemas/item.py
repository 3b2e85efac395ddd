"""
Item Pydantic schemas for request/response validation
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.category import CategoryResponse
from app.schemas.fields import Widget

RANK_MIN = 1
RANK_MAX = 100


class ItemUpdate(BaseModel):
    """Schema for updating an item (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    metadata: Optional[Dict[str, Any]] = Field(None, description="Values keyed by schema field")
    rank: Optional[int] = Field(None, description=f"{RANK_MIN}-{RANK_MAX}, ignored for categories without rank")


class ItemResponse(BaseModel):
    """Schema for API response"""
    id: int
    category_id: int
    name: str
    type: str
    image_url: str
    metadata: Dict[str, Any] = Field(default_factory=dict, validation_alias=AliasChoices("metadata_", "metadata"))
    rank: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ItemDetailResponse(ItemResponse):
    """Item with its metadata rendered for a read-only detail view"""
    fields: List[Widget] = Field(default_factory=list)


class ItemGroup(BaseModel):
    category: CategoryResponse
    items: List[ItemResponse]


class OrphanSweepResponse(BaseModel):
    removed: int
    remaining: int
