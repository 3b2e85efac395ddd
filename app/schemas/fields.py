"""
Schema field and rendered widget schemas
"""
from typing import Any, List, Optional

from pydantic import BaseModel

from app.services.schema_registry import CategoryType, lookup, supports_rank, uses_items


class FieldDescriptorSchema(BaseModel):
    """One field of a category schema"""
    key: str
    label: str
    type: str
    options: Optional[List[str]] = None


class CategorySchemaResponse(BaseModel):
    category_type: str
    supports_rank: bool
    uses_items: bool
    fields: List[FieldDescriptorSchema]

    @classmethod
    def for_type(cls, category_type: CategoryType) -> "CategorySchemaResponse":
        return cls(
            category_type=category_type.value,
            supports_rank=supports_rank(category_type),
            uses_items=uses_items(category_type),
            fields=[field.as_dict() for field in lookup(category_type)],
        )


class WidgetOption(BaseModel):
    value: str
    label: str


class Widget(BaseModel):
    """Rendered control for a form or detail view"""
    key: str
    label: str
    type: str
    value: Any = None
    display: str
    readonly: bool = False
    multiline: Optional[bool] = None
    placeholder: Optional[str] = None
    raw: Optional[str] = None
    options: Optional[List[WidgetOption]] = None
    min: Optional[int] = None
    max: Optional[int] = None
    step: Optional[int] = None
