"""
Category schema API endpoints
"""
from typing import List

from fastapi import APIRouter, HTTPException, status

from app.schemas.fields import CategorySchemaResponse
from app.services.schema_registry import CategoryType, parse_category_type

router = APIRouter()


@router.get("/", response_model=List[CategorySchemaResponse])
def get_schemas():
    """
    Get the field schema of every category type
    """
    return [CategorySchemaResponse.for_type(category_type) for category_type in CategoryType]


@router.get("/{category_type}", response_model=CategorySchemaResponse)
def get_schema(category_type: str):
    """
    Get the field schema of one category type
    """
    parsed = parse_category_type(category_type)
    if parsed is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown category type '{category_type}'"
        )
    return CategorySchemaResponse.for_type(parsed)
