"""
Category API endpoints
"""
import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import announce, get_category_or_404
from app.core.object_store import LocalObjectStore, get_object_store
from app.core.redis_client import RedisClient, get_redis
from app.crud.category import category as crud_category
from app.db.session import get_db
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.schemas.fields import CategorySchemaResponse, Widget
from app.services.item_images import release_image
from app.services.metadata_bag import MetadataBag

logger = logging.getLogger(__name__)

router = APIRouter()

# Everything a category owns goes with it
OWNED_TABLES = ("items", "workout_logs", "transactions", "budgets", "savings_goals")


@router.get("/", response_model=List[CategoryResponse])
def get_categories(db: Session = Depends(get_db)):
    """
    Get all categories, oldest first
    """
    return crud_category.get_multi(db=db)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, db: Session = Depends(get_db)):
    """
    Get specific category by ID
    """
    return get_category_or_404(db, category_id)


@router.get("/{category_id}/fields", response_model=CategorySchemaResponse)
def get_category_fields(category_id: int, db: Session = Depends(get_db)):
    """
    Get the metadata fields items in this category carry
    """
    category = get_category_or_404(db, category_id)
    return CategorySchemaResponse.for_type(category.type)


@router.get("/{category_id}/form", response_model=List[Widget])
def get_category_form(category_id: int, db: Session = Depends(get_db)):
    """
    Get blank editable widgets for the add-item form
    """
    category = get_category_or_404(db, category_id)
    return [control.as_widget() for control in MetadataBag(category.type).controls()]


@router.post("/",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED
    )
def create_category(
    category_in: CategoryCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Create new category
    """
    category = crud_category.create(db=db, obj_in=category_in)
    logger.info(f"Category created: {category.id} ({category.type.value})")
    announce(background_tasks, redis, "categories")
    return category


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    category_in: CategoryUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Update category
    """
    category = get_category_or_404(db, category_id)
    category = crud_category.update(db=db, db_obj=category, obj_in=category_in)
    announce(background_tasks, redis, "categories")
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis),
    store: LocalObjectStore = Depends(get_object_store)
):
    """
    Delete category with everything it holds

    Item images are released after the records are gone.
    """
    get_category_or_404(db, category_id)
    image_urls = crud_category.image_urls(db, category_id)
    crud_category.delete(db=db, id=category_id)
    logger.info(f"Category deleted: {category_id} ({len(image_urls)} images to release)")

    announce(background_tasks, redis, "categories", *OWNED_TABLES)
    for image_url in image_urls:
        background_tasks.add_task(release_image, store, redis, image_url)
    return None
