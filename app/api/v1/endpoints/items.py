"""
Item API endpoints

Every item owns exactly one stored image. Creating an item and swapping
its image upload first and write the record second; replacing or deleting
releases the old image after the record change is committed.
"""
import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    UploadFile,
    status,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import announce, get_category_or_404, get_or_404
from app.core.config import settings
from app.core.object_store import LocalObjectStore, get_object_store
from app.core.redis_client import RedisClient, get_redis
from app.crud.category import category as crud_category
from app.crud.item import item as crud_item
from app.db.session import get_db
from app.models.item import Item
from app.schemas.item import (
    RANK_MAX,
    RANK_MIN,
    ItemDetailResponse,
    ItemGroup,
    ItemResponse,
    ItemUpdate,
    OrphanSweepResponse,
)
from app.services.item_images import release_image, store_image, sweep_orphans
from app.services.item_ordering import ItemSort, group_items_by_category, sort_items
from app.services.metadata_bag import MetadataBag, clean_metadata
from app.services.schema_registry import CategoryType, supports_rank, uses_items

logger = logging.getLogger(__name__)

router = APIRouter()

ITEM_CATEGORY_TYPES = [t for t in CategoryType if uses_items(t)]


async def read_upload(image: UploadFile) -> bytes:
    """Read an uploaded image, enforcing the size limit"""
    data = await image.read()
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Image file is empty"
        )
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Image exceeds {settings.max_upload_bytes} bytes"
        )
    return data


def parse_metadata(raw: Optional[str]) -> Dict[str, Any]:
    """Parse the JSON metadata form field"""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Metadata must be a JSON object"
        )
    if not isinstance(data, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Metadata must be a JSON object"
        )
    return data


def rank_for(category_type: CategoryType, rank: Optional[int]) -> Optional[int]:
    """Rank is only kept for categories that support ranking"""
    if rank is None:
        return None
    if not supports_rank(category_type):
        logger.debug(f"Ignoring rank for {category_type.value} item")
        return None
    if not RANK_MIN <= rank <= RANK_MAX:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Rank must be between {RANK_MIN} and {RANK_MAX}"
        )
    return rank


def item_detail(item: Item) -> ItemDetailResponse:
    bag = MetadataBag(item.category.type, item.metadata_)
    return ItemDetailResponse(
        **ItemResponse.model_validate(item).model_dump(),
        fields=[control.as_widget() for control in bag.controls(readonly=True)],
    )


@router.get("/", response_model=List[ItemResponse])
def get_items(
    db: Session = Depends(get_db),
    category_id: Optional[int] = Query(None, description="Only items of this category"),
    sort: ItemSort = Query(ItemSort.DATE_ADDED, description="date_added, name or rank"),
):
    """
    Get items, newest first unless another sort is requested

    - **category_id**: Optional filter by category
    - **sort**: rank order is only available for ranked categories
    """
    if category_id is not None:
        category = get_category_or_404(db, category_id)
        if sort == ItemSort.RANK and not supports_rank(category.type):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Items of '{category.type.value}' categories cannot be sorted by rank"
            )
    return sort_items(crud_item.by_category(db, category_id), sort)


@router.get("/grouped", response_model=List[ItemGroup])
def get_grouped_items(db: Session = Depends(get_db)):
    """
    Get items grouped by category, categories in creation order
    """
    categories = [c for c in crud_category.get_multi(db=db) if uses_items(c.type)]
    return group_items_by_category(categories, crud_item.get_multi(db=db))


@router.post("/orphans/sweep", response_model=OrphanSweepResponse)
async def sweep_orphaned_images(
    redis: RedisClient = Depends(get_redis),
    store: LocalObjectStore = Depends(get_object_store)
):
    """
    Retry deletion of images left behind by failed cleanups
    """
    return await sweep_orphans(store, redis)


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: int, db: Session = Depends(get_db)):
    """
    Get specific item by ID
    """
    return get_or_404(crud_item, db, item_id, "Item")


@router.get("/{item_id}/detail", response_model=ItemDetailResponse)
def get_item_detail(item_id: int, db: Session = Depends(get_db)):
    """
    Get an item with its metadata rendered as read-only fields
    """
    return item_detail(get_or_404(crud_item, db, item_id, "Item"))


@router.post("/",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED
    )
async def create_item(
    background_tasks: BackgroundTasks,
    category_id: int = Form(...),
    name: str = Form(..., min_length=1, max_length=200),
    metadata: Optional[str] = Form(None, description="JSON object keyed by schema field"),
    rank: Optional[int] = Form(None),
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis),
    store: LocalObjectStore = Depends(get_object_store)
):
    """
    Create new item with its image

    The image is uploaded first. If the record cannot be written the
    uploaded image is released again.
    """
    category = get_category_or_404(db, category_id, ITEM_CATEGORY_TYPES)
    values = clean_metadata(category.type, parse_metadata(metadata))
    item_rank = rank_for(category.type, rank)
    data = await read_upload(image)

    _, image_url = store_image(store, image.filename, data)
    try:
        item = crud_item.create_with_image(
            db,
            category_id=category.id,
            name=name.strip(),
            image_url=image_url,
            metadata=values,
            rank=item_rank,
        )
    except SQLAlchemyError:
        db.rollback()
        await release_image(store, redis, image_url)
        raise

    logger.info(f"Item created: {item.id} in category {category.id}")
    announce(background_tasks, redis, "items")
    return item


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: int,
    item_in: ItemUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis)
):
    """
    Update item name, metadata or rank

    Metadata values are merged into the stored ones; empty values clear
    a field and unparsable values leave it unchanged.
    """
    item = get_or_404(crud_item, db, item_id, "Item")
    category_type = item.category.type
    changes = item_in.model_dump(exclude_unset=True)

    update_data: Dict[str, Any] = {}
    if changes.get("name") is not None:
        update_data["name"] = changes["name"].strip()
    if "metadata" in changes:
        bag = MetadataBag(category_type, item.metadata_)
        bag.merge(changes["metadata"])
        update_data["metadata_"] = bag.to_dict()
    if "rank" in changes:
        update_data["rank"] = rank_for(category_type, changes["rank"])

    item = crud_item.update(db=db, db_obj=item, obj_in=update_data)
    announce(background_tasks, redis, "items")
    return item


@router.put("/{item_id}/image", response_model=ItemResponse)
async def replace_item_image(
    item_id: int,
    background_tasks: BackgroundTasks,
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis),
    store: LocalObjectStore = Depends(get_object_store)
):
    """
    Swap the item image without touching its metadata
    """
    item = get_or_404(crud_item, db, item_id, "Item")
    data = await read_upload(image)
    old_image_url = item.image_url

    _, image_url = store_image(store, image.filename, data)
    try:
        item = crud_item.update(db=db, db_obj=item, obj_in={"image_url": image_url})
    except SQLAlchemyError:
        db.rollback()
        await release_image(store, redis, image_url)
        raise

    logger.info(f"Image replaced for item {item.id}")
    announce(background_tasks, redis, "items")
    background_tasks.add_task(release_image, store, redis, old_image_url)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    redis: RedisClient = Depends(get_redis),
    store: LocalObjectStore = Depends(get_object_store)
):
    """
    Delete item, then release its image
    """
    item = get_or_404(crud_item, db, item_id, "Item")
    image_url = item.image_url
    crud_item.delete(db=db, id=item_id)

    logger.info(f"Item deleted: {item_id}")
    announce(background_tasks, redis, "items")
    background_tasks.add_task(release_image, store, redis, image_url)
    return None
