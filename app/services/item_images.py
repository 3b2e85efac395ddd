"""
Item image lifecycle

Writing an item and its image spans two stores with no shared
transaction. Every operation is split in two phases:

1. Work that can abort the request (upload the new object, write the record)
2. Best-effort cleanup of the object that is no longer referenced

A failure in the second phase leaves an orphaned object. Its key is
logged and recorded in Redis so `sweep_orphans` can retry later.
"""

import logging
from typing import Dict, Optional, Tuple

from app.core.object_store import LocalObjectStore, ObjectStoreError, generate_key
from app.core.redis_client import RedisClient

logger = logging.getLogger(__name__)


def store_image(store: LocalObjectStore, upload_name: Optional[str], data: bytes) -> Tuple[str, str]:
    """
    Upload image bytes under a fresh key

    Returns:
        (key, public_url)

    Raises:
        ObjectStoreError: the upload failed and nothing was stored
    """
    key = generate_key(upload_name)
    url = store.put(key, data)
    logger.info(f"Image stored: {key}")
    return key, url


def discard_key(store: LocalObjectStore, key: str) -> bool:
    """Delete an object, returning False instead of raising on failure"""
    try:
        store.delete(key)
        return True
    except ObjectStoreError as e:
        logger.error(f"Object {key} could not be deleted: {e}")
        return False


async def release_image(store: LocalObjectStore, redis: RedisClient, image_url: Optional[str]) -> bool:
    """
    Delete the object behind an image URL that is no longer referenced

    URLs that do not point into the bucket are left alone.

    Returns:
        True if the object is gone, False if it was recorded as an orphan
    """
    key = store.key_from_url(image_url)
    if key is None:
        if image_url:
            logger.warning(f"Image URL outside the bucket, nothing to delete: {image_url}")
        return True

    if discard_key(store, key):
        return True

    try:
        await redis.add_orphan(key)
        logger.error(f"Orphaned object recorded for later cleanup: {key}")
    except Exception as e:
        logger.error(f"Orphaned object {key} could not be recorded: {e}")
    return False


async def sweep_orphans(store: LocalObjectStore, redis: RedisClient) -> Dict[str, int]:
    """
    Retry deletion of every recorded orphan

    Returns:
        {"removed": n, "remaining": m}
    """
    removed = 0
    remaining = 0
    for key in await redis.get_orphans():
        if discard_key(store, key):
            await redis.remove_orphan(key)
            removed += 1
        else:
            remaining += 1

    logger.info(f"Orphan sweep finished: {removed} removed, {remaining} remaining")
    return {"removed": removed, "remaining": remaining}
