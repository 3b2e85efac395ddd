"""
Object store for item images

Objects live in a bucket directory on disk and are served read-only
under /storage/<bucket>/. The public URL of an object embeds its key
after the bucket name, so the key can be recovered from the URL.
"""

import logging
import random
import re
import string
import time
from pathlib import Path
from typing import Optional

from app.core.config import settings

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


class ObjectStoreError(Exception):
    """Raised when an object cannot be written or removed"""


def sanitize_extension(filename: Optional[str]) -> str:
    """Lower-cased extension of an upload name, without path characters"""
    if not filename or "." not in filename:
        return "bin"
    extension = filename.rsplit(".", 1)[-1].lower()
    extension = re.sub(r"[^a-z0-9]", "", extension)
    return extension or "bin"


def generate_key(original_filename: Optional[str]) -> str:
    """
    Generate a fresh object key

    Format: <milliseconds since epoch>-<random base36 suffix>.<extension>
    """
    suffix = "".join(random.choices(_BASE36, k=11))
    return f"{int(time.time() * 1000)}-{suffix}.{sanitize_extension(original_filename)}"


class LocalObjectStore:
    """
    Bucket-on-disk object store

    Usage:
        store = LocalObjectStore("./storage", "dashboard-images", "http://localhost:8000")
        url = store.put(generate_key("poster.jpg"), data)
        store.delete(store.key_from_url(url))
    """

    def __init__(self, root: str, bucket: str, public_base_url: str):
        self.root = Path(root)
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self._key_pattern = re.compile(rf"{re.escape(bucket)}/(.+)$")

    @property
    def bucket_dir(self) -> Path:
        return self.root / self.bucket

    def ensure_bucket(self) -> None:
        self.bucket_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        path = (self.bucket_dir / key).resolve()
        if self.bucket_dir.resolve() not in path.parents:
            raise ObjectStoreError(f"Invalid object key: {key}")
        return path

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/storage/{self.bucket}/{key}"

    def key_from_url(self, url: Optional[str]) -> Optional[str]:
        """Recover the object key from a public URL; None if it is not ours"""
        if not url:
            return None
        match = self._key_pattern.search(url)
        return match.group(1) if match else None

    def put(self, key: str, data: bytes) -> str:
        """Store bytes under key and return the public URL"""
        path = self._path(key)
        try:
            self.ensure_bucket()
            path.write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to store object {key}: {e}")
            raise ObjectStoreError(f"Failed to store object {key}") from e
        logger.debug(f"Object stored: {key} ({len(data)} bytes)")
        return self.public_url(key)

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def delete(self, key: str) -> None:
        """Remove an object; removing a missing object is not an error"""
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to delete object {key}: {e}")
            raise ObjectStoreError(f"Failed to delete object {key}") from e
        logger.debug(f"Object deleted: {key}")


# Global object store instance
object_store = LocalObjectStore(
    settings.storage_dir,
    settings.storage_bucket,
    settings.public_base_url,
)


def get_object_store() -> LocalObjectStore:
    """
    Dependency function for FastAPI

    Usage:
        @app.post("/upload")
        def upload(store: LocalObjectStore = Depends(get_object_store)):
            store.put(key, data)
    """
    return object_store
