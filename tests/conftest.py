"""
Pytest configuration and fixtures for Life Dashboard tests

Provides:
1. Mock Redis client (change signals and orphan set)
2. In-memory SQLite record store
3. Temporary object store
4. Test JWT tokens and users
5. FastAPI test client with dependency overrides
"""

import asyncio
import json
import os
import tempfile
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORAGE_DIR", tempfile.mkdtemp(prefix="dashboard-storage-"))
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth.dependencies import get_current_user
from app.core.config import settings
from app.core.object_store import LocalObjectStore, get_object_store
from app.core.redis_client import get_redis
from app.db.base import Base
from app.db.session import get_db
from app.main import app


# === MOCK REDIS CLIENT ===

class MockRedisClient:
    """In-process stand-in for RedisClient"""

    def __init__(self):
        self.connected = False
        self.published: List[str] = []
        self.orphans = set()
        self.queue: asyncio.Queue = asyncio.Queue()
        self.fail_publish = False

    async def connect(self):
        self.connected = True

    async def disconnect(self):
        self.connected = False

    async def health_check(self):
        return self.connected

    async def publish_change(self, table: str) -> bool:
        if self.fail_publish:
            return False
        self.published.append(table)
        self.queue.put_nowait({"table": table, "at": datetime.now(timezone.utc).isoformat()})
        return True

    async def listen(self, tables):
        tables = set(tables)
        while True:
            signal = await self.queue.get()
            if signal["table"] in tables:
                yield signal

    async def add_orphan(self, key: str) -> None:
        self.orphans.add(key)

    async def get_orphans(self) -> List[str]:
        return sorted(self.orphans)

    async def remove_orphan(self, key: str) -> bool:
        if key in self.orphans:
            self.orphans.remove(key)
            return True
        return False


@pytest.fixture
def mock_redis():
    """Mock Redis client for testing"""
    return MockRedisClient()


# === RECORD STORE ===

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Fresh schema per test"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


# === OBJECT STORE ===

@pytest.fixture
def object_store(tmp_path):
    """Object store rooted in a temporary directory"""
    store = LocalObjectStore(str(tmp_path), "test-bucket", "http://testserver")
    store.ensure_bucket()
    return store


# === TEST JWT TOKENS ===

@pytest.fixture
def test_user_data():
    """Claims of a token issued by the identity provider"""
    now = datetime.now(timezone.utc)
    return {
        "sub": "123e4567-e89b-12d3-a456-426614174000",
        "email": "testuser@example.com",
        "role": "authenticated",
        "aud": settings.jwt_audience,
        "user_metadata": {"full_name": "Test User"},
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=1)).timestamp()),
    }


def make_token(claims: Dict[str, Any], secret: Optional[str] = None) -> str:
    return jwt.encode(claims, secret or settings.jwt_secret, algorithm="HS256")


@pytest.fixture
def token_factory():
    """Sign arbitrary claims like the identity provider does"""
    return make_token


@pytest.fixture
def test_jwt_token(test_user_data):
    return make_token(test_user_data)


@pytest.fixture
def expired_jwt_token(test_user_data):
    expired = dict(test_user_data)
    expired["exp"] = int((datetime.now(timezone.utc) - timedelta(hours=1)).timestamp())
    return make_token(expired)


@pytest.fixture
def current_user():
    return {
        "user_id": "123e4567-e89b-12d3-a456-426614174000",
        "email": "testuser@example.com",
        "name": "Test User",
        "role": "authenticated",
        "expires_at": None,
        "issued_at": None,
    }


# === FASTAPI TEST CLIENT ===

@pytest.fixture
def test_client():
    """FastAPI test client without overrides"""
    return TestClient(app)


@pytest.fixture
def client(db_session, mock_redis, object_store, current_user):
    """
    Test client with the record store, Redis, object store and
    authentication replaced by test doubles
    """
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    async def override_get_redis():
        return mock_redis

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = override_get_redis
    app.dependency_overrides[get_object_store] = lambda: object_store
    app.dependency_overrides[get_current_user] = lambda: current_user

    yield TestClient(app)

    app.dependency_overrides.clear()


API = settings.api_v1_prefix


@pytest.fixture
def make_category(client):
    """Create a category through the API and return its JSON"""
    def _make(name: str = "Movies", type: str = "movies", icon: str = "film") -> Dict[str, Any]:
        response = client.post(f"{API}/categories/", json={"name": name, "type": type, "icon": icon})
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_item(client):
    """Create an item with a small image through the API and return its JSON"""
    def _make(category_id: int, name: str = "Item", metadata: Optional[Dict[str, Any]] = None,
              rank: Optional[int] = None, filename: str = "poster.jpg") -> Dict[str, Any]:
        data = {"category_id": str(category_id), "name": name}
        if metadata is not None:
            data["metadata"] = json.dumps(metadata)
        if rank is not None:
            data["rank"] = str(rank)
        response = client.post(
            f"{API}/items/",
            data=data,
            files={"image": (filename, b"\xff\xd8\xff fake jpeg", "image/jpeg")},
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _make
