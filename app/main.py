"""
Main FastAPI application for Life Dashboard

This module initializes the FastAPI application, configures CORS,
registers routers, serves stored images and maps store failures to
HTTP responses.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.api import auth
from app.api.v1.endpoints import (
    budgets,
    categories,
    changes,
    finance,
    items,
    savings_goals,
    schemas,
    todos,
    transactions,
    workouts,
)
from app.auth.dependencies import get_current_user
from app.core.config import settings, get_cors_origins
from app.core.object_store import ObjectStoreError, object_store
from app.core.redis_client import close_redis, redis_client
from app.db.session import SessionLocal, init_db

# Setup logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events
    """
    # Startup
    logger.info("=" * 50)
    logger.info(f"Starting {settings.project_name}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"API prefix: {settings.api_v1_prefix}")
    logger.info(f"Object store: {object_store.bucket_dir}")
    logger.info(f"CORS origins: {get_cors_origins()}")
    logger.info("=" * 50)

    if settings.auto_create_tables:
        init_db()
        logger.info("✓ Database tables ready")

    yield

    # Shutdown
    await close_redis()
    logger.info(f"Shutting down {settings.project_name}...")


def create_application() -> FastAPI:
    """
    Application factory for creating FastAPI instance

    This factory pattern allows:
    - Creating app with different settings for tests
    - Better control over initialization
    - Easier testing
    """

    app = FastAPI(
        title=settings.project_name,
        description="Personal life dashboard: collections, fitness, finance and todos",
        version=VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url=f"{settings.api_v1_prefix}/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
    )

    # Stored images, read-only
    object_store.ensure_bucket()
    app.mount(
        f"/storage/{object_store.bucket}",
        StaticFiles(directory=str(object_store.bucket_dir)),
        name="storage",
    )

    register_exception_handlers(app)

    # Register routers
    register_routers(app)

    # Register base routes
    register_base_routes(app)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Map store failures to HTTP responses"""

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Record store failure on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "detail": "The record store is unavailable. "
                          "Verify the database setup and connection settings."
            },
        )

    @app.exception_handler(ObjectStoreError)
    async def object_store_error_handler(request: Request, exc: ObjectStoreError):
        logger.error(f"Object store failure on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "The image could not be stored"},
        )


ROUTERS = (
    (categories.router, "/categories", "Categories"),
    (schemas.router, "/schemas", "Schemas"),
    (items.router, "/items", "Items"),
    (workouts.router, "/workouts", "Workouts"),
    (transactions.router, "/transactions", "Transactions"),
    (budgets.router, "/budgets", "Budgets"),
    (savings_goals.router, "/savings-goals", "Savings Goals"),
    (finance.router, "/finance", "Finance"),
    (todos.router, "/todos", "Todos"),
    (changes.router, "/changes", "Changes"),
)


def register_routers(app: FastAPI) -> None:
    """Register API routers"""
    # Auth router
    app.include_router(
        auth.router,
        prefix=f"{settings.api_v1_prefix}",
        tags=["Authentication"]
    )
    logger.info("✓ Auth router registered")

    # Everything else requires a signed-in user
    for router, prefix, tag in ROUTERS:
        app.include_router(
            router,
            prefix=f"{settings.api_v1_prefix}{prefix}",
            tags=[tag],
            dependencies=[Depends(get_current_user)],
        )
        logger.info(f"✓ {tag} router registered")


def check_database() -> bool:
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return False


def register_base_routes(app: FastAPI) -> None:
    """Register base application routes"""

    @app.get("/")
    async def root():
        """Root endpoint with API information"""
        return {
            "message": "Life Dashboard API",
            "version": VERSION,
            "status": "running",
            "docs_url": "/docs" if settings.debug else "disabled",
            "features": [
                "Categories with schema-typed items",
                "Image storage",
                "Fitness tracking",
                "Personal finance tracking",
                "Todos",
                "Live change feed",
            ]
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        services = {
            "api": "operational",
            "database": "operational" if check_database() else "unavailable",
            "redis": "operational" if await redis_client.health_check() else "unavailable",
            "storage": "operational" if Path(object_store.bucket_dir).is_dir() else "unavailable",
        }
        healthy = all(state == "operational" for state in services.values())
        return {
            "status": "healthy" if healthy else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": VERSION,
            "services": services,
        }

    @app.get("/config")
    async def get_config():
        """
        Get application configuration (development only)

        In production, this endpoint returns 404
        """
        if not settings.debug:
            raise HTTPException(
                status_code=404,
                detail="Endpoint is only available in development mode"
            )

        # Return only safe configuration (no secrets)
        return {
            "project_name": settings.project_name,
            "debug": settings.debug,
            "api_v1_prefix": settings.api_v1_prefix,
            "jwt_algorithm": settings.jwt_algorithm,
            "jwt_audience": settings.jwt_audience,
            "storage_bucket": settings.storage_bucket,
            "public_base_url": settings.public_base_url,
            "weekly_workout_goal": settings.weekly_workout_goal,
            "log_level": settings.log_level,
            "cors_origins": get_cors_origins(),
        }


# Create application instance
app = create_application()


if __name__ == "__main__":
    """
    Development server entry point

    For production use:
    gunicorn -w 4 -k uvicorn.workers.UvicornWorker app.main:app
    """
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
