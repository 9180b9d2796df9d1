"""Vendor Directory API — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.db.base import create_tables
from app.middleware.timing import RequestTimingMiddleware
from app.schemas.common import HealthResponse

# v1 routers
from app.routers.v1.images import router as images_v1_router
from app.routers.v1.vendors import router as vendors_v1_router

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.app_env == "development" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.storage_backend == "sql":
        await create_tables()
        logger.info("Storage ready (sql: %s)", settings.database_url)
    else:
        logger.info("Storage ready (%s)", settings.storage_backend)
    yield


API_VERSION = "1.0.0"


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version=API_VERSION,
        docs_url="/docs" if settings.app_env == "development" else None,
        redoc_url="/redoc" if settings.app_env == "development" else None,
        lifespan=lifespan,
    )

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request timing log ---
    app.add_middleware(RequestTimingMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/api/v1/*) ---
    app.include_router(vendors_v1_router, prefix="/api/v1")
    app.include_router(images_v1_router, prefix="/api/v1")

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(
            app=settings.app_name,
            version=API_VERSION,
            env=settings.app_env,
            storage=settings.storage_backend,
            image_limit_bytes=settings.max_image_size_bytes,
            optimistic_concurrency=settings.optimistic_concurrency,
        )

    return app


app = create_app()
