"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.middleware import RequestTrackingMiddleware
from api.routers import (
    common_router,
    config_router,
    logs_router,
    memory_router,
    notes_router,
    proxy_router,
    tasks_router,
    usage_router,
    webhooks_router,
)
from api.services.app_initializer import AppServiceInitializer
from core import get_logger, setup_logging
from core.config import Settings, load_settings
from core.storage import KVStore

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    if not settings.is_testing:
        setup_logging(level=settings.log_level, enable_file_logging=True)
    logger.info(f"Starting Arni API server in {settings.environment} mode")

    initializer = AppServiceInitializer(settings, store=app.state.store_override)
    await initializer.initialize_all_services(app)
    await initializer.start_all_services()
    logger.info("Arni API server initialized successfully")

    try:
        yield
    finally:
        await initializer.stop_all_services()
        logger.info("Arni API server shutting down")


def create_app(
    settings: Settings | None = None, store: KVStore | None = None
) -> FastAPI:
    """Create FastAPI app.

    Args:
        settings: Settings to use; loaded from the environment when omitted
        store: Store to bind instead of the one configured in ``settings``
    """
    settings = settings or load_settings()

    app = FastAPI(
        title=settings.api_title,
        description="Webhooks, memory, tasks, notes and model usage accounting",
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store_override = store

    app.add_middleware(
        RequestTrackingMiddleware, api_key_header=settings.api_key_header
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(common_router)
    app.include_router(webhooks_router)
    app.include_router(memory_router)
    app.include_router(tasks_router)
    app.include_router(notes_router)
    app.include_router(logs_router)
    app.include_router(config_router)
    app.include_router(proxy_router)
    app.include_router(usage_router)
    return app


app = create_app()
