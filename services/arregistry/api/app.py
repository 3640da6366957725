"""
FastAPI application factory for the registry server.

Uses lifespan handler for startup/shutdown of the shared Artifact Registry client.
"""

import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from arregistry import __version__
from arregistry.api.errors import register_exception_handlers
from arregistry.config import settings
from arregistry.logging_config import configure_logging, get_logger
from arregistry.storage import close_storage, init_storage

from .health import router as health_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan handler for startup and shutdown."""
    # Startup
    configure_logging(json_logs=settings.json_logs, log_level=settings.log_level)
    logger.info("Starting registry server", version=__version__)

    await init_storage()

    yield

    # Shutdown
    logger.info("Shutting down registry server")
    await close_storage()


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Artifact Registry Terraform Registry",
        description="Terraform module and provider registry backed by Artifact Registry",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # CORS middleware
    if settings.cors.allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors.allow_origins,
            allow_credentials=settings.cors.allow_credentials,
            allow_methods=settings.cors.allow_methods,
            allow_headers=settings.cors.allow_headers,
        )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):  # type: ignore[no-untyped-def]
        """Ensure every request has a request ID for logging correlation."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers["X-Request-ID"] = request_id

        return response

    register_exception_handlers(app)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler for unhandled errors."""
        logger.error("Unhandled exception", exc_info=exc, path=str(request.url.path))
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # Health endpoints (no prefix)
    app.include_router(health_router)

    # Discovery (banner + .well-known)
    from arregistry.api.routers.discovery import router as discovery_router

    app.include_router(discovery_router)

    # Registry protocol routes
    from arregistry.api.routers.registry_modules import router as registry_modules_router

    app.include_router(registry_modules_router)

    from arregistry.api.routers.registry_providers import router as registry_providers_router

    app.include_router(registry_providers_router)

    # Asset proxy
    from arregistry.api.routers.assets import router as assets_router

    app.include_router(assets_router)

    return app


# Application instance
app = create_application()
