from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from edupath.config.settings import settings
from edupath.utils.logging import get_logger
from edupath.routers import main_router
from edupath.utils.errors import setup_error_handlers
from edupath.db.db import init_db
from edupath.services.realtime import ConnectionRegistry
from edupath.middlewares import (
    RequestIDMiddleware,
    DevSecurityMiddleware,
    ProdSecurityMiddleware,
)

# Initialize the logger
logger = get_logger()


@asynccontextmanager
async def lifespan(application: FastAPI):
    logger.info(f"{settings.NAME} is starting up...")
    if settings.INIT_DB_ON_STARTUP:
        init_db()
    yield
    registry: ConnectionRegistry = application.state.connection_registry
    logger.info(
        f"{settings.NAME} is shutting down with {len(registry)} live connections..."
    )
    registry.clear()


def create_application() -> FastAPI:
    """Initialize the FastAPI application with settings and lifespan events."""
    application = FastAPI(
        title=settings.NAME, version=settings.VERSION, lifespan=lifespan
    )

    # One registry per application; the WebSocket route and the dispatcher share it
    application.state.connection_registry = ConnectionRegistry()

    # Setup error handlers
    setup_error_handlers(application)

    # Add CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_HOSTS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "authorization"],
    )

    # Add custom middlewares
    application.add_middleware(
        DevSecurityMiddleware
        if settings.ENVIRONMENT == "development"
        else ProdSecurityMiddleware
    )
    application.add_middleware(RequestIDMiddleware)

    # Routers
    application.include_router(main_router, prefix=settings.API_PREFIX, tags=["APIs"])

    return application


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "edupath.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_config=None,
        log_level=None,
    )
