# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the SendBird API Server.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   python run.py
#   uvicorn app.main:app --port 3000 --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, settings as default_settings
from app.exceptions import (
    SendbirdServerException,
    http_exception_handler,
    sendbird_server_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import health, users
from lib.sendbird_client import SendbirdClient, SendbirdConfigError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log the environment and the Sendbird host in use
    - Shutdown: close the Sendbird connection pool
    """
    client = app.state.sendbird_client
    logger.info(f"Starting SendBird API Server in {app.state.settings.ENVIRONMENT} mode")
    logger.info(f"Sendbird API host: {client.base_url}")

    yield

    logger.info("Shutting down SendBird API Server")
    client.close()


def create_app(
    settings: Settings | None = None,
    sendbird_client: SendbirdClient | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    The Sendbird client is constructed here, before the app can serve
    anything, and shared read-only by every request handler.

    Args:
        settings: Settings to use (defaults to the environment-loaded ones)
        sendbird_client: Pre-built client (tests pass a mock)

    Raises:
        SendbirdConfigError: If the Sendbird credentials are missing
    """
    if settings is None:
        settings = default_settings
    if sendbird_client is None:
        try:
            sendbird_client = SendbirdClient.from_settings(settings)
        except SendbirdConfigError as e:
            logger.error(f"Failed to initialize SendBird client: {e}")
            raise

    app = FastAPI(
        title="SendBird API Server",
        description="REST API server for SendBird operations including user management and token generation",
        version="1.0.0",
        docs_url="/api-docs",
        redoc_url=None,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Health",
                "description": "Server health check",
            },
            {
                "name": "Users",
                "description": "Create Sendbird users and issue access tokens",
            },
        ],
    )
    app.state.settings = settings
    app.state.sendbird_client = sendbird_client

    # =========================================================================
    # Middleware
    # =========================================================================

    # CORS middleware - allows cross-origin requests from the frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(SendbirdServerException, sendbird_server_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    # Health check endpoint
    app.include_router(
        health.router,
        tags=["Health"]
    )

    # User and token endpoints
    app.include_router(
        users.router,
        prefix="/api",
        tags=["Users"]
    )

    return app


app = create_app()
