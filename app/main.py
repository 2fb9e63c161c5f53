"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.
It sets up all routes, middleware, and exception handlers.

Design Decisions:
- Use lifespan events to open and close the MongoDB client
- Restrict CORS to configured frontend origins
- Include comprehensive error handling
- Expose health and readiness endpoints
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from app import __version__
from app.api import review_router, users_router
from app.api.users import get_user_repository
from app.config import get_settings
from app.logging_config import get_logger, setup_logging
from app.services.user_store import UserRepository, create_mongo_client

# Initialize logging first
setup_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Opens the MongoDB client on startup and closes it on shutdown.
    """
    settings = get_settings()
    logger.info(
        "Starting AI Code Reviewer",
        host=settings.host,
        port=settings.port,
        model=settings.openai_model,
        chunk_size=settings.review_chunk_size
    )

    client = create_mongo_client()
    app.state.user_repository = UserRepository(client[settings.mongo_database])

    if settings.mongo_ensure_indexes:
        try:
            await app.state.user_repository.ensure_indexes()
        except PyMongoError as e:
            # The database may come up after the API; readiness reports it
            logger.warning("Could not ensure MongoDB indexes", error=str(e))

    yield

    logger.info("Shutting down AI Code Reviewer")
    await client.close()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="AI Code Reviewer",
        description="AI-powered code review and user account backend",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Register routes
    app.include_router(review_router)
    app.include_router(users_router)

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error",
                "type": type(exc).__name__
            }
        )

    @app.get("/")
    async def root():
        """Root endpoint with basic info."""
        return {
            "name": "AI Code Reviewer",
            "version": __version__,
            "status": "running",
            "docs": "/docs"
        }

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint.

        Returns basic health status for load balancers and monitors.
        """
        return {
            "status": "healthy",
            "service": "ai-code-reviewer",
            "version": __version__
        }

    @app.get("/ready")
    async def readiness_check(
        repository: UserRepository = Depends(get_user_repository),
    ):
        """
        Readiness check endpoint.

        Verifies that MongoDB answers before traffic is routed here.
        """
        try:
            await repository.ping()
        except PyMongoError as e:
            logger.error("Readiness check failed", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Not ready: database unavailable"
            )

        return {
            "status": "ready",
            "service": "ai-code-reviewer"
        }

    return app


# Create the application instance
app = create_app()
