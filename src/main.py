"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from api.v1.schemas.common import ServiceInfoResponse
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from infrastructure.database.session import engine

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: release pooled connections on shutdown."""
    logger.info("startup", environment=settings.app_env, version=settings.app_version)
    yield
    await engine.dispose()
    logger.info("shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Yearly Goals\n\n"
            "Set goals for the year, track them, and share a public page "
            "with your progress.\n\n"
            "### Goal types\n"
            "- **one_time**: done or not done, toggled\n"
            "- **progress**: 0-100%, completed at 100\n\n"
            "### Authentication\n"
            "Private endpoints need the access token returned by sign-in:\n"
            "```\nAuthorization: Bearer <your_token>\n```\n"
            "Public profiles and the year-progress clock need no token."
        ),
        version=settings.app_version,
        debug=settings.debug,
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "auth", "description": "Sign up, sign in, sign out"},
            {"name": "dashboard", "description": "The owner's private view"},
            {"name": "goals", "description": "Goal management operations"},
            {"name": "profiles", "description": "Public read-only profiles"},
            {"name": "year-progress", "description": "Year countdown"},
        ],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    @app.get("/", response_model=ServiceInfoResponse, tags=["health"], summary="Landing")
    async def landing() -> ServiceInfoResponse:
        """Service name, version and where to start."""
        return ServiceInfoResponse(
            name=settings.app_name,
            version=settings.app_version,
            links={
                "docs": "/docs",
                "signup": "/api/v1/auth/signup",
                "signin": "/api/v1/auth/signin",
                "dashboard": "/api/v1/dashboard",
                "public_profile": "/api/v1/profiles/{username}",
                "year_progress": "/api/v1/year-progress",
            },
        )

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
