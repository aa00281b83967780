"""FastAPI application factory.

Main entry point for the portfolio content API and CMS dashboard.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from folio import __version__
from folio.config import AppConfig, load_app_config
from folio.db import dispose_engine, init_db
from folio.web.auth import auth_middleware
from folio.web.cors import cors_middleware
from folio.web.dashboard import DashboardNotFound, dashboard_not_found_handler
from folio.web.dashboard import router as dashboard_router
from folio.web.errors import (
    ApiError,
    api_error_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from folio.web.routes import (
    health_router,
    hero_router,
    projects_router,
    skills_router,
    experience_router,
    specializations_router,
    portfolio_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    config: AppConfig = app.state.config
    init_db(config.database.url, echo=config.database.echo)
    logger.info(
        "api_startup",
        environment=config.environment,
        auth_enabled=config.auth.enabled,
        allowed_origins=config.allowed_origins,
    )
    yield
    # Shutdown
    dispose_engine()


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application config. Loaded from file/env when omitted.

    Returns:
        Configured FastAPI app instance
    """
    config = config or load_app_config()

    app = FastAPI(
        title="Folio API",
        description="Portfolio content API and CMS dashboard",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.config = config

    # Outermost last: CORS wraps the auth gate
    app.middleware("http")(auth_middleware)
    app.middleware("http")(cors_middleware)

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DashboardNotFound, dashboard_not_found_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(hero_router)
    app.include_router(projects_router)
    app.include_router(skills_router)
    app.include_router(experience_router)
    app.include_router(specializations_router)
    app.include_router(portfolio_router)
    app.include_router(dashboard_router)

    return app


# Default app instance for uvicorn
app = create_app()
