"""FastAPI application entry point."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from authorflow import __version__
from authorflow.config import Settings, get_settings
from authorflow.errors.exceptions import ConfigurationError
from authorflow.errors.handlers import register_exception_handlers
from authorflow.middleware.request_id import RequestIDMiddleware
from authorflow.routes import account_router, auth_router, health_router, projects_router
from authorflow.services.container import Services, build_services

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Handles startup and shutdown events:
    - Startup: Build the provider client and services unless they were injected
    - Shutdown: Close the provider client we created
    """
    settings: Settings = app.state.settings
    logger.info("Starting AuthorFlow API v%s in %s mode", __version__, settings.node_env)

    owned: Services | None = None
    if app.state.services is None:
        owned = build_services(settings)
        app.state.services = owned

    yield

    logger.info("Shutting down AuthorFlow API")
    if owned is not None:
        await owned.aclose()
        app.state.services = None


def create_app(
    settings: Settings | None = None,
    services: Services | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    ``services`` is normally built in the lifespan from settings; pass a
    container (e.g. ``Services.in_memory()``) to run against fakes.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="AuthorFlow API",
        description=(
            "Backend for AuthorFlow, a workspace for writers.\n\n"
            "## Features\n"
            "- Signup and login through the identity provider\n"
            "- Project CRUD scoped to the signed-in user\n"
            "- Project limits per subscription tier (Free, Pro, Plus)\n\n"
            "## Authentication\n"
            "Project and account endpoints require `Authorization: Bearer <token>`, "
            "where the token is `session.access_token` from `/auth/login`."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestIDMiddleware)  # type: ignore[arg-type]

    register_exception_handlers(app)

    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(projects_router, prefix=settings.api_prefix)
    app.include_router(account_router, prefix=settings.api_prefix)

    return app


def main() -> None:
    """Run the API server; exits with status 1 when provider credentials are missing."""
    import uvicorn

    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    try:
        settings.require_provider()
    except ConfigurationError as e:
        logger.error("%s", e)
        sys.exit(1)

    logger.info("AuthorFlow backend listening on port %s", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
