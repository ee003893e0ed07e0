"""API routes module."""

from authorflow.routes.account import router as account_router
from authorflow.routes.auth import router as auth_router
from authorflow.routes.health import router as health_router
from authorflow.routes.projects import router as projects_router

__all__ = [
    "account_router",
    "auth_router",
    "health_router",
    "projects_router",
]
