"""Services module."""

from authorflow.services.account_service import AccountService
from authorflow.services.auth_service import AuthService
from authorflow.services.container import Services, build_services
from authorflow.services.project_service import ProjectService

__all__ = [
    "AccountService",
    "AuthService",
    "ProjectService",
    "Services",
    "build_services",
]
