"""Pydantic models for the AuthorFlow API."""

from authorflow.models.project import (
    Project,
    ProjectCreate,
    ProjectStatus,
    ProjectType,
    ProjectUpdate,
    count_words,
)
from authorflow.models.responses import ErrorResponse, HealthResponse
from authorflow.models.user import Identity, LoginRequest, Session, SignupRequest, User

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "Project",
    "ProjectCreate",
    "ProjectStatus",
    "ProjectType",
    "ProjectUpdate",
    "Session",
    "SignupRequest",
    "User",
    "count_words",
]
