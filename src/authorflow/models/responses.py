"""Standard API response models."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from authorflow.models.project import Project
from authorflow.models.user import Identity, Session, User


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    error: str = Field(..., description="Short error title")
    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")
    details: dict[str, Any] | None = Field(default=None, description="Additional error details")
    request_id: str | None = Field(default=None, description="Request ID for tracking")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall health status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    environment: str | None = Field(default=None)


class SignupResponse(BaseModel):
    success: bool = True
    message: str = "Signup successful"
    user: Identity


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful"
    user: Identity
    session: Session


class ProjectResponse(BaseModel):
    """Single project envelope."""

    success: bool = True
    data: Project


class ProjectMutationResponse(ProjectResponse):
    """Single project envelope with a confirmation message."""

    message: str


class ProjectListResponse(BaseModel):
    """Project list envelope."""

    success: bool = True
    data: list[Project]
    count: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ProjectUsage(BaseModel):
    """Project quota usage for a user."""

    tier: str
    limit: int | None = Field(..., description="Maximum projects, null when unbounded")
    used: int
    remaining: int | None = Field(..., description="Remaining slots, null when unbounded")


class AccountData(BaseModel):
    user: User
    usage: ProjectUsage


class AccountResponse(BaseModel):
    success: bool = True
    data: AccountData


class TierInfo(BaseModel):
    tier: str
    max_projects: int | None
    current: bool = False


class TierListResponse(BaseModel):
    success: bool = True
    data: list[TierInfo]
