"""User and identity models."""

from datetime import UTC, datetime

from pydantic import BaseModel, EmailStr, Field

from authorflow.config import UserTier


class Identity(BaseModel):
    """Authenticated caller as reported by the identity provider."""

    id: str = Field(..., description="Provider user identifier")
    email: str = Field(default="", description="User email address")
    role: str | None = Field(default=None, description="Provider role claim")

    model_config = {"frozen": True}


class Session(BaseModel):
    """Provider session returned on sign-in."""

    access_token: str = Field(..., description="Bearer token for subsequent requests")
    token_type: str = Field(default="bearer")
    expires_in: int | None = Field(default=None, description="Token lifetime in seconds")
    expires_at: int | None = Field(default=None, description="Expiry as unix timestamp")
    refresh_token: str | None = Field(default=None)


class User(BaseModel):
    """User profile row."""

    id: str = Field(..., description="Unique user identifier")
    email: EmailStr = Field(..., description="User email address")
    username: str = Field(..., description="Display name")
    subscription_tier: UserTier = Field(default=UserTier.FREE)
    avatar_url: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"from_attributes": True}


class SignupRequest(BaseModel):
    """Request to create an account."""

    email: EmailStr
    password: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1, max_length=100)


class LoginRequest(BaseModel):
    """Request to sign in with email and password."""

    email: EmailStr
    password: str = Field(..., min_length=1)
