"""Custom exception hierarchy for the AuthorFlow API."""

from typing import Any


class AuthorFlowError(Exception):
    """Base exception for all AuthorFlow API errors."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    error: str = "Internal server error"
    message: str = "An internal error occurred"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.__class__.message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(Exception):
    """Raised at startup when required settings are absent."""


# Validation Errors (400)


class InvalidArgumentError(AuthorFlowError):
    """Malformed, missing or out-of-enum input."""

    status_code = 400
    error_code = "INVALID_ARGUMENT"
    error = "Invalid request"
    message = "The request is invalid"


class MissingFieldsError(InvalidArgumentError):
    """Required fields are absent or empty."""

    error_code = "MISSING_FIELDS"
    error = "Missing required fields"
    message = "Missing required fields"


class InvalidProjectTypeError(InvalidArgumentError):
    """Project type is not one of the supported kinds."""

    error_code = "INVALID_PROJECT_TYPE"
    error = "Invalid project type"

    def __init__(self, value: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid project type. Must be one of: {', '.join(allowed)}",
            details={"type": value, "allowed": allowed},
        )


class SignupFailedError(InvalidArgumentError):
    """The auth provider refused to create the account."""

    error_code = "SIGNUP_FAILED"
    error = "Signup failed"
    message = "Unable to create account"


# Authentication Errors (401)


class AuthenticationError(AuthorFlowError):
    """Base authentication error."""

    status_code = 401
    error_code = "UNAUTHENTICATED"
    error = "Unauthorized"
    message = "Authentication failed"


class MissingCredentialsError(AuthenticationError):
    """No bearer token was supplied."""

    error_code = "AUTH_MISSING_CREDENTIALS"
    message = "Missing or invalid authorization header"


class InvalidTokenError(AuthenticationError):
    """Bearer token was rejected by the provider."""

    error_code = "AUTH_INVALID_TOKEN"
    message = "Invalid or expired token"


class InvalidCredentialsError(AuthenticationError):
    """Email/password pair was rejected by the provider."""

    error_code = "AUTH_INVALID_CREDENTIALS"
    error = "Invalid credentials"
    message = "Invalid login credentials"


# Authorization Errors (403)


class QuotaExceededError(AuthorFlowError):
    """User has reached the project limit of their tier."""

    status_code = 403
    error_code = "QUOTA_EXCEEDED"
    error = "Project limit reached"
    message = "Project limit reached"

    def __init__(self, tier: str, limit: int, used: int):
        super().__init__(
            message=f"Project limit reached for {tier} tier. Upgrade to create more projects.",
            details={"tier": tier, "limit": limit, "used": used},
        )


# Resource Not Found Errors (404)


class NotFoundError(AuthorFlowError):
    """Resource absent or not owned by the caller."""

    status_code = 404
    error_code = "NOT_FOUND"
    error = "Not found"
    message = "Resource not found"


class ProjectNotFoundError(NotFoundError):
    """Project not found for this user."""

    error_code = "PROJECT_NOT_FOUND"
    error = "Project not found"

    def __init__(self, project_id: str):
        super().__init__(
            message=f"Project '{project_id}' not found",
            details={"project_id": project_id},
        )


class UserNotFoundError(NotFoundError):
    """No profile row exists for the authenticated user."""

    error_code = "USER_NOT_FOUND"
    error = "User not found"
    message = "User profile not found"


# Internal Errors (500)


class InternalError(AuthorFlowError):
    """Base internal error."""

    status_code = 500
    error_code = "INTERNAL_ERROR"
    error = "Internal server error"
    message = "An internal error occurred"


class ProviderError(InternalError):
    """The auth provider failed or answered unexpectedly."""

    error_code = "PROVIDER_ERROR"
    message = "The authentication provider is unavailable"


class StoreError(InternalError):
    """The project store failed."""

    error_code = "STORE_ERROR"
    message = "The project store is unavailable"
