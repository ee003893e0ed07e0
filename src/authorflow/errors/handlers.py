"""FastAPI exception handlers."""

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from authorflow.errors.exceptions import AuthorFlowError
from authorflow.middleware.request_id import RequestIDMiddleware
from authorflow.models.responses import ErrorResponse

logger = logging.getLogger(__name__)


def create_error_response(
    error_code: str,
    error: str,
    message: str,
    status_code: int,
    details: dict | None = None,
    request_id: str | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    request_id = request_id or str(uuid.uuid4())
    response = ErrorResponse(
        error=error,
        message=message,
        code=error_code,
        details=details or None,
        request_id=request_id,
    )
    # Unhandled-exception responses never pass back through RequestIDMiddleware
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json", exclude_none=True),
        headers={RequestIDMiddleware.HEADER: request_id},
    )


async def authorflow_exception_handler(
    request: Request,
    exc: AuthorFlowError,
) -> JSONResponse:
    """Handle AuthorFlowError and subclasses."""
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())

    if exc.status_code >= 500:
        logger.error(
            "API error: %s - %s",
            exc.error_code,
            exc.message,
            extra={"request_id": request_id, "details": exc.details},
        )
        # Provider and store diagnostics stay in the log
        return create_error_response(
            error_code=exc.error_code,
            error="Internal server error",
            message=exc.__class__.message,
            status_code=exc.status_code,
            request_id=request_id,
        )

    logger.warning(
        "API error: %s - %s",
        exc.error_code,
        exc.message,
        extra={"request_id": request_id, "details": exc.details},
    )

    return create_error_response(
        error_code=exc.error_code,
        error=exc.error,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        request_id=request_id,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle Pydantic validation errors."""
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())

    errors = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error["loc"])
        errors.append({"field": loc, "message": error["msg"], "type": error["type"]})

    logger.warning(
        "Validation error",
        extra={"request_id": request_id, "errors": errors},
    )

    return create_error_response(
        error_code="INVALID_ARGUMENT",
        error="Invalid request",
        message="Request validation failed",
        status_code=400,
        details={"errors": errors},
        request_id=request_id,
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected exceptions."""
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())

    logger.exception(
        "Unhandled exception",
        extra={"request_id": request_id},
    )

    return create_error_response(
        error_code="INTERNAL_ERROR",
        error="Internal server error",
        message="An unexpected error occurred",
        status_code=500,
        request_id=request_id,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AuthorFlowError, authorflow_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
