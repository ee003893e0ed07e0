"""Request ID middleware."""

import logging
import uuid
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with an ID.

    The ID is stored on ``request.state`` for error responses and log lines,
    and echoed in the ``X-Request-ID`` response header. A well-formed
    incoming ``X-Request-ID`` is reused.
    """

    HEADER = "X-Request-ID"

    def __init__(self, app: FastAPI):
        super().__init__(app)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(self.HEADER) or ""
        if not request_id or len(request_id) > 128 or not request_id.isprintable():
            request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[self.HEADER] = request_id

        logger.debug(
            "%s %s -> %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={"request_id": request_id},
        )
        return response
