"""
Middleware for request correlation ID tracking.

HTTP requests get their correlation ID from the X-Correlation-ID header
(or a new 8-char UUID). WebSocket connections set it once per connection
through `set_correlation_id` so every log line of that connection is tagged.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# Context variable for storing correlation ID per request or connection
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add correlation IDs to HTTP requests.

    This middleware:
    - Extracts correlation ID from X-Correlation-ID header or generates new 8-char UUID
    - Stores correlation ID in request.state.request_id
    - Stores correlation ID in context variable for logging
    - Adds correlation ID to response headers for client tracking
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        cid = request.headers.get("X-Correlation-ID", str(uuid.uuid4())[:8])
        cid = cid[:8]

        request.state.request_id = cid
        correlation_id.set(cid)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = cid

        return response


def set_correlation_id(cid: str) -> None:
    """Bind a correlation ID (truncated to 8 chars) to the current context."""
    correlation_id.set(cid[:8])


def get_correlation_id() -> str:
    """
    Get the correlation ID for the current request or connection context.

    Returns:
        The correlation ID string, or empty string if not set.
    """
    return correlation_id.get()
