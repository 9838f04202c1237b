"""
Error handler decorators for unified exception handling across protocols.

These decorators convert AppException instances into HTTP errors or
WebSocket `error` frames, so handlers need no try/except of their own.
"""

from functools import wraps
from typing import Any, Callable

from fastapi import HTTPException

from translation_relay.exceptions import AppException
from translation_relay.logging import logger


def handle_http_errors(func: Callable) -> Callable:
    """
    Decorator for HTTP endpoints to convert AppException to HTTPException.

    Example:
        ```python
        @router.post("/api/translate-text")
        @handle_http_errors
        async def translate_text(body: TranslateTextRequest, ...) -> ...:
            ...  # raise ProviderError -> 502
        ```
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except AppException as ex:
            logger.warning(
                f"AppException in {func.__name__}: {ex.message}",
                extra={"exception_type": type(ex).__name__},
            )
            raise HTTPException(
                status_code=ex.http_status,
                detail=ex.message,
            )

    return wrapper


def handle_ws_errors(func: Callable) -> Callable:
    """
    Decorator for WebSocket endpoint receive handlers.

    An AppException is reported to the sender as an `error` frame. Any
    other exception is logged with its traceback and reported as a generic
    `error` frame. Either way the connection stays open and nobody else is
    affected.

    The decorated method's owner must provide `send_error(message)`.
    """

    @wraps(func)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        try:
            return await func(self, *args, **kwargs)
        except AppException as ex:
            logger.info(
                f"Rejected frame in {func.__name__}: {ex.message}",
                extra={"exception_type": type(ex).__name__},
            )
            await self.send_error(ex.message)
        except Exception:
            logger.exception(f"Unexpected error in {func.__name__}")
            await self.send_error("Message processing error")

    return wrapper
