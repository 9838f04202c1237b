"""
Tests for correlation ID middleware.

This module tests the CorrelationIDMiddleware functionality including
correlation ID generation, header handling, and context variable access.
"""

from unittest.mock import MagicMock

import pytest
from starlette.requests import Request
from starlette.responses import Response

from translation_relay.middlewares.correlation_id import (
    CorrelationIDMiddleware,
    get_correlation_id,
    set_correlation_id,
)


def make_request(headers=None):
    request = MagicMock(spec=Request)
    request.headers = headers or {}
    request.state = MagicMock()
    return request


class TestCorrelationIDMiddleware:
    """Tests for CorrelationIDMiddleware class."""

    @pytest.mark.asyncio
    async def test_middleware_generates_correlation_id(self):
        middleware = CorrelationIDMiddleware(app=MagicMock())

        async def call_next(request):
            return Response(content="test", status_code=200)

        response = await middleware.dispatch(make_request(), call_next)

        assert len(response.headers["X-Correlation-ID"]) == 8

    @pytest.mark.asyncio
    async def test_middleware_uses_provided_correlation_id(self):
        middleware = CorrelationIDMiddleware(app=MagicMock())
        seen = {}

        async def call_next(request):
            seen["cid"] = get_correlation_id()
            return Response(content="test", status_code=200)

        request = make_request({"X-Correlation-ID": "test-cor-long-value"})
        response = await middleware.dispatch(request, call_next)

        assert response.headers["X-Correlation-ID"] == "test-cor"
        assert request.state.request_id == "test-cor"
        assert seen["cid"] == "test-cor"


def test_set_correlation_id_truncates():
    set_correlation_id("0123456789abcdef")

    assert get_correlation_id() == "01234567"
