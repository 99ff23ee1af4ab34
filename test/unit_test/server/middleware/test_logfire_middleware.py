"""
Unit tests for Logfire middleware.

This test suite covers:
- Request/response processing
- Duration header injection
- Error tracking
- Slow request detection
"""

from itertools import chain, repeat
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from holyspots_admin.server.middleware.logfire_middleware import SLOW_REQUEST_MS, LogfireMiddleware

MODULE = "holyspots_admin.server.middleware.logfire_middleware"


@pytest.fixture
def mock_request():
    request = AsyncMock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/tables/spots/records"
    request.state = MagicMock()
    return request


class TestLogfireMiddlewareDispatch:
    @pytest.mark.asyncio
    async def test_successful_request_is_logged(self, mock_request):
        async def call_next(request):
            return Response(content="ok", status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())
        with patch(f"{MODULE}.log_api_request") as mock_log:
            response = await middleware.dispatch(mock_request, call_next)

        assert response.status_code == 200
        assert "X-Process-Time" in response.headers
        kwargs = mock_log.call_args[1]
        assert kwargs["method"] == "GET"
        assert kwargs["path"] == "/api/v1/tables/spots/records"
        assert kwargs["status_code"] == 200
        assert kwargs["duration_ms"] >= 0

    @pytest.mark.asyncio
    async def test_exception_is_logged_and_reraised(self, mock_request):
        async def call_next(request):
            raise RuntimeError("boom")

        middleware = LogfireMiddleware(app=AsyncMock())
        with patch(f"{MODULE}.log_api_request") as mock_log, patch(f"{MODULE}.logger") as mock_logger:
            with pytest.raises(RuntimeError):
                await middleware.dispatch(mock_request, call_next)

        assert mock_log.call_args[1]["status_code"] == 500
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_slow_request_warns(self, mock_request):
        async def call_next(request):
            return Response(status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())
        clock = chain([0.0], repeat((SLOW_REQUEST_MS + 500) / 1000))
        with patch(f"{MODULE}.time.time", side_effect=lambda: next(clock)), patch(
            f"{MODULE}.log_api_request"
        ), patch(f"{MODULE}.logger") as mock_logger:
            await middleware.dispatch(mock_request, call_next)

        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]

    @pytest.mark.asyncio
    async def test_fast_request_does_not_warn(self, mock_request):
        async def call_next(request):
            return Response(status_code=204)

        middleware = LogfireMiddleware(app=AsyncMock())
        with patch(f"{MODULE}.log_api_request"), patch(f"{MODULE}.logger") as mock_logger:
            await middleware.dispatch(mock_request, call_next)

        mock_logger.warning.assert_not_called()
