"""Tests for logging middleware."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from auv_console.middleware.logging import LoggingMiddleware


@pytest.fixture
def mock_tool_context() -> MagicMock:
    """Create a mock middleware context for the connect tool."""
    context = MagicMock()
    context.method = "tools/call"
    context.message = MagicMock()
    context.message.name = "connect"
    context.message.arguments = {"host": "192.168.55.1", "password": "hunter2"}
    return context


@pytest.fixture
def mock_resource_context() -> MagicMock:
    context = MagicMock()
    context.method = "resources/read"
    context.message = MagicMock()
    context.message.uri = "console://logs"
    return context


@pytest.mark.asyncio
async def test_logs_tool_call_and_redacts_password(
    mock_tool_context: MagicMock,
) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)

    await middleware.on_call_tool(mock_tool_context, AsyncMock(return_value="ok"))

    info_calls = str(mock_logger.info.call_args_list)
    assert ">>> TOOL" in info_calls
    assert "192.168.55.1" in info_calls
    assert "hunter2" not in info_calls
    assert "***" in info_calls
    assert "<<< TOOL: connect" in str(mock_logger.log.call_args_list)


@pytest.mark.asyncio
async def test_logs_resource_read(mock_resource_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)

    result = await middleware.on_read_resource(
        mock_resource_context, AsyncMock(return_value="a\nb")
    )

    assert result == "a\nb"
    assert "console://logs" in str(mock_logger.info.call_args_list)
    assert "3 chars, 2 lines" in str(mock_logger.log.call_args_list)


@pytest.mark.asyncio
async def test_logs_and_reraises_errors(mock_tool_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)

    with pytest.raises(RuntimeError):
        await middleware.on_call_tool(
            mock_tool_context, AsyncMock(side_effect=RuntimeError("boom"))
        )

    assert "!!! TOOL: connect" in str(mock_logger.error.call_args_list)


@pytest.mark.asyncio
async def test_slow_calls_log_at_warning(mock_tool_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger, slow_threshold_ms=0.0)

    await middleware.on_call_tool(mock_tool_context, AsyncMock(return_value="ok"))

    level = mock_logger.log.call_args[0][0]
    assert level == 30
    assert "SLOW!" in str(mock_logger.log.call_args)


def test_long_arguments_truncated() -> None:
    middleware = LoggingMiddleware()

    formatted = middleware._format_args({"host": "x" * 80})

    assert "..." in formatted
    assert "x" * 60 not in formatted
