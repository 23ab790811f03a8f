"""AUV Console FastMCP server.

A thin wrapper wiring the console tools and resources into an MCP server.
All behaviour lives in the console/, services/ and tools/ modules.
"""

import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from fastmcp.server.middleware import MiddlewareContext
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from auv_console.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from auv_console.resources import logs_resource, status_resource
from auv_console.services import get_deps
from auv_console.tools import (
    connect,
    disconnect,
    list_scripts,
    run_script,
    show_logs,
    start_service,
    target_status,
)
from auv_console.utils.console import ColorfulFormatter


def _configure_logging() -> None:
    """Configure colorful logging for the auv_console package.

    Called at module load time so logging is ready before any logger is
    used, however the server is started.
    """
    log_level = os.getenv("AUV_LOG_LEVEL", "INFO").upper()
    use_colors = os.getenv("AUV_LOG_COLORS", "true").lower() != "false"

    if not sys.stderr.isatty():
        use_colors = False

    console_logger = logging.getLogger("auv_console")
    console_logger.setLevel(getattr(logging, log_level, logging.INFO))

    # Only add handler if not already configured
    if not console_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        console_logger.addHandler(handler)
        console_logger.propagate = False

    for noisy_logger in [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "asyncssh",
        "httpx",
        "httpcore",
        "fastmcp",
        "starlette",
        "anyio",
    ]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


_configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Create the console session on startup and close it on shutdown."""
    deps = get_deps()
    config = deps.config
    logger.info(
        "AUV Console ready (default target=%s, services=%s)",
        config.default_host or "(none)",
        ", ".join(sorted(config.services)) or "(none)",
    )

    try:
        yield {"session": deps.session.status()}
    finally:
        logger.info("AUV Console shutting down")
        await deps.cleanup()
        logger.info("AUV Console shutdown complete")


def _report_to_sink(error: Exception, context: MiddlewareContext) -> None:
    """Copy unexpected request failures into the operator's log."""
    get_deps().sink.error(f"{context.method} failed: {type(error).__name__}: {error}")


def configure_middleware(server: FastMCP) -> None:
    """Configure middleware stack for the server.

    Environment variables:
        AUV_LOG_PAYLOADS: Set to "true" to log response payloads
        AUV_SLOW_THRESHOLD_MS: Threshold for slow request warnings (default: 1000)
        AUV_INCLUDE_TRACEBACK: Set to "true" to include tracebacks in error logs

    Args:
        server: The FastMCP server to configure.
    """
    log_payloads = os.getenv("AUV_LOG_PAYLOADS", "").lower() == "true"
    slow_threshold = float(os.getenv("AUV_SLOW_THRESHOLD_MS", "1000"))
    include_traceback = os.getenv("AUV_INCLUDE_TRACEBACK", "").lower() == "true"

    # First added = innermost
    server.add_middleware(
        ErrorHandlingMiddleware(
            include_traceback=include_traceback,
            error_callback=_report_to_sink,
        )
    )
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=log_payloads,
            slow_threshold_ms=slow_threshold,
        )
    )


def create_server() -> FastMCP:
    """Create and configure the MCP server with tools and resources.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP("auv_console", lifespan=app_lifespan)

    configure_middleware(server)

    for tool in (
        connect,
        start_service,
        list_scripts,
        run_script,
        disconnect,
        show_logs,
        target_status,
    ):
        server.tool()(tool)

    server.resource("console://logs", mime_type="text/plain")(logs_resource)
    server.resource("console://status", mime_type="application/json")(
        status_resource
    )

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
