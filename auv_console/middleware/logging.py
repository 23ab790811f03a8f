"""Logging middleware for tool and resource requests."""

import json
import logging
import time
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from auv_console.middleware.base import ConsoleMiddleware

# Arguments never written to logs
REDACTED_ARGS = frozenset({"password"})


class LoggingMiddleware(ConsoleMiddleware):
    """Logs tool calls and resource reads with timing.

    Passwords passed to the connect tool are redacted.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_payloads: bool = False,
        max_payload_length: int = 1000,
        slow_threshold_ms: float = 1000.0,
    ) -> None:
        """Initialize logging middleware.

        Args:
            logger: Optional custom logger.
            include_payloads: Whether to log response payloads.
            max_payload_length: Maximum payload length before truncation.
            slow_threshold_ms: Threshold in ms for slow request warnings.
        """
        super().__init__(logger=logger)
        self.include_payloads = include_payloads
        self.max_payload_length = max_payload_length
        self.slow_threshold_ms = slow_threshold_ms

    def _truncate(self, data: Any) -> str:
        try:
            text = json.dumps(data, default=str)
        except (TypeError, ValueError):
            text = str(data)

        if len(text) > self.max_payload_length:
            return text[: self.max_payload_length] + "... [truncated]"
        return text

    def _format_args(self, args: dict[str, Any] | None) -> str:
        """Format tool arguments for logging."""
        if not args:
            return "()"
        parts = []
        for key, value in args.items():
            if key in REDACTED_ARGS:
                value = "***"
            elif isinstance(value, str) and len(value) > 50:
                value = value[:50] + "..."
            parts.append(f"{key}={value!r}")
        return f"({', '.join(parts)})"

    def _format_duration(self, duration_ms: float) -> str:
        if duration_ms >= self.slow_threshold_ms:
            return f"{duration_ms:.1f}ms SLOW!"
        return f"{duration_ms:.1f}ms"

    def _summarize_result(self, result: Any) -> str:
        """Create a brief summary of a result for logging."""
        if result is None:
            return "null"
        if isinstance(result, str):
            lines = result.count("\n") + 1
            if lines > 1:
                return f"{len(result)} chars, {lines} lines"
            return f"{len(result)} chars"
        if isinstance(result, (list, tuple)):
            return f"{len(result)} items"
        if hasattr(result, "content"):
            content = result.content
            if isinstance(content, (list, tuple)):
                return f"{len(content)} content item(s)"
            return "content"
        return type(result).__name__

    async def _timed(
        self,
        label: str,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Run the next handler and log its outcome and duration."""
        start = time.perf_counter()
        try:
            result = await call_next(context)
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            self.logger.error(
                "!!! %s -> %s: %s [%s]",
                label,
                type(e).__name__,
                str(e),
                self._format_duration(duration_ms),
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        log_level = (
            logging.WARNING if duration_ms >= self.slow_threshold_ms else logging.INFO
        )
        self.logger.log(
            log_level,
            "<<< %s -> %s [%s]",
            label,
            self._summarize_result(result),
            self._format_duration(duration_ms),
        )
        if self.include_payloads and result is not None:
            self.logger.debug("    Result: %s", self._truncate(result))
        return result

    async def on_call_tool(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log tool calls with name, arguments, and timing."""
        tool_name = getattr(context.message, "name", "unknown")
        args = getattr(context.message, "arguments", None)
        self.logger.info(">>> TOOL: %s%s", tool_name, self._format_args(args))
        return await self._timed(f"TOOL: {tool_name}", context, call_next)

    async def on_read_resource(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log resource reads with URI and timing."""
        uri = getattr(context.message, "uri", "unknown")
        self.logger.info(">>> RESOURCE: %s", uri)
        return await self._timed(f"RESOURCE: {uri}", context, call_next)
