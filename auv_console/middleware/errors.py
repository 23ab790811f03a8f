"""Error reporting middleware: request failures reach the operator's log."""

import logging
import traceback
from collections.abc import Callable
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from auv_console.middleware.base import ConsoleMiddleware

ErrorCallback = Callable[[Exception, MiddlewareContext], None]


class ErrorHandlingMiddleware(ConsoleMiddleware):
    """Log a failed request, hand it to ``error_callback``, re-raise.

    The server wires the callback to the log sink, so a tool that blows up
    outside the session's own error handling still shows up in
    ``show_logs``.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
        error_callback: ErrorCallback | None = None,
    ) -> None:
        super().__init__(logger=logger)
        self.include_traceback = include_traceback
        self.error_callback = error_callback

    def _describe(self, error: Exception, context: MiddlewareContext) -> str:
        name = getattr(context.message, "name", None) or getattr(
            context.message, "uri", None
        )
        target = f"{context.method} {name}" if name else context.method
        return f"{target}: {type(error).__name__}: {error}"

    async def on_message(self, context: MiddlewareContext, call_next: Any) -> Any:
        try:
            return await call_next(context)
        except Exception as e:
            description = self._describe(e, context)
            if self.include_traceback:
                self.logger.error(
                    "Request failed %s\n%s", description, traceback.format_exc()
                )
            else:
                self.logger.error("Request failed %s", description)

            if self.error_callback is not None:
                try:
                    self.error_callback(e, context)
                except Exception as callback_error:
                    self.logger.warning("Error callback failed: %s", callback_error)
            raise
