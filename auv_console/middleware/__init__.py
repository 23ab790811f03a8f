"""AUV Console middleware components."""

from auv_console.middleware.base import ConsoleMiddleware
from auv_console.middleware.errors import ErrorHandlingMiddleware
from auv_console.middleware.logging import LoggingMiddleware

__all__ = [
    "ConsoleMiddleware",
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
]
