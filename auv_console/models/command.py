"""Command execution data models."""

from dataclasses import dataclass
from enum import Enum


class ExecutionMode(str, Enum):
    """How a remote command's output is handled."""

    CAPTURED = "captured"
    STREAMED = "streamed"


@dataclass
class ExecutionResult:
    """Result of a remote command execution.

    ``output`` is empty for streamed runs since every line already went to
    the log sink. ``error`` is set when the remote process could not be run.
    """

    command: str
    mode: ExecutionMode
    returncode: int
    output: str = ""
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.returncode == 0 and self.error is None
