"""Exception types for remote console operations."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from auv_console.models import ExecutionResult


class ConsoleError(Exception):
    """Base class for remote console failures."""


class ConnectError(ConsoleError):
    """Failed to dial or authenticate with the target."""

    def __init__(self, target: str, reason: str):
        """Initialize connect error.

        Args:
            target: user@host:port of the target
            reason: Human readable cause
        """
        self.target = target
        self.reason = reason
        super().__init__(f"Cannot connect to {target}: {reason}")


class NotConnectedError(ConsoleError):
    """Operation attempted without a live connection."""

    def __init__(self, operation: str = "command"):
        self.operation = operation
        super().__init__(f"Cannot run {operation}: not connected")


class ChannelError(ConsoleError):
    """A session channel could not be opened for a command."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Cannot open channel for '{command}': {reason}")


class DiscoveryError(ConsoleError):
    """The workspace listing command failed."""


class RemoteExecutionError(ConsoleError):
    """Remote command exited non-zero or failed to run."""

    def __init__(self, result: "ExecutionResult"):
        self.result = result
        detail = result.error or f"exit status {result.returncode}"
        super().__init__(f"'{result.command}' failed: {detail}")
