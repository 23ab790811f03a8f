"""Owner of the single remote connection and its lifecycle.

State machine::

    DISCONNECTED --connect--> CONNECTING --ok--> CONNECTED
    CONNECTING --failure--> DISCONNECTED
    CONNECTED --disconnect--> DISCONNECTED
    any --shutdown--> CLOSED (terminal)

Locking Strategy:
- `_lock` serializes lifecycle transitions (connect, disconnect, shutdown)
- Remote operations read a snapshot of the connection handle without the
  lock, so long streamed runs never hold up a reconnect or each other

Every failure is converted to a sink line at this boundary; nothing here
raises to the caller except task cancellation.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import asyncssh

from auv_console.models import ExecutionMode, SessionState
from auv_console.services import discovery
from auv_console.services.errors import (
    ConnectError,
    ConsoleError,
    NotConnectedError,
    RemoteExecutionError,
)
from auv_console.services.executors import execute
from auv_console.services.transport import close_connection, open_connection
from auv_console.utils.shell import quote_arg
from auv_console.utils.validation import validate_host

if TYPE_CHECKING:
    from auv_console.config import Config
    from auv_console.models import ExecutionResult, ScriptCandidate, TargetHost
    from auv_console.services.log_sink import LogSink

logger = logging.getLogger(__name__)

# Failures an operation boundary converts into log lines
OPERATION_ERRORS = (ConsoleError, OSError, asyncssh.Error)


def build_service_command(name: str, launch_command: str) -> str:
    """Background a launch command in a detached tmux session named ``name``.

    Operators attach with ``tmux attach -t <name>`` on the target.
    """
    return f"tmux new-session -d -s {quote_arg(name)} {quote_arg(launch_command)}"


class SessionManager:
    """Connection lifecycle plus the high-level remote operations."""

    def __init__(self, config: "Config", sink: "LogSink") -> None:
        self.config = config
        self.sink = sink
        self._state = SessionState.DISCONNECTED
        self._connection: asyncssh.SSHClientConnection | None = None
        self._target: "TargetHost | None" = None
        self._lock = asyncio.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def target(self) -> "TargetHost | None":
        return self._target

    @property
    def is_connected(self) -> bool:
        return self._state is SessionState.CONNECTED

    async def connect(self, host: "TargetHost") -> bool:
        """Open the connection, replacing any existing one.

        Returns:
            True once connected, False on any failure.
        """
        if self._state is SessionState.CLOSED:
            self.sink.error("Connect failed: session is closed")
            return False

        try:
            validate_host(host.hostname)
        except ValueError as e:
            self.sink.error(f"Connect failed: {e}")
            return False

        async with self._lock:
            if self._state is SessionState.CLOSED:
                self.sink.error("Connect failed: session is closed")
                return False

            if self._connection is not None and self._target is not None:
                self.sink.info(f"Closing previous connection to {self._target.label}")
                await self._release()

            self._state = SessionState.CONNECTING
            self.sink.info(f"Connecting to {host.label}...")
            try:
                conn = await open_connection(host, self.config.connect_timeout)
            except ConnectError as e:
                self.sink.error(f"Connect failed: {e}")
                return False
            except asyncio.CancelledError:
                self.sink.warning(f"Connect to {host.label} cancelled")
                raise
            else:
                self._connection = conn
                self._target = host
                self._state = SessionState.CONNECTED
            finally:
                if self._connection is None:
                    self._state = SessionState.DISCONNECTED

        self.sink.success(f"Connected to {host.label}")
        return True

    async def disconnect(self) -> None:
        """Close the connection; a later connect is allowed."""
        async with self._lock:
            if self._connection is None or self._target is None:
                self.sink.warning("Disconnect: not connected")
                return

            label = self._target.label
            await self._release()
            self._state = SessionState.DISCONNECTED

        self.sink.info(f"Disconnected from {label}")

    async def shutdown(self) -> None:
        """Release everything and enter the terminal CLOSED state."""
        async with self._lock:
            if self._state is SessionState.CLOSED:
                return

            if self._connection is not None and self._target is not None:
                self.sink.info(f"Closing connection to {self._target.label}")
                await self._release()
            self._state = SessionState.CLOSED

        logger.info("Session closed")

    async def _release(self) -> None:
        """Drop and close the current connection. Caller holds the lock."""
        conn, self._connection = self._connection, None
        self._target = None
        await close_connection(conn)

    def _snapshot(self, operation: str) -> asyncssh.SSHClientConnection | None:
        """Connection handle for an operation, or None after logging why."""
        if self._state is SessionState.CONNECTED and self._connection is not None:
            return self._connection

        self.sink.error(str(NotConnectedError(operation)))
        return None

    async def run_service(self, name: str) -> "ExecutionResult | None":
        """Launch a configured service in a detached session on the target.

        Success means the tmux launcher returned 0, not that the service
        itself is healthy.
        """
        operation = f"start {name}"
        conn = self._snapshot(operation)
        if conn is None:
            return None

        launch_command = self.config.services.get(name)
        if not launch_command:
            self.sink.error(
                f"Cannot {operation}: no launch command configured "
                "(set AUV_SERVICES)"
            )
            return None

        command = build_service_command(name, launch_command)
        self.sink.info(f"Starting {name} in detached session '{name}'")
        try:
            result = await execute(conn, command, ExecutionMode.CAPTURED, self.sink)
        except OPERATION_ERRORS as e:
            self.sink.error(f"Cannot {operation}: {e}")
            return None

        if result.success:
            self.sink.success(f"Started {name}: {command}")
        else:
            output = result.output.strip()
            message = str(RemoteExecutionError(result))
            self.sink.error(f"{message}: {output}" if output else message)
        return result

    async def discover_scripts(self) -> list["ScriptCandidate"]:
        """List runnable executables in the target's workspace."""
        conn = self._snapshot("script discovery")
        if conn is None:
            return []

        root = self.config.workspace_root
        self.sink.info(f"Searching for scripts under {root}")
        try:
            candidates = await discovery.discover_scripts(conn, root, self.sink)
        except OPERATION_ERRORS as e:
            self.sink.error(f"Script discovery failed: {e}")
            return []

        if candidates:
            self.sink.info(f"Found {len(candidates)} script(s)")
        else:
            self.sink.warning(f"No executables found under {root}")
        return candidates

    async def run_script(
        self, candidate: "ScriptCandidate"
    ) -> "ExecutionResult | None":
        """Run a discovered script, streaming its output to the sink."""
        conn = self._snapshot(f"run {candidate.label}")
        if conn is None:
            return None

        try:
            return await discovery.invoke(
                conn, candidate, self.sink, self.config.script_runner
            )
        except OPERATION_ERRORS as e:
            self.sink.error(f"Cannot run {candidate.label}: {e}")
            return None

    def status(self) -> dict[str, Any]:
        """Snapshot of the session for display."""
        return {
            "state": self._state.value,
            "target": self._target.label if self._target else None,
            "services": sorted(self.config.services),
            "workspace_root": self.config.workspace_root,
        }
