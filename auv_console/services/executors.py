"""Remote command execution in captured or streamed mode."""

import logging
from typing import TYPE_CHECKING

from auv_console.models import ExecutionMode, ExecutionResult
from auv_console.services.errors import NotConnectedError
from auv_console.services.transport import close_channel, open_channel

if TYPE_CHECKING:
    import asyncssh

    from auv_console.services.log_sink import LogSink

logger = logging.getLogger(__name__)


def _returncode(completed: "asyncssh.SSHCompletedProcess") -> int:
    """Exit status of a finished process, -1 if the target reported none."""
    returncode = completed.returncode
    if returncode is None:
        return -1
    return int(returncode)


async def run_captured(
    conn: "asyncssh.SSHClientConnection",
    command: str,
) -> ExecutionResult:
    """Run a command to completion and buffer its combined output."""
    process = await open_channel(conn, command)
    try:
        output = await process.stdout.read()
        completed = await process.wait(check=False)
    finally:
        await close_channel(process)

    return ExecutionResult(
        command=command,
        mode=ExecutionMode.CAPTURED,
        returncode=_returncode(completed),
        output=output or "",
    )


async def run_streamed(
    conn: "asyncssh.SSHClientConnection",
    command: str,
    sink: "LogSink",
) -> ExecutionResult:
    """Run a command, forwarding each output line to the sink as it arrives.

    A final success or error line is appended once the remote process exits.
    """
    sink.info(f"$ {command}")
    process = await open_channel(conn, command)
    line_count = 0
    try:
        async for line in process.stdout:
            sink.info(line.rstrip("\r\n"))
            line_count += 1
        completed = await process.wait(check=False)
    finally:
        await close_channel(process)

    result = ExecutionResult(
        command=command,
        mode=ExecutionMode.STREAMED,
        returncode=_returncode(completed),
    )
    logger.debug("Streamed %d line(s) from '%s'", line_count, command)
    if result.success:
        sink.success(f"Finished: {command}")
    else:
        sink.error(f"Exited with status {result.returncode}: {command}")
    return result


async def execute(
    conn: "asyncssh.SSHClientConnection | None",
    command: str,
    mode: ExecutionMode,
    sink: "LogSink",
) -> ExecutionResult:
    """Execute a command on a fresh channel.

    Args:
        conn: Live connection, or None when disconnected
        command: Remote shell command line
        mode: CAPTURED buffers output, STREAMED forwards it line by line
        sink: Output sink for streamed lines

    Returns:
        ExecutionResult with exit status (and output for captured runs)

    Raises:
        NotConnectedError: If conn is None; no channel is opened.
        ChannelError: If the channel could not be opened.
    """
    if conn is None:
        raise NotConnectedError(command)

    logger.info("Executing (%s): %s", mode.value, command)
    if mode is ExecutionMode.STREAMED:
        return await run_streamed(conn, command, sink)
    return await run_captured(conn, command)
