"""Discovery of runnable executables in the target's ROS workspace."""

import logging
from typing import TYPE_CHECKING

from auv_console.models import ExecutionMode, ExecutionResult, ScriptCandidate
from auv_console.services.errors import DiscoveryError
from auv_console.services.executors import execute
from auv_console.utils.shell import quote_arg, quote_remote_path

if TYPE_CHECKING:
    import asyncssh

    from auv_console.services.log_sink import LogSink

logger = logging.getLogger(__name__)

LISTING_DEPTH = 2


def build_listing_command(workspace_root: str) -> str:
    """Command listing executables one level below each package directory."""
    return (
        f"find {quote_remote_path(workspace_root)} "
        f"-maxdepth {LISTING_DEPTH} -type f -executable"
    )


def parse_listing(text: str) -> list[ScriptCandidate]:
    """Turn ``find`` output into script candidates.

    Lines yielding fewer than two path segments cannot name a package and
    are skipped without error, as are diagnostics ``find`` writes to stderr.
    """
    candidates: list[ScriptCandidate] = []
    skipped = 0

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith("find:"):
            skipped += 1
            continue

        parts = [p for p in line.split("/") if p]
        if len(parts) < 2:
            skipped += 1
            continue

        candidates.append(
            ScriptCandidate(package=parts[-2], executable=parts[-1], path=line)
        )

    if skipped:
        logger.debug("Skipped %d malformed listing line(s)", skipped)
    return candidates


def build_run_command(candidate: ScriptCandidate, runner: str = "rosrun") -> str:
    """Package-qualified run command with both names quoted as single tokens."""
    return (
        f"{runner} {quote_arg(candidate.package)} {quote_arg(candidate.executable)}"
    )


async def discover_scripts(
    conn: "asyncssh.SSHClientConnection | None",
    workspace_root: str,
    sink: "LogSink",
) -> list[ScriptCandidate]:
    """List executables under the workspace root.

    Returns:
        Candidates in listing order; empty when nothing is executable.

    Raises:
        NotConnectedError: If conn is None.
        ChannelError: If the listing channel could not be opened.
        DiscoveryError: If the listing exited non-zero with nothing usable.
    """
    command = build_listing_command(workspace_root)
    result = await execute(conn, command, ExecutionMode.CAPTURED, sink)

    candidates = parse_listing(result.output)

    if not result.success:
        if not candidates:
            detail = result.output.strip() or f"exit status {result.returncode}"
            raise DiscoveryError(f"'{command}' failed: {detail}")
        # Unreadable subdirectories make find exit 1 after a usable listing
        logger.warning(
            "Listing exited with status %d, keeping %d partial result(s)",
            result.returncode,
            len(candidates),
        )

    logger.info(
        "Discovered %d script(s) under %s", len(candidates), workspace_root
    )
    return candidates


async def invoke(
    conn: "asyncssh.SSHClientConnection | None",
    candidate: ScriptCandidate,
    sink: "LogSink",
    runner: str = "rosrun",
) -> ExecutionResult:
    """Run a discovered script with live output."""
    command = build_run_command(candidate, runner)
    return await execute(conn, command, ExecutionMode.STREAMED, sink)
