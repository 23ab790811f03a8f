"""Console tools: each mirrors one entry of the operator menu."""

import asyncio
import logging
from typing import Any

from auv_console.models import SSH_PORT
from auv_console.services import get_deps
from auv_console.utils.console import format_log_lines
from auv_console.utils.ping import check_host_online

logger = logging.getLogger(__name__)


async def _report(task: "asyncio.Task[Any] | None", since: int) -> str:
    """Wait for a background operation and return the lines it logged."""
    deps = get_deps()
    if task is not None:
        await asyncio.wait({task})
    lines = deps.sink.lines(since)
    return format_log_lines(lines) or "(no output)"


async def connect(
    password: str,
    host: str | None = None,
    username: str | None = None,
) -> str:
    """Connect to the onboard computer over SSH (menu option 1).

    Any existing connection is closed first.

    Args:
        password: SSH password for the target user.
        host: Target address. Defaults to AUV_HOST.
        username: Target user. Defaults to AUV_USERNAME.
    """
    deps = get_deps()
    since = len(deps.sink)
    hostname = host or deps.config.default_host
    user = username or deps.config.default_username

    if not hostname or not user:
        deps.sink.error("Connect failed: host and username are required")
        return await _report(None, since)

    deps.menu.back()
    deps.menu.select("1")
    task = deps.menu.submit_connect(hostname, user, password)
    return await _report(task, since)


async def start_service(name: str) -> str:
    """Start a configured service (e.g. roscore) in a detached tmux session.

    Args:
        name: Service name from AUV_SERVICES.
    """
    deps = get_deps()
    since = len(deps.sink)
    item = next(
        (i for i in deps.menu.items() if i.service == name),
        None,
    )
    deps.menu.back()
    if item is None:
        available = ", ".join(sorted(deps.config.services)) or "(none)"
        deps.sink.error(f"Unknown service '{name}'. Available: {available}")
        return await _report(None, since)

    return await _report(deps.menu.select(item.key), since)


async def list_scripts() -> str:
    """Discover executables in the target workspace (menu option 4).

    The returned numbers are the indices accepted by run_script.
    """
    deps = get_deps()
    since = len(deps.sink)
    deps.menu.back()
    candidates = await deps.menu.open_script_picker()

    if not candidates:
        return await _report(None, since)

    lines = [f"Scripts under {deps.config.workspace_root}:"]
    for number, candidate in enumerate(candidates, start=1):
        lines.append(f"  {number:>3}. {candidate.package} {candidate.executable}")
    return "\n".join(lines)


async def run_script(number: int) -> str:
    """Run a script from the last list_scripts result.

    Output streams into the console log; follow it with show_logs.

    Args:
        number: 1-based position in the list_scripts output.
    """
    deps = get_deps()
    since = len(deps.sink)
    deps.menu.reopen_picker()
    task = deps.menu.choose_script(number - 1)
    if task is None:
        return await _report(None, since)

    # Let the launch line reach the sink before replying
    await asyncio.sleep(0)
    return f"Started {task.get_name()}. Follow output with show_logs(since={since})."


async def disconnect() -> str:
    """Close the SSH connection."""
    deps = get_deps()
    since = len(deps.sink)
    deps.menu.back()
    return await _report(deps.menu.select("d"), since)


async def show_logs(since: int = 0) -> str:
    """Return console log lines starting at index ``since``."""
    deps = get_deps()
    lines = deps.sink.lines(since)
    if not lines:
        return f"(no new output; {len(deps.sink)} line(s) total)"
    return format_log_lines(lines)


async def target_status() -> str:
    """Report session state and whether the target's SSH port answers."""
    deps = get_deps()
    status = deps.session.status()
    hostname = deps.session.target.hostname if deps.session.target else None
    hostname = hostname or deps.config.default_host

    lines = [
        f"State:     {status['state']}",
        f"Target:    {status['target'] or '(none)'}",
        f"Services:  {', '.join(status['services']) or '(none)'}",
        f"Workspace: {status['workspace_root']}",
        f"Running:   {deps.menu.pending} background operation(s)",
    ]
    if hostname:
        online = await check_host_online(hostname, SSH_PORT)
        lines.append(
            f"Reachable: {'yes' if online else 'no'} ({hostname}:{SSH_PORT})"
        )
    return "\n".join(lines)
