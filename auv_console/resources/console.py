"""Read-only console resources: the log pane and session status."""

import json

from auv_console.services import get_deps
from auv_console.utils.console import format_log_lines


async def logs_resource() -> str:
    """Full console log, oldest first."""
    deps = get_deps()
    return format_log_lines(deps.sink.lines()) or "(log is empty)"


async def status_resource() -> str:
    """Session status as JSON."""
    deps = get_deps()
    status = deps.session.status()
    status["screen"] = deps.menu.screen.value
    status["log_lines"] = len(deps.sink)
    return json.dumps(status, indent=2)
