"""Screen/menu state machine turning operator selections into session calls.

Screens::

    MAIN --"1"--> CONNECT_FORM --submit--> MAIN
    MAIN --"4"--> (discovery) --> SCRIPT_PICKER --choose--> MAIN
    any --back--> MAIN
    any --quit--> EXITED

Remote work runs in background tasks; results reach the operator only
through the log sink, never as return values of the selection calls.
"""

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from auv_console.models import TargetHost

if TYPE_CHECKING:
    from auv_console.models import ScriptCandidate
    from auv_console.services.log_sink import LogSink
    from auv_console.services.session import SessionManager

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    MAIN = "main"
    CONNECT_FORM = "connect_form"
    SCRIPT_PICKER = "script_picker"
    EXITED = "exited"


class Action(str, Enum):
    CONNECT = "connect"
    START_SERVICE = "start_service"
    RUN_SCRIPT = "run_script"
    DISCONNECT = "disconnect"
    QUIT = "quit"


@dataclass(frozen=True)
class MenuItem:
    """One entry of the main menu."""

    key: str
    label: str
    description: str
    action: Action
    service: str | None = None


BASE_MENU = (
    MenuItem("1", "Connect to Jetson", "Establish an SSH connection", Action.CONNECT),
    MenuItem(
        "2",
        "Start ROS Core",
        "Run roscore in a background session",
        Action.START_SERVICE,
        service="roscore",
    ),
    MenuItem(
        "3",
        "Start Rosserial",
        "Run the rosserial client",
        Action.START_SERVICE,
        service="rosserial",
    ),
    MenuItem("4", "Run a Script", "Select and run a ROS node", Action.RUN_SCRIPT),
)

TRAILING_MENU = (
    MenuItem("d", "Disconnect", "Close the SSH connection", Action.DISCONNECT),
    MenuItem("q", "Quit", "Exit the application", Action.QUIT),
)


class ConsoleMenu:
    """Sequences operator input into SessionManager calls."""

    def __init__(self, session: "SessionManager", sink: "LogSink") -> None:
        self.session = session
        self.sink = sink
        self.screen = Screen.MAIN
        self._candidates: tuple["ScriptCandidate", ...] = ()
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def candidates(self) -> tuple["ScriptCandidate", ...]:
        """Scripts offered by the picker, in discovery order."""
        return self._candidates

    @property
    def pending(self) -> int:
        """Number of background operations still running."""
        return len(self._tasks)

    def items(self) -> list[MenuItem]:
        """Main menu entries, including extra configured services."""
        items = list(BASE_MENU)
        builtin = {item.service for item in BASE_MENU if item.service}
        extra = sorted(set(self.session.config.services) - builtin)
        for offset, name in enumerate(extra, start=len(BASE_MENU) + 1):
            items.append(
                MenuItem(
                    str(offset),
                    f"Start {name}",
                    f"Run {name} in a background session",
                    Action.START_SERVICE,
                    service=name,
                )
            )
        items.extend(TRAILING_MENU)
        return items

    def spawn(
        self, coro: Coroutine[Any, Any, Any], name: str
    ) -> asyncio.Task[Any]:
        """Run an operation in the background, keeping a reference to it."""
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug("Background task %s cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Background task %s crashed", task.get_name(), exc_info=exc
            )
            self.sink.error(f"{task.get_name()} failed: {exc}")

    async def wait_idle(self) -> None:
        """Wait for every background operation to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def select(self, key: str) -> asyncio.Task[Any] | None:
        """Handle a main-menu selection.

        Returns:
            The spawned background task, or None if nothing was started.
        """
        if self.screen is not Screen.MAIN:
            self.sink.warning(f"Menu selection '{key}' ignored on {self.screen.value}")
            return None

        item = next((i for i in self.items() if i.key == key), None)
        if item is None:
            self.sink.warning(f"Unknown menu option '{key}'")
            return None

        logger.debug("Menu selection %s (%s)", item.key, item.action.value)
        if item.action is Action.CONNECT:
            self.screen = Screen.CONNECT_FORM
            return None
        if item.action is Action.START_SERVICE and item.service:
            return self.spawn(
                self.session.run_service(item.service), f"start {item.service}"
            )
        if item.action is Action.RUN_SCRIPT:
            return self.spawn(self.open_script_picker(), "script discovery")
        if item.action is Action.DISCONNECT:
            return self.spawn(self.session.disconnect(), "disconnect")
        return self.spawn(self.quit(), "quit")

    def submit_connect(
        self, hostname: str, username: str, password: str
    ) -> asyncio.Task[Any] | None:
        """Submit the connect form and dial in the background."""
        if self.screen is not Screen.CONNECT_FORM:
            self.sink.warning("Connect form is not open")
            return None

        self.screen = Screen.MAIN
        host = TargetHost(hostname=hostname, username=username, password=password)
        return self.spawn(self.session.connect(host), "connect")

    async def open_script_picker(self) -> tuple["ScriptCandidate", ...]:
        """Discover scripts and show the picker if any were found."""
        self._candidates = tuple(await self.session.discover_scripts())
        if self._candidates and self.screen is Screen.MAIN:
            self.screen = Screen.SCRIPT_PICKER
        return self._candidates

    def choose_script(self, index: int) -> asyncio.Task[Any] | None:
        """Run the picker entry at ``index`` in the background."""
        if self.screen is not Screen.SCRIPT_PICKER:
            self.sink.warning("Script picker is not open")
            return None

        if not 0 <= index < len(self._candidates):
            self.sink.warning(
                f"No script #{index + 1}; choose 1-{len(self._candidates)}"
            )
            return None

        candidate = self._candidates[index]
        self.screen = Screen.MAIN
        return self.spawn(self.session.run_script(candidate), f"run {candidate.label}")

    def reopen_picker(self) -> bool:
        """Show the last discovery result again without re-listing."""
        if self._candidates and self.screen is not Screen.EXITED:
            self.screen = Screen.SCRIPT_PICKER
            return True
        return False

    def back(self) -> None:
        """Leave a form or picker without acting."""
        if self.screen is not Screen.EXITED:
            self.screen = Screen.MAIN

    async def quit(self) -> None:
        """Shut the session down; no further selections are accepted."""
        self.screen = Screen.EXITED
        await self.session.shutdown()
