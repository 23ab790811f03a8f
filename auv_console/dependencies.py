"""Dependency injection container for AUV Console."""

from dataclasses import dataclass

from auv_console.config import Config
from auv_console.console.menu import ConsoleMenu
from auv_console.services.log_sink import LogSink
from auv_console.services.session import SessionManager


@dataclass
class Dependencies:
    """Container for AUV Console dependencies.

    Holds the single log sink, the session manager that owns the remote
    connection, and the menu state machine driving it.
    """

    config: Config
    sink: LogSink
    session: SessionManager
    menu: ConsoleMenu

    @classmethod
    def from_config(cls, config: Config) -> "Dependencies":
        """Create dependencies with custom configuration.

        Args:
            config: Custom Config instance

        Returns:
            Dependencies sharing one sink between session and menu
        """
        sink = LogSink()
        session = SessionManager(config, sink)
        menu = ConsoleMenu(session, sink)
        return cls(config=config, sink=sink, session=session, menu=menu)

    async def cleanup(self) -> None:
        """Shut the session down and close the connection."""
        await self.menu.quit()
