"""SSH-related data models."""

from dataclasses import dataclass, field
from enum import Enum

SSH_PORT = 22


class SessionState(str, Enum):
    """Lifecycle of the single remote connection."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    CLOSED = "closed"


@dataclass(frozen=True)
class TargetHost:
    """Connection parameters for the onboard computer."""

    hostname: str
    username: str
    password: str = field(default="", repr=False)
    port: int = SSH_PORT

    @property
    def label(self) -> str:
        """user@host:port string used in log lines."""
        return f"{self.username}@{self.hostname}:{self.port}"
