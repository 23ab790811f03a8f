"""Configuration management for AUV Console."""

import logging
import os
from contextlib import suppress
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


def parse_services(value: str) -> dict[str, str]:
    """Parse ``name=command;name=command`` into a service map.

    Entries without a name or command are ignored.
    """
    services: dict[str, str] = {}
    for entry in value.split(";"):
        name, sep, command = entry.partition("=")
        name = name.strip()
        command = command.strip()
        if not sep or not name or not command:
            if entry.strip():
                logger.warning("Ignoring malformed service entry: %r", entry)
            continue
        services[name] = command
    return services


@dataclass
class Config:
    """AUV Console configuration."""

    default_host: str | None = None
    default_username: str | None = None
    connect_timeout: float = 10.0
    workspace_root: str = "~/catkin_ws/src"
    script_runner: str = "rosrun"
    # Launch commands run inside detachable sessions on the target. There is
    # no default rosserial command: the serial port differs per vehicle.
    services: dict[str, str] = field(
        default_factory=lambda: {"roscore": "roscore"}
    )
    # Transport configuration
    transport: str = "stdio"  # "http" or "stdio"
    http_host: str = "127.0.0.1"
    http_port: int = 8000

    def __post_init__(self) -> None:
        """Apply AUV_* environment variable overrides."""

        def get_env_number(key: str, kind: type) -> int | float | None:
            if val := os.getenv(key):
                with suppress(ValueError):
                    return kind(val)
                logger.warning("Ignoring invalid %s=%r", key, val)
            return None

        if host := os.getenv("AUV_HOST"):
            self.default_host = host

        if username := os.getenv("AUV_USERNAME"):
            self.default_username = username

        timeout = get_env_number("AUV_CONNECT_TIMEOUT", float)
        if timeout is not None:
            if timeout <= 0:
                logger.warning(
                    "AUV_CONNECT_TIMEOUT must be > 0, got %s. Using default: %s",
                    timeout,
                    self.connect_timeout,
                )
            else:
                self.connect_timeout = timeout

        if root := os.getenv("AUV_WORKSPACE_ROOT"):
            self.workspace_root = root

        if runner := os.getenv("AUV_SCRIPT_RUNNER"):
            self.script_runner = runner

        if services := os.getenv("AUV_SERVICES"):
            self.services = parse_services(services)

        transport = os.getenv("AUV_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            self.transport = transport

        if http_host := os.getenv("AUV_HTTP_HOST"):
            self.http_host = http_host

        http_port = get_env_number("AUV_HTTP_PORT", int)
        if http_port is not None:
            self.http_port = int(http_port)

        logger.debug(
            "Config initialized: transport=%s, workspace_root=%s, "
            "connect_timeout=%s, services=%s",
            self.transport,
            self.workspace_root,
            self.connect_timeout,
            ", ".join(sorted(self.services)) or "(none)",
        )
