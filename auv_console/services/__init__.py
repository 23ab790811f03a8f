"""Services for AUV Console."""

from auv_console.services.discovery import (
    build_listing_command,
    build_run_command,
    discover_scripts,
    invoke,
    parse_listing,
)
from auv_console.services.errors import (
    ChannelError,
    ConnectError,
    ConsoleError,
    DiscoveryError,
    NotConnectedError,
    RemoteExecutionError,
)
from auv_console.services.executors import execute
from auv_console.services.log_sink import LogSink
from auv_console.services.session import SessionManager, build_service_command
from auv_console.services.state import (
    get_config,
    get_deps,
    reset_state,
    set_deps,
)
from auv_console.services.transport import (
    close_connection,
    open_channel,
    open_connection,
)

__all__ = [
    "ChannelError",
    "ConnectError",
    "ConsoleError",
    "DiscoveryError",
    "LogSink",
    "NotConnectedError",
    "RemoteExecutionError",
    "SessionManager",
    "build_listing_command",
    "build_run_command",
    "build_service_command",
    "close_connection",
    "discover_scripts",
    "execute",
    "get_config",
    "get_deps",
    "invoke",
    "open_channel",
    "open_connection",
    "parse_listing",
    "reset_state",
    "set_deps",
]
