"""Single SSH transport to the onboard computer.

Host key verification is skipped on purpose: the console talks to one
vehicle over a tethered/private link whose key changes on every reflash.
This is an accepted trust trade-off and is logged on every connect.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

import asyncssh

from auv_console.services.errors import ChannelError, ConnectError

if TYPE_CHECKING:
    from auv_console.models import TargetHost

logger = logging.getLogger(__name__)


async def open_connection(
    host: "TargetHost",
    connect_timeout: float = 10.0,
) -> asyncssh.SSHClientConnection:
    """Dial and authenticate with the target using a password.

    Args:
        host: Target connection parameters
        connect_timeout: Seconds allowed for dial plus auth handshake

    Returns:
        Authenticated SSH connection

    Raises:
        ConnectError: On dial, auth or timeout failure. Never retried.
    """
    logger.warning(
        "Host key verification disabled for %s (known_hosts=None)",
        host.hostname,
    )
    logger.info("Opening SSH connection to %s", host.label)
    try:
        conn = await asyncio.wait_for(
            asyncssh.connect(
                host.hostname,
                port=host.port,
                username=host.username,
                password=host.password,
                known_hosts=None,
                client_keys=None,
            ),
            timeout=connect_timeout,
        )
    except asyncio.TimeoutError as e:
        raise ConnectError(
            host.label, f"timed out after {connect_timeout:g}s"
        ) from e
    except asyncssh.PermissionDenied as e:
        raise ConnectError(host.label, f"authentication failed: {e.reason}") from e
    except (OSError, ValueError, asyncssh.Error) as e:
        # ValueError covers hostnames the IDNA encoder rejects
        raise ConnectError(host.label, str(e) or type(e).__name__) from e

    logger.info("SSH connection established to %s", host.label)
    return conn


async def open_channel(
    conn: asyncssh.SSHClientConnection,
    command: str,
) -> asyncssh.SSHClientProcess:
    """Start ``command`` on a fresh session channel.

    stderr is merged into stdout. The caller owns the returned process and
    must close it.

    Raises:
        ChannelError: If the channel could not be opened.
    """
    try:
        return await conn.create_process(
            command,
            stderr=asyncssh.STDOUT,
            errors="replace",
        )
    except (OSError, asyncssh.Error) as e:
        reason = getattr(e, "reason", "") or str(e) or type(e).__name__
        raise ChannelError(command, reason) from e


async def close_channel(process: asyncssh.SSHClientProcess) -> None:
    """Release a command channel."""
    process.close()
    try:
        await process.wait_closed()
    except (OSError, asyncssh.Error) as e:
        logger.debug("Channel close reported %s", e)


async def close_connection(conn: asyncssh.SSHClientConnection | None) -> None:
    """Close the transport and all of its channels.

    ``None`` and already-closed connections are no-ops.
    """
    if conn is None or conn.is_closed():
        return

    conn.close()
    try:
        await conn.wait_closed()
    except (OSError, asyncssh.Error) as e:
        logger.debug("Connection close reported %s", e)
