"""Target reachability checks."""

import asyncio

from auv_console.models import SSH_PORT


async def check_host_online(
    hostname: str, port: int = SSH_PORT, timeout: float = 2.0
) -> bool:
    """Check if the target accepts TCP connections on its SSH port.

    Args:
        hostname: Host to check.
        port: Port to connect to.
        timeout: Connection timeout in seconds.

    Returns:
        True if host is reachable, False otherwise.
    """
    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(hostname, port),
            timeout=timeout,
        )
        writer.close()
        await writer.wait_closed()
        return True
    except (TimeoutError, asyncio.TimeoutError, OSError):
        return False
