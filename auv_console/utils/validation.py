"""Input validation utilities."""

from typing import Final

# Characters that could enable injection if a host string reached a shell
SUSPICIOUS_HOST_CHARS: Final[list[str]] = [
    "/",
    "\\",
    ";",
    "&",
    "|",
    "$",
    "`",
    " ",
    "\n",
    "\r",
    "\x00",
]


def validate_host(host: str) -> str:
    """Validate a target host name or address.

    Args:
        host: The host name to validate

    Returns:
        Validated host name

    Raises:
        ValueError: If host name is invalid
    """
    if not host:
        raise ValueError("Host cannot be empty")

    if len(host) > 253:
        raise ValueError(f"Host name too long: {len(host)} chars")

    for char in SUSPICIOUS_HOST_CHARS:
        if char in host:
            raise ValueError(f"Host contains invalid characters: {host!r}")

    return host
