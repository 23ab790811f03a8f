"""Shell command safety utilities."""

import shlex


def quote_arg(arg: str) -> str:
    """Safely quote a shell argument.

    Args:
        arg: Argument to quote

    Returns:
        Shell-safe quoted argument
    """
    return shlex.quote(arg)


def quote_remote_path(path: str) -> str:
    """Quote a remote path while keeping a leading ``~/`` expandable.

    Args:
        path: Remote file system path, possibly home-relative

    Returns:
        Shell-safe path
    """
    if path == "~":
        return path
    if path.startswith("~/"):
        return "~/" + shlex.quote(path[2:])
    return shlex.quote(path)
