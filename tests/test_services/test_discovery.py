"""Tests for workspace script discovery."""

import shlex
from typing import Any

import pytest

from auv_console.models import ScriptCandidate
from auv_console.services.discovery import (
    build_listing_command,
    build_run_command,
    discover_scripts,
    invoke,
    parse_listing,
)
from auv_console.services.errors import DiscoveryError, NotConnectedError
from auv_console.services.log_sink import LogSink


def test_listing_command_is_exact_for_home_workspace() -> None:
    """The default listing command is byte-for-byte what operators expect."""
    assert (
        build_listing_command("~/catkin_ws/src")
        == "find ~/catkin_ws/src -maxdepth 2 -type f -executable"
    )


def test_listing_command_quotes_unsafe_root() -> None:
    """A root with spaces stays a single argument."""
    command = build_listing_command("/opt/my ws")

    assert command == "find '/opt/my ws' -maxdepth 2 -type f -executable"


def test_parse_listing_skips_malformed_lines() -> None:
    """Lines without a package segment and blank lines are dropped."""
    text = "\n".join(["/a/pkgX/exeY", "bad", "", "/p/q/r/exeZ"])

    candidates = parse_listing(text)

    assert [(c.package, c.executable) for c in candidates] == [
        ("pkgX", "exeY"),
        ("r", "exeZ"),
    ]


def test_parse_listing_trims_and_keeps_order() -> None:
    """Whitespace is trimmed and listing order preserved."""
    text = "  /ws/nav/planner.py  \r\n/ws/arm/grip\n\n   \n"

    candidates = parse_listing(text)

    assert candidates == [
        ScriptCandidate("nav", "planner.py", "/ws/nav/planner.py"),
        ScriptCandidate("arm", "grip", "/ws/arm/grip"),
    ]


def test_parse_listing_ignores_find_diagnostics() -> None:
    """Permission errors from find are not mistaken for scripts."""
    text = "find: '/ws/secret': Permission denied\n/ws/nav/planner.py\n"

    candidates = parse_listing(text)

    assert [c.label for c in candidates] == ["nav/planner.py"]


def test_parse_listing_empty_output() -> None:
    assert parse_listing("") == []


def test_run_command_keeps_names_as_two_tokens() -> None:
    """Crafted file names cannot inject extra shell words."""
    candidate = ScriptCandidate(
        package="pkg; reboot",
        executable="$(rm -rf ~)",
        path="/ws/pkg; reboot/$(rm -rf ~)",
    )

    command = build_run_command(candidate)

    assert shlex.split(command) == ["rosrun", "pkg; reboot", "$(rm -rf ~)"]


def test_run_command_plain_names() -> None:
    candidate = ScriptCandidate("nav", "planner.py", "/ws/nav/planner.py")

    assert build_run_command(candidate) == "rosrun nav planner.py"


@pytest.mark.asyncio
async def test_discover_scripts_runs_listing(
    sink: LogSink, make_connection: Any, make_process: Any
) -> None:
    """Discovery issues one listing command and parses its output."""
    listing = ["/home/jetson/catkin_ws/src/nav/planner.py\n", "junk\n"]
    conn = make_connection(lambda command: make_process(listing))

    candidates = await discover_scripts(conn, "~/catkin_ws/src", sink)

    assert conn.commands == ["find ~/catkin_ws/src -maxdepth 2 -type f -executable"]
    assert [c.label for c in candidates] == ["nav/planner.py"]


@pytest.mark.asyncio
async def test_discover_scripts_empty_is_not_an_error(
    sink: LogSink, make_connection: Any
) -> None:
    conn = make_connection()

    assert await discover_scripts(conn, "~/catkin_ws/src", sink) == []


@pytest.mark.asyncio
async def test_discover_scripts_failed_listing_raises(
    sink: LogSink, make_connection: Any, make_process: Any
) -> None:
    """A listing that fails outright raises DiscoveryError."""
    output = ["find: '/nope': No such file or directory\n"]
    conn = make_connection(lambda command: make_process(output, returncode=1))

    with pytest.raises(DiscoveryError) as exc_info:
        await discover_scripts(conn, "/nope", sink)

    assert "No such file" in str(exc_info.value)


@pytest.mark.asyncio
async def test_discover_scripts_keeps_partial_listing(
    sink: LogSink, make_connection: Any, make_process: Any
) -> None:
    """Unreadable subdirectories do not discard what was found."""
    output = ["find: '/ws/private': Permission denied\n", "/ws/nav/planner.py\n"]
    conn = make_connection(lambda command: make_process(output, returncode=1))

    candidates = await discover_scripts(conn, "/ws", sink)

    assert [c.label for c in candidates] == ["nav/planner.py"]


@pytest.mark.asyncio
async def test_discover_scripts_requires_connection(sink: LogSink) -> None:
    with pytest.raises(NotConnectedError):
        await discover_scripts(None, "~/catkin_ws/src", sink)


@pytest.mark.asyncio
async def test_invoke_streams_run_command(
    sink: LogSink, make_connection: Any, make_process: Any
) -> None:
    """Invoking a candidate streams its rosrun command."""
    conn = make_connection(lambda command: make_process(["started\n"]))
    candidate = ScriptCandidate("nav", "planner.py", "/ws/nav/planner.py")

    result = await invoke(conn, candidate, sink)

    assert conn.commands == ["rosrun nav planner.py"]
    assert result.success
    assert "started" in [line.text for line in sink.lines()]
