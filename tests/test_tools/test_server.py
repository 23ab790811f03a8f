"""Tests for server wiring and lifespan."""

from typing import Any

import pytest

from auv_console.config import Config
from auv_console.dependencies import Dependencies
from auv_console.models import SessionState, TargetHost
from auv_console.services.state import set_deps


@pytest.mark.asyncio
async def test_server_registers_console_tools() -> None:
    from auv_console.server import create_server

    server = create_server()
    tools = await server.get_tools()

    assert {
        "connect",
        "start_service",
        "list_scripts",
        "run_script",
        "disconnect",
        "show_logs",
        "target_status",
    } <= set(tools)


@pytest.mark.asyncio
async def test_lifespan_closes_session(config: Config, make_connection: Any) -> None:
    from auv_console.server import app_lifespan, create_server

    deps = Dependencies.from_config(config)
    set_deps(deps)
    conn = make_connection()
    deps.session._connection = conn
    deps.session._target = TargetHost("192.168.55.1", "jetson")
    deps.session._state = SessionState.CONNECTED

    async with app_lifespan(create_server()) as context:
        assert context["session"]["state"] == "connected"

    assert deps.session.state is SessionState.CLOSED
    assert conn.is_closed()


def test_error_callback_writes_sink(config: Config) -> None:
    from unittest.mock import MagicMock

    from auv_console.server import _report_to_sink

    deps = Dependencies.from_config(config)
    set_deps(deps)
    context = MagicMock()
    context.method = "tools/call"

    _report_to_sink(ValueError("bad index"), context)

    assert deps.sink.lines()[-1].text == "tools/call failed: ValueError: bad index"
