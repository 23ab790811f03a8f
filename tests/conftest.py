"""Shared fixtures: in-memory stand-ins for asyncssh connections."""

from collections.abc import Callable, Generator
from types import SimpleNamespace

import asyncssh
import pytest

from auv_console.config import Config
from auv_console.services.log_sink import LogSink
from auv_console.services.state import reset_state


class FakeStream:
    """Process stdout yielding canned lines."""

    def __init__(self, lines: list[str]) -> None:
        self._lines = lines

    async def read(self) -> str:
        return "".join(self._lines)

    def __aiter__(self):  # type: ignore[no-untyped-def]
        return self._iterate()

    async def _iterate(self):  # type: ignore[no-untyped-def]
        for line in self._lines:
            yield line


class FakeProcess:
    """SSHClientProcess stand-in tracking channel release."""

    def __init__(self, lines: list[str] | None = None, returncode: int = 0) -> None:
        self.stdout = FakeStream(lines or [])
        self.returncode = returncode
        self.close_calls = 0

    async def wait(self, check: bool = False) -> SimpleNamespace:
        return SimpleNamespace(returncode=self.returncode)

    def close(self) -> None:
        self.close_calls += 1

    async def wait_closed(self) -> None:
        return None


class FakeConnection:
    """SSHClientConnection stand-in recording every command it is given."""

    def __init__(
        self,
        responder: Callable[[str], FakeProcess] | None = None,
        channel_error: Exception | None = None,
    ) -> None:
        self.responder = responder or (lambda command: FakeProcess())
        self.channel_error = channel_error
        self.commands: list[str] = []
        self.processes: list[FakeProcess] = []
        self.close_calls = 0
        self._closed = False

    async def create_process(self, command: str, **kwargs: object) -> FakeProcess:
        self.commands.append(command)
        if self.channel_error is not None:
            raise self.channel_error
        process = self.responder(command)
        self.processes.append(process)
        return process

    def is_closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self.close_calls += 1
        self._closed = True

    async def wait_closed(self) -> None:
        return None


def channel_open_error(
    reason: str = "Connection refused",
) -> asyncssh.ChannelOpenError:
    return asyncssh.ChannelOpenError(2, reason)


@pytest.fixture(autouse=True)
def clean_state() -> Generator[None, None, None]:
    """Isolate global config/dependency singletons between tests."""
    reset_state()
    yield
    reset_state()


@pytest.fixture
def sink() -> LogSink:
    return LogSink()


@pytest.fixture
def config(monkeypatch: pytest.MonkeyPatch) -> Config:
    """Config built with no AUV_* variables leaking in from the environment."""
    for key in (
        "AUV_HOST",
        "AUV_USERNAME",
        "AUV_CONNECT_TIMEOUT",
        "AUV_WORKSPACE_ROOT",
        "AUV_SCRIPT_RUNNER",
        "AUV_SERVICES",
        "AUV_TRANSPORT",
        "AUV_HTTP_HOST",
        "AUV_HTTP_PORT",
    ):
        monkeypatch.delenv(key, raising=False)
    return Config(
        services={
            "roscore": "roscore",
            "rosserial": "rosrun rosserial_python serial_node.py /dev/ttyUSB0",
        }
    )


@pytest.fixture
def make_process() -> type[FakeProcess]:
    """Factory for fake remote processes: make_process(lines, returncode)."""
    return FakeProcess


@pytest.fixture
def make_connection() -> type[FakeConnection]:
    """Factory for fake connections: make_connection(responder, channel_error)."""
    return FakeConnection


@pytest.fixture
def make_channel_error() -> Callable[..., asyncssh.ChannelOpenError]:
    return channel_open_error
