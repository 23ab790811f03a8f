"""Thread-safe, append-only log sink shared with the presentation layer.

The sink is the only channel by which background operations report back.
Every appended line is also mirrored to the standard ``logging`` tree so
that server logs and the operator's output pane tell the same story.
"""

import logging
import threading

from auv_console.models import LogLine, Severity

logger = logging.getLogger(__name__)

_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class LogSink:
    """Ordered sequence of tagged output lines."""

    def __init__(self) -> None:
        self._lines: list[LogLine] = []
        self._lock = threading.Lock()

    def append(self, severity: Severity, text: str) -> LogLine:
        """Append a tagged line and return it."""
        line = LogLine(severity=severity, text=text)
        with self._lock:
            self._lines.append(line)
        logger.log(_LEVELS[severity], "[%s] %s", severity.value, text)
        return line

    def info(self, text: str) -> LogLine:
        return self.append(Severity.INFO, text)

    def success(self, text: str) -> LogLine:
        return self.append(Severity.SUCCESS, text)

    def warning(self, text: str) -> LogLine:
        return self.append(Severity.WARNING, text)

    def error(self, text: str) -> LogLine:
        return self.append(Severity.ERROR, text)

    def lines(self, since: int = 0) -> list[LogLine]:
        """Return a copy of the lines starting at index ``since``."""
        with self._lock:
            return list(self._lines[max(since, 0) :])

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)
