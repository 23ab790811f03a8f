"""Colorful console output for server logs and the operator's log pane."""

import logging
import re
from collections.abc import Iterable
from datetime import datetime

from auv_console.models import LogLine, Severity

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

# Log level colors
LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "auv_console.server": COLORS["bright_cyan"],
    "auv_console.services.session": COLORS["bright_magenta"],
    "auv_console.services.transport": COLORS["bright_magenta"],
    "auv_console.services.log_sink": COLORS["cyan"],
    "auv_console.tools": COLORS["bright_blue"],
    "auv_console.middleware": COLORS["yellow"],
    "auv_console.config": COLORS["green"],
    "default": COLORS["white"],
}

# Operator log pane: (indicator, color) per severity
SEVERITY_STYLES = {
    Severity.INFO: ("  ", COLORS["white"]),
    Severity.SUCCESS: ("OK", COLORS["bright_green"]),
    Severity.WARNING: ("! ", COLORS["bright_yellow"]),
    Severity.ERROR: ("!!", COLORS["bright_red"]),
}

SSH_TARGET_PATTERN = re.compile(r"(\w[\w\.\-]*@[\w\.\-]+:\d+)")


def _colorize(text: str, color: str, use_colors: bool) -> str:
    if not use_colors:
        return text
    return f"{color}{text}{COLORS['reset']}"


class ColorfulFormatter(logging.Formatter):
    """Colorful log formatter with component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _get_component_color(self, name: str) -> str:
        """Get color for a logger name/component."""
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        return f"{dt.strftime('%H:%M:%S')}.{int(record.msecs):03d}"

    def _format_level(self, record: logging.LogRecord) -> str:
        """Format log level with color and fixed width."""
        level = record.levelname
        color = LEVEL_COLORS.get(level, COLORS["white"])
        return _colorize(f"{level:<8}", color, self.use_colors)

    def _format_component(self, record: logging.LogRecord) -> str:
        """Format component/logger name with color."""
        name = record.name
        if name.startswith("auv_console."):
            name = name[len("auv_console.") :]
        color = self._get_component_color(record.name)
        return _colorize(f"{name:<20}", color, self.use_colors)

    def _highlight_message(self, message: str) -> str:
        """Highlight user@host:port targets and durations."""
        if not self.use_colors:
            return message

        message = SSH_TARGET_PATTERN.sub(
            f"{COLORS['bright_magenta']}\\1{COLORS['reset']}", message
        )
        if "ms" in message:
            message = re.sub(
                r"(\d+\.?\d*ms)",
                f"{COLORS['bright_yellow']}\\1{COLORS['reset']}",
                message,
            )
        return message

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        timestamp = _colorize(
            self._format_timestamp(record), COLORS["dim"], self.use_colors
        )
        level = self._format_level(record)
        component = self._format_component(record)
        sep = _colorize("|", COLORS["dim"], self.use_colors)
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def format_log_line(line: LogLine, use_colors: bool = False) -> str:
    """Render one sink line as ``HH:MM:SS XX text``."""
    indicator, color = SEVERITY_STYLES[line.severity]
    stamp = line.timestamp.strftime("%H:%M:%S")
    timestamp = _colorize(stamp, COLORS["dim"], use_colors)
    text = line.text
    if line.severity is not Severity.INFO:
        text = _colorize(text, color, use_colors)
    return f"{timestamp} {_colorize(indicator, color, use_colors)} {text}"


def format_log_lines(lines: Iterable[LogLine], use_colors: bool = False) -> str:
    """Render sink lines for the log pane, one per row."""
    return "\n".join(format_log_line(line, use_colors) for line in lines)
