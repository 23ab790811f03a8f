"""Log sink data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Severity(str, Enum):
    """Emphasis tag interpreted by the presentation layer."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class LogLine:
    """A single timestamped, severity-tagged output line."""

    severity: Severity
    text: str
    timestamp: datetime = field(default_factory=datetime.now)
