"""Data models for AUV Console."""

from auv_console.models.command import ExecutionMode, ExecutionResult
from auv_console.models.log import LogLine, Severity
from auv_console.models.script import ScriptCandidate
from auv_console.models.ssh import SSH_PORT, SessionState, TargetHost

__all__ = [
    "ExecutionMode",
    "ExecutionResult",
    "LogLine",
    "SSH_PORT",
    "ScriptCandidate",
    "SessionState",
    "Severity",
    "TargetHost",
]
