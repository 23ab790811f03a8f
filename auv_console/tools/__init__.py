"""MCP tools for AUV Console."""

from auv_console.tools.console import (
    connect,
    disconnect,
    list_scripts,
    run_script,
    show_logs,
    start_service,
    target_status,
)

__all__ = [
    "connect",
    "disconnect",
    "list_scripts",
    "run_script",
    "show_logs",
    "start_service",
    "target_status",
]
