"""MCP resources for AUV Console."""

from auv_console.resources.console import logs_resource, status_resource

__all__ = ["logs_resource", "status_resource"]
