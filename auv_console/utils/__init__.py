"""Utilities for AUV Console."""

from auv_console.utils.console import ColorfulFormatter, format_log_lines
from auv_console.utils.ping import check_host_online
from auv_console.utils.shell import quote_arg, quote_remote_path
from auv_console.utils.validation import validate_host

__all__ = [
    "check_host_online",
    "ColorfulFormatter",
    "format_log_lines",
    "quote_arg",
    "quote_remote_path",
    "validate_host",
]
