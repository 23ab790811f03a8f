"""Operator-facing menu state machine."""

from auv_console.console.menu import Action, ConsoleMenu, MenuItem, Screen

__all__ = ["Action", "ConsoleMenu", "MenuItem", "Screen"]
