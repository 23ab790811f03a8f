"""Global state management for AUV Console."""

from typing import TYPE_CHECKING

from auv_console.config import Config

if TYPE_CHECKING:
    from auv_console.dependencies import Dependencies

# Global state (initialized on first access)
_config: Config | None = None
_deps: "Dependencies | None" = None


def get_config() -> Config:
    """Get or create config."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_deps() -> "Dependencies":
    """Get or create the dependency container (sink, session, menu)."""
    global _deps
    if _deps is None:
        from auv_console.dependencies import Dependencies

        _deps = Dependencies.from_config(get_config())
    return _deps


def reset_state() -> None:
    """Reset global state for testing.

    This function clears the singleton instances, allowing tests
    to start with fresh state. Should only be used in test fixtures.
    """
    global _config, _deps
    _config = None
    _deps = None


def set_deps(deps: "Dependencies") -> None:
    """Set the global dependency container.

    Args:
        deps: Dependencies instance to use globally.
    """
    global _config, _deps
    _config = deps.config
    _deps = deps
