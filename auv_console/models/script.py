"""Script discovery data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScriptCandidate:
    """An executable found in the target's workspace.

    ``package`` and ``executable`` are the last two segments of ``path``.
    """

    package: str
    executable: str
    path: str

    @property
    def label(self) -> str:
        return f"{self.package}/{self.executable}"
