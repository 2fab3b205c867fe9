"""Error taxonomy for task discovery, handoff and installation."""

from __future__ import annotations


class RxError(Exception):
    """Base class for every failure rx reports to the user."""


class SourceUnavailable(RxError):
    """One task source cannot be used (missing file/tool, bad manifest, no tasks)."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class NoSourceFound(RxError):
    """No task source in the current directory produced any tasks."""

    def __init__(self, reasons: list[str] | None = None) -> None:
        super().__init__("no valid script source found")
        self.reasons = list(reasons or [])


class ExecutionFailed(RxError):
    """The underlying tool could not be located or launched."""


class InstallError(RxError):
    """``rx init`` could not copy the executable or update the shell config."""
