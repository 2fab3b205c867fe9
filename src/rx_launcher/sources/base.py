"""Base class for task sources."""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import NoReturn

from rx_launcher.errors import ExecutionFailed
from rx_launcher.handoff import replace_process
from rx_launcher.tasks.model import Task


class TaskSource(ABC):
    """Abstract task source.  Subclasses implement ``identify``, ``enumerate``
    and ``build_argv``; ``execute`` hands the chosen task to the tool."""

    name: str = "base"
    backing_file: str = ""
    executable: str = ""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root if root is not None else Path.cwd()

    @abstractmethod
    def identify(self) -> str:
        """Return a display label for the source."""
        ...

    @abstractmethod
    def enumerate(self) -> list[Task]:
        """Return the runnable tasks, or raise :class:`SourceUnavailable`."""
        ...

    @abstractmethod
    def build_argv(self, task_name: str) -> list[str]:
        """Return the command (argv[0] is the bare program name) for *task_name*."""
        ...

    @property
    def backing_path(self) -> Path:
        return self.root / self.backing_file

    def check_available(self) -> str | None:
        """Return an error message if the backing file or tool is missing, else None."""
        if not self.backing_path.is_file():
            return f"{self.backing_file} not found"
        if not shutil.which(self.executable):
            return f"{self.executable} not found in PATH"
        return None

    def command_line(self, task_name: str) -> str:
        """Human-readable form of the command ``execute`` will run."""
        return " ".join(self.build_argv(task_name))

    def execute(self, task_name: str) -> NoReturn:
        """Replace the current process with the tool running *task_name*."""
        path = shutil.which(self.executable)
        if not path:
            raise ExecutionFailed(f"{self.executable} not found")
        replace_process(path, self.build_argv(task_name))
