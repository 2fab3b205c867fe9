"""Makefile targets, read from make's own rule database."""

from __future__ import annotations

import subprocess
from pathlib import Path

from rx_launcher import log
from rx_launcher.config import BUILD_FILE
from rx_launcher.errors import SourceUnavailable
from rx_launcher.sources.base import TaskSource
from rx_launcher.tasks.model import Task

TARGET_DESCRIPTION = "make target"

# Characters that mark pattern rules, comments and path-qualified targets.
_REJECTED_CHARS = ("#", "%", "/")


def parse_make_targets(output: str) -> list[str]:
    """Extract target names from ``make -pn`` output.

    Only lines containing ``:`` and no ``=`` are considered; the text before
    the first ``:`` is the candidate.  Targets are deduplicated in the order
    they first appear.
    """
    seen: set[str] = set()
    targets: list[str] = []
    for line in output.splitlines():
        if ":" not in line or "=" in line:
            continue
        target = line.split(":", 1)[0].strip()
        if not target or target.startswith("."):
            continue
        if any(ch in target for ch in _REJECTED_CHARS):
            continue
        if target in seen:
            continue
        seen.add(target)
        targets.append(target)
    return targets


class MakefileScriptSource(TaskSource):
    name = "make"

    def __init__(
        self,
        root: Path | None = None,
        *,
        build_file: str = BUILD_FILE,
        executable: str = "make",
    ) -> None:
        super().__init__(root)
        self.backing_file = build_file
        self.executable = executable

    def identify(self) -> str:
        return self.backing_file

    def enumerate(self) -> list[Task]:
        if not self.backing_path.is_file():
            raise SourceUnavailable(self.name, f"{self.backing_file} not found")

        output = self._print_database()
        targets = parse_make_targets(output)
        if not targets:
            raise SourceUnavailable(self.name, f"no targets found in {self.backing_file}")

        log.debug(f"{len(targets)} target(s) in {self.backing_file}")
        return [Task(name=t, description=TARGET_DESCRIPTION, origin=self.name) for t in targets]

    def _print_database(self) -> str:
        """Run ``make -pn`` and return its stdout.  Nothing is built."""
        cmd = [self.executable, "-pn"]
        if self.backing_file != BUILD_FILE:
            cmd += ["-f", self.backing_file]
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=self.root,
                check=False,
            )
        except FileNotFoundError as exc:
            raise SourceUnavailable(self.name, f"{self.executable} not found") from exc

        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()
            detail = stderr.splitlines()[0] if stderr else f"exit code {proc.returncode}"
            raise SourceUnavailable(self.name, f"error running {self.executable} -pn: {detail}")
        return proc.stdout or ""

    def build_argv(self, task_name: str) -> list[str]:
        argv = [self.executable]
        if self.backing_file != BUILD_FILE:
            argv += ["-f", self.backing_file]
        argv.append(task_name)
        return argv
