"""npm scripts from ``package.json``."""

from __future__ import annotations

import json
from pathlib import Path

from rx_launcher.config import MANIFEST_FILE
from rx_launcher.errors import SourceUnavailable
from rx_launcher.io_utils import read_text
from rx_launcher.sources.base import TaskSource
from rx_launcher.tasks.model import Task


class NpmScriptSource(TaskSource):
    name = "npm"

    def __init__(
        self,
        root: Path | None = None,
        *,
        manifest_file: str = MANIFEST_FILE,
        executable: str = "npm",
    ) -> None:
        super().__init__(root)
        self.backing_file = manifest_file
        self.executable = executable
        # Captured by enumerate().
        self.package_name = ""
        self.package_version = ""

    def identify(self) -> str:
        name = self.package_name or self.root.name
        if self.package_version:
            return f"{name}@{self.package_version}"
        return name

    def enumerate(self) -> list[Task]:
        # Undecodable bytes become U+FFFD instead of failing the whole manifest.
        try:
            raw = read_text(self.backing_path, errors="replace")
        except OSError as exc:
            raise SourceUnavailable(self.name, f"error reading {self.backing_file}: {exc}") from exc

        try:
            manifest = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SourceUnavailable(self.name, f"error parsing {self.backing_file}: {exc}") from exc

        if not isinstance(manifest, dict):
            raise SourceUnavailable(self.name, f"{self.backing_file} is not a JSON object")

        scripts = manifest.get("scripts")
        if not isinstance(scripts, dict):
            scripts = {}

        tasks = [
            Task(name=name, description=cmd, origin=self.name)
            for name, cmd in scripts.items()
            if isinstance(cmd, str)
        ]
        if not tasks:
            raise SourceUnavailable(self.name, f"no scripts found in {self.backing_file}")

        self.package_name = str(manifest.get("name") or "")
        self.package_version = str(manifest.get("version") or "")
        return tasks

    def build_argv(self, task_name: str) -> list[str]:
        return [self.executable, "run", task_name]
