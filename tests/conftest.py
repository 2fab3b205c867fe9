"""Shared fixtures for rx tests.

File handling in tests:
- Use tmp_path for any directory or file creation so tests are isolated and cleaned up.
- Write files with an explicit encoding="utf-8".
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from rx_launcher.tasks.model import Task


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register opt-in switch for tests that need real npm/make binaries."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end tests marked with 'e2e'.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip e2e tests unless explicitly enabled."""
    if config.getoption("--run-e2e"):
        return

    skip_e2e = pytest.mark.skip(
        reason="E2E tests are skipped by default. Use --run-e2e to include them.",
    )
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


def _make_task(name: str, description: str = "", origin: str = "npm") -> Task:
    return Task(name=name, description=description or f"echo {name}", origin=origin)


@pytest.fixture
def make_task():
    """Factory fixture that creates Task instances."""
    return _make_task


@pytest.fixture
def make_tasks():
    """Build a task list from names."""

    def _build(*names: str) -> list[Task]:
        return [_make_task(n) for n in names]

    return _build


@pytest.fixture
def write_manifest():
    """Write a package.json into a directory."""

    def _write(root: Path, data: object) -> Path:
        path = root / "package.json"
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_makefile():
    """Write a Makefile into a directory."""

    def _write(root: Path, text: str = "build:\n\techo build\n") -> Path:
        path = root / "Makefile"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
