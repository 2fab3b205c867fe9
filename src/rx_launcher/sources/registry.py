"""Source registry: get the right task source by name, and discover one."""

from __future__ import annotations

from pathlib import Path

from rx_launcher import log
from rx_launcher.config import Config
from rx_launcher.errors import NoSourceFound, SourceUnavailable
from rx_launcher.sources.base import TaskSource
from rx_launcher.sources.make import MakefileScriptSource
from rx_launcher.sources.npm import NpmScriptSource
from rx_launcher.tasks.model import Task

# Priority order used by discover_source().
SOURCE_NAMES = ("npm", "make")


def get_source(name: str, *, root: Path | None = None, cfg: Config | None = None) -> TaskSource:
    """Return a fresh task source for *name*."""
    cfg = cfg or Config()
    match name:
        case "npm":
            return NpmScriptSource(
                root, manifest_file=cfg.manifest_file, executable=cfg.npm_command
            )
        case "make":
            return MakefileScriptSource(
                root, build_file=cfg.build_file, executable=cfg.make_command
            )
        case _:
            raise ValueError(f"Unknown source: {name}")


def discover_source(
    root: Path | None = None,
    *,
    names: tuple[str, ...] | list[str] = SOURCE_NAMES,
    cfg: Config | None = None,
) -> tuple[TaskSource, list[Task]]:
    """Return the first source in *names* that yields tasks, with its tasks.

    A candidate is only enumerated when its backing file exists and its tool
    is on PATH.  Raises :class:`NoSourceFound` when every candidate fails.
    """
    reasons: list[str] = []
    for name in names:
        source = get_source(name, root=root, cfg=cfg)
        problem = source.check_available()
        if problem:
            log.debug(f"skipping {name}: {problem}")
            reasons.append(f"{name}: {problem}")
            continue
        try:
            tasks = source.enumerate()
        except SourceUnavailable as exc:
            log.debug(f"skipping {name}: {exc.reason}")
            reasons.append(str(exc))
            continue
        log.debug(f"using {name} source ({len(tasks)} task(s))")
        return source, tasks

    raise NoSourceFound(reasons)
