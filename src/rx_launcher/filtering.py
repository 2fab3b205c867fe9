"""Live filtering of the task list by a typed query."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from rx_launcher.tasks.model import Task


def apply_filter(tasks: Iterable[Task], query: str) -> tuple[Task, ...]:
    """Return tasks whose name contains *query*, case-insensitively, in order."""
    if not query:
        return tuple(tasks)
    needle = query.lower()
    return tuple(t for t in tasks if needle in t.filter_value().lower())


@dataclass(frozen=True)
class FilterState:
    """Full task list plus the view derived from the current query."""

    all_tasks: tuple[Task, ...] = ()
    query: str = ""
    visible_tasks: tuple[Task, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "all_tasks", tuple(self.all_tasks))
        object.__setattr__(self, "visible_tasks", apply_filter(self.all_tasks, self.query))

    @classmethod
    def of(cls, tasks: Iterable[Task]) -> FilterState:
        return cls(all_tasks=tuple(tasks))

    def with_query(self, query: str) -> FilterState:
        if query == self.query:
            return self
        return FilterState(all_tasks=self.all_tasks, query=query)
