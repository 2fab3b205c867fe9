"""Task data model shared by sources, the filter and the selector."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Task:
    name: str
    description: str = ""
    origin: str = ""

    def filter_value(self) -> str:
        return self.name
