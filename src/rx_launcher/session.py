"""Selection state machine for the interactive picker.

A :class:`Session` is an immutable value.  :func:`step` takes the current
session and one input event and returns the next session; the UI loop only
has to keep the latest value around.

States::

    FILTER_FOCUSED --enter/tab/down--> LIST_FOCUSED
    LIST_FOCUSED   --/ or ctrl+f-----> FILTER_FOCUSED
    LIST_FOCUSED   --enter-----------> CHOSEN     (terminal)
    FILTER_FOCUSED --esc/ctrl+c------> QUITTING   (terminal)
    LIST_FOCUSED   --q/ctrl+c--------> QUITTING   (terminal)

List navigation clamps at both ends; it never wraps around.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable

from rx_launcher.filtering import FilterState
from rx_launcher.tasks.model import Task


class State(str, Enum):
    FILTER_FOCUSED = "filter"
    LIST_FOCUSED = "list"
    QUITTING = "quitting"
    CHOSEN = "chosen"


class Focus(str, Enum):
    FILTER = "filter"
    LIST = "list"


TERMINAL_STATES = frozenset({State.QUITTING, State.CHOSEN})

# Rows taken by title, filter box and help line; the rest shows tasks.
CHROME_HEIGHT = 6


@dataclass(frozen=True)
class KeyEvent:
    key: str


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


Event = KeyEvent | ResizeEvent


@dataclass(frozen=True)
class Session:
    filter: FilterState
    state: State = State.FILTER_FOCUSED
    selected_index: int = 0
    chosen: Task | None = None
    width: int = 80
    height: int = 24

    @classmethod
    def start(cls, tasks: Iterable[Task], *, width: int = 80, height: int = 24) -> Session:
        return cls(filter=FilterState.of(tasks), width=width, height=height)

    @property
    def focus(self) -> Focus | None:
        if self.state == State.FILTER_FOCUSED:
            return Focus.FILTER
        if self.state == State.LIST_FOCUSED:
            return Focus.LIST
        return None

    @property
    def query(self) -> str:
        return self.filter.query

    @property
    def visible_tasks(self) -> tuple[Task, ...]:
        return self.filter.visible_tasks

    @property
    def quitting(self) -> bool:
        return self.state == State.QUITTING

    @property
    def done(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def selected_task(self) -> Task | None:
        visible = self.visible_tasks
        if 0 <= self.selected_index < len(visible):
            return visible[self.selected_index]
        return None

    @property
    def page_size(self) -> int:
        return max(1, self.height - CHROME_HEIGHT)


def clamp_index(index: int, count: int) -> int:
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


def step(session: Session, event: Event) -> Session:
    """Apply one event and return the resulting session."""
    if session.done:
        return session
    if isinstance(event, ResizeEvent):
        return replace(session, width=event.width, height=event.height)
    if session.state == State.FILTER_FOCUSED:
        return _step_filter(session, event.key)
    return _step_list(session, event.key)


def _with_query(session: Session, query: str) -> Session:
    flt = session.filter.with_query(query)
    return replace(
        session,
        filter=flt,
        selected_index=clamp_index(session.selected_index, len(flt.visible_tasks)),
    )


def _step_filter(session: Session, key: str) -> Session:
    match key:
        case "ctrl+c" | "escape":
            return replace(session, state=State.QUITTING)
        case "enter" | "tab" | "down":
            return replace(session, state=State.LIST_FOCUSED)
        case "backspace":
            return _with_query(session, session.query[:-1])
        case "ctrl+u":
            return _with_query(session, "")
        case _ if len(key) == 1 and key.isprintable():
            return _with_query(session, session.query + key)
        case _:
            return session


def _move(session: Session, delta: int) -> Session:
    count = len(session.visible_tasks)
    return replace(session, selected_index=clamp_index(session.selected_index + delta, count))


def _step_list(session: Session, key: str) -> Session:
    match key:
        case "ctrl+c" | "q":
            return replace(session, state=State.QUITTING)
        case "/" | "ctrl+f":
            return replace(session, state=State.FILTER_FOCUSED)
        case "up" | "k":
            return _move(session, -1)
        case "down" | "j":
            return _move(session, 1)
        case "pageup":
            return _move(session, -session.page_size)
        case "pagedown":
            return _move(session, session.page_size)
        case "home" | "g":
            return replace(session, selected_index=0)
        case "end" | "G":
            return _move(session, len(session.visible_tasks))
        case "enter":
            task = session.selected_task
            if task is None:
                return session
            return replace(session, state=State.CHOSEN, chosen=task)
        case _:
            return session
