"""Full-screen picker built on prompt_toolkit.

This module only draws a :class:`~rx_launcher.session.Session` and turns key
presses into :class:`~rx_launcher.session.KeyEvent` values; every decision
about focus, filtering and selection lives in :mod:`rx_launcher.session`.
"""

from __future__ import annotations

from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style

from rx_launcher.session import Focus, KeyEvent, ResizeEvent, Session, step
from rx_launcher.tasks.model import Task

HELP_TEXT = "/ or ctrl+f: filter • ↑/↓: navigate • enter: run script • q: quit"
FILTER_PLACEHOLDER = "Type to filter scripts..."

STYLE = Style.from_dict(
    {
        "title": "#61afef bold",
        "filter.label": "#61afef bold",
        "filter.label.blurred": "#5c6370",
        "filter.text": "#d7dfe6",
        "filter.placeholder": "#5c6370 italic",
        "filter.cursor": "reverse",
        "task.name": "#d7dfe6",
        "task.desc": "#5c6370",
        "selected.name": "#61afef bold",
        "selected.desc": "#98c379",
        "empty": "#e06c75",
        "help": "#5c6370",
    }
)

_KEY_NAMES: dict[Keys, str] = {
    Keys.ControlC: "ctrl+c",
    Keys.Escape: "escape",
    Keys.Enter: "enter",
    Keys.Tab: "tab",
    Keys.Up: "up",
    Keys.Down: "down",
    Keys.Backspace: "backspace",
    Keys.ControlF: "ctrl+f",
    Keys.ControlU: "ctrl+u",
    Keys.Home: "home",
    Keys.End: "end",
    Keys.PageUp: "pageup",
    Keys.PageDown: "pagedown",
}


def translate_key(key_press: KeyPress) -> str | None:
    """Map a prompt_toolkit key press to a session key name."""
    name = _KEY_NAMES.get(key_press.key)  # type: ignore[call-overload]
    if name is not None:
        return name
    data = key_press.data
    if len(data) == 1 and data.isprintable():
        return data
    return None


def window_bounds(selected: int, count: int, rows: int, top: int = 0) -> tuple[int, int]:
    """Return ``[start, end)`` of the rows to draw so *selected* stays visible.

    *top* is the first row drawn last time.  The window only moves when the
    selection leaves it, and then just far enough to bring it back.
    """
    rows = max(1, rows)
    if count <= rows:
        return 0, count
    if selected < top:
        top = selected
    elif selected >= top + rows:
        top = selected - rows + 1
    start = min(max(0, top), count - rows)
    return start, start + rows


def _task_line(task: Task, selected: bool) -> list[tuple[str, str]]:
    prefix = "class:selected" if selected else "class:task"
    marker = "> " if selected else "  "
    return [
        (f"{prefix}.name", f"{marker}{task.name}"),
        (f"{prefix}.desc", f"  {task.description}"),
        ("", "\n"),
    ]


def render(session: Session, title: str, top: int = 0) -> FormattedText:
    """Render the whole screen for *session*, scrolling the list from *top*."""
    focused = session.focus == Focus.FILTER
    out: list[tuple[str, str]] = [("class:title", f"  {title}"), ("", "\n\n")]

    label_style = "class:filter.label" if focused else "class:filter.label.blurred"
    out.append((label_style, "  Filter: "))
    if session.query:
        out.append(("class:filter.text", session.query))
    if focused:
        out.append(("class:filter.cursor", " "))
    if not session.query:
        out.append(("class:filter.placeholder", FILTER_PLACEHOLDER))
    out.append(("", "\n\n"))

    visible = session.visible_tasks
    if not visible:
        out += [("class:empty", "  No matching scripts"), ("", "\n")]
    else:
        start, end = window_bounds(session.selected_index, len(visible), session.page_size, top)
        list_focused = session.focus == Focus.LIST
        for i in range(start, end):
            out += _task_line(visible[i], list_focused and i == session.selected_index)

    out += [("", "\n"), ("class:help", f"  {HELP_TEXT}")]
    return FormattedText(out)


class SelectorApp:
    """Owns the latest session value and the prompt_toolkit application."""

    def __init__(self, session: Session, title: str) -> None:
        self.session = session
        self.title = title
        self._top = 0

        kb = KeyBindings()

        for key in _KEY_NAMES:
            kb.add(key, eager=key == Keys.Escape)(self._on_key)
        kb.add(Keys.Any)(self._on_key)

        control = FormattedTextControl(self._render, focusable=True, show_cursor=False)
        root = HSplit([Window(content=control, wrap_lines=False, always_hide_cursor=True)])

        self.app: Application[Session] = Application(
            layout=Layout(root),
            key_bindings=kb,
            style=STYLE,
            full_screen=True,
        )
        # Make Esc responsive instead of waiting for an escape sequence.
        self.app.ttimeoutlen = 0.05

    def dispatch(self, event: KeyEvent | ResizeEvent) -> Session:
        self.session = step(self.session, event)
        return self.session

    def _on_key(self, event: KeyPressEvent) -> None:
        name = translate_key(event.key_sequence[0])
        if name is None:
            return
        session = self.dispatch(KeyEvent(name))
        if session.done:
            event.app.exit(result=session)

    def _render(self) -> FormattedText:
        size = self.app.output.get_size()
        if (size.columns, size.rows) != (self.session.width, self.session.height):
            self.dispatch(ResizeEvent(width=size.columns, height=size.rows))
        session = self.session
        self._top, _ = window_bounds(session.selected_index, len(session.visible_tasks), session.page_size, self._top)
        return render(session, self.title, self._top)

    def run(self) -> Session:
        result = self.app.run()
        return result if result is not None else self.session


def run_selector(session: Session, title: str) -> Session:
    """Run the picker until the user chooses a task or quits."""
    return SelectorApp(session, title).run()
