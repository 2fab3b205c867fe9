"""Status lines for rx, styled with Rich.

Everything goes to stdout except errors.  Debug lines only show up after
``set_verbose(True)`` (``rx -v``).
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

THEME = Theme(
    {
        "rx.info": "#61AFEF",
        "rx.ok": "#98C379",
        "rx.warn": "#E5C07B",
        "rx.error": "bold #E06C75",
        "rx.debug": "#5C6370",
        "rx.accent": "bold #98C379",
    }
)

console = Console(highlight=False, theme=THEME)
_err_console = Console(highlight=False, stderr=True, theme=THEME)

_verbose = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def _tagged(tag: str, style: str, msg: str) -> str:
    return f"[{style}]\\[{tag}][/{style}] {msg}"


def info(msg: str) -> None:
    console.print(_tagged("INFO", "rx.info", msg))


def success(msg: str) -> None:
    console.print(_tagged("OK", "rx.ok", msg))


def warn(msg: str) -> None:
    console.print(_tagged("WARN", "rx.warn", msg))


def error(msg: str) -> None:
    _err_console.print(_tagged("ERROR", "rx.error", msg))


def debug(msg: str) -> None:
    if not _verbose:
        return
    console.print(f"[rx.debug]\\[DEBUG] {msg}[/rx.debug]")


def running(cmd: str) -> None:
    """Announce the command that is about to take over the terminal."""
    console.print(f"[rx.accent]Running:[/rx.accent] {escape(cmd)}")


def bye() -> None:
    console.print("[rx.accent]Bye![/rx.accent]")
