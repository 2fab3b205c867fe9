"""UTF-8 text I/O for package.json and shell rc files."""

from __future__ import annotations

from pathlib import Path


def read_text(path: Path, errors: str = "strict") -> str:
    """Read *path* as UTF-8.  Pass ``errors="replace"`` for files rx does not own."""
    return path.read_text(encoding="utf-8", errors=errors)


def append_text(path: Path, text: str) -> None:
    """Append *text* to *path*, creating the file when it does not exist yet."""
    with open(path, "a", encoding="utf-8") as f:
        f.write(text)
