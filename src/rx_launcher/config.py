"""Configuration defaults, env vars, and runtime options for rx."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path


VERSION = "0.3.0"

PROG_NAME = "rx"

MANIFEST_FILE = "package.json"
BUILD_FILE = "Makefile"

# Checked in order; the first one that exists wins.
SHELL_CONFIG_CANDIDATES = (".zshrc", ".bashrc", ".bash_profile")


@dataclass
class Config:
    """Runtime configuration, mirroring the command-line flags."""

    # Sources
    manifest_file: str = MANIFEST_FILE
    build_file: str = BUILD_FILE
    npm_command: str = "npm"
    make_command: str = "make"
    source: str = ""

    # Install (``rx init``)
    install_dir: str = ""
    shell_config: str = ""

    # Misc
    list_only: bool = False

    def __post_init__(self) -> None:
        if not self.install_dir:
            self.install_dir = os.environ.get("RX_INSTALL_DIR", "")
        if not self.shell_config:
            self.shell_config = os.environ.get("RX_SHELL_CONFIG", "")


def resolve_home() -> Path | None:
    """Return the user's home directory, or None when it cannot be determined."""
    try:
        return Path.home()
    except RuntimeError:
        return None


def is_windows() -> bool:
    return sys.platform == "win32"
