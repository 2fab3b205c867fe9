"""``rx init``: copy the rx executable onto PATH and register it in the shell config."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path

from rx_launcher import log
from rx_launcher.config import PROG_NAME, SHELL_CONFIG_CANDIDATES, Config, resolve_home
from rx_launcher.errors import InstallError
from rx_launcher.io_utils import append_text, read_text

FALLBACK_INSTALL_DIR = Path("/usr/local/bin")
PATH_MARKER = f"# Added by {PROG_NAME} init"


def default_install_path() -> Path:
    home = resolve_home()
    if home is None:
        return FALLBACK_INSTALL_DIR
    return home / ".local" / "bin"


def find_shell_config() -> Path | None:
    """Return the first existing shell rc file, defaulting to ``~/.zshrc``."""
    home = resolve_home()
    if home is None:
        return None
    for name in SHELL_CONFIG_CANDIDATES:
        candidate = home / name
        if candidate.is_file():
            return candidate
    return home / ".zshrc"


def current_executable() -> Path:
    """Locate the ``rx`` launcher that is running right now."""
    argv0 = Path(sys.argv[0])
    if argv0.name == PROG_NAME and argv0.is_file():
        return argv0.resolve()
    found = shutil.which(PROG_NAME)
    if found:
        return Path(found).resolve()
    raise InstallError(f"failed to get executable path: {PROG_NAME} is not on PATH")


def install(target_dir: Path, executable: Path | None = None) -> Path:
    """Copy the rx executable into *target_dir* and return the new path."""
    src = executable or current_executable()
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise InstallError(f"failed to create install directory: {exc}") from exc

    dest = target_dir / PROG_NAME
    if dest.exists() and dest.resolve() == src.resolve():
        log.debug(f"{dest} is already the running executable")
        return dest
    try:
        shutil.copyfile(src, dest)
        dest.chmod(0o755)
    except OSError as exc:
        raise InstallError(f"failed to copy file: {exc}") from exc
    return dest


def register_on_path(shell_config: Path, target_dir: Path) -> bool:
    """Append a PATH export for *target_dir* to *shell_config*.

    Returns ``False`` when the directory is already mentioned in the file.
    """
    try:
        content = read_text(shell_config) if shell_config.exists() else ""
    except OSError as exc:
        raise InstallError(f"failed to read shell config: {exc}") from exc

    if str(target_dir) in content:
        return False

    path_line = f'export PATH="$PATH:{target_dir}"'
    try:
        append_text(shell_config, f"\n{PATH_MARKER}\n{path_line}\n")
    except OSError as exc:
        raise InstallError(f"failed to update shell config: {exc}") from exc
    return True


def run_init(cfg: Config) -> None:
    """Install rx and put it on PATH.  Raises :class:`InstallError` on failure."""
    install_dir = Path(cfg.install_dir).expanduser() if cfg.install_dir else default_install_path()
    shell_config = Path(cfg.shell_config).expanduser() if cfg.shell_config else find_shell_config()

    log.success(f"Installing {PROG_NAME} to {install_dir}")
    dest = install(install_dir)
    log.debug(f"copied to {dest}")

    if shell_config is not None:
        log.success(f"Updating shell config at {shell_config}")
        if not register_on_path(shell_config, install_dir):
            log.info(f"{install_dir} already in {shell_config}")
    else:
        log.warn(f"Could not locate a shell config; add {install_dir} to PATH manually.")

    log.success(f"{PROG_NAME} has been installed successfully!")
    if shell_config is not None:
        log.console.print(f"To use {PROG_NAME} from any directory, restart your terminal or run:")
        log.console.print(f"  source {shell_config}")
