"""Hand the terminal over to an external tool by replacing this process."""

from __future__ import annotations

import os
import subprocess
import sys
from typing import NoReturn

from rx_launcher import log
from rx_launcher.config import is_windows
from rx_launcher.errors import ExecutionFailed


def replace_process(executable: str, argv: list[str]) -> NoReturn:
    """Replace the current process image with *executable* running *argv*.

    ``argv[0]`` is the program name the child sees.  On success this never
    returns.  Windows has no exec primitive, so there the command is run as
    a child and rx exits with the child's status instead.
    """
    log.debug(f"exec {executable} ({' '.join(argv)})")
    sys.stdout.flush()
    sys.stderr.flush()

    if is_windows():
        _spawn_and_exit(executable, argv)

    try:
        os.execv(executable, argv)
    except OSError as exc:
        raise ExecutionFailed(f"failed to launch {argv[0]}: {exc}") from exc
    # os.execv only comes back by raising.
    raise ExecutionFailed(f"failed to launch {argv[0]}")


def _spawn_and_exit(executable: str, argv: list[str]) -> NoReturn:
    try:
        proc = subprocess.run([executable, *argv[1:]], check=False)
    except OSError as exc:
        raise ExecutionFailed(f"failed to launch {argv[0]}: {exc}") from exc
    except KeyboardInterrupt:
        sys.exit(130)
    sys.exit(proc.returncode)
