"""Tests for ``rx init``: copying the executable and updating the shell config."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from rx_launcher.config import Config
from rx_launcher.errors import InstallError
from rx_launcher.install import (
    PATH_MARKER,
    default_install_path,
    find_shell_config,
    install,
    register_on_path,
    run_init,
)
from rx_launcher.io_utils import read_text


@pytest.fixture
def fake_exe(tmp_path: Path) -> Path:
    exe = tmp_path / "venv" / "bin" / "rx"
    exe.parent.mkdir(parents=True)
    exe.write_text("#!/usr/bin/env python3\nprint('rx')\n", encoding="utf-8")
    return exe


class TestPaths:
    def test_default_install_path_is_local_bin(self, tmp_path: Path) -> None:
        with patch("rx_launcher.install.resolve_home", return_value=tmp_path):
            assert default_install_path() == tmp_path / ".local" / "bin"

    def test_default_install_path_without_home(self) -> None:
        with patch("rx_launcher.install.resolve_home", return_value=None):
            assert default_install_path() == Path("/usr/local/bin")

    def test_find_shell_config_prefers_existing_file(self, tmp_path: Path) -> None:
        (tmp_path / ".bashrc").write_text("", encoding="utf-8")
        (tmp_path / ".bash_profile").write_text("", encoding="utf-8")
        with patch("rx_launcher.install.resolve_home", return_value=tmp_path):
            assert find_shell_config() == tmp_path / ".bashrc"

    def test_find_shell_config_defaults_to_zshrc(self, tmp_path: Path) -> None:
        with patch("rx_launcher.install.resolve_home", return_value=tmp_path):
            assert find_shell_config() == tmp_path / ".zshrc"


class TestInstall:
    def test_copies_executable_with_exec_bits(self, tmp_path: Path, fake_exe: Path) -> None:
        target = tmp_path / "bin"
        dest = install(target, executable=fake_exe)

        assert dest == target / "rx"
        assert read_text(dest) == read_text(fake_exe)
        if os.name != "nt":
            assert dest.stat().st_mode & stat.S_IXUSR

    def test_reinstall_overwrites(self, tmp_path: Path, fake_exe: Path) -> None:
        target = tmp_path / "bin"
        install(target, executable=fake_exe)
        fake_exe.write_text("new contents\n", encoding="utf-8")
        install(target, executable=fake_exe)
        assert read_text(target / "rx") == "new contents\n"

    def test_unwritable_target_raises(self, tmp_path: Path, fake_exe: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(InstallError, match="install directory"):
            install(blocker / "bin", executable=fake_exe)


class TestRegisterOnPath:
    def test_appends_export_line(self, tmp_path: Path) -> None:
        rc = tmp_path / ".zshrc"
        rc.write_text("alias ll='ls -l'\n", encoding="utf-8")

        assert register_on_path(rc, Path("/home/u/.local/bin")) is True
        content = read_text(rc)
        assert content.startswith("alias ll='ls -l'\n")
        assert PATH_MARKER in content
        assert 'export PATH="$PATH:/home/u/.local/bin"' in content

    def test_is_idempotent(self, tmp_path: Path) -> None:
        rc = tmp_path / ".bashrc"
        rc.write_text("", encoding="utf-8")
        register_on_path(rc, Path("/opt/rx"))
        first = read_text(rc)

        assert register_on_path(rc, Path("/opt/rx")) is False
        assert read_text(rc) == first

    def test_creates_missing_config(self, tmp_path: Path) -> None:
        rc = tmp_path / ".zshrc"
        register_on_path(rc, Path("/opt/rx"))
        assert "/opt/rx" in read_text(rc)


class TestRunInit:
    def test_uses_configured_paths(self, tmp_path: Path, fake_exe: Path) -> None:
        cfg = Config(install_dir=str(tmp_path / "bin"), shell_config=str(tmp_path / ".zshrc"))
        with patch("rx_launcher.install.current_executable", return_value=fake_exe):
            run_init(cfg)

        assert (tmp_path / "bin" / "rx").is_file()
        assert str(tmp_path / "bin") in read_text(tmp_path / ".zshrc")

    def test_missing_executable_raises(self, tmp_path: Path) -> None:
        cfg = Config(install_dir=str(tmp_path / "bin"), shell_config=str(tmp_path / ".zshrc"))
        with patch("rx_launcher.install.sys.argv", ["python"]), patch(
            "rx_launcher.install.shutil.which", return_value=None
        ):
            with pytest.raises(InstallError, match="executable path"):
                run_init(cfg)
