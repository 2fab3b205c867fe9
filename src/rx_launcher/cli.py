"""rx CLI: pick a script from package.json or a Makefile target and run it.

Installed as ``rx`` console_script via pipx / pip.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click
from rich.markup import escape

from rx_launcher import __version__
from rx_launcher import log as rlog
from rx_launcher.config import Config, PROG_NAME
from rx_launcher.errors import ExecutionFailed, InstallError, NoSourceFound
from rx_launcher.sources.base import TaskSource
from rx_launcher.sources.registry import SOURCE_NAMES, discover_source
from rx_launcher.tasks.model import Task


# ── Custom Click group that tolerates stray arguments ────────────────

class RxGroup(click.Group):
    """Only ``init`` is a subcommand; any other positional word still launches the picker."""

    # Options whose value is the next argument.
    _VALUE_OPTIONS = frozenset({"-C", "--directory", "--source"})

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        """Drop positional words that are not subcommands before Click parses them."""
        kept: list[str] = []
        expect_value = False
        for i, arg in enumerate(args):
            if expect_value:
                kept.append(arg)
                expect_value = False
                continue
            if arg.startswith("-"):
                kept.append(arg)
                expect_value = arg in self._VALUE_OPTIONS or self._bundle_ends_with_value(arg)
                continue
            if arg in self.commands:
                kept.extend(args[i:])
                break
            rlog.debug(f"ignoring argument {arg!r}")
        return super().parse_args(ctx, kept)

    @staticmethod
    def _bundle_ends_with_value(arg: str) -> bool:
        """``-vC`` takes the next word as its directory, like ``-v -C``."""
        return not arg.startswith("--") and len(arg) > 2 and arg.endswith("C")


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

NO_SOURCE_HINT = "No package.json or Makefile found in the current directory."


@click.group(
    cls=RxGroup,
    invoke_without_command=True,
    context_settings=CONTEXT_SETTINGS,
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Run as if started in this directory",
)
@click.option("--source", type=click.Choice(SOURCE_NAMES), default=None, help="Only look at this task source")
@click.option("--list", "list_only", is_flag=True, help="Print the tasks and exit")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.version_option(__version__, prog_name=PROG_NAME)
@click.pass_context
def main(
    ctx: click.Context,
    directory: Path | None,
    source: str | None,
    list_only: bool,
    verbose: bool,
) -> None:
    """rx: run npm scripts and make targets from a filterable list.

    Looks for package.json scripts first, then Makefile targets, in the
    current directory. Type to filter, press enter to run.

    \b
    EXAMPLES:
      rx                      # Pick a task interactively
      rx --list               # Print the tasks without the picker
      rx --source make        # Ignore package.json
      rx -C ../web            # Use another directory
      rx init                 # Install rx to ~/.local/bin and add it to PATH

    \b
    KEYS:
      type        filter by name
      enter/tab   move to the list
      ↑/↓         navigate
      / ctrl+f    back to the filter
      enter       run the selected task
      q esc       quit
    """
    rlog.set_verbose(verbose)

    if directory is not None:
        os.chdir(directory)

    cfg = Config(source=source or "", list_only=list_only)
    ctx.obj = cfg

    # ── If a subcommand (init) was invoked, skip the picker ──────
    if ctx.invoked_subcommand is not None:
        return

    _run_picker(cfg)


# ── Subcommand: init ─────────────────────────────────────────────


@main.command()
@click.option("--dir", "install_dir", default="", help="Install directory (default: ~/.local/bin)")
@click.option("--shell-config", default="", help="Shell rc file to update (default: first of ~/.zshrc, ~/.bashrc, ~/.bash_profile)")
@click.pass_context
def init(ctx: click.Context, install_dir: str, shell_config: str) -> None:
    """Install rx and add its directory to PATH."""
    from rx_launcher.install import run_init

    cfg: Config = ctx.obj if isinstance(ctx.obj, Config) else Config()
    if install_dir:
        cfg.install_dir = install_dir
    if shell_config:
        cfg.shell_config = shell_config

    try:
        run_init(cfg)
    except InstallError as exc:
        rlog.error(f"Error installing {PROG_NAME}: {exc}")
        sys.exit(1)


# ── Picker ───────────────────────────────────────────────────────


def _is_interactive() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def _run_picker(cfg: Config) -> None:
    names = (cfg.source,) if cfg.source else SOURCE_NAMES
    try:
        source, tasks = discover_source(Path.cwd(), names=names, cfg=cfg)
    except NoSourceFound as exc:
        rlog.error(f"Error: {exc}")
        for reason in exc.reasons:
            rlog.debug(reason)
        rlog.console.print(NO_SOURCE_HINT)
        sys.exit(1)

    if cfg.list_only:
        _print_tasks(source, tasks)
        return

    if not _is_interactive():
        rlog.error("Not a TTY; the picker needs an interactive terminal. Use --list instead.")
        sys.exit(1)

    from rx_launcher.session import Session
    from rx_launcher.tui import run_selector

    session = run_selector(Session.start(tasks), f"Available scripts from {source.identify()}")
    if session.chosen is None:
        rlog.bye()
        return

    _handoff(source, session.chosen)


def _print_tasks(source: TaskSource, tasks: list[Task]) -> None:
    rlog.console.print(f"[bold]Available scripts from {source.identify()}[/bold]")
    width = max(len(t.name) for t in tasks)
    for task in tasks:
        rlog.console.print(f"  [cyan]{escape(task.name.ljust(width))}[/cyan]  [dim]{escape(task.description)}[/dim]")


def _handoff(source: TaskSource, task: Task) -> None:
    """Run *task* with the source that listed it.  Only returns by exiting."""
    rlog.running(source.command_line(task.name))
    try:
        source.execute(task.name)
    except ExecutionFailed as exc:
        rlog.error(f"Error executing script: {exc}")
        sys.exit(1)
