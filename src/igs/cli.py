"""igs CLI — Typer application that starts the interactive status list."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from igs import __version__

app = typer.Typer(
    name="igs",
    help="Stage and unstage git changes from an interactive status list.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console(stderr=True)

KEYS_HELP = """\
Keys:

  j / k, arrows   move down / up
  g, H / G, L     first / last entry
  M               middle entry
  space, enter    stage or unstage the entry
  d               show or hide the entry's diff
  o               open the file and quit
  q, esc          quit
"""


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from igs.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _version_callback(value: bool) -> None:
    if value:
        print(f"igs {__version__}")
        raise typer.Exit()


def _write_starter_config(repo_root: Path) -> None:
    from igs.config.defaults import DEFAULT_TOML
    from igs.config.loader import CONFIG_FILENAME

    config_path = repo_root / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)
    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


@app.command(epilog=KEYS_HELP)
def main(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .igs.toml"),
    init: bool = typer.Option(False, "--init", help="Write a starter .igs.toml and exit"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write a log to this file"),
    debug: bool = typer.Option(False, "--debug", help="Log at debug level (needs --log-file)"),
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """Show the working-tree status as a list and stage entries with single keys."""
    from igs.config.loader import ConfigError, load_config
    from igs.errors import IgsError
    from igs.git.adapter import Git, GitError
    from igs.logs import configure_logging
    from igs.tui.entry_list import EntryList
    from igs.tui.keymap import build_keymap
    from igs.tui.loop import LoopSession, run
    from igs.tui.surface import TerminalSurface
    from igs.tui.terminal import KeyReader

    repo_root = _resolve_repo_root()

    if init:
        _write_starter_config(repo_root)
        raise typer.Exit(code=0)

    try:
        cfg = load_config(repo_root, config)
        keymap = build_keymap(repo_root, cfg.keys.file)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    configure_logging(log_file, debug=debug)

    if not sys.stdin.isatty():
        console.print("[bold red]Error:[/bold red] igs needs an interactive terminal")
        raise typer.Exit(code=2)

    git = Git(Path.cwd(), cfg)
    session = LoopSession(
        entries=EntryList(git, cfg.colors),
        surface=TerminalSurface(Console(highlight=False)),
        keys=KeyReader(),
        keymap=keymap,
    )

    try:
        run(session)
    except (IgsError, GitError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
