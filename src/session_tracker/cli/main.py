"""Command line interface for the session change tracker."""

import logging
import time
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from session_tracker.config import TrackerConfig, load_config
from session_tracker.core.tracker import ChangeTracker
from session_tracker.models.result import DiffStatus

console = Console()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def truncate_lines(text: str, max_lines: int) -> str:
    """Limit text to ``max_lines`` lines, noting how many were dropped."""
    lines = text.splitlines()
    if max_lines <= 0 or len(lines) <= max_lines:
        return text
    hidden = len(lines) - max_lines
    return "\n".join(lines[:max_lines] + [f"... ({hidden} more lines)"])


def _print_diff(text: str, max_lines: int, plain: bool = False) -> None:
    shown = truncate_lines(text, max_lines)
    if plain:
        console.print(
            shown, markup=False, emoji=False, highlight=False, soft_wrap=True
        )
    else:
        console.print(Syntax(shown, "diff", theme="ansi_dark", word_wrap=True))


def _load_config_or_exit(project_root: Path) -> TrackerConfig:
    try:
        return load_config(project_root)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e


def _start_tracker(project_root: Path, config: TrackerConfig) -> ChangeTracker:
    """Start a tracker or exit if the directory cannot be tracked."""
    if not config.enabled:
        console.print("[yellow]Change tracking is disabled by configuration[/yellow]")
        raise click.Abort()

    tracker = ChangeTracker(
        enabled=True,
        working_directory=project_root,
        include_untracked=config.include_untracked,
    )
    if not tracker.enabled:
        console.print(
            f"[red]Error: cannot track {project_root} "
            "(not a git repository or no commits yet)[/red]"
        )
        raise click.Abort()
    return tracker


project_path_option = click.option(
    "--project-path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Path to project directory",
)


@click.group()
@click.version_option(package_name="session-diff-tracker")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    help="Logging level",
)
def main(log_level: str):
    """Session Tracker - show what changed in a working tree this session."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@main.command()
@project_path_option
def status(project_path: str):
    """Show tracking status for a project."""
    project_root = Path(project_path).resolve()
    config = _load_config_or_exit(project_root)

    tracker = ChangeTracker(
        enabled=config.enabled,
        working_directory=project_root,
        include_untracked=config.include_untracked,
    )
    session = tracker.snapshot()

    console.print(f"[bold]Project:[/bold] {project_root}")
    console.print(
        f"[bold]Tracking:[/bold] {'Enabled' if session.enabled else 'Unavailable'}"
    )
    if not session.enabled:
        return

    console.print(f"[bold]Baseline:[/bold] {session.baseline_revision}")
    console.print(
        f"[bold]Session start:[/bold] {session.session_start_time.isoformat()}"
    )

    exclusions = tracker.worktree_exclusions()
    if not exclusions:
        console.print("[dim]No nested worktrees excluded[/dim]")
        return

    table = Table(title="Excluded worktrees")
    table.add_column("Pathspec", style="cyan")
    for pattern in exclusions:
        table.add_row(pattern)
    console.print(table)


@main.command()
@project_path_option
@click.option("--max-lines", type=int, help="Truncate output to this many lines")
@click.option("--no-color", is_flag=True, help="Print the diff without highlighting")
def diff(project_path: str, max_lines: Optional[int], no_color: bool):
    """Start a session and show its combined diff against HEAD."""
    project_root = Path(project_path).resolve()
    config = _load_config_or_exit(project_root)
    tracker = _start_tracker(project_root, config)

    text = tracker.get_diff()
    if not text:
        console.print("[green]No changes[/green]")
        return

    limit = config.max_display_lines if max_lines is None else max_lines
    _print_diff(text, limit, plain=no_color)


@main.command()
@project_path_option
@click.option("--interval", type=float, help="Seconds between checks")
@click.option("--max-lines", type=int, help="Truncate each diff to this many lines")
@click.option("--iterations", type=int, help="Stop after this many checks")
@click.option("--no-color", is_flag=True, help="Print diffs without highlighting")
def watch(
    project_path: str,
    interval: Optional[float],
    max_lines: Optional[int],
    iterations: Optional[int],
    no_color: bool,
):
    """Start a session and print the diff whenever it changes."""
    project_root = Path(project_path).resolve()
    config = _load_config_or_exit(project_root)
    tracker = _start_tracker(project_root, config)

    interval = config.poll_interval if interval is None else interval
    limit = config.max_display_lines if max_lines is None else max_lines

    console.print(
        f"🔍 Watching {project_root} from {tracker.baseline_revision[:8]} "
        f"(every {interval:g}s, Ctrl-C to stop)"
    )

    checks = 0
    try:
        while iterations is None or checks < iterations:
            if checks:
                time.sleep(interval)
            checks += 1

            update = tracker.get_diff_if_changed()
            if update.status == DiffStatus.UNAVAILABLE:
                console.print("[red]Change tracking became unavailable[/red]")
                raise click.Abort()
            if not update.has_changes:
                continue

            stamp = time.strftime("%H:%M:%S")
            if update.text:
                console.rule(f"Changes at {stamp}")
                _print_diff(update.text, limit, plain=no_color)
            else:
                console.print(f"[dim]{stamp} No changes[/dim]")
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped watching[/yellow]")


if __name__ == "__main__":
    main()
