"""Shared helper functions for CLI commands."""

import logging
from typing import Iterable, Optional

import typer

from ..config import Config, load_config
from ..dotfiles import (
    Action,
    BatchResult,
    Entry,
    FailureKind,
    LinkBuilder,
    Outcome,
    SyncEngine,
)
from ..dotfiles.engine import Confirm
from ..system import Environment

logger = logging.getLogger(__name__)

# Wording used when a bulk run finds nothing to do
NOTHING_TO_DO = {
    Action.TRACK: "No new dotfiles to add.",
    Action.UNTRACK: "No linked dotfiles to remove.",
    Action.LINK: "Every dotfile is already linked.",
    Action.UNLINK: "No linked dotfiles to unlink.",
}

# Longer explanations for single-entry failures
FAILURE_MESSAGES = {
    (Action.TRACK, FailureKind.NOT_FOUND):
        "The file '{name}' doesn't exist in the home directory.",
    (Action.TRACK, FailureKind.NOT_MANAGED):
        "'{name}' holds the dotify directory and cannot be added.",
    (Action.LINK, FailureKind.NOT_MANAGED):
        "'{name}' holds the dotify directory and cannot be linked.",
    (Action.UNTRACK, FailureKind.NOT_MANAGED):
        "The file '{name}' is not managed by dotify. Cannot remove.",
    (Action.UNTRACK, FailureKind.NOT_FOUND):
        "The file '~/{name}' does not exist.",
    (Action.LINK, FailureKind.NOT_FOUND):
        "'{name}' does not exist in dotify.",
    (Action.UNLINK, FailureKind.NOT_FOUND):
        "'{name}' does not exist in dotify.",
    (Action.UNLINK, FailureKind.NOT_MANAGED):
        "'~/{name}' is not linked to dotify. Leaving it alone.",
}


def get_config() -> Config:
    """Load ~/.dotrc for the current $HOME."""
    return load_config(Environment())


def get_engine(config: Optional[Config] = None) -> SyncEngine:
    return SyncEngine(config or get_config())


def not_setup_warning(config: Config):
    """Warn (without stopping) when the tracked directory is missing."""
    if not config.is_installed():
        typer.secho(
            "dotify has not been set up yet! "
            "You need to run 'dotify setup' first.",
            fg=typer.colors.YELLOW,
        )


def confirm_with_user(force: bool) -> Optional[Confirm]:
    """Confirmation callback for the engine, or None when forced."""
    if force:
        return None

    def confirm(entry: Entry, action: Action) -> bool:
        question = LinkBuilder(entry).describe(action)
        return typer.confirm(question, default=True)

    return confirm


def say_status(status: str, name: str, color: Optional[str] = None):
    """Print an aligned status line like '      linked  .vimrc'."""
    typer.echo(f"{typer.style(f'{status:>14}', fg=color)}  {name}")


def print_outcome(outcome: Outcome, single: bool = False):
    """Render one outcome. Single-entry runs get a full sentence on failure."""
    if outcome.changed:
        say_status(outcome.status, outcome.name, typer.colors.GREEN)
        return

    if outcome.kind in (FailureKind.SKIPPED, FailureKind.ALREADY_IN_STATE):
        say_status(outcome.status, outcome.name, typer.colors.YELLOW)
        return

    template = FAILURE_MESSAGES.get((outcome.action, outcome.kind))
    if single and template:
        typer.secho(template.format(name=outcome.name), fg=typer.colors.BLUE)
    else:
        say_status(outcome.status, outcome.name, typer.colors.RED)
    if outcome.kind == FailureKind.IO_FAILURE:
        typer.echo(f"    {outcome.message}", err=True)


def report(outcomes: Iterable[Outcome], single: bool = False) -> bool:
    """Print outcomes; returns True if none of them failed."""
    ok = True
    for outcome in outcomes:
        print_outcome(outcome, single=single)
        ok = ok and outcome.ok
    return ok


def run_action(action: Action, name: Optional[str], force: bool):
    """Shared body of the track/untrack/link/unlink commands.

    Raises typer.Exit(1) if any entry failed.
    """
    config = get_config()
    not_setup_warning(config)
    engine = get_engine(config)
    confirm = confirm_with_user(force)

    if name is not None:
        ok = report([engine.run(action, name, confirm)], single=True)
    else:
        result: BatchResult = engine.run_all(action, confirm)
        if not len(result):
            typer.secho(NOTHING_TO_DO[action], fg=typer.colors.BLUE)
        ok = report(result)

    if not ok:
        raise typer.Exit(1)
