"""Track, untrack, link, unlink and list commands for dotify CLI."""

from typing import Optional

import typer

from ..dotfiles import Action, LinkStatus
from .helpers import get_config, get_engine, run_action

STATUS_COLORS = {
    LinkStatus.LINKED: typer.colors.GREEN,
    LinkStatus.UNLINKED: typer.colors.YELLOW,
    LinkStatus.UNTRACKED: typer.colors.RED,
}


def register(app: typer.Typer) -> None:
    """Register file commands with the app."""
    app.command()(track)
    app.command()(untrack)
    app.command()(link)
    app.command()(unlink)
    app.command(name="list")(list_entries)
    # Names used by earlier releases
    app.command(name="add", hidden=True)(track)
    app.command(name="remove", hidden=True)(untrack)


def track(
    name: Optional[str] = typer.Argument(
        None, help="Dotfile to add (default: every untracked dotfile)"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Add without confirmation"
    ),
):
    """Copy one or all home dotfiles into the dotify directory.

    Examples:
        dotify track .vimrc
        dotify track            # every dotfile not yet in dotify

    Run 'dotify link' afterwards to point your home directory at the copies.
    """
    run_action(Action.TRACK, name, force)


def untrack(
    name: Optional[str] = typer.Argument(
        None, help="Dotfile to remove (default: every linked dotfile)"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Remove without confirmation"
    ),
):
    """Move one or all dotfiles out of dotify and back into your home directory.

    The home directory gets a plain copy back and the dotify copy is
    deleted. Run 'dotify track FILE' to manage it again.
    """
    run_action(Action.UNTRACK, name, force)


def link(
    name: Optional[str] = typer.Argument(
        None, help="Dotfile to link (default: every unlinked dotfile)"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Link without confirmation"
    ),
):
    """Link one or all dotify files into your home directory.

    Whatever is at the home path is replaced by the link.
    """
    run_action(Action.LINK, name, force)


def unlink(
    name: Optional[str] = typer.Argument(
        None, help="Dotfile to unlink (default: every linked dotfile)"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Unlink without confirmation"
    ),
):
    """Remove the home directory link for one or all dotfiles.

    The files stay in dotify, so 'dotify link' can put them back.
    """
    run_action(Action.UNLINK, name, force)


def list_entries():
    """Show tracked dotfiles with their link status."""
    config = get_config()
    engine = get_engine(config)
    tracked, home = engine.status()

    typer.echo(f"\n--- dotify ({config.tracked_root()}) ---")
    if not config.is_installed():
        typer.echo("Not set up. Run 'dotify setup' first.")
        return

    if not len(tracked):
        typer.echo("No dotfiles tracked yet.")
    for entry in tracked:
        status = entry.status
        label = typer.style(f"{status.value:>10}", fg=STATUS_COLORS[status])
        typer.echo(f"  {label}  {entry.name}")

    untracked = [e.name for e in home if e.status == LinkStatus.UNTRACKED]
    if untracked:
        typer.echo("\nNot tracked:")
        for name in untracked:
            typer.echo(f"  {name}")
