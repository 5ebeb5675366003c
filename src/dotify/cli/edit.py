"""Edit command for dotify CLI."""

import os
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional

import typer

from .helpers import get_config, get_engine
from .save import do_save


def register(app: typer.Typer) -> None:
    """Register the edit command with the app."""
    app.command()(edit)


def open_in_editor(files: List[Path], editor: Optional[str] = None) -> None:
    """Open one or more files in the user's editor.

    $EDITOR and $VISUAL win over the editor from .dotrc.
    """
    if not files:
        typer.echo("No files to open.")
        raise typer.Exit(1)

    command = os.environ.get("EDITOR") or os.environ.get("VISUAL") or editor
    if not command:
        typer.echo("No editor configured. Files are at:")
        for f in files:
            typer.echo(f"  {f}")
        raise typer.Exit(1)

    # Editors are often configured with flags, e.g. "code --wait"
    args = shlex.split(command) + [str(f) for f in files]
    try:
        subprocess.run(args, check=True)
    except FileNotFoundError:
        typer.echo(f"Editor not found: {args[0]}", err=True)
        raise typer.Exit(1)
    except subprocess.CalledProcessError as e:
        typer.echo(f"Editor exited with status {e.returncode}", err=True)
        raise typer.Exit(1)


def edit(
    name: str = typer.Argument(..., help="Linked dotfile to edit"),
    save: bool = typer.Option(
        False, "--save", "-s", help="Save and push dotify files afterwards"
    ),
):
    """Edit a dotify file in your editor.

    Examples:
        dotify edit .vimrc
        dotify edit .zshrc --save
    """
    config = get_config()
    entry = get_engine(config).entry(name)

    if entry is None or not entry.is_linked:
        shown = entry.name if entry else name
        typer.secho(
            f"'{shown}' has not been linked by dotify. "
            f"Please run `dotify link {shown}` to edit this file.",
            fg=typer.colors.BLUE,
        )
        raise typer.Exit(1)

    open_in_editor([entry.tracked_path], config.editor)

    if save and not do_save():
        raise typer.Exit(1)
