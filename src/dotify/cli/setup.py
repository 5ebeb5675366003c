"""Setup and install commands for dotify CLI."""

import typer

from .edit import open_in_editor
from .helpers import (
    confirm_with_user,
    get_config,
    get_engine,
    report,
)


def register(app: typer.Typer) -> None:
    """Register setup commands with the app."""
    app.command()(setup)
    app.command()(install)


def setup(
    install_files: bool = typer.Option(
        True,
        "--install/--no-install",
        help="Add your home dotfiles to dotify after setup",
    ),
    edit_config: bool = typer.Option(
        True,
        "--edit-config/--no-edit-config",
        help="Open .dotrc in your editor",
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Install without confirmation"
    ),
):
    """Set up your system for dotify to manage your dotfiles."""
    config = get_config()

    if config.is_installed():
        typer.secho("dotify is already set up.", fg=typer.colors.BLUE)
    else:
        config.tracked_root().mkdir(parents=True, exist_ok=True)
        typer.secho(
            f"✓ Created {config.tracked_root()}", fg=typer.colors.GREEN
        )

    if config.write_default():
        typer.secho(f"✓ Created {config.config_file}", fg=typer.colors.GREEN)

    if edit_config:
        typer.secho("Editing config file...", fg=typer.colors.BLUE)
        open_in_editor([config.config_file], config.editor)
        typer.secho("Config file updated.", fg=typer.colors.BLUE)

    if install_files:
        install(force=force)


def install(
    force: bool = typer.Option(
        False, "--force", "-f", help="Add files without confirmation"
    ),
):
    """Add every untracked dotfile in your home directory to dotify."""
    # Reload: the config may have just been edited
    config = get_config()
    if not config.is_installed():
        setup(install_files=False, edit_config=False, force=force)

    result = get_engine(config).track_all(confirm_with_user(force))
    if not len(result):
        typer.secho("No new dotfiles to add.", fg=typer.colors.BLUE)
    if not report(result):
        raise typer.Exit(1)
