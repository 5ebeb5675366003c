"""dotify CLI - Command-line interface for dotfiles management."""

import typer

from ..utils import setup_logging
from . import edit, files, save, setup, version

# Create the main app
app = typer.Typer(
    name="dotify",
    help="Manage your dotfiles with symbolic links.",
    add_completion=True,
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging output.",
    ),
):
    """dotify - keep your dotfiles in one directory, linked into home."""
    setup_logging(verbose=verbose)


# Register all commands
setup.register(app)
files.register(app)
edit.register(app)
save.register(app)
version.register(app)


def main():
    """Main entry point for the dotify CLI."""
    app()
