"""Save command for committing and pushing the dotify directory."""

import subprocess
from typing import Optional

import typer

from ..dotfiles import TrackedRepo
from .helpers import get_config, say_status


def register(app: typer.Typer) -> None:
    """Register save command with the app."""
    app.command()(save)


def _push(repo: TrackedRepo, debug: bool) -> bool:
    typer.secho("Pushing to your remote repo...", fg=typer.colors.BLUE)
    try:
        repo.push()
    except subprocess.CalledProcessError as e:
        typer.secho(
            "There was a problem pushing to your remote repo.",
            fg=typer.colors.RED,
        )
        if debug:
            typer.secho(f"Git error: {e.stderr.strip()}", fg=typer.colors.RED)
        return False
    except subprocess.TimeoutExpired:
        typer.secho("Push timed out.", fg=typer.colors.RED)
        return False

    typer.secho("Successfully pushed!", fg=typer.colors.BLUE)
    return True


def do_save(
    message: Optional[str] = None,
    force: bool = False,
    push: bool = False,
    debug: bool = False,
    verbose: bool = True,
) -> bool:
    """Stage changed files, commit them and push.

    Args:
        message: Commit message; prompted for when None
        force: Stage every changed file without asking
        push: Push without asking
        debug: Show git's error output when pushing fails
        verbose: Print a status line per file

    Returns:
        True if everything requested succeeded.
    """
    config = get_config()
    repo = TrackedRepo(config.tracked_root())

    if not repo.is_repo():
        typer.secho("dotify has nothing to save.", fg=typer.colors.BLUE)
        return True

    try:
        changed = repo.changed_files()
    except subprocess.CalledProcessError as e:
        typer.echo(f"Could not read git status: {e.stderr.strip()}", err=True)
        return False

    if changed:
        staged = 0
        for f in changed:
            if verbose:
                say_status("changed", f.path, typer.colors.YELLOW)
            if force or typer.confirm(
                f"Do you want to add '{f.path}' to the Git index?",
                default=True,
            ):
                try:
                    repo.add(f.path)
                except subprocess.CalledProcessError as e:
                    typer.echo(
                        f"Could not add '{f.path}': {e.stderr.strip()}",
                        err=True,
                    )
                    return False
                staged += 1
                if verbose:
                    say_status("added", f.path, typer.colors.GREEN)

        if staged:
            if message is None:
                message = typer.prompt("Commit message")
            if verbose:
                typer.secho(message, fg=typer.colors.YELLOW)
            try:
                repo.commit(message)
            except subprocess.CalledProcessError as e:
                typer.echo(f"Commit failed: {e.stderr.strip()}", err=True)
                return False
    else:
        typer.secho(
            "No files have been changed in dotify.", fg=typer.colors.BLUE
        )
        # Nothing new to commit, so only earlier commits are left to push
        push = True

    if push or typer.confirm(
        "Would you like to push these changes to your remote repo?",
        default=True,
    ):
        return _push(repo, debug)
    return True


def save(
    message: Optional[str] = typer.Option(
        None, "--message", "-m", help="Git commit message"
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Do not ask before adding files to the staging area",
    ),
    push: bool = typer.Option(
        False, "--push", "-p", help="Push to the remote without asking"
    ),
    debug: bool = typer.Option(
        False, "--debug", "-d", help="Show git errors if pushing fails"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Do not list each changed file"
    ),
):
    """Commit changed dotify files and push them to your remote.

    Only works once the dotify directory is a git repository, e.g. after
    'git init' or 'git clone' inside it.

    Examples:
        dotify save -m "Update vimrc"
        dotify save --force --push
    """
    if not do_save(
        message=message,
        force=force,
        push=push,
        debug=debug,
        verbose=not quiet,
    ):
        raise typer.Exit(1)
