"""Version command for dotify CLI."""

import json
import urllib.request
from urllib.error import URLError

import typer

from ..utils import get_version

PYPI_URL = "https://pypi.org/pypi/dotify/json"


def register(app: typer.Typer) -> None:
    """Register the version command with the app."""
    app.command()(version)


def get_latest_version_from_pypi(timeout: int = 5) -> str:
    """Get the latest released version of dotify from PyPI.

    Raises:
        URLError, OSError: If PyPI cannot be reached
        ValueError, KeyError: If the response is not what PyPI sends
    """
    with urllib.request.urlopen(PYPI_URL, timeout=timeout) as response:
        data = json.loads(response.read())
    return data["info"]["version"]


def parse_version(version_str: str) -> tuple:
    """Parse a version string into a comparable tuple."""
    # Remove any leading 'v' and development markers
    version_str = version_str.lstrip("v").split("-")[0].split("+")[0]
    try:
        parts = version_str.split(".")
        return tuple(int(p) for p in parts[:3])
    except (ValueError, IndexError):
        return (0, 0, 0)


def is_version_lower(current: str, latest: str) -> bool:
    """Check if current version is lower than latest."""
    return parse_version(current) < parse_version(latest)


def version(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show errors from the version check"
    ),
):
    """Check whether your dotify version is up to date."""
    current = get_version()

    try:
        latest = get_latest_version_from_pypi()
    except (URLError, OSError, ValueError, KeyError) as e:
        typer.secho(
            "There was an error checking your dotify version. "
            "Please try again.",
            fg=typer.colors.RED,
        )
        if verbose:
            typer.echo(str(e))
        typer.echo(f"dotify version {current}")
        return

    if is_version_lower(current, latest):
        typer.secho(
            "Your version of dotify is out of date.", fg=typer.colors.YELLOW
        )
        typer.secho(f"  Your Version:   {current}", fg=typer.colors.BLUE)
        typer.secho(f"  Latest Version: {latest}", fg=typer.colors.BLUE)
        typer.echo("Run 'pip install --upgrade dotify' to update.")
    else:
        typer.secho(
            f"Your version of dotify is up to date: {current}",
            fg=typer.colors.BLUE,
        )
