"""Utility helpers shared across dotify."""

import importlib.metadata
import logging


def setup_logging(verbose: bool = False):
    """Configure root logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )
    # basicConfig is a no-op once handlers exist, so set the level anyway
    logging.getLogger().setLevel(level)


def get_version() -> str:
    """Get the installed version of dotify."""
    try:
        return importlib.metadata.version("dotify")
    except importlib.metadata.PackageNotFoundError:
        return "(development)"
