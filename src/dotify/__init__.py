"""dotify - Keep your dotfiles in one place, linked into your home."""

from .cli import main
from .config import Config, load_config
from .dotfiles import (
    Action,
    Collection,
    Entry,
    FailureKind,
    LinkBuilder,
    LinkStatus,
    Outcome,
    SyncEngine,
)
from .system import Environment
from .utils import get_version

__all__ = [
    "Action",
    "Collection",
    "Config",
    "Entry",
    "Environment",
    "FailureKind",
    "LinkBuilder",
    "LinkStatus",
    "Outcome",
    "SyncEngine",
    "get_version",
    "load_config",
    "main",
]
