"""Dotfile synchronization engine."""

from .collection import Collection
from .engine import SyncEngine
from .entry import Entry, entry_name
from .link_builder import LinkBuilder
from .repo import ChangedFile, TrackedRepo
from .types import (
    Action,
    BatchResult,
    FailureKind,
    LinkStatus,
    Outcome,
)

__all__ = [
    "Action",
    "BatchResult",
    "ChangedFile",
    "Collection",
    "Entry",
    "FailureKind",
    "LinkBuilder",
    "LinkStatus",
    "Outcome",
    "SyncEngine",
    "TrackedRepo",
    "entry_name",
]
