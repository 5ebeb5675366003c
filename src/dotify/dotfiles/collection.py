"""Discovery of entries in the home and tracked directories."""

import fnmatch
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from ..config import HOME, TRACKED, Config
from .entry import INVALID_NAMES, Entry

logger = logging.getLogger(__name__)


def is_ignored(name: str, patterns: Iterable[str]) -> bool:
    """True if name equals, or glob-matches, any ignore pattern."""
    return any(
        name == pattern or fnmatch.fnmatchcase(name, pattern)
        for pattern in patterns
    )


def list_names(directory: Path, include: str = "*") -> List[str]:
    """Immediate children of directory, in listing order.

    A missing directory yields no names: before setup there is simply
    nothing tracked yet.
    """
    try:
        children = list(directory.iterdir())
    except FileNotFoundError:
        logger.debug(f"{directory} does not exist, nothing to scan")
        return []
    except NotADirectoryError:
        logger.warning(f"{directory} is not a directory, nothing to scan")
        return []

    return [
        child.name
        for child in children
        if child.name not in INVALID_NAMES
        and fnmatch.fnmatchcase(child.name, include)
    ]


class Collection:
    """An ordered, name-unique set of entries from one directory scan.

    Built fresh for every query; ignore rules are applied once at
    construction and the collection is not changed afterwards.
    """

    def __init__(self, entries: Iterable[Entry], ignore: Iterable[str] = ()):
        patterns = list(ignore)
        unique = {}
        for entry in entries:
            if entry.name in INVALID_NAMES or entry.name in unique:
                continue
            if is_ignored(entry.name, patterns):
                continue
            unique[entry.name] = entry
        self._entries = tuple(unique.values())

    @classmethod
    def scan(
        cls,
        directory: Path,
        config: Config,
        category: str,
        include: str = "*",
    ) -> "Collection":
        home_root = config.home()
        tracked_root = config.tracked_root()
        entries = [
            Entry(name, home_root, tracked_root)
            for name in list_names(directory, include)
        ]
        return cls(entries, config.ignore_list(category))

    @classmethod
    def scan_home(cls, config: Config) -> "Collection":
        """Dotfiles in the home directory, minus home ignores."""
        return cls.scan(config.home(), config, HOME, config.include)

    @classmethod
    def scan_tracked(cls, config: Config) -> "Collection":
        """Entries in the tracked directory, minus tracked ignores."""
        return cls.scan(config.tracked_root(), config, TRACKED)

    def linked(self) -> List[Entry]:
        return [e for e in self._entries if e.is_linked]

    def unlinked(self) -> List[Entry]:
        return [e for e in self._entries if not e.is_linked]

    def names(self) -> List[str]:
        return [e.name for e in self._entries]

    def find(self, name: str) -> Optional[Entry]:
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, item: Union[str, Entry]) -> bool:
        name = item.name if isinstance(item, Entry) else item
        return self.find(name) is not None

    def __repr__(self) -> str:
        return f"Collection({self.names()!r})"
