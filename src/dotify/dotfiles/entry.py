"""A single dotfile under consideration, identified by its base name."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .types import LinkStatus

INVALID_NAMES = ("", ".", "..")


def entry_name(value: Union[str, Path]) -> Optional[str]:
    """Reduce user input to an entry name.

    ``~/.vimrc``, ``/home/me/.vimrc`` and ``.vimrc`` all name ``.vimrc``.
    Returns None for input that cannot name an entry.
    """
    text = str(value).rstrip("/")
    if not text:
        return None
    name = Path(text).name
    if name in INVALID_NAMES:
        return None
    return name


@dataclass(frozen=True)
class Entry:
    """One file or directory, seen from both the home and tracked side.

    Only ``name`` takes part in equality and hashing. The two roots are
    context; status is read from the filesystem on every access.
    """

    name: str
    home_root: Path = field(compare=False, repr=False)
    tracked_root: Path = field(compare=False, repr=False)

    @classmethod
    def from_config(cls, name: str, config) -> "Entry":
        return cls(name, config.home(), config.tracked_root())

    @property
    def home_path(self) -> Path:
        return self.home_root / self.name

    @property
    def tracked_path(self) -> Path:
        return self.tracked_root / self.name

    @property
    def home_exists(self) -> bool:
        # lexists: a dangling symlink still occupies the home path
        return os.path.lexists(self.home_path)

    @property
    def is_tracked(self) -> bool:
        return self.tracked_path.exists()

    @property
    def is_linked(self) -> bool:
        """Home path is a symlink resolving to the tracked copy."""
        if not self.home_path.is_symlink() or not self.is_tracked:
            return False
        return os.path.realpath(self.home_path) == os.path.realpath(
            self.tracked_path
        )

    @property
    def holds_tracked_root(self) -> bool:
        """Home path is the tracked directory or one of its parents."""
        home = os.path.realpath(self.home_path)
        tracked = os.path.realpath(self.tracked_root)
        return os.path.commonpath([home, tracked]) == home

    @property
    def status(self) -> LinkStatus:
        if self.is_linked:
            return LinkStatus.LINKED
        if self.is_tracked:
            return LinkStatus.UNLINKED
        return LinkStatus.UNTRACKED
