"""Facts about the machine dotify runs on."""

import getpass
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class OS(Enum):
    """Operating systems a ``platforms:`` block in .dotrc can target."""

    LINUX = "linux"
    MACOS = "macos"
    UNKNOWN = "unknown"


def detect_os() -> OS:
    if sys.platform.startswith("linux"):
        return OS.LINUX
    if sys.platform == "darwin":
        return OS.MACOS
    return OS.UNKNOWN


def home_directory() -> Path:
    """The directory dotfiles are linked into.

    $HOME is honoured even when it disagrees with the password database,
    so ``HOME=/tmp/x dotify ...`` works on a scratch directory.
    """
    home = os.environ.get("HOME")
    return Path(home) if home else Path.home()


def user_name() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return home_directory().name


@dataclass
class Environment:
    """Operating system, home directory and user for this run."""

    os: OS = field(default_factory=detect_os)
    home: Path = field(default_factory=home_directory)
    user: str = field(default_factory=user_name)

    def is_linux(self) -> bool:
        return self.os == OS.LINUX

    def is_macos(self) -> bool:
        return self.os == OS.MACOS
