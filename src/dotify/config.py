from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import ConfigError
from .system import Environment

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".dotrc"

TRACKED = "tracked"
HOME = "home"
IGNORE_CATEGORIES = (TRACKED, HOME)

# Category names used by older .dotrc files
LEGACY_CATEGORIES = {"dotify": TRACKED, "dotfiles": HOME}

SCALAR_KEYS = ("dirname", "editor", "include", "home")

DEFAULT_TEMPLATE = """\
# dotify configuration
#
# dirname: name of the tracked directory inside your home directory
# editor:  program used by `dotify edit`
# include: glob of home directory entries dotify looks at
# ignore:  extra names (or glob patterns) to leave alone
dirname: .dotify
editor: vim
include: ".*"
ignore:
  tracked:
    - .DS_Store
    - .git
    - .gitmodules
  home:
    - .DS_Store
    - .Trash
    - .dropbox
# platforms:
#   macos:
#     ignore:
#       home:
#         - .CFUserTextEncoding
"""


class Config:
    """Path and ignore-rule configuration for dotify.

    Built-in defaults are merged with ~/.dotrc. Scalar settings replace
    the defaults, ignore lists are added to them. A ``platforms`` block
    matching the running OS is merged on top with the same rules.

    A broken .dotrc is never fatal: it is logged and the defaults are used.
    """

    DEFAULT_CONFIG = {
        "dirname": ".dotify",
        "editor": "vim",
        "include": ".*",
        "home": None,
        "ignore": {
            TRACKED: [".DS_Store", ".git", ".gitmodules"],
            HOME: [".DS_Store", ".Trash", ".dropbox"],
        },
    }

    def __init__(
        self,
        config_path: Optional[Path] = None,
        env: Optional[Environment] = None,
    ):
        if env is None:
            env = Environment()

        # Use deepcopy to avoid mutating the class-level DEFAULT_CONFIG
        self.data = copy.deepcopy(self.DEFAULT_CONFIG)
        self.env = env
        self.config_path = config_path
        self._load_error: Optional[str] = None

        if config_path and config_path.exists():
            try:
                user_config = self._load_user_config(config_path)
            except ConfigError as e:
                logger.warning(
                    f"Ignoring {config_path}, using defaults: {e}"
                )
                self._load_error = str(e)
            else:
                self._merge(user_config)

    @property
    def load_error(self) -> Optional[str]:
        """Why the user config was rejected, or None if it loaded."""
        return self._load_error

    def _load_user_config(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML: {e}") from e
        except OSError as e:
            raise ConfigError(f"could not read file: {e}") from e

        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ConfigError("top level must be a mapping")

        config = self._validate(raw)

        platforms = raw.get("platforms") or {}
        if not isinstance(platforms, dict):
            raise ConfigError("'platforms' must be a mapping")
        config["platforms"] = {}
        for name, block in platforms.items():
            if not isinstance(block, dict):
                raise ConfigError(f"platform '{name}' must be a mapping")
            config["platforms"][str(name).lower()] = self._validate(block)

        return config

    def _validate(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        """Check value types and normalise ignore categories."""
        config: Dict[str, Any] = {}

        for key in SCALAR_KEYS:
            if key not in raw or raw[key] is None:
                continue
            if not isinstance(raw[key], str):
                raise ConfigError(f"'{key}' must be a string")
            config[key] = raw[key]

        dirname = config.get("dirname")
        if dirname is not None and (
            not dirname or "/" in dirname or dirname in (".", "..")
        ):
            raise ConfigError(f"invalid dirname: {dirname!r}")

        ignore = raw.get("ignore")
        if ignore is None:
            return config
        if not isinstance(ignore, dict):
            raise ConfigError("'ignore' must be a mapping of categories")

        config["ignore"] = {}
        for category, names in ignore.items():
            category = LEGACY_CATEGORIES.get(category, category)
            if category not in IGNORE_CATEGORIES:
                logger.warning(f"Unknown ignore category: {category}")
                continue
            if names is None:
                continue
            if isinstance(names, str):
                names = [names]
            if not isinstance(names, list) or not all(
                isinstance(n, str) for n in names
            ):
                raise ConfigError(
                    f"'ignore.{category}' must be a list of names"
                )
            config["ignore"].setdefault(category, []).extend(names)

        return config

    def _merge(self, update: Dict[str, Any]):
        for key, value in update.items():
            if key == "platforms":
                continue
            if key == "ignore":
                for category, names in value.items():
                    merged = self.data["ignore"].setdefault(category, [])
                    for name in names:
                        if name not in merged:
                            merged.append(name)
            else:
                self.data[key] = value

        block = update.get("platforms", {}).get(self.env.os.value)
        if block:
            logger.debug(f"Applying {self.env.os.value} platform overrides")
            self._merge(block)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get a config value by dot-separated path."""
        keys = key_path.split(".")
        value = self.data
        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    @property
    def dirname(self) -> str:
        return self.data["dirname"]

    @property
    def editor(self) -> str:
        return self.data["editor"]

    @property
    def include(self) -> str:
        return self.data["include"]

    @property
    def config_file(self) -> Path:
        """Location of the user's .dotrc."""
        return self.config_path or self.env.home / CONFIG_FILENAME

    def home(self, suffix: Optional[str] = None) -> Path:
        """Home directory root, or a path inside it."""
        override = self.data.get("home")
        root = Path(override).expanduser() if override else self.env.home
        return root / suffix if suffix else root

    def tracked_root(self, suffix: Optional[str] = None) -> Path:
        """Tracked directory root, or a path inside it."""
        root = self.home(self.dirname)
        return root / suffix if suffix else root

    def is_installed(self) -> bool:
        """True when the tracked directory exists."""
        root = self.tracked_root()
        return root.exists() and root.is_dir()

    def ignore_list(self, category: str) -> List[str]:
        """Built-in and user ignore names for a directory category.

        The home list always contains the tracked directory's own name so
        the tracked directory never manages itself.
        """
        category = LEGACY_CATEGORIES.get(category, category)
        if category not in IGNORE_CATEGORIES:
            raise ValueError(f"Unknown ignore category: {category}")

        names = list(self.data["ignore"].get(category, []))
        if category == HOME:
            names.append(self.dirname)

        # dict preserves first-seen order while dropping duplicates
        return list(dict.fromkeys(names))

    def write_default(self) -> bool:
        """Create a commented .dotrc if none exists. Returns True if written."""
        path = self.config_file
        if path.exists():
            return False
        path.write_text(DEFAULT_TEMPLATE)
        logger.info(f"Wrote default config to {path}")
        return True


def load_config(env: Optional[Environment] = None) -> Config:
    """Load ~/.dotrc for the given (or detected) environment."""
    if env is None:
        env = Environment()
    return Config(env.home / CONFIG_FILENAME, env=env)
