"""Shared pytest fixtures."""

from pathlib import Path

import pytest

from dotify.config import CONFIG_FILENAME, Config
from dotify.system import Environment


@pytest.fixture
def home(tmp_path, monkeypatch) -> Path:
    """An empty home directory that $HOME points at."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def env(home) -> Environment:
    return Environment()


@pytest.fixture
def config(home, env) -> Config:
    """Config for the temporary home, read from its (absent) .dotrc."""
    return Config(home / CONFIG_FILENAME, env=env)


@pytest.fixture
def tracked(config) -> Path:
    """The tracked directory, created."""
    root = config.tracked_root()
    root.mkdir()
    return root

