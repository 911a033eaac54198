"""Test configuration."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from dotin.core.importer import ImportManager


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's real config file out of the tests."""
    monkeypatch.setenv("DOTIN_CONFIG", str(tmp_path / "no-such-config.yaml"))


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a home directory and make it the working directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.chdir(home_dir)
    return home_dir


@pytest.fixture
def group_dir(home: Path) -> Path:
    """Return the group folder inside a dotfiles root living in home."""
    dotfiles_dir = home / "dotfiles"
    dotfiles_dir.mkdir()
    return dotfiles_dir / "group_name"


@pytest.fixture
def console() -> Console:
    """Create a console that records its output."""
    return Console(file=io.StringIO(), width=300)


@pytest.fixture
def import_manager(console: Console) -> ImportManager:
    """Create an import manager printing to the test console."""
    return ImportManager(console)
