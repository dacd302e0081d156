"""Shared test fixtures."""

import os
from pathlib import Path
from typing import Callable

import pytest

from helpbox.config import Settings

HELP_TREE = {
    "index.md": "---\ntitle: Home\ndescription: Start here\n---\nWelcome to the help.\n",
    "ch1/index.md": "---\ntitle: Chapter1\ndescription: Basics\n---\n# Chapter one\n",
    "ch1/page.md": "---\nauthor: nobody\n---\nPage body text.\n",
}

TreeWriter = Callable[[Path, dict[str, str]], None]


def _write_tree(root: Path, files: dict[str, str]) -> None:
    for name, content in files.items():
        target = root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Each test starts without a cached settings singleton."""
    monkeypatch.setattr("helpbox.config._settings", None)


@pytest.fixture
def write_tree() -> TreeWriter:
    """Create files (and their folders) below a root."""
    return _write_tree


@pytest.fixture
def help_root(tmp_path: Path) -> str:
    """A small help folder: root index plus one chapter with two pages."""
    root = tmp_path / "help"
    _write_tree(root, HELP_TREE)
    return os.path.realpath(root)


@pytest.fixture
def help_tree_size() -> int:
    """Number of documents in the help_root folder."""
    return len(HELP_TREE)


@pytest.fixture
def settings(help_root: str) -> Settings:
    return Settings(help_doc_dir=Path(help_root))
