"""Path classifier and directory walker tests."""

import os
from pathlib import Path

import pytest

from helpbox.docdir import EntryType, ScanEntry, classify, scan
from helpbox.errors import DirOpenError
from helpbox.models import DocumentRole

ROOT = os.path.join(os.sep, "srv", "help")


def _p(*parts: str) -> str:
    return os.path.join(ROOT, *parts)


def test_classify_roles():
    """Verify roles by folder depth and index file name."""
    assert classify(_p("a.md"), ROOT) == DocumentRole.ROOTDOC
    assert classify(_p("index.md"), ROOT) == DocumentRole.ROOTDOC | DocumentRole.INDEX
    assert classify(_p("ch", "index.md"), ROOT) == DocumentRole.CHAPTER | DocumentRole.INDEX
    assert classify(_p("ch", "page.md"), ROOT) == DocumentRole.CHAPTER
    assert classify(_p("ch", "sec", "x.md"), ROOT) == DocumentRole.SECTION
    assert classify(_p("ch", "sec", "deeper", "x.md"), ROOT) == DocumentRole.SECTION


def test_classify_is_case_insensitive():
    """Verify extension and index name match in any case."""
    assert classify(_p("ch", "INDEX.MD"), ROOT) == DocumentRole.CHAPTER | DocumentRole.INDEX
    assert classify(_p("Readme.Md"), ROOT) == DocumentRole.ROOTDOC


def test_classify_fails_closed():
    """Verify anything outside the root or of another type is UNKNOWN."""
    assert classify(_p("notes.txt"), ROOT) == DocumentRole.UNKNOWN
    assert classify(os.path.join(os.sep, "elsewhere", "a.md"), ROOT) == DocumentRole.UNKNOWN
    assert classify(ROOT, ROOT) == DocumentRole.UNKNOWN
    assert classify(ROOT + "2" + os.sep + "a.md", ROOT) == DocumentRole.UNKNOWN
    assert classify(_p("a.md"), "") == DocumentRole.UNKNOWN


def test_classify_ignores_filesystem_and_trailing_separator():
    """Verify classification uses the path string only."""
    path = _p("does", "not", "exist.md")
    assert classify(path, ROOT) == classify(path, ROOT) == DocumentRole.SECTION
    assert classify(_p("a.md"), ROOT + os.sep) == DocumentRole.ROOTDOC


@pytest.fixture
def tree(tmp_path: Path, write_tree) -> Path:
    write_tree(tmp_path, {
        "a.md": "",
        "b.md": "",
        "sub/c.md": "",
        "sub/deep/d.md": "",
    })
    return tmp_path


def test_scan_files_not_recursive(tree: Path):
    """Verify a flat scan yields the top level files only."""
    names = sorted(e.name for e in scan(tree))
    assert names == ["a.md", "b.md"]


def test_scan_files_recursive(tree: Path):
    """Verify a recursive scan yields files at every depth."""
    entries = list(scan(tree, recursive=True))
    assert sorted(e.name for e in entries) == ["a.md", "b.md", "c.md", "d.md"]
    assert all(e.type == EntryType.FILE for e in entries)
    assert all(os.path.isfile(e.path) for e in entries)


def test_scan_directories_recursive(tree: Path):
    """Verify the DIR mask yields folders depth first."""
    entries = list(scan(tree, recursive=True, mask=EntryType.DIR))
    assert sorted(e.name for e in entries) == ["deep", "sub"]
    # a folder is yielded before its sub-folders
    assert [e.name for e in entries].index("sub") < [e.name for e in entries].index("deep")


def test_scan_filter_skips_entry(tree: Path):
    """Verify a positive filter result skips the entry."""
    def skip_b(entry: ScanEntry) -> int:
        return 1 if entry.name == "b.md" else 0

    assert sorted(e.name for e in scan(tree, entry_filter=skip_b)) == ["a.md"]


def test_scan_filter_skipping_folder_skips_its_subtree(tree: Path):
    """Verify skipping a folder also skips its contents."""
    def skip_sub(entry: ScanEntry) -> int:
        return 1 if entry.name == "sub" else 0

    entries = list(scan(tree, recursive=True, mask=EntryType.FILE | EntryType.DIR, entry_filter=skip_sub))
    assert sorted(e.name for e in entries) == ["a.md", "b.md"]


def test_scan_filter_abort_stops_one_level(tree: Path):
    """Verify a negative filter result ends only the current folder."""
    def abort_in_deep(entry: ScanEntry) -> int:
        return -1 if entry.name == "d.md" else 0

    names = sorted(e.name for e in scan(tree, recursive=True, entry_filter=abort_in_deep))
    assert names == ["a.md", "b.md", "c.md"]


def test_scan_missing_directory(tmp_path: Path):
    """Verify a missing directory raises DirOpenError."""
    with pytest.raises(DirOpenError):
        list(scan(tmp_path / "missing"))


def test_scan_is_reusable(tree: Path):
    """Verify scanning twice gives the same entries."""
    assert sorted(e.name for e in scan(tree)) == sorted(e.name for e in scan(tree))


def test_scan_skips_unreadable_subfolder(tree: Path, monkeypatch: pytest.MonkeyPatch):
    """Verify a recursive scan keeps yielding siblings of an unreadable folder."""
    (tree / "locked").mkdir()
    (tree / "locked" / "e.md").write_text("")
    real_scandir = os.scandir

    def scandir(path="."):
        if os.path.basename(os.fspath(path)) == "locked":
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)

    names = sorted(e.name for e in scan(tree, recursive=True))
    assert names == ["a.md", "b.md", "c.md", "d.md"]
    with pytest.raises(DirOpenError):
        list(scan(tree / "locked"))
