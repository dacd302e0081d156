"""Help folder scanner and path classifier"""

import logging
import os
from dataclasses import dataclass
from enum import IntFlag
from typing import Callable, Iterator

from ..errors import DirOpenError
from ..models import DocumentRole

logger = logging.getLogger("helpbox.scanner")


class EntryType(IntFlag):
    """Directory entry kinds a scan can be restricted to"""
    FILE = 1
    DIR = 2
    OTHER = 4


@dataclass
class ScanEntry:
    """A directory entry that passed the type mask and filter"""
    path: str
    name: str
    type: EntryType


# Filter result: < 0 aborts the current directory, > 0 skips the entry, 0 keeps it
EntryFilter = Callable[[ScanEntry], int]


def classify(
    path: str,
    root: str,
    extension: str = ".md",
    index_filename: str = "index.md",
) -> DocumentRole:
    """
    Determine the role of a document from its path string alone.

    The file does not need to exist. A path classifies as UNKNOWN unless it
    lies below root and ends with the document extension (case-insensitive).

    Args:
        path: Absolute path of the candidate file
        root: Configured document root
        extension: Required file extension
        index_filename: Name marking a folder's index document

    Returns:
        ROOTDOC, CHAPTER or SECTION, possibly combined with INDEX
    """
    if not root or not extension:
        return DocumentRole.UNKNOWN
    prefix = root if root.endswith(os.sep) else root + os.sep
    if len(path) <= len(prefix) or not path.startswith(prefix):
        return DocumentRole.UNKNOWN
    if path[-len(extension):].lower() != extension.lower():
        return DocumentRole.UNKNOWN

    parts = path[len(prefix):].split(os.sep)
    if parts[-1].lower() == index_filename.lower():
        role = DocumentRole.INDEX
    else:
        role = DocumentRole.UNKNOWN

    folders = len(parts) - 1
    if folders == 0:
        role |= DocumentRole.ROOTDOC
    elif folders == 1:
        role |= DocumentRole.CHAPTER
    else:
        role |= DocumentRole.SECTION

    return role


def entry_type(entry: os.DirEntry) -> EntryType:
    """Type of a directory entry, using cached dirent data where available"""
    # DirEntry falls back to stat() itself when d_type is unknown
    if entry.is_dir(follow_symlinks=False):
        return EntryType.DIR
    if entry.is_file(follow_symlinks=False):
        return EntryType.FILE
    return EntryType.OTHER


def scan(
    path: str | os.PathLike,
    *,
    recursive: bool = False,
    mask: EntryType = EntryType.FILE,
    entry_filter: EntryFilter | None = None,
) -> Iterator[ScanEntry]:
    """
    Walk a directory and yield entries matching the type mask.

    Entries are yielded in the order the filesystem returns them, depth
    first. Unreadable entries and sub-directories are logged and skipped;
    only a failure to open ``path`` itself raises.

    Args:
        path: Directory to scan
        recursive: Descend into sub-directories
        mask: Entry types to yield
        entry_filter: Optional preselection, see ``EntryFilter``

    Raises:
        DirOpenError: ``path`` cannot be opened
    """
    curpath = os.path.realpath(path)
    try:
        it = os.scandir(curpath)
    except OSError as e:
        # the caller decides whether this is fatal and logs it
        logger.debug(f"Error opening directory '{path}': {e.strerror} (errno {e.errno})")
        raise DirOpenError(str(path), e.strerror or str(e)) from e

    with it:
        yield from _walk(it, curpath, recursive, mask, entry_filter)


def _walk(
    it: Iterator[os.DirEntry],
    curpath: str,
    recursive: bool,
    mask: EntryType,
    entry_filter: EntryFilter | None,
) -> Iterator[ScanEntry]:
    while True:
        try:
            ep = next(it)
        except StopIteration:
            break
        except OSError as e:
            # scandir cannot resume after a read error
            logger.warning(f"Unable to read directory '{curpath}': {e.strerror} (errno {e.errno})")
            break

        if ep.name in ("", ".", ".."):
            continue

        try:
            flag = entry_type(ep)
        except OSError as e:
            logger.warning(f"Unable to stat '{ep.path}': {e.strerror} (errno {e.errno})")
            continue

        item = ScanEntry(path=os.path.join(curpath, ep.name), name=ep.name, type=flag)

        if mask & flag:
            rc = entry_filter(item) if entry_filter else 0
            if rc < 0:
                break
            if rc > 0:
                continue
            yield item

        if flag == EntryType.DIR and recursive:
            try:
                sub = os.scandir(item.path)
            except OSError as e:
                logger.warning(f"Skipping unreadable directory '{item.path}': {e.strerror}")
                continue
            with sub:
                yield from _walk(sub, item.path, recursive, mask, entry_filter)
