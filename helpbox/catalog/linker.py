"""Thread linker - orders folder contents and links documents into threads"""

import logging
import os
from datetime import datetime

from ..config import Settings, get_settings
from ..docdir import EntryType, build_document, document_epoch, scan
from ..errors import DirOpenError
from ..models import Document, DocumentRole

logger = logging.getLogger("helpbox.linker")


def uplink(target: Document | None, source: Document | None) -> None:
    """Thread source below target by referencing target's id"""
    if target is None or source is None:
        return
    if not target.generated_id:
        return
    source.references.append(target.generated_id)


class ThreadLinker:
    """
    Builds the ordered, threaded document list of one root folder.

    Every folder contributes a batch whose head (its index document, or the
    first one found) is threaded below the current chapter head when it is a
    section. The other documents of the batch are threaded below the head.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.documents: list[Document] = []
        self.parent_index = 0
        self.epoch: datetime | None = None
        self.root: str | None = None

    def reset(self) -> None:
        self.documents = []
        self.parent_index = 0
        self.epoch = None
        self.root = None

    def _get(self, index: int) -> Document | None:
        if 0 <= index < len(self.documents):
            return self.documents[index]
        return None

    def _append(self, doc: Document) -> None:
        doc.index = len(self.documents)
        self.documents.append(doc)

    def read_folder(self, path: str) -> int:
        """
        Add the documents of one folder (not recursively) to the catalog.

        Returns:
            Number of documents added

        Raises:
            DirOpenError: folder cannot be opened
        """
        root = self.root or os.path.realpath(self.settings.help_doc_dir)
        epoch = self.epoch or document_epoch(self.settings, datetime.now())

        batch = []
        for entry in scan(path, mask=EntryType.FILE):
            doc = build_document(entry.path, root, self.settings, epoch)
            if doc is not None:
                batch.append(doc)
        if not batch:
            return 0

        # index documents first, discovery order otherwise
        batch.sort(key=lambda d: not d.is_index)

        head = batch[0]
        if head.role & DocumentRole.CHAPTER:
            if self.settings.link_chapters:
                uplink(self._get(0), head)
            self.parent_index = len(self.documents)
        elif head.role & DocumentRole.SECTION:
            uplink(self._get(self.parent_index), head)
        else:
            self.parent_index = 0

        self._append(head)
        for doc in batch[1:]:
            uplink(head, doc)
            self._append(doc)

        logger.debug(f"{path}: {len(batch)} documents, head {head.relative_path}")
        return len(batch)

    def build(self, root: str) -> list[Document]:
        """
        Rebuild the whole document list below root.

        The root folder is read first, then every sub-folder depth first in
        filesystem order.

        Raises:
            DirOpenError: root cannot be opened
        """
        self.reset()
        self.root = os.path.realpath(root)
        self.epoch = document_epoch(self.settings, datetime.now())

        self.read_folder(root)
        for entry in scan(root, recursive=True, mask=EntryType.DIR):
            try:
                self.read_folder(entry.path)
            except DirOpenError as e:
                logger.warning(f"Skipping folder: {e}")

        return self.documents
