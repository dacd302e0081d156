"""Document catalog - cached, threaded list of all help documents"""

import hashlib
import logging
import os
from collections import Counter

from ..config import Settings, get_settings
from ..models import Document, DocumentRole
from ..observability import log_duration
from .linker import ThreadLinker

logger = logging.getLogger("helpbox.catalog")


def root_fingerprint(root: str | os.PathLike) -> str:
    """MD5 hex digest of the root path string (not of its contents)"""
    return hashlib.md5(os.fspath(root).encode()).hexdigest()


class DocumentCatalog:
    """
    Catalog of the help documents below one root.

    The catalog is rebuilt wholesale whenever the root path string changes
    or caching is disabled. Edits below an unchanged root are not picked up
    until ``invalidate()`` is called.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._linker = ThreadLinker(self.settings)
        self._documents: list[Document] | None = None
        self.fingerprint = ""
        self.generation = 0

    @property
    def documents(self) -> list[Document]:
        """The shared document list; use ``clone_documents()`` to modify"""
        return self._documents or []

    @property
    def ready(self) -> bool:
        return bool(self._documents)

    def is_fresh(self, root: str | os.PathLike) -> bool:
        return self._documents is not None and self.fingerprint == root_fingerprint(root)

    def invalidate(self) -> None:
        """Drop the catalog and its fingerprint"""
        self._documents = None
        self.fingerprint = ""
        self._linker.reset()

    def ensure(self, root: str | os.PathLike | None = None) -> list[Document]:
        """
        Make sure the catalog matches root, rebuilding it if needed.

        Args:
            root: Document root (configured help_doc_dir if None)

        Returns:
            The catalog documents

        Raises:
            DirOpenError: root cannot be opened
        """
        root = os.fspath(root if root is not None else self.settings.help_doc_dir)

        if self.settings.cache_catalog and self.is_fresh(root):
            logger.debug(f"Catalog for {root} is up to date")
            return self._documents

        self.invalidate()
        with log_duration(logger, f"Catalog build for {root}"):
            documents = self._linker.build(root)
            self._documents = documents
            self.fingerprint = root_fingerprint(root)
            self.generation += 1

        logger.info(f"Catalog holds {len(documents)} documents")
        return documents

    def clone_documents(self) -> list[Document]:
        """Independent copies of the catalog documents"""
        return [doc.clone() for doc in self.documents]

    def get_stats(self) -> dict:
        """Get current catalog statistics"""
        roles = Counter()
        for doc in self.documents:
            for role in (DocumentRole.ROOTDOC, DocumentRole.CHAPTER, DocumentRole.SECTION):
                if doc.role & role:
                    roles[role.name.lower()] += 1
            if doc.is_index:
                roles["index"] += 1

        return {
            "total_documents": len(self.documents),
            "roles": dict(roles),
            "threaded": sum(1 for doc in self.documents if doc.references),
            "generation": self.generation,
            "fingerprint": self.fingerprint,
        }
