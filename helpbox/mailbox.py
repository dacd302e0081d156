"""Read-only help mailbox backed by the document catalog"""

import logging
import os

from .catalog import DocumentCatalog
from .config import Settings, get_settings
from .docdir import split_body
from .errors import DirOpenError, MailboxOpenError, MessageOpenError
from .models import Document, Message
from .paths import probe, transpose

logger = logging.getLogger("helpbox.mailbox")


class HelpMailbox:
    """
    A session over the help documents, presented as threaded messages.

    The catalog may be shared between sessions so that reopening the same
    root does not rescan it.
    """

    def __init__(
        self,
        catalog: DocumentCatalog | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or (catalog.settings if catalog else get_settings())
        self.catalog = catalog or DocumentCatalog(self.settings)
        self.messages: list[Document] = []
        self.path = ""
        self.realpath = ""
        self.readonly = True

    def probe(self, path: str) -> bool:
        return probe(path, self.settings.help_scheme)

    @property
    def is_open(self) -> bool:
        return bool(self.messages)

    def _resolve_root(self) -> str:
        docdir = self.settings.help_doc_dir
        if not os.access(docdir, os.F_OK):
            logger.error(f"Unable to access help mailbox '{docdir}'")
            raise MailboxOpenError(f"Help folder not found: {docdir}")
        return os.path.realpath(docdir)

    def open(self, path: str | None = None) -> list[Document]:
        """
        Open the mailbox and mark the requested document as active.

        Args:
            path: help:// address or path below the root; the document whose
                relative path starts with the request becomes the only unread
                message (first match wins, the first document by default)

        Returns:
            The mailbox messages (copies of the catalog documents)

        Raises:
            MailboxOpenError: root inaccessible or without documents
        """
        scheme = self.settings.help_scheme
        path = path or f"{scheme}://"
        root = self._resolve_root()

        try:
            self.catalog.ensure(root)
        except DirOpenError as e:
            raise MailboxOpenError(str(e)) from e
        if not self.catalog.ready:
            raise MailboxOpenError(f"No help documents found in {root}")

        self.messages = self.catalog.clone_documents()
        self.readonly = True
        self.realpath = root
        self.path = path

        self.messages[0].read = False
        # probe() ignores scheme case but transpose() does not; HELP:// selects nothing
        address = path if path.startswith(scheme) else transpose(path, root, scheme)
        request = transpose(address, root, scheme)
        if request:
            self.path = transpose(request, root, scheme) or path
            # TODO: prefer folder (chapter/section) matches over root file names
            prefix = request[len(root) + 1:]
            for msg in self.messages:
                if msg.relative_path.startswith(prefix):
                    self.messages[0].read = True
                    msg.read = False
                    break

        logger.debug(f"Opened {self.path} with {len(self.messages)} messages")
        return self.messages

    @property
    def active(self) -> Document | None:
        """The message marked unread by ``open()``"""
        for msg in self.messages:
            if not msg.read:
                return msg
        return None

    def open_message(self, msgno: int) -> Message:
        """
        Read a document from disk.

        Raises:
            MessageOpenError: index out of range or file no longer readable
        """
        if not 0 <= msgno < len(self.messages):
            raise MessageOpenError(f"No message {msgno}")

        doc = self.messages[msgno]
        path = os.path.join(self.realpath, doc.relative_path)
        doc.read = True

        try:
            with open(path, encoding="utf-8", errors="replace") as fp:
                text = fp.read()
        except OSError as e:
            logger.error(f"{path}: {e.strerror} (errno {e.errno})")
            raise MessageOpenError(f"{path}: {e.strerror}") from e

        return Message(document=doc, text=text, body=split_body(text))

    def threads(self) -> list[tuple[Document, int]]:
        """Messages in catalog order with their thread depth"""
        depths: dict[str, int] = {}
        result = []
        for msg in self.messages:
            depth = 0
            if msg.references:
                depth = depths.get(msg.references[-1], -1) + 1
            depths[msg.generated_id] = depth
            result.append((msg, depth))
        return result

    def close(self) -> None:
        self.messages = []
        self.path = ""
