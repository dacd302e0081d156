"""Data models for Helpbox"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntFlag


class DocumentRole(IntFlag):
    """Structural role of a document, derived from its path only"""
    UNKNOWN = 0
    INDEX = 1       # combined with exactly one of the roles below
    ROOTDOC = 2
    CHAPTER = 4
    SECTION = 8


@dataclass
class HeaderField:
    """One `key: value` line of a document header"""
    key: str
    value: str


@dataclass
class DocumentMeta:
    """Per-document metadata kept next to the message record"""
    name: str                                   # basename of the file
    role: DocumentRole
    headers: list[HeaderField] = field(default_factory=list)

    def header(self, key: str) -> str | None:
        """Value of the first header with exactly this key"""
        if not key:
            return None
        for item in self.headers:
            if item.key == key:
                return item.value
        return None

    def clone(self) -> "DocumentMeta":
        return DocumentMeta(
            name=self.name,
            role=self.role,
            headers=[HeaderField(h.key, h.value) for h in self.headers],
        )


@dataclass
class Document:
    """A help document presented as a read-only message"""
    relative_path: str          # relative to the configured root
    generated_id: str           # <YYYYmmddHHMMSS.tag>
    subject: str
    timestamp: datetime
    meta: DocumentMeta
    references: list[str] = field(default_factory=list)  # parent generated_id
    read: bool = True
    index: int = 0              # catalog position, set on append
    sender: str = ""
    organization: str = ""
    content_type: str = "text/plain"

    @property
    def role(self) -> DocumentRole:
        return self.meta.role

    @property
    def is_index(self) -> bool:
        return bool(self.meta.role & DocumentRole.INDEX)

    def clone(self) -> "Document":
        """Copy that shares no mutable state with the original"""
        return Document(
            relative_path=self.relative_path,
            generated_id=self.generated_id,
            subject=self.subject,
            timestamp=self.timestamp,
            meta=self.meta.clone(),
            references=list(self.references),
            read=self.read,
            index=self.index,
            sender=self.sender,
            organization=self.organization,
            content_type=self.content_type,
        )


@dataclass
class Message:
    """An opened document: its record plus the file contents"""
    document: Document
    text: str       # whole file, header included
    body: str       # text below the header block
