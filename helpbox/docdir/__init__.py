"""Docdir module - folder scanning, header parsing, and document building"""

from .scanner import (
    scan,
    classify,
    EntryType,
    ScanEntry,
)
from .parser import parse_header, split_body
from .builder import (
    build_document,
    document_epoch,
    make_message_id,
    render_subject,
)

__all__ = [
    "scan",
    "classify",
    "EntryType",
    "ScanEntry",
    "parse_header",
    "split_body",
    "build_document",
    "document_epoch",
    "make_message_id",
    "render_subject",
]
