"""Build message records from help document files"""

import logging
import os
import secrets
from datetime import datetime
from string import Formatter
from typing import Sequence

from ..config import Settings, get_settings
from ..errors import HeaderError
from ..models import Document, DocumentMeta, DocumentRole, HeaderField
from .parser import parse_header
from .scanner import classify

logger = logging.getLogger("helpbox.builder")

RANDTAG_ALPHABET = "abcdefghijklmnopqrstuvwxyz234567"
RANDTAG_LEN = 16


def make_message_id(stamp: datetime) -> str:
    """Generate a message id from a timestamp and a random base32 tag"""
    tag = "".join(secrets.choice(RANDTAG_ALPHABET) for _ in range(RANDTAG_LEN))
    return f"<{stamp:%Y%m%d%H%M%S}.{tag}>"


def template_fields(template: str) -> list[tuple[str, str]]:
    """(placeholder, header key) pairs of a subject template, in order"""
    return [
        (name, name)
        for _, name, _, _ in Formatter().parse(template)
        if name is not None
    ]


def render_subject(
    headers: Sequence[HeaderField],
    default: str,
    template: str,
    fields: Sequence[tuple[str, str]] | None = None,
    max_length: int = 255,
) -> str:
    """
    Fill a subject template with header values.

    Each placeholder is replaced by the value of its header key. The default
    subject is returned when a header is missing or the template is broken.

    Args:
        headers: Header fields of the document
        default: Subject used on any failure
        template: str.format style template, e.g. "[{title}]: {description}"
        fields: (placeholder, header key) pairs; derived from template if None
        max_length: Subjects are cut to this many characters
    """
    meta = DocumentMeta(name="", role=DocumentRole.UNKNOWN, headers=list(headers))
    try:
        pairs = template_fields(template) if fields is None else fields
        values = {}
        for placeholder, key in pairs:
            value = meta.header(key)
            if value is None:
                return default[:max_length]
            values[placeholder] = value
        subject = template.format_map(values)
    except (ValueError, KeyError, IndexError, AttributeError) as e:
        logger.debug(f"Subject template '{template}' failed: {e}")
        return default[:max_length]
    return subject[:max_length]


def document_epoch(settings: Settings, build_time: datetime) -> datetime:
    """Timestamp stamped on every document of one catalog build"""
    if settings.doc_epoch:
        return datetime.strptime(settings.doc_epoch, "%Y%m%d")
    return build_time.replace(microsecond=0)


def build_document(
    file_path: str,
    root: str,
    settings: Settings | None = None,
    epoch: datetime | None = None,
) -> Document | None:
    """
    Turn a file below root into a help document.

    Args:
        file_path: Absolute path of the candidate file
        root: Configured document root
        settings: Settings to use (global settings if None)
        epoch: Build timestamp, see ``document_epoch``

    Returns:
        Document, or None when the file is not a usable help document
    """
    settings = settings or get_settings()

    role = classify(file_path, root, settings.doc_extension, settings.index_filename)
    if role == DocumentRole.UNKNOWN:
        return None

    try:
        headers = parse_header(
            file_path,
            settings.header_max_lines,
            extension=settings.doc_extension,
            marker=settings.header_marker,
        )
    except HeaderError as e:
        logger.debug(f"Skipping {e}")
        return None
    if not headers:
        logger.debug(f"Skipping {file_path}: empty header")
        return None

    stamp = epoch or document_epoch(settings, datetime.now())
    name = os.path.basename(file_path)
    parent = os.path.basename(os.path.dirname(file_path))
    root = root.rstrip(os.sep) or os.sep
    relative = file_path[len(root):].lstrip(os.sep)

    default_subject = f"[{parent}]: {name}"
    subject = render_subject(
        headers,
        default_subject,
        settings.subject_template,
        max_length=settings.subject_max_length,
    )

    return Document(
        relative_path=relative,
        generated_id=make_message_id(stamp),
        subject=subject,
        timestamp=stamp,
        meta=DocumentMeta(name=name, role=role, headers=headers),
        read=True,
        index=0,
        sender=settings.doc_sender,
        organization=settings.doc_organization,
    )
