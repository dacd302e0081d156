"""Help document header parser"""

import os
import re

from frontmatter.default_handlers import YAMLHandler

from ..errors import (
    HeaderReadError,
    MissingEndMarkerError,
    MissingStartMarkerError,
    NotAHelpDocError,
)
from ..models import HeaderField

# First character that may end a header key
_SEPARATOR = re.compile(r"[: \t]")

_body_handler = YAMLHandler()


def parse_header(
    file_path: str,
    max_lines: int = -1,
    extension: str = ".md",
    marker: str = "---",
) -> list[HeaderField]:
    """
    Read the delimited `key: value` block at the top of a document.

    Lines without a separator, with the separator in the first column, or
    whose first separator is whitespace instead of ``:`` are skipped. Once
    ``max_lines`` fields were collected the rest of the block is only
    searched for the closing delimiter.

    Args:
        file_path: Path to the candidate file
        max_lines: Max fields to collect (N < 0 means all)
        extension: Required file extension
        marker: Line opening and closing the block

    Returns:
        Header fields in file order, possibly empty

    Raises:
        NotAHelpDocError: extension doesn't match
        HeaderReadError: file cannot be opened or read
        MissingStartMarkerError: first line isn't the marker
        MissingEndMarkerError: no closing marker before end of file
    """
    name = os.path.basename(file_path)
    stem, ext = os.path.splitext(name)
    if not stem or ext.lower() != extension.lower():
        raise NotAHelpDocError(file_path, f"not a '{extension}' file")

    fields: list[HeaderField] = []
    endmark = False
    limit = max_lines if max_lines >= 0 else -1

    try:
        with open(file_path, encoding="utf-8", errors="replace") as fp:
            first = fp.readline()
            if first.rstrip("\r\n") != marker:
                raise MissingStartMarkerError(file_path, "no header start mark")

            for raw in fp:
                line = raw.rstrip("\r\n")
                if line == marker:
                    endmark = True
                    break
                if limit == 0:
                    continue  # keep looking for the end mark

                line = line.rstrip()
                match = _SEPARATOR.search(line)
                if not match or match.start() == 0 or match.group() != ":":
                    continue

                q = match.start()
                fields.append(HeaderField(key=line[:q].strip(), value=line[q + 1:].strip()))
                limit -= 1
    except OSError as e:
        raise HeaderReadError(file_path, e.strerror or str(e)) from e

    if not endmark:
        raise MissingEndMarkerError(file_path, "no header end mark")

    return fields


def split_body(text: str) -> str:
    """Text of a document below its header block"""
    if not _body_handler.detect(text):
        return text
    try:
        _, content = _body_handler.split(text)
    except ValueError:
        return text
    return content.strip()
