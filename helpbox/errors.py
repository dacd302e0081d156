"""Exceptions raised while indexing and reading help documents"""


class HelpboxError(Exception):
    """Base class for all helpbox errors"""


class HeaderError(HelpboxError):
    """A candidate file does not carry a usable header block"""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class NotAHelpDocError(HeaderError):
    """The file extension is not the recognised document extension"""


class HeaderReadError(HeaderError):
    """The file could not be opened or read"""


class MissingStartMarkerError(HeaderError):
    """The first line is not the header delimiter"""


class MissingEndMarkerError(HeaderError):
    """End of file was reached before the closing delimiter"""


class DirOpenError(HelpboxError):
    """A directory could not be opened for scanning"""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Error opening directory '{path}': {reason}")
        self.path = path


class MailboxOpenError(HelpboxError):
    """The help mailbox cannot be opened"""


class MessageOpenError(HelpboxError):
    """A catalogued document cannot be read any more"""
