"""Helpbox - help documents presented as a threaded, read-only mailbox"""

__version__ = "0.1.0"
