"""Catalog module - thread linking and catalog caching"""

from .linker import ThreadLinker, uplink
from .manager import DocumentCatalog, root_fingerprint

__all__ = [
    "ThreadLinker",
    "uplink",
    "DocumentCatalog",
    "root_fingerprint",
]
