"""Translation between help:// addresses and filesystem paths"""

import os


def probe(path: str | None, scheme: str = "help") -> bool:
    """Whether path addresses the help mailbox"""
    if not path:
        return False
    prefix = f"{scheme}://"
    return path[:len(prefix)].lower() == prefix.lower()


def transpose(
    path: str | None,
    root: str,
    scheme: str = "help",
    validate: bool = False,
) -> str | None:
    """
    Convert a scheme address into a filesystem path or vice versa.

    ``help://a/b``, ``help:a/b`` and ``help`` map below root; a path below
    root maps to ``help://``. Trailing slashes are stripped from the result.

    Args:
        path: Address or filesystem path to convert
        root: Configured document root
        scheme: Address scheme
        validate: Require the filesystem path to exist

    Returns:
        The converted path, or None if path is neither form or doesn't exist
    """
    if not path:
        return None

    root = root.rstrip("/") or "/"

    if path.startswith(scheme):
        # unlike a URL check, allow the scheme alone without a separator
        j = len(scheme)
        if j < len(path) and path[j] != ":":
            return None
        if j < len(path):
            j += 1
        to_fs = True
        keep = len(root)
    elif path.startswith(root):
        j = len(root)
        if j < len(path) and path[j] != "/":
            return None
        to_fs = False
        keep = len(scheme) + 3
    else:
        return None

    rest = path[j:].lstrip("/")
    fqp = f"{root}/{rest}"
    url = f"{scheme}://{rest}"
    result = fqp if to_fs else url

    end = len(result)
    while end > keep and result[end - 1] == "/":
        end -= 1

    if validate and not os.path.exists(fqp):
        return None
    return result[:end]


def to_path(address: str, root: str, scheme: str = "help", validate: bool = False) -> str | None:
    """Filesystem path of a help address"""
    if not address.startswith(scheme):
        return None
    return transpose(address, root, scheme, validate)


def to_address(path: str, root: str, scheme: str = "help", validate: bool = False) -> str | None:
    """Help address of a filesystem path below root"""
    if path.startswith(scheme):
        return None
    return transpose(path, root, scheme, validate)
