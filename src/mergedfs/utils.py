"""Path utilities and descriptor coercion."""

from __future__ import annotations

import posixpath
from typing import Any


def normalize_path(path: str) -> str:
    """Normalize a path in the unified namespace.

    - Strips the leading ``.`` of a ``./`` relative path
    - Ensures leading /

    Nothing else is rewritten: ``..`` segments and trailing slashes are
    kept as given.

    Examples:
        normalize_path("foo.txt") -> "/foo.txt"
        normalize_path("./foo.txt") -> "/foo.txt"
        normalize_path("/foo/") -> "/foo/"
        normalize_path("") -> "/"
    """
    if not path:
        return "/"

    if path.startswith("./"):
        return path[1:]

    if not path.startswith("/"):
        path = "/" + path

    return path


def collapse_path(path: str) -> str:
    """Normalize a path and fold ``.``, ``..``, double and trailing slashes.

    Used where paths are stored as keys rather than passed through.

    Examples:
        collapse_path("foo//bar/") -> "/foo/bar"
        collapse_path("/foo/../bar") -> "/bar"
    """
    path = posixpath.normpath(normalize_path(path))
    if path.startswith("//"):
        path = "/" + path.lstrip("/")
    return path


def join_alias(target: str, subpath: str) -> str:
    """Join an alias target with a subpath.

    Unlike ``posixpath.join``, an absolute *subpath* is appended to the
    target instead of replacing it.

    Examples:
        join_alias("/srv/data", "/a.txt") -> "/srv/data/a.txt"
        join_alias("/srv/data", "") -> "/srv/data"
        join_alias("/srv/data/", "../b") -> "/srv/b"
    """
    if not subpath:
        return posixpath.normpath(target)
    # normpath keeps a leading "//", so never build one
    return posixpath.normpath(f"{target.rstrip('/')}/{subpath.lstrip('/')}")


def ensure_list(value: Any) -> list[Any]:
    """Wrap a single descriptor in a list; copy lists and tuples."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]
