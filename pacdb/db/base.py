"""
Constants and helpers shared by package databases.
"""

from __future__ import annotations

LOCAL_DB_NAME = "local"


def split_package_dirname(dirname: str) -> tuple[str, str] | None:
    """
    Split a package directory name into (name, version).

    Directory names have the form `<name>-<pkgver>-<pkgrel>`. Package names
    may themselves contain dashes, so the split is taken from the right.

    Args:
        dirname: Directory name, e.g. "python-foo-1.2.3-1"

    Returns:
        ("python-foo", "1.2.3-1"), or None if the name is malformed

    Examples:
        >>> split_package_dirname("foo-1.0-1")
        ('foo', '1.0-1')
        >>> split_package_dirname("foo-1.0") is None
        True
    """
    parts = dirname.rsplit("-", 2)
    if len(parts) != 3:
        return None
    name, pkgver, pkgrel = parts
    if not name or not pkgver or not pkgrel:
        return None
    return name, f"{pkgver}-{pkgrel}"
