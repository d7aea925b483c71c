"""
Identity of an installed package.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..version import Version


@dataclass(frozen=True)
class PackageKey:
    """(name, version) pair addressing one entry in a package cache.

    Equality and hashing use both fields. Use `version_key` to order keys
    that share a name, e.g. `max(keys, key=PackageKey.version_key)`.
    """

    name: str
    version: str

    def version_key(self) -> Version:
        return Version(self.version)

    def __str__(self) -> str:
        return f"{self.name}-{self.version}"
