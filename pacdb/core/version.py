"""
Package version comparison.

Implements the ordering pacman uses for `[epoch:]pkgver[-pkgrel]` strings.
The pkgver part is compared segment by segment as in rpmvercmp: runs of
digits compare numerically, runs of letters compare lexically and numeric
runs are newer than alpha runs. Separators count where the two strings
differ: a longer separator run wins, and text left over after a separator
makes that version newer, so "1.5.a" is newer than "1.5" but "1.5a" is older.
"""

from __future__ import annotations

import functools
import re
import string

_SEGMENT_RE = re.compile(r"[0-9]+|[A-Za-z]+")
_SEPARATOR_RE = re.compile(r"[^0-9A-Za-z]*")


def _starts_alpha(text: str) -> bool:
    return bool(text) and text[0] in string.ascii_letters


def _parse_evr(version: str) -> tuple[str, str, str | None]:
    """Split a version into (epoch, pkgver, pkgrel)."""
    epoch = "0"
    rest = version
    head, sep, tail = version.partition(":")
    if sep and head.isdigit():
        epoch, rest = head, tail
    elif sep and head == "":
        rest = tail

    pkgver, sep, pkgrel = rest.rpartition("-")
    if not sep:
        return epoch, rest, None
    return epoch, pkgver, pkgrel


def rpmvercmp(a: str, b: str) -> int:
    """Compare two pkgver strings. Returns -1, 0 or 1."""
    if a == b:
        return 0

    pos_a = pos_b = 0
    while pos_a < len(a) and pos_b < len(b):
        start_a = _SEPARATOR_RE.match(a, pos_a).end()  # type: ignore[union-attr]
        start_b = _SEPARATOR_RE.match(b, pos_b).end()  # type: ignore[union-attr]
        if start_a == len(a) or start_b == len(b):
            pos_a, pos_b = start_a, start_b
            break

        # Differing separator runs: the version with more separators wins.
        sep_a = start_a - pos_a
        sep_b = start_b - pos_b
        if sep_a != sep_b:
            return -1 if sep_a < sep_b else 1

        seg_a = _SEGMENT_RE.match(a, start_a).group()  # type: ignore[union-attr]
        seg_b = _SEGMENT_RE.match(b, start_b).group()  # type: ignore[union-attr]
        a_numeric = seg_a[0].isdigit()
        b_numeric = seg_b[0].isdigit()

        if a_numeric != b_numeric:
            # Numeric segments are always newer than alpha ones.
            return 1 if a_numeric else -1

        if a_numeric:
            num_a = int(seg_a)
            num_b = int(seg_b)
            if num_a != num_b:
                return -1 if num_a < num_b else 1
        elif seg_a != seg_b:
            return -1 if seg_a < seg_b else 1

        pos_a = start_a + len(seg_a)
        pos_b = start_b + len(seg_b)

    rest_a = a[pos_a:]
    rest_b = b[pos_b:]
    if not rest_a and not rest_b:
        return 0

    # Whatever is left decides, separators included: "1.0" < "1.0.1" and
    # "1.5" < "1.5.a", but "1.0a" < "1.0".
    if (not rest_a and not _starts_alpha(rest_b)) or _starts_alpha(rest_a):
        return -1
    return 1


def vercmp(a: str, b: str) -> int:
    """
    Compare two full package versions.

    Args:
        a: First version, e.g. "1:2.3-4"
        b: Second version

    Returns:
        -1 if a is older, 0 if equal, 1 if a is newer
    """
    if a == b:
        return 0

    epoch_a, ver_a, rel_a = _parse_evr(a)
    epoch_b, ver_b, rel_b = _parse_evr(b)

    ret = rpmvercmp(epoch_a, epoch_b)
    if ret == 0:
        ret = rpmvercmp(ver_a, ver_b)
        if ret == 0 and rel_a is not None and rel_b is not None:
            ret = rpmvercmp(rel_a, rel_b)
    return ret


@functools.total_ordering
class Version:
    """A version string that orders with vercmp."""

    __slots__ = ("raw",)

    def __init__(self, raw: str) -> None:
        self.raw = raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return vercmp(self.raw, other.raw) == 0

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return vercmp(self.raw, other.raw) < 0

    # "1.0" and "1.00" compare equal, so no hash consistent with __eq__.
    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"Version({self.raw!r})"
