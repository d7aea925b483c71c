"""
Shared formatting utilities for pacdb CLI output.
"""

from __future__ import annotations

from datetime import datetime


def format_timestamp(ts: float | None) -> str:
    """Format a Unix timestamp for display.

    Args:
        ts: Unix timestamp (seconds since epoch), or None

    Returns:
        Formatted datetime string in "YYYY-MM-DD HH:MM:SS" format, local time
    """
    if ts is None:
        return "?"
    dt = datetime.fromtimestamp(ts)
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def format_size(size_bytes: int | None) -> str:
    """Format byte size as human-readable string.

    Examples:
        >>> format_size(None)
        '?'
        >>> format_size(500)
        '500B'
        >>> format_size(2048)
        '2.0KB'
        >>> format_size(1536000)
        '1.5MB'
    """
    if size_bytes is None:
        return "?"

    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f}KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f}MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f}GB"


def format_list(values: tuple[str, ...] | list[str]) -> str:
    """Join values for a one-line field, "None" when empty."""
    return "  ".join(values) if values else "None"
