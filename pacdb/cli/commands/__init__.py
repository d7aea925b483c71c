"""
Click command implementations for pacdb CLI.

Each module corresponds to a pacdb command (e.g., status.py implements
'pacdb status'). Commands are registered with the main CLI group via the
register_commands() function in pacdb.cli.
"""

from .config import config
from .info import info
from .query import query
from .status import status

COMMANDS = [
    config,
    info,
    query,
    status,
]

__all__ = [
    "COMMANDS",
    "config",
    "info",
    "query",
    "status",
]
