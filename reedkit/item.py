"""A single history entry with optional context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any


@dataclass
class HistoryItem:
    """One run command line with optional additional context.

    ``id`` is the primary key within one history; ``session_id`` tells
    different shell sessions apart.
    """

    command_line: str
    id: int | None = None
    start_timestamp: datetime | None = None
    session_id: int | None = None
    hostname: str | None = None
    cwd: str | None = None
    duration: timedelta | None = None
    exit_status: int | None = None
    more_info: Any | None = None

    @classmethod
    def from_command_line(cls, cmd: str) -> HistoryItem:
        """Create an item from the command line alone, everything else unset."""
        if not isinstance(cmd, str):
            raise TypeError(f"command line must be a string, got {cmd!r}")
        return cls(command_line=cmd)