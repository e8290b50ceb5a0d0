"""A history of plain command lines, optionally kept in a text file."""

from __future__ import annotations

import os
import threading
from collections import deque
from collections.abc import Callable
from pathlib import Path

import portalocker

from reedkit.history import (
    History,
    HistoryFeatureUnsupported,
    SearchDirection,
    SearchQuery,
)
from reedkit.item import HistoryItem

HISTORY_SIZE = 1000
NEWLINE_ESCAPE = "<\\n>"

_NAME = "FileBackedHistory"
# File locks taken by one process may not exclude its own threads.
_SYNC_LOCK = threading.Lock()


def encode_entry(text: str) -> str:
    """Escape newlines so an entry fits on one line of the file."""
    return text.replace("\n", NEWLINE_ESCAPE)


def decode_entry(text: str) -> str:
    """Restore the newlines of an entry read from the file."""
    return text.replace(NEWLINE_ESCAPE, "\n")


def _split_lines(text: str) -> list[str]:
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _entry(item_id: int | None, command_line: str) -> HistoryItem:
    return HistoryItem(command_line=command_line, id=item_id)


class FileBackedHistory(History):
    """History of up to ``capacity`` command lines with optional file backing.

    Consecutive duplicates and empty lines are not stored. With a file,
    new entries are written on :meth:`sync` and on :meth:`close`; the file
    is trimmed to ``capacity`` lines, keeping entries from other writers.
    """

    def __init__(self, capacity: int = HISTORY_SIZE) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise TypeError(f"capacity must be an integer, got {capacity!r}")
        if capacity < 0:
            raise ValueError(f"capacity must not be negative, got {capacity}")
        self.capacity = capacity
        self._entries: deque[str] = deque()
        self.file: Path | None = None
        self._len_on_disk = 0

    @classmethod
    def with_file(cls, capacity: int, file: str | os.PathLike[str]) -> FileBackedHistory:
        """Create a history tied to ``file``, reading it if it exists.

        Missing parent directories are created.
        """
        hist = cls(capacity)
        path = Path(file)
        path.parent.mkdir(parents=True, exist_ok=True)
        hist.file = path
        hist.sync()
        return hist

    def save(self, item: HistoryItem) -> HistoryItem:
        entry = item.command_line
        item_id = None
        if entry and (not self._entries or self._entries[-1] != entry):
            if len(self._entries) == self.capacity:
                if self._entries:
                    self._entries.popleft()
                self._len_on_disk = max(0, self._len_on_disk - 1)
            self._entries.append(entry)
            item_id = len(self._entries) - 1
        return _entry(item_id, entry)

    def load(self, item_id: int) -> HistoryItem:
        if item_id < 0 or item_id >= len(self._entries):
            raise IndexError(f"no history item with id {item_id}")
        return _entry(item_id, self._entries[item_id])

    def count(self, query: SearchQuery) -> int:
        return len(self.search(query))

    def search(self, query: SearchQuery) -> list[HistoryItem]:
        if query.start_time is not None or query.end_time is not None:
            raise HistoryFeatureUnsupported(_NAME, "filtering by time")
        flt = query.filter
        if (
            flt.hostname is not None
            or flt.cwd_exact is not None
            or flt.cwd_prefix is not None
            or flt.exit_successful is not None
        ):
            raise HistoryFeatureUnsupported(_NAME, "filtering by extra info")

        backward = query.direction is SearchDirection.BACKWARD
        low, high = (query.end_id, query.start_id) if backward else (query.start_id, query.end_id)
        last = len(self._entries) - 1
        min_id = 0 if low is None else low + 1
        max_id = last if high is None else high - 1
        if max_id < 0 or min_id > last:
            return []
        span = max(0, max_id - min_id + 1)
        limit = span
        if query.limit is not None and query.limit >= 0:
            limit = min(span, query.limit)

        start = max(0, min_id)
        indexed = list(enumerate(self._entries))[start : start + span]
        if backward:
            indexed.reverse()

        results: list[HistoryItem] = []
        for idx, cmd in indexed:
            if len(results) >= limit:
                break
            if flt.command_line is not None and not flt.command_line.matches(cmd):
                continue
            if flt.not_command_line is not None and cmd == flt.not_command_line:
                continue
            results.append(_entry(idx, cmd))
        return results

    def update(self, item_id: int, updater: Callable[[HistoryItem], HistoryItem]) -> None:
        raise HistoryFeatureUnsupported(_NAME, "updating entries")

    def delete(self, item_id: int) -> None:
        raise HistoryFeatureUnsupported(_NAME, "removing entries")

    def sync(self) -> None:
        """Write unwritten entries to the file, trimming it to capacity."""
        if self.file is None:
            return
        own = list(self._entries)[self._len_on_disk :]
        self.file.parent.mkdir(parents=True, exist_ok=True)

        with _SYNC_LOCK:
            fd = os.open(self.file, os.O_RDWR | os.O_CREAT, 0o644)
            with os.fdopen(fd, "r+", encoding="utf-8", newline="") as fh:
                portalocker.lock(fh, portalocker.LOCK_EX)
                try:
                    fh.seek(0)
                    from_file = [decode_entry(line) for line in _split_lines(fh.read())]
                    truncate = len(from_file) + len(own) > self.capacity
                    if truncate:
                        keep = max(0, self.capacity - len(own))
                        foreign = from_file[len(from_file) - keep :] if keep else []
                        fh.seek(0)
                        for line in foreign:
                            fh.write(encode_entry(line) + "\n")
                    else:
                        foreign = from_file
                        fh.seek(0, os.SEEK_END)
                    for line in own:
                        fh.write(encode_entry(line) + "\n")
                    if truncate:
                        fh.truncate()
                    fh.flush()
                finally:
                    portalocker.unlock(fh)

        self._entries = deque(foreign + own)
        self._len_on_disk = len(self._entries)

    def next_session_id(self) -> int:
        # Sessions are not told apart by this history.
        return 0

    def close(self) -> None:
        """Write pending entries to the file, if there is one."""
        self.sync()

    def __enter__(self) -> FileBackedHistory:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()