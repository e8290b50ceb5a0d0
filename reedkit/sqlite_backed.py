"""A history stored in an SQLite database, with rich per-command context."""

from __future__ import annotations

import json
import os
import sqlite3
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from reedkit.history import (
    History,
    HistoryDatabaseError,
    SearchDirection,
    SearchKind,
    SearchQuery,
)
from reedkit.item import HistoryItem

SQLITE_APPLICATION_ID = 1151497937

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_STRICT = " strict" if sqlite3.sqlite_version_info >= (3, 37, 0) else ""

_SCHEMA = f"""
create table if not exists history (
    id integer primary key autoincrement,
    command_line text not null,
    start_timestamp integer,
    session_id integer,
    hostname text,
    cwd text,
    duration_ms integer,
    exit_status integer,
    more_info text
){_STRICT};
create index if not exists idx_history_time on history(start_timestamp);
create index if not exists idx_history_cwd on history(cwd);
create index if not exists idx_history_exit_status on history(exit_status);
create index if not exists idx_history_cmd on history(command_line);
create index if not exists idx_history_session on history(session_id);
"""

_UPSERT = """
insert into history
    (id, start_timestamp, command_line, session_id, hostname, cwd,
     duration_ms, exit_status, more_info)
values
    (:id, :start_timestamp, :command_line, :session_id, :hostname, :cwd,
     :duration_ms, :exit_status, :more_info)
on conflict (id) do update set
    start_timestamp = excluded.start_timestamp,
    command_line = excluded.command_line,
    session_id = excluded.session_id,
    hostname = excluded.hostname,
    cwd = excluded.cwd,
    duration_ms = excluded.duration_ms,
    exit_status = excluded.exit_status,
    more_info = excluded.more_info
"""


def _to_millis(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def _from_millis(millis: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=millis)


def _row_to_item(row: sqlite3.Row) -> HistoryItem:
    raw_info = row["more_info"]
    more_info = None
    if raw_info is not None:
        try:
            more_info = json.loads(raw_info)
        except json.JSONDecodeError as exc:
            raise HistoryDatabaseError(f"could not deserialize more_info: {exc}") from exc
    timestamp = row["start_timestamp"]
    duration = row["duration_ms"]
    return HistoryItem(
        command_line=row["command_line"],
        id=row["id"],
        start_timestamp=None if timestamp is None else _from_millis(timestamp),
        session_id=row["session_id"],
        hostname=row["hostname"],
        cwd=row["cwd"],
        duration=None if duration is None else timedelta(milliseconds=duration),
        exit_status=row["exit_status"],
        more_info=more_info,
    )


class SqliteBackedHistory(History):
    """History kept in an SQLite database.

    Besides the command line each item may carry a timestamp, session id,
    hostname, working directory, duration, exit status and JSON extra info.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._db = connection
        self._db.row_factory = sqlite3.Row
        try:
            self._db.execute("pragma journal_mode = wal")
            self._db.execute("pragma synchronous = normal")
            self._db.execute("pragma mmap_size = 1000000000")
            self._db.execute("pragma foreign_keys = on")
            self._db.execute(f"pragma application_id = {SQLITE_APPLICATION_ID}")
            version = self._db.execute(
                "select user_version from pragma_user_version"
            ).fetchone()[0]
        except sqlite3.Error as exc:
            raise HistoryDatabaseError(repr(exc)) from exc
        if version != 0:
            raise HistoryDatabaseError(f"Unknown database version {version}")
        try:
            self._db.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            raise HistoryDatabaseError(repr(exc)) from exc

    @classmethod
    def with_file(cls, file: str | os.PathLike[str]) -> SqliteBackedHistory:
        """Open (or create) a database file; missing directories are created."""
        path = Path(file)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise HistoryDatabaseError(str(exc)) from exc
        try:
            connection = sqlite3.connect(str(path), isolation_level=None)
        except sqlite3.Error as exc:
            raise HistoryDatabaseError(repr(exc)) from exc
        return cls(connection)

    @classmethod
    def in_memory(cls) -> SqliteBackedHistory:
        """Create a history that lives in memory only."""
        return cls(sqlite3.connect(":memory:", isolation_level=None))

    def _execute(self, sql: str, params: Any = ()) -> sqlite3.Cursor:
        try:
            return self._db.execute(sql, params)
        except sqlite3.Error as exc:
            raise HistoryDatabaseError(repr(exc)) from exc

    def save(self, item: HistoryItem) -> HistoryItem:
        params = {
            "id": item.id,
            "start_timestamp": None
            if item.start_timestamp is None
            else _to_millis(item.start_timestamp),
            "command_line": item.command_line,
            "session_id": item.session_id,
            "hostname": item.hostname,
            "cwd": item.cwd,
            "duration_ms": None
            if item.duration is None
            else item.duration // timedelta(milliseconds=1),
            "exit_status": item.exit_status,
            "more_info": None if item.more_info is None else json.dumps(item.more_info),
        }
        cursor = self._execute(_UPSERT, params)
        new_id = item.id if item.id is not None else cursor.lastrowid
        return replace(item, id=new_id)

    def load(self, item_id: int) -> HistoryItem:
        row = self._execute("select * from history where id = :id", {"id": item_id}).fetchone()
        if row is None:
            raise HistoryDatabaseError(f"no history item with id {item_id}")
        return _row_to_item(row)

    def _construct_query(
        self, query: SearchQuery, select_expression: str
    ) -> tuple[str, dict[str, Any]]:
        ascending = query.direction is SearchDirection.FORWARD
        order = "asc" if ascending else "desc"
        wheres: list[str] = []
        params: dict[str, Any] = {}
        if query.start_time is not None:
            wheres.append(
                "start_timestamp > :start_time" if ascending else "start_timestamp < :start_time"
            )
            params["start_time"] = _to_millis(query.start_time)
        if query.end_time is not None:
            wheres.append(
                ":end_time >= start_timestamp" if ascending else ":end_time <= start_timestamp"
            )
            params["end_time"] = _to_millis(query.end_time)
        if query.start_id is not None:
            wheres.append("id > :start_id" if ascending else "id < :start_id")
            params["start_id"] = query.start_id
        if query.end_id is not None:
            wheres.append(":end_id >= id" if ascending else ":end_id <= id")
            params["end_id"] = query.end_id
        limit = ""
        if query.limit is not None:
            params["limit"] = query.limit
            limit = "limit :limit"
        flt = query.filter
        if flt.command_line is not None:
            text = flt.command_line.text
            pattern = {
                SearchKind.EXACT: text,
                SearchKind.PREFIX: f"{text}%",
                SearchKind.SUBSTRING: f"%{text}%",
            }[flt.command_line.kind]
            wheres.append("command_line like :command_line")
            params["command_line"] = pattern
        if flt.not_command_line is not None:
            wheres.append("command_line != :not_cmd")
            params["not_cmd"] = flt.not_command_line
        if flt.hostname is not None:
            wheres.append("hostname = :hostname")
            params["hostname"] = flt.hostname
        if flt.cwd_exact is not None:
            wheres.append("cwd = :cwd")
            params["cwd"] = flt.cwd_exact
        if flt.cwd_prefix is not None:
            wheres.append("cwd like :cwd_like")
            params["cwd_like"] = f"{flt.cwd_prefix}%"
        if flt.exit_successful is not None:
            wheres.append("exit_status = 0" if flt.exit_successful else "exit_status != 0")
        condition = " and ".join(wheres) or "true"
        sql = (
            f"select {select_expression} from history "
            f"where {condition} order by id {order} {limit}"
        )
        return sql, params

    def count(self, query: SearchQuery) -> int:
        sql, params = self._construct_query(query, "coalesce(count(*), 0)")
        return self._execute(sql, params).fetchone()[0]

    def search(self, query: SearchQuery) -> list[HistoryItem]:
        sql, params = self._construct_query(query, "*")
        return [_row_to_item(row) for row in self._execute(sql, params).fetchall()]

    def update(self, item_id: int, updater: Callable[[HistoryItem], HistoryItem]) -> None:
        self.save(updater(self.load(item_id)))

    def delete(self, item_id: int) -> None:
        cursor = self._execute("delete from history where id = ?", (item_id,))
        if cursor.rowcount == 0:
            raise HistoryDatabaseError("Could not find item")

    def sync(self) -> None:
        """Nothing to do: every change is committed immediately."""

    def next_session_id(self) -> int:
        return self._execute(
            "select coalesce(max(session_id), 0) + 1 from history"
        ).fetchone()[0]

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def __enter__(self) -> SqliteBackedHistory:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()