# reedkit

Building blocks for an interactive line editor.

- `reedkit.enums` holds the editing vocabulary. It defines `EditCommand`
  (with `EditCommandKind`), `ReedlineEvent` (with `ReedlineEventKind`),
  `Signal` (with `SignalKind`), `UndoBehavior` (with `UndoBehaviorKind`) and
  `EditType`. `EditCommand.edit_type()` sorts a command into cursor movement,
  text edit or undo/redo. `UndoBehavior.create_undo_point_after()` decides
  whether a change starts a new undo set.
- `reedkit.item` provides `HistoryItem`: one command line, plus optional id,
  start timestamp, session id, hostname, working directory, duration, exit
  status and extra info.
- `reedkit.history` has the abstract `History` interface, queries
  (`SearchQuery`, `SearchFilter`, `CommandLineSearch`, `SearchKind`,
  `SearchDirection`), navigation modes (`HistoryNavigationQuery`,
  `NavigationKind`) and the errors `HistoryError`,
  `HistoryFeatureUnsupported` and `HistoryDatabaseError`.
- `reedkit.file_backed` provides `FileBackedHistory`. It keeps up to
  `capacity` command lines in memory and does not store empty lines or a
  line equal to the one before it. Created with `with_file`, it reads the
  file and writes new entries back on `sync()`, `close()` or the end of a
  `with` block.
  - While writing, it takes a lock on the file. Lines written there by other
    histories are kept, and the file is trimmed to `capacity`.
  - Newlines inside an entry are stored as `<\n>`.
  - Filtering by time or by extra context raises `HistoryFeatureUnsupported`,
    and so do `update` and `delete`.
- `reedkit.sqlite_backed` provides `SqliteBackedHistory`, which stores items
  and all their context in SQLite. Use `in_memory()` for a throwaway history
  or `with_file(path)` for a database file. It supports every filter,
  `update` and `delete`, and gives out increasing session ids.
- `reedkit.cursor` provides `HistoryCursor`. It walks any `History` with
  `back()` and `forward()` in one of three modes: plain up/down, prefix
  search or substring search. It skips entries equal to the one currently
  shown.
- `reedkit.hinter` defines the `Hinter` interface and `DefaultHinter`.
  `DefaultHinter` suggests the rest of the most recent history entry that
  starts with the current line. It can return the whole hint or only its
  next word.

## Installation

```
pip install reedkit
```

## Example

```python
from reedkit.cursor import HistoryCursor
from reedkit.file_backed import FileBackedHistory
from reedkit.hinter import DefaultHinter
from reedkit.history import HistoryNavigationQuery, NavigationKind
from reedkit.item import HistoryItem

with FileBackedHistory.with_file(50, "history.txt") as history:
    history.save(HistoryItem.from_command_line("git status"))
    history.save(HistoryItem.from_command_line("git log"))

    cursor = HistoryCursor(HistoryNavigationQuery(NavigationKind.PREFIX_SEARCH, "git"))
    cursor.back(history)
    print(cursor.string_at_cursor())   # git log

    hinter = DefaultHinter()
    print(hinter.handle("git s", 5, history, False))  # tatus
    print(hinter.next_hint_token())                   # tatus
```

When the `with` block ends, the history is written back to `history.txt`.

An SQLite history can hold more context:

```python
from reedkit.history import SearchQuery
from reedkit.item import HistoryItem
from reedkit.sqlite_backed import SqliteBackedHistory

with SqliteBackedHistory.in_memory() as history:
    session = history.next_session_id()
    item = HistoryItem(command_line="make test", session_id=session, exit_status=0)
    saved = history.save(item)
    print(saved.id)
    print(history.search(SearchQuery.all_that_contain_rev("test"))[0].command_line)
```

## What this package does not do

This package has no line-editing engine. It does not read keys from a
terminal, turn key presses into `ReedlineEvent`s, keep or paint an edit
buffer, show menus or completions, or run a prompt loop. `EditCommand`,
`ReedlineEvent` and `Signal` describe those actions, but nothing in the
package carries them out. There is also no command-line program.

## Running the tests

```
pip install -e .[test]
pytest
```