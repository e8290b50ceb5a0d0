from dataclasses import replace

import pytest

from reedkit.history import (
    CommandLineSearch,
    History,
    HistoryDatabaseError,
    HistoryError,
    HistoryFeatureUnsupported,
    HistoryNavigationQuery,
    NavigationKind,
    SearchDirection,
    SearchFilter,
    SearchKind,
    SearchQuery,
)
from reedkit.item import HistoryItem


class _ListHistory(History):
    def __init__(self, lines):
        self.lines = list(lines)
        self.queries = []

    def save(self, item):
        self.lines.append(item.command_line)
        return replace(item, id=len(self.lines) - 1)

    def load(self, item_id):
        return HistoryItem(self.lines[item_id], id=item_id)

    def next_session_id(self):
        return 0

    def count(self, query):
        self.queries.append(query)
        return len(self.search(query))

    def search(self, query):
        items = [HistoryItem(line, id=i) for i, line in enumerate(self.lines)]
        if query.filter.command_line is not None:
            items = [i for i in items if query.filter.command_line.matches(i.command_line)]
        return items

    def update(self, item_id, updater):
        self.lines[item_id] = updater(self.load(item_id)).command_line

    def delete(self, item_id):
        del self.lines[item_id]

    def sync(self):
        return None


def test_anything_has_no_constraints():
    f = SearchFilter.anything()
    assert f == SearchFilter()
    assert f.command_line is None
    assert f.hostname is None
    assert f.exit_successful is None


def test_from_text_search_sets_only_command_line():
    cmd = CommandLineSearch(SearchKind.PREFIX, "ls")
    f = SearchFilter.from_text_search(cmd)
    assert f.command_line == cmd
    assert replace(f, command_line=None) == SearchFilter.anything()


def test_last_with_prefix():
    q = SearchQuery.last_with_prefix("git")
    assert q.direction is SearchDirection.BACKWARD
    assert q.limit == 1
    assert q.filter.command_line == CommandLineSearch(SearchKind.PREFIX, "git")


def test_last_with_search_keeps_filter():
    f = SearchFilter(hostname="host")
    q = SearchQuery.last_with_search(f)
    assert q.filter is f
    assert q.limit == 1
    assert q.direction is SearchDirection.BACKWARD


def test_all_that_contain_rev():
    q = SearchQuery.all_that_contain_rev("zip")
    assert q.direction is SearchDirection.BACKWARD
    assert q.limit is None
    assert q.filter.command_line == CommandLineSearch(SearchKind.SUBSTRING, "zip")


@pytest.mark.parametrize("direction", list(SearchDirection))
def test_everything_is_unbounded(direction):
    q = SearchQuery.everything(direction)
    assert q.direction is direction
    assert (q.start_id, q.end_id, q.start_time, q.end_time, q.limit) == (
        None,
        None,
        None,
        None,
        None,
    )
    assert q.filter == SearchFilter.anything()


@pytest.mark.parametrize(
    "kind, text, line, expected",
    [
        (SearchKind.PREFIX, "ls ", "ls -l", True),
        (SearchKind.PREFIX, "ls ", "ls", False),
        (SearchKind.SUBSTRING, "foo.zip", "unzip foo.zip", True),
        (SearchKind.SUBSTRING, "foo.zip", "cd foo", False),
        (SearchKind.EXACT, "ls", "ls", True),
        (SearchKind.EXACT, "ls", "ls -l", False),
    ],
)
def test_command_line_search_matches(kind, text, line, expected):
    assert CommandLineSearch(kind, text).matches(line) is expected


def test_count_all_counts_everything_forward():
    hist = _ListHistory(["a", "b", "c"])
    assert hist.count_all() == 3
    assert hist.queries == [SearchQuery.everything(SearchDirection.FORWARD)]


def test_history_is_abstract():
    with pytest.raises(TypeError):
        History()


def test_feature_unsupported_is_history_error():
    err = HistoryFeatureUnsupported("FileBackedHistory", "removing entries")
    assert isinstance(err, HistoryError)
    assert err.history == "FileBackedHistory"
    assert err.feature == "removing entries"
    assert "removing entries" in str(err)


def test_database_error_is_history_error():
    err = HistoryDatabaseError("Could not find item")
    assert isinstance(err, HistoryError)
    assert "Could not find item" in str(err)


def test_navigation_query_equality():
    a = HistoryNavigationQuery(NavigationKind.PREFIX_SEARCH, "find")
    b = HistoryNavigationQuery(NavigationKind.PREFIX_SEARCH, "find")
    c = HistoryNavigationQuery(NavigationKind.SUBSTRING_SEARCH, "find")
    assert a == b
    assert (a == c) is False