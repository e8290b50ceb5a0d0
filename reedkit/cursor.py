"""Stateful navigation through a history according to a browsing mode."""

from __future__ import annotations

from dataclasses import replace

from reedkit.history import (
    CommandLineSearch,
    History,
    HistoryNavigationQuery,
    NavigationKind,
    SearchDirection,
    SearchFilter,
    SearchKind,
    SearchQuery,
)
from reedkit.item import HistoryItem

_SEARCH_KINDS = {
    NavigationKind.PREFIX_SEARCH: SearchKind.PREFIX,
    NavigationKind.SUBSTRING_SEARCH: SearchKind.SUBSTRING,
}


class HistoryCursor:
    """A position in a history, moved by :meth:`back` and :meth:`forward`.

    The navigation query decides which entries are visited. Entries equal to
    the one currently shown are skipped.
    """

    def __init__(self, query: HistoryNavigationQuery) -> None:
        self._query = query
        self._current: HistoryItem | None = None
        self._skip_dupes = True

    def back(self, history: History) -> None:
        """Move to the previous matching entry; stays put at the oldest one."""
        self._navigate(history, SearchDirection.BACKWARD)

    def forward(self, history: History) -> None:
        """Move to the next matching entry, or past the newest one."""
        self._navigate(history, SearchDirection.FORWARD)

    def _search_filter(self) -> SearchFilter:
        search_kind = _SEARCH_KINDS.get(self._query.kind)
        if search_kind is None:
            flt = SearchFilter.anything()
        else:
            flt = SearchFilter.from_text_search(
                CommandLineSearch(search_kind, self._query.value)
            )
        if self._skip_dupes and self._current is not None:
            flt = replace(flt, not_command_line=self._current.command_line)
        return flt

    def _navigate(self, history: History, direction: SearchDirection) -> None:
        if direction is SearchDirection.FORWARD and self._current is None:
            # Without a starting point the cursor is already past the end.
            return
        start_id = self._current.id if self._current is not None else None
        found = history.search(
            SearchQuery(
                direction=direction,
                start_id=start_id,
                limit=1,
                filter=self._search_filter(),
            )
        )
        if len(found) == 1:
            self._current = found[0]
        elif direction is SearchDirection.FORWARD:
            self._current = None

    def string_at_cursor(self) -> str | None:
        """The command line at the cursor, if any."""
        return self._current.command_line if self._current is not None else None

    def get_navigation(self) -> HistoryNavigationQuery:
        """The navigation query this cursor follows."""
        return self._query