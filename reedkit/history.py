"""History interface, search queries and navigation modes."""

from __future__ import annotations

import abc
import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from reedkit.item import HistoryItem


class HistoryError(Exception):
    """Base class for errors raised by a history backend."""


class HistoryFeatureUnsupported(HistoryError):
    """The history backend does not offer the requested feature."""

    def __init__(self, history: str, feature: str) -> None:
        super().__init__(f"{history} does not support {feature}")
        self.history = history
        self.feature = feature


class HistoryDatabaseError(HistoryError):
    """The storage behind a history failed."""


class NavigationKind(enum.Enum):
    """Ways of browsing through a history."""

    NORMAL = "Normal"
    PREFIX_SEARCH = "PrefixSearch"
    SUBSTRING_SEARCH = "SubstringSearch"


@dataclass(frozen=True)
class HistoryNavigationQuery:
    """A browsing mode with its parameter.

    For ``NORMAL`` the value is the line buffer state typed before browsing;
    for the search kinds it is the string searched for.
    """

    kind: NavigationKind
    value: Any = None


class SearchKind(enum.Enum):
    """How a command line is matched against a search string."""

    PREFIX = "Prefix"
    SUBSTRING = "Substring"
    EXACT = "Exact"


@dataclass(frozen=True)
class CommandLineSearch:
    """A constraint on the text of a command line."""

    kind: SearchKind
    text: str

    def matches(self, command_line: str) -> bool:
        """Whether ``command_line`` satisfies this constraint."""
        if self.kind is SearchKind.PREFIX:
            return command_line.startswith(self.text)
        if self.kind is SearchKind.SUBSTRING:
            return self.text in command_line
        return command_line == self.text


class SearchDirection(enum.Enum):
    """Order in which a search walks the history."""

    BACKWARD = "Backward"
    FORWARD = "Forward"


@dataclass
class SearchFilter:
    """Additional constraints for a history search."""

    command_line: CommandLineSearch | None = None
    not_command_line: str | None = None
    hostname: str | None = None
    cwd_exact: str | None = None
    cwd_prefix: str | None = None
    exit_successful: bool | None = None

    @classmethod
    def anything(cls) -> SearchFilter:
        """A filter without any constraint."""
        return cls()

    @classmethod
    def from_text_search(cls, cmd: CommandLineSearch) -> SearchFilter:
        """A filter constraining only the command line text."""
        return cls(command_line=cmd)


@dataclass
class SearchQuery:
    """A query over a history.

    ``start_*`` and ``end_*`` bounds are exclusive and inclusive respectively,
    relative to the search direction.
    """

    direction: SearchDirection
    start_time: datetime | None = None
    end_time: datetime | None = None
    start_id: int | None = None
    end_id: int | None = None
    limit: int | None = None
    filter: SearchFilter = field(default_factory=SearchFilter)

    @classmethod
    def all_that_contain_rev(cls, contains: str) -> SearchQuery:
        """All entries containing ``contains``, newest first."""
        return cls(
            direction=SearchDirection.BACKWARD,
            filter=SearchFilter.from_text_search(
                CommandLineSearch(SearchKind.SUBSTRING, contains)
            ),
        )

    @classmethod
    def last_with_search(cls, search_filter: SearchFilter) -> SearchQuery:
        """The most recent entry matching ``search_filter``."""
        return cls(direction=SearchDirection.BACKWARD, limit=1, filter=search_filter)

    @classmethod
    def last_with_prefix(cls, prefix: str) -> SearchQuery:
        """The most recent entry starting with ``prefix``."""
        return cls.last_with_search(
            SearchFilter.from_text_search(CommandLineSearch(SearchKind.PREFIX, prefix))
        )

    @classmethod
    def everything(cls, direction: SearchDirection) -> SearchQuery:
        """All entries in the given direction."""
        return cls(direction=direction)


class History(abc.ABC):
    """A store of command lines, such as a text file or a database."""

    @abc.abstractmethod
    def save(self, item: HistoryItem) -> HistoryItem:
        """Store an item; a new id is assigned when the item has none."""

    @abc.abstractmethod
    def load(self, item_id: int) -> HistoryItem:
        """Return the item with the given id."""

    @abc.abstractmethod
    def next_session_id(self) -> int:
        """Return the next unused session id."""

    @abc.abstractmethod
    def count(self, query: SearchQuery) -> int:
        """Count the results of a query."""

    def count_all(self) -> int:
        """Return the total number of items."""
        return self.count(SearchQuery.everything(SearchDirection.FORWARD))

    @abc.abstractmethod
    def search(self, query: SearchQuery) -> list[HistoryItem]:
        """Return the results of a query."""

    @abc.abstractmethod
    def update(self, item_id: int, updater: Callable[[HistoryItem], HistoryItem]) -> None:
        """Replace an item with what ``updater`` makes of it."""

    @abc.abstractmethod
    def delete(self, item_id: int) -> None:
        """Remove an item."""

    @abc.abstractmethod
    def sync(self) -> None:
        """Make sure the history is written to its storage."""