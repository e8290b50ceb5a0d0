"""Signals, editing commands, undo behaviour tags and engine events."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


class SignalKind(enum.Enum):
    """The ways a line read can end."""

    SUCCESS = "Success"
    CTRL_C = "CtrlC"
    CTRL_D = "CtrlD"


@dataclass(frozen=True)
class Signal:
    """Outcome of reading a line; ``content`` is set only for a success."""

    kind: SignalKind
    content: str | None = None

    def __post_init__(self) -> None:
        if self.kind is SignalKind.SUCCESS:
            if not isinstance(self.content, str):
                raise TypeError("a successful signal carries the entered text")
        elif self.content is not None:
            raise ValueError(f"{self.kind.value} carries no content")

    @classmethod
    def success(cls, content: str) -> Signal:
        """Entry succeeded with the given content."""
        return cls(SignalKind.SUCCESS, content)


class EditType(enum.Enum):
    """Coarse grouping of edit commands, used for undo bookkeeping."""

    MOVE_CURSOR = "MoveCursor"
    UNDO_REDO = "UndoRedo"
    EDIT_TEXT = "EditText"


# Argument kinds understood by the validator below.
_INT = "int"
_U16 = "u16"
_CHAR = "char"
_STR = "str"
_EDITS = "edits"
_EVENTS = "events"


def _check_arg(owner: str, spec: str, value: Any) -> Any:
    if spec in (_INT, _U16):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{owner} expects an integer, got {value!r}")
        if value < 0:
            raise ValueError(f"{owner} expects a non-negative integer, got {value}")
        if spec == _U16 and value > 0xFFFF:
            raise ValueError(f"{owner} expects a value below 65536, got {value}")
        return value
    if spec == _CHAR:
        if not isinstance(value, str) or len(value) != 1:
            raise TypeError(f"{owner} expects a single character, got {value!r}")
        return value
    if spec == _STR:
        if not isinstance(value, str):
            raise TypeError(f"{owner} expects a string, got {value!r}")
        return value
    if spec == _EDITS:
        items = tuple(value)
        if not all(isinstance(item, EditCommand) for item in items):
            raise TypeError(f"{owner} expects edit commands")
        return items
    if spec == _EVENTS:
        items = tuple(value)
        if not all(isinstance(item, ReedlineEvent) for item in items):
            raise TypeError(f"{owner} expects reedline events")
        return items
    raise AssertionError(f"unknown argument kind {spec}")


def _check_args(owner: str, specs: tuple[str, ...], args: tuple[Any, ...]) -> tuple[Any, ...]:
    if len(args) != len(specs):
        raise TypeError(f"{owner} takes {len(specs)} argument(s), got {len(args)}")
    return tuple(_check_arg(owner, spec, value) for spec, value in zip(specs, args))


class EditCommandKind(enum.Enum):
    """Every editing action that can be bound to a key."""

    MOVE_TO_START = "MoveToStart"
    MOVE_TO_LINE_START = "MoveToLineStart"
    MOVE_TO_END = "MoveToEnd"
    MOVE_TO_LINE_END = "MoveToLineEnd"
    MOVE_LEFT = "MoveLeft"
    MOVE_RIGHT = "MoveRight"
    MOVE_WORD_LEFT = "MoveWordLeft"
    MOVE_BIG_WORD_LEFT = "MoveBigWordLeft"
    MOVE_WORD_RIGHT = "MoveWordRight"
    MOVE_WORD_RIGHT_START = "MoveWordRightStart"
    MOVE_BIG_WORD_RIGHT_START = "MoveBigWordRightStart"
    MOVE_WORD_RIGHT_END = "MoveWordRightEnd"
    MOVE_BIG_WORD_RIGHT_END = "MoveBigWordRightEnd"
    MOVE_TO_POSITION = "MoveToPosition"
    INSERT_CHAR = "InsertChar"
    INSERT_STRING = "InsertString"
    INSERT_NEWLINE = "InsertNewline"
    REPLACE_CHAR = "ReplaceChar"
    REPLACE_CHARS = "ReplaceChars"
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    CUT_CHAR = "CutChar"
    BACKSPACE_WORD = "BackspaceWord"
    DELETE_WORD = "DeleteWord"
    CLEAR = "Clear"
    CLEAR_TO_LINE_END = "ClearToLineEnd"
    CUT_CURRENT_LINE = "CutCurrentLine"
    CUT_FROM_START = "CutFromStart"
    CUT_FROM_LINE_START = "CutFromLineStart"
    CUT_TO_END = "CutToEnd"
    CUT_TO_LINE_END = "CutToLineEnd"
    CUT_WORD_LEFT = "CutWordLeft"
    CUT_BIG_WORD_LEFT = "CutBigWordLeft"
    CUT_WORD_RIGHT = "CutWordRight"
    CUT_BIG_WORD_RIGHT = "CutBigWordRight"
    CUT_WORD_RIGHT_TO_NEXT = "CutWordRightToNext"
    CUT_BIG_WORD_RIGHT_TO_NEXT = "CutBigWordRightToNext"
    PASTE_CUT_BUFFER_BEFORE = "PasteCutBufferBefore"
    PASTE_CUT_BUFFER_AFTER = "PasteCutBufferAfter"
    UPPERCASE_WORD = "UppercaseWord"
    LOWERCASE_WORD = "LowercaseWord"
    CAPITALIZE_CHAR = "CapitalizeChar"
    SWITCHCASE_CHAR = "SwitchcaseChar"
    SWAP_WORDS = "SwapWords"
    SWAP_GRAPHEMES = "SwapGraphemes"
    UNDO = "Undo"
    REDO = "Redo"
    CUT_RIGHT_UNTIL = "CutRightUntil"
    CUT_RIGHT_BEFORE = "CutRightBefore"
    MOVE_RIGHT_UNTIL = "MoveRightUntil"
    MOVE_RIGHT_BEFORE = "MoveRightBefore"
    CUT_LEFT_UNTIL = "CutLeftUntil"
    CUT_LEFT_BEFORE = "CutLeftBefore"
    MOVE_LEFT_UNTIL = "MoveLeftUntil"
    MOVE_LEFT_BEFORE = "MoveLeftBefore"


_EK = EditCommandKind

_EDIT_ARGS: dict[EditCommandKind, tuple[str, ...]] = {
    _EK.MOVE_TO_POSITION: (_INT,),
    _EK.INSERT_CHAR: (_CHAR,),
    _EK.INSERT_STRING: (_STR,),
    _EK.REPLACE_CHAR: (_CHAR,),
    _EK.REPLACE_CHARS: (_INT, _STR),
    _EK.CUT_RIGHT_UNTIL: (_CHAR,),
    _EK.CUT_RIGHT_BEFORE: (_CHAR,),
    _EK.MOVE_RIGHT_UNTIL: (_CHAR,),
    _EK.MOVE_RIGHT_BEFORE: (_CHAR,),
    _EK.CUT_LEFT_UNTIL: (_CHAR,),
    _EK.CUT_LEFT_BEFORE: (_CHAR,),
    _EK.MOVE_LEFT_UNTIL: (_CHAR,),
    _EK.MOVE_LEFT_BEFORE: (_CHAR,),
}

_EDIT_LABELS: dict[EditCommandKind, str] = {
    _EK.MOVE_TO_POSITION: "MoveToPosition  Value: <int>",
    _EK.INSERT_CHAR: "InsertChar  Value: <char>",
    _EK.INSERT_STRING: "InsertString Value: <string>",
    _EK.REPLACE_CHAR: "ReplaceChar <char>",
    _EK.REPLACE_CHARS: "ReplaceChars <int> <string>",
    _EK.CUT_RIGHT_UNTIL: "CutRightUntil Value: <char>",
    _EK.CUT_RIGHT_BEFORE: "CutRightBefore Value: <char>",
    _EK.MOVE_RIGHT_UNTIL: "MoveRightUntil Value: <char>",
    _EK.MOVE_RIGHT_BEFORE: "MoveRightBefore Value: <char>",
    _EK.CUT_LEFT_UNTIL: "CutLeftUntil Value: <char>",
    _EK.CUT_LEFT_BEFORE: "CutLeftBefore Value: <char>",
    _EK.MOVE_LEFT_UNTIL: "MoveLeftUntil Value: <char>",
    _EK.MOVE_LEFT_BEFORE: "MoveLeftBefore Value: <char>",
}

_CURSOR_MOVES = frozenset(
    {
        _EK.MOVE_TO_START,
        _EK.MOVE_TO_END,
        _EK.MOVE_TO_LINE_START,
        _EK.MOVE_TO_LINE_END,
        _EK.MOVE_TO_POSITION,
        _EK.MOVE_LEFT,
        _EK.MOVE_RIGHT,
        _EK.MOVE_WORD_LEFT,
        _EK.MOVE_BIG_WORD_LEFT,
        _EK.MOVE_WORD_RIGHT,
        _EK.MOVE_WORD_RIGHT_START,
        _EK.MOVE_BIG_WORD_RIGHT_START,
        _EK.MOVE_WORD_RIGHT_END,
        _EK.MOVE_BIG_WORD_RIGHT_END,
        _EK.MOVE_RIGHT_UNTIL,
        _EK.MOVE_RIGHT_BEFORE,
        _EK.MOVE_LEFT_UNTIL,
        _EK.MOVE_LEFT_BEFORE,
    }
)


@dataclass(frozen=True, init=False)
class EditCommand:
    """An editing action with the arguments its kind requires.

    ``EditCommand(EditCommandKind.INSERT_CHAR, "a")`` or
    ``EditCommand(EditCommandKind.REPLACE_CHARS, 3, "text")``.
    """

    kind: EditCommandKind
    args: tuple[Any, ...]

    def __init__(self, kind: EditCommandKind, *args: Any) -> None:
        kind = EditCommandKind(kind)
        checked = _check_args(kind.value, _EDIT_ARGS.get(kind, ()), args)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "args", checked)

    def edit_type(self) -> EditType:
        """Classify the command for undo grouping."""
        if self.kind in _CURSOR_MOVES:
            return EditType.MOVE_CURSOR
        if self.kind in (_EK.UNDO, _EK.REDO):
            return EditType.UNDO_REDO
        return EditType.EDIT_TEXT

    def __str__(self) -> str:
        return _EDIT_LABELS.get(self.kind, self.kind.value)


class UndoBehaviorKind(enum.Enum):
    """How a line change relates to the undo stack."""

    INSERT_CHARACTER = "InsertCharacter"
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    MOVE_CURSOR = "MoveCursor"
    HISTORY_NAVIGATION = "HistoryNavigation"
    CREATE_UNDO_POINT = "CreateUndoPoint"
    UNDO_REDO = "UndoRedo"


_UK = UndoBehaviorKind


@dataclass(frozen=True)
class UndoBehavior:
    """Undo tag of a line change, with the character involved where tracked."""

    kind: UndoBehaviorKind
    char: str | None = None

    def __post_init__(self) -> None:
        if self.kind is _UK.INSERT_CHARACTER:
            _check_arg(self.kind.value, _CHAR, self.char)
        elif self.kind in (_UK.BACKSPACE, _UK.DELETE):
            if self.char is not None:
                _check_arg(self.kind.value, _CHAR, self.char)
        elif self.char is not None:
            raise ValueError(f"{self.kind.value} carries no character")

    def create_undo_point_after(self, previous: UndoBehavior) -> bool:
        """Whether this change starts a new undo set after ``previous``."""
        prev, new = previous.kind, self.kind
        if new is _UK.MOVE_CURSOR:
            return False
        if prev is _UK.HISTORY_NAVIGATION and new is _UK.HISTORY_NAVIGATION:
            return False
        if prev is _UK.INSERT_CHARACTER and new is _UK.INSERT_CHARACTER:
            return previous.char in ("\n", "\r") or (
                not previous.char.isspace() and self.char.isspace()
            )
        if prev is new and new in (_UK.BACKSPACE, _UK.DELETE):
            if previous.char is None or self.char is None:
                return False
            return self.char in ("\n", "\r") or (
                previous.char.isspace() and not self.char.isspace()
            )
        return True


class ReedlineEventKind(enum.Enum):
    """Every action the line editor engine understands."""

    NONE = "None"
    HISTORY_HINT_COMPLETE = "HistoryHintComplete"
    HISTORY_HINT_WORD_COMPLETE = "HistoryHintWordComplete"
    CTRL_D = "CtrlD"
    CTRL_C = "CtrlC"
    CLEAR_SCREEN = "ClearScreen"
    CLEAR_SCROLLBACK = "ClearScrollback"
    ENTER = "Enter"
    ESC = "Esc"
    MOUSE = "Mouse"
    RESIZE = "Resize"
    EDIT = "Edit"
    REPAINT = "Repaint"
    PREVIOUS_HISTORY = "PreviousHistory"
    UP = "Up"
    DOWN = "Down"
    RIGHT = "Right"
    LEFT = "Left"
    NEXT_HISTORY = "NextHistory"
    SEARCH_HISTORY = "SearchHistory"
    MULTIPLE = "Multiple"
    UNTIL_FOUND = "UntilFound"
    MENU = "Menu"
    MENU_NEXT = "MenuNext"
    MENU_PREVIOUS = "MenuPrevious"
    MENU_UP = "MenuUp"
    MENU_DOWN = "MenuDown"
    MENU_LEFT = "MenuLeft"
    MENU_RIGHT = "MenuRight"
    MENU_PAGE_NEXT = "MenuPageNext"
    MENU_PAGE_PREVIOUS = "MenuPagePrevious"
    EXECUTE_HOST_COMMAND = "ExecuteHostCommand"
    OPEN_EDITOR = "OpenEditor"
    RECORD_TO_TILL = "RecordToTill"


_RK = ReedlineEventKind

_EVENT_ARGS: dict[ReedlineEventKind, tuple[str, ...]] = {
    _RK.RESIZE: (_U16, _U16),
    _RK.EDIT: (_EDITS,),
    _RK.MULTIPLE: (_EVENTS,),
    _RK.UNTIL_FOUND: (_EVENTS,),
    _RK.MENU: (_STR,),
    _RK.EXECUTE_HOST_COMMAND: (_STR,),
}

_EVENT_LABELS: dict[ReedlineEventKind, str] = {
    _RK.RESIZE: "Resize <int> <int>",
    _RK.EDIT: "Edit: <EditCommand> or Edit: <EditCommand> value: <string>",
    _RK.MULTIPLE: "Multiple[ { ReedLineEvents, } ]",
    _RK.UNTIL_FOUND: "UntilFound [ { ReedLineEvents, } ]",
    _RK.MENU: "Menu Name: <string>",
}


@dataclass(frozen=True, init=False)
class ReedlineEvent:
    """An engine event with the arguments its kind requires.

    Sequences of commands or events are stored as tuples.
    """

    kind: ReedlineEventKind
    args: tuple[Any, ...]

    def __init__(self, kind: ReedlineEventKind, *args: Any) -> None:
        kind = ReedlineEventKind(kind)
        if kind in (_RK.EDIT, _RK.MULTIPLE, _RK.UNTIL_FOUND):
            if len(args) == 1 and not isinstance(args[0], Iterable):
                raise TypeError(f"{kind.value} expects a sequence")
        checked = _check_args(kind.value, _EVENT_ARGS.get(kind, ()), args)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "args", checked)

    def __str__(self) -> str:
        return _EVENT_LABELS.get(self.kind, self.kind.value)