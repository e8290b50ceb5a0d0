import pytest

from reedkit.enums import (
    EditCommand,
    EditCommandKind,
    EditType,
    ReedlineEvent,
    ReedlineEventKind,
    Signal,
    SignalKind,
    UndoBehavior,
    UndoBehaviorKind,
)

EK = EditCommandKind
UK = UndoBehaviorKind
RK = ReedlineEventKind


def test_signal_success_holds_content():
    sig = Signal.success("ls -l")
    assert sig.kind is SignalKind.SUCCESS
    assert sig.content == "ls -l"


def test_signal_ctrl_c_rejects_content():
    with pytest.raises(ValueError):
        Signal(SignalKind.CTRL_C, "text")


def test_signal_success_requires_text():
    with pytest.raises(TypeError):
        Signal(SignalKind.SUCCESS)


def test_edit_command_args_and_equality():
    a = EditCommand(EK.REPLACE_CHARS, 3, "abc")
    b = EditCommand(EK.REPLACE_CHARS, 3, "abc")
    assert a.args == (3, "abc")
    assert a == b
    assert hash(a) == hash(b)


@pytest.mark.parametrize(
    "kind,args,error",
    [
        (EK.INSERT_CHAR, ("ab",), TypeError),
        (EK.INSERT_CHAR, (), TypeError),
        (EK.MOVE_TO_POSITION, (-1,), ValueError),
        (EK.MOVE_TO_POSITION, ("1",), TypeError),
        (EK.CLEAR, ("x",), TypeError),
    ],
)
def test_edit_command_argument_validation(kind, args, error):
    with pytest.raises(error):
        EditCommand(kind, *args)


@pytest.mark.parametrize(
    "command,expected",
    [
        (EditCommand(EK.MOVE_LEFT), EditType.MOVE_CURSOR),
        (EditCommand(EK.MOVE_TO_POSITION, 4), EditType.MOVE_CURSOR),
        (EditCommand(EK.MOVE_LEFT_BEFORE, "x"), EditType.MOVE_CURSOR),
        (EditCommand(EK.INSERT_CHAR, "a"), EditType.EDIT_TEXT),
        (EditCommand(EK.CUT_LEFT_UNTIL, "x"), EditType.EDIT_TEXT),
        (EditCommand(EK.CLEAR), EditType.EDIT_TEXT),
        (EditCommand(EK.UNDO), EditType.UNDO_REDO),
        (EditCommand(EK.REDO), EditType.UNDO_REDO),
    ],
)
def test_edit_type(command, expected):
    assert command.edit_type() is expected


def test_every_edit_kind_has_an_edit_type():
    for kind in EK:
        if kind in (EK.MOVE_TO_POSITION,):
            cmd = EditCommand(kind, 0)
        elif kind is EK.REPLACE_CHARS:
            cmd = EditCommand(kind, 1, "s")
        elif kind is EK.INSERT_STRING:
            cmd = EditCommand(kind, "s")
        else:
            try:
                cmd = EditCommand(kind)
            except TypeError:
                cmd = EditCommand(kind, "c")
        assert cmd.edit_type() in set(EditType)


@pytest.mark.parametrize(
    "command,text",
    [
        (EditCommand(EK.MOVE_TO_START), "MoveToStart"),
        (EditCommand(EK.MOVE_TO_POSITION, 2), "MoveToPosition  Value: <int>"),
        (EditCommand(EK.INSERT_CHAR, "q"), "InsertChar  Value: <char>"),
        (EditCommand(EK.INSERT_STRING, "hi"), "InsertString Value: <string>"),
        (EditCommand(EK.REPLACE_CHARS, 1, "z"), "ReplaceChars <int> <string>"),
        (EditCommand(EK.CUT_RIGHT_UNTIL, "z"), "CutRightUntil Value: <char>"),
        (EditCommand(EK.SWITCHCASE_CHAR), "SwitchcaseChar"),
    ],
)
def test_edit_command_display(command, text):
    assert str(command) == text


def test_move_cursor_never_creates_undo_point():
    move = UndoBehavior(UK.MOVE_CURSOR)
    for prev in (UndoBehavior(UK.INSERT_CHARACTER, "a"), UndoBehavior(UK.CREATE_UNDO_POINT)):
        assert move.create_undo_point_after(prev) is False


def test_history_navigation_groups():
    nav = UndoBehavior(UK.HISTORY_NAVIGATION)
    assert nav.create_undo_point_after(UndoBehavior(UK.HISTORY_NAVIGATION)) is False
    assert nav.create_undo_point_after(UndoBehavior(UK.INSERT_CHARACTER, "a")) is True


@pytest.mark.parametrize(
    "prev,new,expected",
    [
        ("a", "b", False),
        ("a", " ", True),
        (" ", "a", False),
        ("\n", "a", True),
        ("\r", "a", True),
    ],
)
def test_insert_character_grouping(prev, new, expected):
    result = UndoBehavior(UK.INSERT_CHARACTER, new).create_undo_point_after(
        UndoBehavior(UK.INSERT_CHARACTER, prev)
    )
    assert result is expected


@pytest.mark.parametrize("kind", [UK.BACKSPACE, UK.DELETE])
@pytest.mark.parametrize(
    "prev,new,expected",
    [
        ("a", "b", False),
        (" ", "a", True),
        ("a", " ", False),
        ("a", "\n", True),
        (None, "a", False),
        ("a", None, False),
    ],
)
def test_backspace_and_delete_grouping(kind, prev, new, expected):
    result = UndoBehavior(kind, new).create_undo_point_after(UndoBehavior(kind, prev))
    assert result is expected


def test_mixed_kinds_create_undo_point():
    back = UndoBehavior(UK.BACKSPACE, "a")
    assert back.create_undo_point_after(UndoBehavior(UK.DELETE, "a")) is True
    assert back.create_undo_point_after(UndoBehavior(UK.INSERT_CHARACTER, "a")) is True


def test_insert_character_requires_char():
    with pytest.raises(TypeError):
        UndoBehavior(UK.INSERT_CHARACTER)


def test_event_edit_stores_tuple():
    cmds = [EditCommand(EK.INSERT_CHAR, "a"), EditCommand(EK.BACKSPACE)]
    event = ReedlineEvent(RK.EDIT, cmds)
    assert event.args == (tuple(cmds),)
    assert event == ReedlineEvent(RK.EDIT, tuple(cmds))


def test_event_nested_until_found():
    inner = [ReedlineEvent(RK.MENU, "completion_menu"), ReedlineEvent(RK.MENU_NEXT)]
    event = ReedlineEvent(RK.UNTIL_FOUND, inner)
    assert event.args[0][0].args == ("completion_menu",)
    assert len(event.args[0]) == len(inner)


@pytest.mark.parametrize(
    "kind,args,error",
    [
        (RK.RESIZE, (10,), TypeError),
        (RK.RESIZE, (70000, 10), ValueError),
        (RK.EDIT, ([ReedlineEvent(RK.ENTER)],), TypeError),
        (RK.MULTIPLE, ([EditCommand(EK.CLEAR)],), TypeError),
        (RK.MENU, (5,), TypeError),
        (RK.ENTER, ("x",), TypeError),
    ],
)
def test_event_argument_validation(kind, args, error):
    with pytest.raises(error):
        ReedlineEvent(kind, *args)


@pytest.mark.parametrize(
    "event,text",
    [
        (ReedlineEvent(RK.NONE), "None"),
        (ReedlineEvent(RK.RESIZE, 80, 24), "Resize <int> <int>"),
        (ReedlineEvent(RK.EDIT, []), "Edit: <EditCommand> or Edit: <EditCommand> value: <string>"),
        (ReedlineEvent(RK.MULTIPLE, []), "Multiple[ { ReedLineEvents, } ]"),
        (ReedlineEvent(RK.UNTIL_FOUND, []), "UntilFound [ { ReedLineEvents, } ]"),
        (ReedlineEvent(RK.MENU, "history_menu"), "Menu Name: <string>"),
        (ReedlineEvent(RK.EXECUTE_HOST_COMMAND, "ls"), "ExecuteHostCommand"),
        (ReedlineEvent(RK.RECORD_TO_TILL), "RecordToTill"),
    ],
)
def test_event_display(event, text):
    assert str(event) == text