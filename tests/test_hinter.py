import pytest

from reedkit.file_backed import FileBackedHistory
from reedkit.hinter import DefaultHinter
from reedkit.item import HistoryItem


@pytest.fixture
def history():
    hist = FileBackedHistory()
    for cmd in ["hello there", "hello world again", "goodbye"]:
        hist.save(HistoryItem.from_command_line(cmd))
    return hist


def test_hint_completes_most_recent_match(history):
    hinter = DefaultHinter()
    hint = hinter.handle("hel", 3, history, False)
    assert "hel" + hint == "hello world again"
    assert hinter.complete_hint() == hint


def test_no_match_gives_empty_hint(history):
    hinter = DefaultHinter()
    assert hinter.handle("xyz", 3, history, True) == ""
    assert hinter.complete_hint() == ""


def test_min_chars_suppresses_hint(history):
    hinter = DefaultHinter().with_min_chars(4)
    assert hinter.handle("hel", 3, history, False) == ""
    assert "hell" + hinter.handle("hell", 4, history, False) == "hello world again"


def test_ansi_coloring_wraps_hint(history):
    hinter = DefaultHinter()
    shown = hinter.handle("good", 4, history, True)
    plain = hinter.complete_hint()
    assert "good" + plain == "goodbye"
    assert shown.startswith("\x1b[")
    assert shown.endswith("\x1b[0m")
    assert plain in shown


def test_custom_style(history):
    hinter = DefaultHinter().with_style(lambda s: f"<{s}>")
    shown = hinter.handle("good", 4, history, True)
    assert shown == "<" + hinter.complete_hint() + ">"


def test_next_hint_token_takes_first_word(history):
    hinter = DefaultHinter()
    hinter.handle("hello", 5, history, False)
    token = hinter.next_hint_token()
    assert token == " world"
    assert hinter.complete_hint().startswith(token)


def test_next_hint_token_of_empty_hint(history):
    hinter = DefaultHinter()
    hinter.handle("goodbye", 7, history, False)
    assert hinter.complete_hint() == ""
    assert hinter.next_hint_token() == ""