import pytest
from blessed.keyboard import Keystroke

from awsome.keymap import MAIN_KEYS, POPUP_KEYS, hotkey_help, key_name, translate
from awsome.services import Service
from awsome.state import (
    AppState,
    ClosePopup,
    NavigateDown,
    NavigateUp,
    OpenPopup,
    Quit,
    Refresh,
    SelectService,
    ShowSelection,
    ToggleFavorite,
)

KEY_UP = Keystroke("\x1b[A", code=259, name="KEY_UP")
KEY_DOWN = Keystroke("\x1b[B", code=258, name="KEY_DOWN")
KEY_ENTER = Keystroke("\r", code=343, name="KEY_ENTER")
KEY_ESCAPE = Keystroke("\x1b", code=361, name="KEY_ESCAPE")

MAIN = AppState()
POPUP = AppState(popup_open=True, popup_index=2)


def test_key_name():
    assert key_name(KEY_UP) == "KEY_UP"
    assert key_name(Keystroke("\n")) == "KEY_ENTER"
    assert key_name("\x1b") == "KEY_ESCAPE"
    assert key_name(Keystroke("R")) == "r"


@pytest.mark.parametrize(
    "key,event",
    [
        (" ", OpenPopup()),
        ("r", Refresh()),
        ("R", Refresh()),
        (KEY_UP, NavigateUp()),
        (KEY_DOWN, NavigateDown()),
        ("k", NavigateUp()),
        ("j", NavigateDown()),
        ("J", NavigateDown()),
        (KEY_ENTER, ShowSelection()),
        ("q", Quit()),
        ("Q", Quit()),
    ],
)
def test_main_view_bindings(key, event):
    assert translate(MAIN, key) == event


@pytest.mark.parametrize("key", ["f", KEY_ESCAPE, "x", "i"])
def test_main_view_ignores(key):
    assert translate(MAIN, key) is None


@pytest.mark.parametrize(
    "key,event",
    [
        (" ", ClosePopup()),
        (KEY_ESCAPE, ClosePopup()),
        (KEY_UP, NavigateUp()),
        (KEY_DOWN, NavigateDown()),
        ("k", NavigateUp()),
        ("j", NavigateDown()),
        (KEY_ENTER, SelectService(Service.IAM)),
        ("f", ToggleFavorite(Service.IAM)),
        ("F", ToggleFavorite(Service.IAM)),
        ("q", Quit()),
    ],
)
def test_popup_bindings(key, event):
    assert translate(POPUP, key) == event


@pytest.mark.parametrize("key", ["r", "x"])
def test_popup_ignores(key):
    assert translate(POPUP, key) is None


def test_hotkey_help_merges_shared_tooltips():
    assert hotkey_help(POPUP_KEYS, ["KEY_UP", "KEY_DOWN", "KEY_ENTER", "KEY_ESCAPE"]) == [
        ("↑/↓", "Navigate"),
        ("Enter", "Select"),
        ("Esc", "Close"),
    ]
    assert hotkey_help(MAIN_KEYS, [" ", "r"]) == [("Space", "Services"), ("r", "Refresh")]
