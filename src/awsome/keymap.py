"""
Module for translating keystrokes into state events.

Bindings are kept in hotkey tables mapping a key name to the event it triggers and a tooltip. Events which depend on the state, such as
selecting the highlighted service, are built by a function of the state.
"""
from .state import (
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

MAIN_KEYS = {
    " ": (lambda state: OpenPopup(), "Services"),
    "r": (lambda state: Refresh(), "Refresh"),
    "KEY_UP": (lambda state: NavigateUp(), "Up"),
    "k": (lambda state: NavigateUp(), "Up"),
    "KEY_DOWN": (lambda state: NavigateDown(), "Down"),
    "j": (lambda state: NavigateDown(), "Down"),
    "KEY_ENTER": (lambda state: ShowSelection(), "Show"),
    "q": (lambda state: Quit(), "Quit"),
}
"""
Keys accepted by the main view.
"""

POPUP_KEYS = {
    "KEY_UP": (lambda state: NavigateUp(), "Navigate"),
    "k": (lambda state: NavigateUp(), "Navigate"),
    "KEY_DOWN": (lambda state: NavigateDown(), "Navigate"),
    "j": (lambda state: NavigateDown(), "Navigate"),
    "KEY_ENTER": (lambda state: SelectService(state.highlighted_service), "Select"),
    "f": (lambda state: ToggleFavorite(state.highlighted_service), "Toggle ★"),
    " ": (lambda state: ClosePopup(), "Close"),
    "KEY_ESCAPE": (lambda state: ClosePopup(), "Close"),
    "q": (lambda state: Quit(), "Quit"),
}
"""
Keys accepted by the service selector popup.
"""

translations = {
    "KEY_UP": "↑",
    "KEY_DOWN": "↓",
    "KEY_ENTER": "Enter",
    "KEY_ESCAPE": "Esc",
    " ": "Space",
}


def key_name(key):
    """
    Normalizes a keystroke into a hotkey name. Special keys are referred to by their blessed key name, characters are lowercased.

    Parameters
    ----------
    key : blessed.keyboard.Keystroke or str
        The key that was pressed.

    Returns
    -------
    str
        The normalized key name.
    """
    if getattr(key, "is_sequence", False):
        return key.name
    name = str(key)
    if name in ("\n", "\r"):
        return "KEY_ENTER"
    if name == "\x1b":
        return "KEY_ESCAPE"
    return name.lower()


def hotkey_help(table, keys):
    """
    Builds help entries for some keys of a hotkey table. Keys sharing a tooltip are merged into a single entry.

    Parameters
    ----------
    table : dict
        The hotkey table.
    keys : list(str)
        The key names to describe, in display order.

    Returns
    -------
    list(tuple(str, str))
        (keys, tooltip) pairs, such as ("↑/↓", "Navigate").
    """
    entries = {}
    for key in keys:
        tooltip = table[key][1]
        entries.setdefault(tooltip, []).append(translations.get(key, key))
    return [("/".join(labels), tooltip) for tooltip, labels in entries.items()]


def translate(state, key):
    """
    Maps a keystroke to the event it triggers in the given state.

    Parameters
    ----------
    state : awsome.state.AppState
        The current state. Decides whether the popup or the main view consumes the key.
    key : blessed.keyboard.Keystroke or str
        The key that was pressed.

    Returns
    -------
    object
        An event for awsome.state.apply, or None if the key is not bound.
    """
    table = POPUP_KEYS if state.popup_open else MAIN_KEYS
    binding = table.get(key_name(key))
    if binding is None:
        return None
    return binding[0](state)
