"""
This module contains common termui features.
"""


class Commons:
    """
    TermUI Common class.

    Holds the UI singleton so that blocks can reach the screen buffer without passing the UI around.

    Attributes
    ----------
    UIInstance : awsome.termui.ui.UI
        The UI singleton which has been instantiated for the terminal.
    """

    UIInstance = None


def fit(text, width):
    """
    Pads or truncates a text so it occupies exactly the given number of character cells.

    Parameters
    ----------
    text : str
        The text to fit.
    width : int
        The number of cells available.

    Returns
    -------
    str
        The fitted text.
    """
    if width <= 0:
        return ""
    if len(text) > width:
        return text[:width]
    return text + " " * (width - len(text))
