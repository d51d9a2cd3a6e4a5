"""
Terminal colors. A Color is a callable which wraps a string in the escape sequences of its palette.
"""


class Palette:
    """
    A palette which leaves strings uncolored. Subclasses turn color codes into escape sequences.
    """

    def __call__(self, code, string, background=None, bold=False):
        """
        Colors a string.

        Parameters
        ----------
        code : object
            The foreground color code.
        string : str
            The string to color.
        background : object, optional
            The background color code. If None, the terminal background is kept.
        bold : bool
            Whether to print the string in bold.

        Returns
        -------
        str
            The colored string, followed by a reset sequence where applicable.
        """
        return string


class Palette8Bit(Palette):
    """
    The 256 color table, addressed with the SGR 38;5 and 48;5 sequences.
    """

    def __call__(self, code, string, background=None, bold=False):
        params = ["1"] if bold else []
        params.append(f"38;5;{code}")
        if background is not None:
            params.append(f"48;5;{background}")
        return f"\033[{';'.join(params)}m{string}\033[0m"


class Color:
    """
    A foreground and background pair within a palette.

    Attributes
    ----------
    palette : awsome.termui.color.Palette
        The palette the codes refer to.
    code : object
        The foreground color code.
    background : object
        The background color code, or None to keep the terminal background.
    """

    def __init__(self, palette, code, background=None):
        self.palette = palette
        self.code = code
        self.background = background

    def _key(self):
        return (type(self.palette).__name__, self.code, self.background)

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return "Color({0}, {1}, background={2})".format(*self._key())

    def __call__(self, string, bold=False):
        return self.palette(self.code, string, background=self.background, bold=bold)


ColorGold = Color(Palette8Bit(), 220)
ColorBlackOnGold = Color(Palette8Bit(), 0, background=220)
ColorBlackOnOrange = Color(Palette8Bit(), 0, background=208)
