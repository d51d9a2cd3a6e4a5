"""
The screen buffer. Blocks paint into the buffer, which is written to the terminal in one go at the end of the frame.
"""


def nullcolor(string, **kwargs):
    return string


class Character:
    """
    One cell of the screen buffer.

    The colored output of a cell is cached until the cell changes.

    Attributes
    ----------
    value : str
        The displayed character.
    color : callable
        Colors the character. Receives the character and a bold keyword.
    bold : bool
        Whether the character is bold.
    out : str
        The cached colored output.
    dirty : bool
        Whether out must be recomputed.
    """

    def __init__(self):
        self.clear()

    def clear(self):
        """
        Blanks the cell.
        """
        self.value = " "
        self.color = nullcolor
        self.bold = False
        self.out = " "
        self.dirty = False

    def output(self):
        if self.dirty:
            color = self.color if self.color is not None else nullcolor
            self.out = color(self.value, bold=self.bold)
            self.dirty = False
        return self.out


class Screen:
    """
    A grid of character cells the size of the terminal.

    Attributes
    ----------
    ui : awsome.termui.ui.UI
        The UI owning the screen, queried for the terminal size.
    buf : list(list(awsome.termui.screen.Character))
        The rows of cells.
    """

    def __init__(self, ui):
        self.ui = ui
        self.buf = []
        self.clear()

    def clear(self):
        """
        Blanks every cell. Rebuilds the grid if the terminal was resized since the last frame.
        """
        (width, height) = self.ui.dim
        if len(self.buf) != height or any(len(row) != width for row in self.buf):
            self.buf = [[Character() for _ in range(width)] for _ in range(height)]
            return
        for row in self.buf:
            for cell in row:
                cell.clear()

    def __getitem__(self, i):
        return self.buf[i]

    def text(self):
        """
        Returns the characters on the screen without colors, one line per row.

        Returns
        -------
        str
            The screen contents.
        """
        return "\n".join("".join(cell.value for cell in row) for row in self.buf)

    def output(self):
        """
        Writes the buffer to the terminal.
        """
        print(
            "\r\n".join("".join(cell.output() for cell in row) for row in self.buf),
            end="",
        )
