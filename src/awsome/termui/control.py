"""
Controls are blocks which may be framed by a border.
"""
from .block import Block
from .common import Commons


class BorderStyle:
    """
    The characters a border is drawn with.

    Attributes
    ----------
    chars : list(str)
        Six characters: horizontal edge, vertical edge, then the top left, top right, bottom left and bottom right corners.
    """

    def __init__(self, chars=None):
        self.chars = list(chars) if chars is not None else ["-", "|", "+", "+", "+", "+"]

    horizontal = property(lambda self: self.chars[0])
    vertical = property(lambda self: self.chars[1])
    topleft = property(lambda self: self.chars[2])
    topright = property(lambda self: self.chars[3])
    bottomleft = property(lambda self: self.chars[4])
    bottomright = property(lambda self: self.chars[5])


BorderStyleContinuous = BorderStyle(["─", "│", "┌", "┐", "└", "┘"])
"""
Box drawing border which forms an unbroken line.
"""


class Border:
    """
    The frame of a control, with an optional title centered on the top edge.

    Attributes
    ----------
    style : awsome.termui.control.BorderStyle
        The characters of the frame.
    color : awsome.termui.color.Color
        The color of the frame.
    title : str
        Text centered on the top edge.
    title_color : awsome.termui.color.Color
        The color of the title.
    title_info : str
        Text following the title, such as a status indicator.
    title_info_color : awsome.termui.color.Color
        The color of title_info. Defaults to title_color.
    """

    def __init__(
        self,
        style=None,
        color=None,
        title=None,
        title_color=None,
        title_info=None,
        title_info_color=None,
    ):
        self.style = style
        self.color = color
        self.title = title
        self.title_color = title_color
        self.title_info = title_info
        self.title_info_color = title_info_color

    def paint(self, block):
        """
        Draws the frame along the outermost cells of a block.

        Parameters
        ----------
        block : awsome.termui.block.Block
            The framed block.
        """
        if self.style is None or self.color is None:
            return
        ((x0, x1), (y0, y1)) = block.corners
        span = x1 - x0 - 1
        if span < 0 or y1 <= y0:
            return
        ui = Commons.UIInstance
        style = self.style
        ui.print(
            style.topleft + style.horizontal * span + style.topright,
            xy=(x0, y0),
            color=self.color,
        )
        for y in range(y0 + 1, y1):
            ui.print(style.vertical, xy=(x0, y), color=self.color)
            ui.print(style.vertical, xy=(x1, y), color=self.color)
        ui.print(
            style.bottomleft + style.horizontal * span + style.bottomright,
            xy=(x0, y1),
            color=self.color,
        )
        self.paint_title(x0 + 1, span, y0)

    def paint_title(self, x, span, y):
        if not self.title or self.title_color is None:
            return
        title = f" {self.title} "
        info = f"{self.title_info} " if self.title_info else ""
        if len(title) + len(info) > span:
            (title, info) = (title[:span], "")
        x += int((span - len(title) - len(info)) / 2)
        ui = Commons.UIInstance
        ui.print(title, xy=(x, y), color=self.title_color, bold=True)
        if info:
            ui.print(
                info,
                xy=(x + len(title), y),
                color=self.title_info_color or self.title_color,
                bold=True,
            )


class Control(Block):
    """
    A block which may be framed by a border. The border takes up the outermost cells, shrinking the inner area by one on every side.
    """

    def __init__(self, *args, border=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.border = border

    @property
    def border(self):
        """
        The frame of the control, or None. Replacing it forces a repaint.
        """
        return self._border

    @border.setter
    def border(self, value):
        self._border = value
        Commons.UIInstance.dirty = True

    @property
    def inner(self):
        ((x0, x1), (y0, y1)) = self.corners
        if self.border is None:
            return ((x0, x1), (y0, y1))
        return ((x0 + 1, x1 - 1), (y0 + 1, y1 - 1))

    def clear_area(self):
        """
        Blanks every cell of the control, hiding whatever was painted underneath.
        """
        ((x0, x1), (y0, y1)) = self.corners
        for y in range(y0, y1 + 1):
            Commons.UIInstance.print(" " * (x1 - x0 + 1), xy=(x0, y))

    def paint(self):
        if self.border is not None:
            self.border.paint(self)
        super().paint()
