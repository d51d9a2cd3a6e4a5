"""
Positioning and sizing of blocks.

A block is placed by an anchor, which turns the block size and the parent block into the top left cell of the block, and sized by a
Dimension, which is evaluated against the terminal size on every frame.
"""
from .common import Commons


class Dimension:
    """
    A width and height specification, evaluated lazily against the size of the terminal.

    Each axis is either a plain cell count (``20``) or a string expression:

    * ``"50%"`` is a share of the terminal along that axis,
    * ``"100%-6"`` subtracts terms from the first one, never going below zero,
    * ``"60%|58"`` takes the largest of the alternatives.

    Results never exceed the terminal size.

    Attributes
    ----------
    width : int or str
        The width expression.
    height : int or str
        The height expression.
    """

    def __init__(self, width, height):
        self.width = width
        self.height = height

    def __getitem__(self, key):
        if key in (0, "x", "w"):
            return self()[0]
        if key in (1, "y", "h"):
            return self()[1]
        raise KeyError(f"Bad dimension key {key}")

    @classmethod
    def evaluate(cls, expr, space):
        """
        Evaluates one axis expression.

        Parameters
        ----------
        expr : int or str
            The axis expression.
        space : int
            The cells available along the axis.

        Returns
        -------
        int
            The resulting cell count.
        """
        if not isinstance(expr, str):
            return int(expr)
        if "|" in expr:
            return max(cls.evaluate(option, space) for option in expr.split("|"))
        if "-" in expr:
            first, *rest = expr.split("-")
            total = cls.evaluate(first, space)
            for term in rest:
                total -= cls.evaluate(term, space)
            return max(total, 0)
        if expr.endswith("%"):
            return int(space * float(expr[:-1]) / 100)
        return int(expr)

    def __call__(self):
        """
        Evaluates both axes.

        Returns
        -------
        tuple(int, int)
            The (width, height) pair.
        """
        (space_w, space_h) = Commons.UIInstance.dim
        return (
            min(self.evaluate(self.width, space_w), space_w),
            min(self.evaluate(self.height, space_h), space_h),
        )


class AbstractAnchor:
    """
    Interface of anchors. The parent block is None for blocks placed directly on the screen.
    """

    def topleft(self, dim, parent):
        """
        Computes the top left cell of an anchored block.

        Parameters
        ----------
        dim : awsome.termui.alignment.Dimension
            The size of the anchored block.
        parent : awsome.termui.block.Block
            The parent block, or None.

        Returns
        -------
        tuple(int, int)
            The (x, y) cell.
        """
        raise NotImplementedError


class TopLeftAnchor(AbstractAnchor):
    """
    Places a block at an offset from the top left corner of its parent.
    """

    def __init__(self, left, top):
        self.left = left
        self.top = top

    def topleft(self, dim, parent):
        (x, y) = (0, 0) if parent is None else parent.topleft()
        return (x + self.left, y + self.top)


class BottomLeftAnchor(AbstractAnchor):
    """
    Places a block so that its bottom left corner sits at an offset from the bottom left corner of its parent.
    """

    def __init__(self, left, bottom):
        self.left = left
        self.bottom = bottom

    def topleft(self, dim, parent):
        if parent is None:
            (x, bottom) = (0, Commons.UIInstance.dim[1] - 1)
        else:
            x = parent.topleft()[0]
            bottom = parent.bottomright()[1]
        return (x + self.left, bottom - self.bottom - dim[1] + 1)


class CenterAnchor(AbstractAnchor):
    """
    Centers a block within its parent, shifted by an offset.
    """

    def __init__(self, xoffset, yoffset):
        self.xoffset = xoffset
        self.yoffset = yoffset

    def topleft(self, dim, parent):
        if parent is None:
            (px, py) = (0, 0)
            (pw, ph) = Commons.UIInstance.dim
        else:
            (px, py) = parent.topleft()
            (pw, ph) = parent.dimensions()
        center_x = px + int(pw / 2) + self.xoffset
        center_y = py + int(ph / 2) + self.yoffset
        return (center_x - int(dim[0] / 2), center_y - int(dim[1] / 2))
