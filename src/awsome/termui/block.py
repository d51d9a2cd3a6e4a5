"""
Blocks are rectangular regions of the screen arranged in a tree.
"""
from .common import Commons


class Block:
    """
    A rectangular region of the screen which may contain child blocks.

    Children are kept sorted by weight. Input reaches the lowest weight child first, and painting goes the other way round, so the
    lowest weight child ends up on top.

    Attributes
    ----------
    blocks : list(awsome.termui.block.Block)
        The child blocks, sorted by ascending weight.
    weight : int
        Stacking order among siblings.
    parent : awsome.termui.block.Block
        The containing block, or None for the screen itself.
    alignment : awsome.termui.alignment.AbstractAnchor
        Places the block within the parent.
    dimensions : awsome.termui.alignment.Dimension
        The size of the block.
    tag : str
        Free-form label for telling blocks apart.
    """

    def __init__(
        self, parent, alignment, dimensions, *args, weight=0, tag="default", **kwargs
    ):
        self.blocks = []
        self.weight = weight
        self.alignment = alignment
        self.dimensions = dimensions
        self.tag = tag
        self.parent = None
        if parent is not None:
            parent.add_block(self)
        Commons.UIInstance.dirty = True

    def topleft(self):
        return self.alignment.topleft(self.dimensions, self.parent)

    def bottomright(self):
        ((_, x1), (_, y1)) = self.corners
        return (x1, y1)

    @property
    def corners(self):
        """
        The horizontal and vertical extent of the block as ((x0, x1), (y0, y1)), both ends included.
        """
        (x0, y0) = self.topleft()
        (width, height) = self.dimensions()
        return ((x0, x0 + width - 1), (y0, y0 + height - 1))

    @property
    def width(self):
        ((x0, x1), _) = self.corners
        return x1 - x0 + 1

    @property
    def height(self):
        (_, (y0, y1)) = self.corners
        return y1 - y0 + 1

    @property
    def inner(self):
        """
        The usable extent of the block, in the same form as corners. Decorated subclasses shrink it.
        """
        return self.corners

    @property
    def w_in(self):
        """
        The usable width of the block.
        """
        ((x0, x1), _) = self.inner
        return x1 - x0 + 1

    def before_paint(self):
        """
        Called on every frame before anything is painted. Blocks synchronize their contents here.
        """
        for block in self.blocks:
            block.before_paint()

    def paint(self):
        for block in reversed(self.blocks):
            block.paint()

    def add_block(self, block):
        """
        Attaches a child block, above existing children of the same weight.

        Parameters
        ----------
        block : awsome.termui.block.Block
            The new child.
        """
        position = len(self.blocks)
        for idx, existing in enumerate(self.blocks):
            if existing.weight >= block.weight:
                position = idx
                break
        self.blocks.insert(position, block)
        block.parent = self
        Commons.UIInstance.dirty = True

    def remove_block(self, block):
        """
        Detaches a child block. Unknown blocks are ignored.
        """
        if block in self.blocks:
            self.blocks.remove(block)
            block.parent = None
        Commons.UIInstance.dirty = True

    def input(self, key):
        """
        Offers a keystroke to the children, lowest weight first, until one of them takes it.

        Parameters
        ----------
        key : blessed.keyboard.Keystroke
            The keystroke.

        Returns
        -------
        bool
            Whether the keystroke was handled.
        """
        return any(block.input(key) for block in self.blocks)
