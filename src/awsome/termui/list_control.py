"""
This module defines list controls for displaying data in tables.
"""
from .color import ColorBlackOnGold, ColorBlackOnOrange, ColorGold
from .common import Commons, fit
from .control import Control


class ListControl(Control):
    """
    A ListControl displays any amount of rows, where each row is a sequence of column values. It tracks a selected row and scrolls
    so that the selected row is always visible. The rows themselves are owned elsewhere and pushed into the control before painting.

    Attributes
    ----------
    rows : list(tuple(str))
        The rows to display.
    placeholder : list(str)
        Lines displayed instead of the column headings and rows when there are no rows to display.
    color : awsome.termui.color.Color
        The color of unselected rows.
    selection_color : awsome.termui.color.Color
        The color of the selected row.
    title_color : awsome.termui.color.Color
        The color of the column headings.
    placeholder_color : awsome.termui.color.Color
        The color of the placeholder lines.
    selected : int
        The index of the selected row, or None if nothing is selected.
    column_titles : dict
        A mapping of column titles to the size of the column. By default, this contains the initial size of the column. Space will be given to
        and taken away from columns roughly equally based on window size.
    column_order : list
        The order in which columns should be displayed.
    calculated : int
        Cached value for the block width for which column sizes have been calculated.
    top : int
        How many rows should be skipped before displaying (how far we're scrolled down).
    """

    def __init__(
        self,
        *args,
        color=ColorGold,
        selection_color=ColorBlackOnGold,
        title_color=ColorBlackOnOrange,
        placeholder_color=None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.rows = []
        self.placeholder = []
        self.color = color
        self.selection_color = selection_color
        self.title_color = title_color
        self.placeholder_color = color if placeholder_color is None else placeholder_color
        self.selected = None
        self.column_titles = {}
        self.column_order = []
        self.calculated = 0
        self.top = 0

    def set_columns(self, columns):
        """
        Replaces the columns of the control.

        Parameters
        ----------
        columns : list(tuple(str, int))
            A list of column titles with their initial sizes.
        """
        titles = [title for title, _ in columns]
        if titles == self.column_order:
            return
        self.column_order = titles
        self.column_titles = dict(columns)
        self.calculated = 0
        self.top = 0
        Commons.UIInstance.dirty = True

    def set_rows(self, rows, selected):
        """
        Replaces the displayed rows and the selection cursor.

        Parameters
        ----------
        rows : sequence(tuple(str))
            The rows to display.
        selected : int
            The index of the selected row, or None.
        """
        self.rows = list(rows)
        self.selected = selected
        if not self.rows:
            self.top = 0
        Commons.UIInstance.dirty = True

    @property
    def visible_rows(self):
        """
        Read-only property for the number of rows that can be displayed at once below the column headings.
        """
        ((_, _), (y0, y1)) = self.inner
        return max(y1 - y0, 0)

    def scroll_to_selection(self):
        """
        Adjusts the scroll position so that the selected row is visible.
        """
        if self.selected is None:
            self.top = 0
            return
        rows = self.visible_rows
        if self.selected < self.top:
            self.top = self.selected
        elif rows > 0 and self.selected >= self.top + rows:
            self.top = max(0, self.selected - rows + 1)

    def size_columns(self):
        """
        Distributes the inner width of the control between the columns, giving spare space to the first column.
        """
        win = self.w_in
        if win == self.calculated or not self.column_order:
            return
        vals = sum(self.column_titles.values())
        if vals > win:
            ratio = float(vals) / float(win)
            tot = 0
            for k in self.column_order:
                self.column_titles[k] = int(float(self.column_titles[k]) / ratio)
                tot += self.column_titles[k]
            self.column_titles[self.column_order[0]] += win - tot
        elif vals < win:
            diff = win - vals
            part = int(diff / len(self.column_titles))
            rem = diff - (part * len(self.column_titles))
            for k in self.column_order:
                self.column_titles[k] += part
            self.column_titles[self.column_order[0]] += rem
        self.calculated = win

    def paint(self):
        self.size_columns()
        super().paint()
        ((x0, x1), (y0, y1)) = self.inner
        ui = Commons.UIInstance
        if not self.rows:
            for offset, line in enumerate(self.placeholder):
                if y0 + offset > y1:
                    break
                ui.print(
                    fit(line, x1 - x0 + 1), xy=(x0, y0 + offset), color=self.placeholder_color
                )
            return
        self.scroll_to_selection()
        x = x0
        for col in self.column_order:
            ui.print(
                fit(col.upper(), self.column_titles[col]),
                xy=(x, y0),
                color=self.title_color,
            )
            x += self.column_titles[col]
        y = y0 + 1
        for i in range(self.top, min(len(self.rows), self.top + self.visible_rows)):
            row = self.rows[i]
            x = x0
            color = self.selection_color if i == self.selected else self.color
            for idx, col in enumerate(self.column_order):
                text = row[idx] if idx < len(row) else ""
                ui.print(fit(text, self.column_titles[col]), xy=(x, y), color=color)
                x += self.column_titles[col]
            y += 1
