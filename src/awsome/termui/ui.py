"""
The UI singleton and its main loop.
"""
import signal
import threading
import time

from blessed import Terminal

from .alignment import Dimension, TopLeftAnchor
from .block import Block
from .common import Commons
from .screen import Screen

FRAMERATE = 0.02
"""
Length of a main loop cycle in seconds.
"""

SIZE_REFRESH_INTERVAL = 1
"""
Minimum time between two terminal size queries, in seconds.
"""


class UI:
    """
    Owns the terminal, the screen buffer and the block tree, and runs the main loop.

    Keystrokes are read on a separate thread and queued in input_buffer. Everything else, including painting and input handling, happens
    on the thread running main().

    Attributes
    ----------
    term : blessed.Terminal
        The terminal.
    top_block : awsome.termui.block.Block
        The root of the block tree, spanning the whole screen.
    buf : awsome.termui.screen.Screen
        The screen buffer.
    tickers : list(callable)
        Called once per main loop cycle, before painting.
    mutex : threading.Lock
        Guards input_buffer.
    input_buffer : list(blessed.keyboard.Keystroke)
        Keystrokes waiting to be handled.
    dirty : bool
        Whether the screen must be repainted.
    exit : bool
        Set to leave the main loop after the current cycle.
    last_paint : float
        Time of the last repaint.
    last_size_refresh : float
        Time of the last terminal size query.
    """

    def __init__(self, term=None):
        """
        Initializes the UI singleton.

        Parameters
        ----------
        term : blessed.Terminal, optional
            The terminal to drive. Defaults to a new blessed Terminal.

        Raises
        ------
        RuntimeError
            If a UI already exists.
        """
        if Commons.UIInstance is not None:
            raise RuntimeError("UI is a singleton.")
        Commons.UIInstance = self
        self.term = Terminal() if term is None else term
        self._w = self.term.width
        self._h = self.term.height
        self.last_paint = time.time()
        self.last_size_refresh = self.last_paint
        self.dirty = False
        self.exit = False
        self.tickers = []
        self.mutex = threading.Lock()
        self.input_buffer = []
        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGINT, self.set_exit)
        self.top_block = Block(
            None, TopLeftAnchor(0, 0), Dimension("100%", "100%"), tag="top"
        )
        self.buf = Screen(self)

    def print(self, out, xy=None, color=None, bounds=None, bold=False):
        """
        Writes text into the screen buffer, cutting off whatever falls outside the bounds.

        Parameters
        ----------
        out : str
            The text.
        xy : tuple(int, int), optional
            The cell of the first character. Defaults to the top left corner of the bounds.
        color : awsome.termui.color.Color, optional
            The color of the text.
        bounds : tuple(tuple(int, int), tuple(int, int)), optional
            The writable area as ((x0, x1), (y0, y1)), upper ends excluded. Defaults to the whole screen.
        bold : bool
            Whether the text is bold.
        """
        if color is not None and not callable(color):
            raise ValueError("Color must be callable or None.")
        ((bx0, bx1), (by0, by1)) = (
            ((0, self.width), (0, self.height)) if bounds is None else bounds
        )
        (x, y) = (bx0, by0) if xy is None else xy
        self.dirty = True
        if not by0 <= y < min(by1, len(self.buf.buf)):
            return
        row = self.buf[y]
        right = min(bx1, len(row))
        for offset, char in enumerate(out):
            col = x + offset
            if col >= right:
                break
            if col < bx0:
                continue
            cell = row[col]
            cell.value = char
            cell.color = color
            cell.bold = bold
            cell.dirty = True

    def refresh_size(self):
        """
        Queries the terminal size, at most once per SIZE_REFRESH_INTERVAL.
        """
        if self.last_paint - self.last_size_refresh > SIZE_REFRESH_INTERVAL:
            self.last_size_refresh = self.last_paint
            self._w = self.term.width
            self._h = self.term.height

    @property
    def width(self):
        return self.dim[0]

    @property
    def height(self):
        return self.dim[1]

    @property
    def dim(self):
        """
        The (width, height) of the terminal, as of the last size query.
        """
        self.refresh_size()
        return (self._w, self._h)

    def set_exit(self, *args, **kwargs):
        """
        Requests the main loop to stop. Usable as a signal handler.
        """
        self.exit = True

    def before_paint(self):
        self.top_block.before_paint()

    def render(self):
        """
        Repaints the block tree into the screen buffer without writing to the terminal.
        """
        self.buf.clear()
        self.top_block.paint()

    def paint(self):
        """
        Repaints the block tree and writes the screen buffer to the terminal.
        """
        self.render()
        with self.term.location(0, 0):
            self.buf.output()
        self.last_paint = time.time()
        self.dirty = False

    def buffer_input(self):
        """
        Reads keystrokes into input_buffer until the main loop stops. Runs on its own thread.
        """
        while not self.exit:
            key = self.term.inkey(timeout=FRAMERATE / 2.0)
            if key:
                with self.mutex:
                    self.input_buffer.append(key)

    def process_input_buffer(self, start_time):
        """
        Hands queued keystrokes to the block tree. Keystrokes left over when the cycle runs out of time wait for the next cycle.

        Parameters
        ----------
        start_time : float
            When the current main loop cycle started.

        Raises
        ------
        KeyboardInterrupt
            If Ctrl-C was pressed.
        """
        with self.mutex:
            (pending, self.input_buffer) = (self.input_buffer, [])
        while pending:
            key = pending.pop(0)
            if key == "\x03":
                raise KeyboardInterrupt
            self.top_block.input(key)
            self.dirty = True
            if self.exit or time.time() - start_time > FRAMERATE / 2.0:
                break
        if pending:
            with self.mutex:
                self.input_buffer = pending + self.input_buffer

    def main(self):
        """
        Runs the main loop in the alternate screen with raw keyboard input, until exit is set or Ctrl-C is pressed.

        Each cycle handles queued input, runs the tickers, then repaints if anything changed.
        """
        try:
            with self.term.fullscreen(), self.term.hidden_cursor(), self.term.raw():
                threading.Thread(target=self.buffer_input, daemon=True).start()
                while not self.exit:
                    start_time = time.time()
                    self.process_input_buffer(start_time)
                    for ticker in self.tickers:
                        ticker()
                    self.before_paint()
                    if self.dirty or time.time() - self.last_paint > 3:
                        self.paint()
                    delay = FRAMERATE - (time.time() - start_time)
                    if delay > 0:
                        time.sleep(delay)
        except KeyboardInterrupt:
            pass
