"""
Module for the controls which display the application state.

Controls read the state from the session before each frame and never modify it. Keystrokes received by the controls are handed back to the
session.
"""
from .common import Common, default_border
from .keymap import POPUP_KEYS, hotkey_help
from .services import Service
from .state import StatusKind
from .termui.common import Commons, fit
from .termui.control import Border, Control
from .termui.list_control import ListControl

SPINNER = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
"""
Frames of the loading spinner displayed next to the resource panel title.
"""

POPUP_HELP = [
    (keys, f": {tooltip}")
    for keys, tooltip in hotkey_help(
        POPUP_KEYS, ["KEY_UP", "KEY_DOWN", "KEY_ENTER", "f", "KEY_ESCAPE"]
    )
]
"""
The key help line of the service selector, as (keys, text) pairs.
"""


def placeholder_lines(state):
    """
    Generates the text displayed in the resource panel when there are no rows to list.

    Parameters
    ----------
    state : awsome.state.AppState
        The displayed state.

    Returns
    -------
    list(str)
        The placeholder lines.
    """
    service = state.service
    if state.status.is_loading:
        return ["Loading..."]
    if state.status.is_error:
        return [
            f"Error loading {service.display_name}",
            f"Details: {state.status.message}",
            "",
            "Possible causes:",
            "- Invalid AWS credentials",
            f"- Insufficient IAM permissions (requires {service.permission})",
            "- Network connectivity issues",
        ]
    if state.status.kind is StatusKind.LOADED:
        return [f"No {service.display_name} found"]
    return [f"Press 'r' to load {service.display_name} resources"]


class HeaderBar(Control):
    """
    The header at the top of the screen. Lists the favorite services, highlighting the active one.

    Attributes
    ----------
    session : awsome.session.Session
        The session whose state is displayed.
    """

    def __init__(self, *args, session=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session

    def paint(self):
        super().paint()
        ((x0, x1), (y0, _)) = self.inner
        ui = Commons.UIInstance
        state = self.session.state
        spans = [
            ("AWSOME ", Common.color("header_title"), True),
            ("| ", Common.color("generic"), False),
        ]
        favorites = state.favorite_services()
        if not favorites:
            spans.append(
                (
                    "No favorites - Press Space to select service",
                    Common.color("header_hint"),
                    False,
                )
            )
        else:
            for idx, service in enumerate(favorites):
                active = service is state.service
                spans.append(
                    (
                        f" {service.short_name} ",
                        Common.color("header_active" if active else "header_favorite"),
                        active,
                    )
                )
                if idx < len(favorites) - 1:
                    spans.append(("• ", Common.color("generic"), False))
            spans.append((" [Space: More]", Common.color("header_hint"), False))
        x = x0
        for text, color, bold in spans:
            if x > x1:
                break
            ui.print(
                text,
                xy=(x, y0),
                color=color,
                bounds=((x0, x1 + 1), (y0, y0 + 1)),
                bold=bold,
            )
            x += len(text) + 2


class ResourcePanel(ListControl):
    """
    The main panel, listing the resources of the active service.

    The border, the title indicator and the row colors follow the loading status of the state.

    Attributes
    ----------
    session : awsome.session.Session
        The session whose state is displayed.
    synced : tuple(awsome.state.AppState, int)
        The state and spinner frame the control was last updated for.
    """

    def __init__(self, *args, session=None, **kwargs):
        super().__init__(
            *args,
            color=Common.color("generic"),
            selection_color=Common.color("selection"),
            title_color=Common.color("column_title"),
            placeholder_color=Common.color("generic"),
            **kwargs,
        )
        self.session = session
        self.synced = None

    def before_paint(self):
        super().before_paint()
        state = self.session.state
        frame = self.session.spinner
        if (
            self.synced is not None
            and self.synced[0] is state
            and self.synced[1] == frame
        ):
            return
        self.synced = (state, frame)
        self.sync(state, frame)

    def sync(self, state, frame=0):
        """
        Updates the control to display a state.

        Parameters
        ----------
        state : awsome.state.AppState
            The state to display.
        frame : int
            The frame of the loading spinner.
        """
        self.set_columns(state.service.columns)
        self.set_rows(state.rows, state.selected)
        status_color = Common.color(f"status_{state.status.kind.name.lower()}")
        info = state.status.kind.indicator
        if state.status.is_loading:
            info = f"{info} {SPINNER[frame % len(SPINNER)]}"
        self.border = Border(
            Common.border("resource_list", "default"),
            status_color,
            state.service.display_name,
            status_color,
            info if info else None,
            status_color,
        )
        if state.status.is_error:
            self.color = Common.color("error_row")
            self.selection_color = Common.color("error_selection")
            self.placeholder_color = Common.color("error_row")
        else:
            self.color = Common.color("generic")
            self.selection_color = Common.color("selection")
            self.placeholder_color = Common.color("generic")
        self.placeholder = placeholder_lines(state)

    def input(self, key):
        return self.session.handle_key(key)


class StatusBar(Control):
    """
    The footer at the bottom of the screen. Displays the status message, colored by the loading status.
    """

    def __init__(self, *args, session=None, **kwargs):
        kwargs.setdefault("border", default_border("status", "Status"))
        super().__init__(*args, **kwargs)
        self.session = session

    def paint(self):
        super().paint()
        ((x0, x1), (y0, _)) = self.inner
        state = self.session.state
        Commons.UIInstance.print(
            fit(state.message, x1 - x0 + 1),
            xy=(x0, y0),
            color=Common.color(f"message_{state.status.kind.name.lower()}"),
        )


class ServicePopup(Control):
    """
    The modal service selector, centered over the rest of the screen. While open, it consumes every keystroke.

    Attributes
    ----------
    session : awsome.session.Session
        The session whose state is displayed.
    """

    def __init__(self, *args, session=None, **kwargs):
        kwargs.setdefault(
            "border",
            Border(
                Common.border("modal", "default"),
                Common.color("popup_border"),
                "Select Service",
                Common.color("popup_border"),
            ),
        )
        super().__init__(*args, **kwargs)
        self.session = session

    def input(self, key):
        self.session.handle_key(key)
        return True

    def paint(self):
        self.clear_area()
        super().paint()
        ((x0, x1), (y0, y1)) = self.inner
        width = x1 - x0 + 1
        ui = Commons.UIInstance
        state = self.session.state
        # The last inner row is reserved for the help line.
        for idx, service in enumerate(Service.ordered()):
            y = y0 + idx
            if y >= y1:
                break
            favorite = service in state.favorites
            marker = "★ " if favorite else "  "
            if idx == state.popup_index:
                color = Common.color("popup_selection")
            elif favorite:
                color = Common.color("popup_favorite")
            else:
                color = Common.color("popup_generic")
            ui.print(
                fit(f"{marker}{service.display_name}", width),
                xy=(x0, y),
                color=color,
                bold=idx == state.popup_index,
            )

        help_width = sum(len(key) + len(text) + 2 for key, text in POPUP_HELP) - 2
        x = x0 + max(int((width - help_width) / 2), 0)
        bounds = ((x0, x1 + 1), (y1, y1 + 1))
        for key, text in POPUP_HELP:
            ui.print(key, xy=(x, y1), color=Common.color("popup_help_key"), bounds=bounds)
            x += len(key)
            ui.print(text, xy=(x, y1), color=Common.color("popup_help"), bounds=bounds)
            x += len(text) + 2
