"""
Module for the application state and its transition function.

The state is an immutable value. Every change goes through apply(), which returns the next state along with an optional effect that the
session has to carry out, such as fetching resources in the background.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from .services import Service

DEFAULT_MESSAGE = "Press Space for services, r to refresh, q to quit"


class StatusKind(Enum):
    """
    The kinds of status the resource panel can be in, with the indicator displayed next to the panel title.
    """

    IDLE = ""
    LOADING = "[LOADING...]"
    LOADED = "[READY]"
    ERROR = "[ERROR]"

    @property
    def indicator(self):
        """
        The indicator displayed next to the panel title.
        """
        return self.value


@dataclass(frozen=True)
class Status:
    """
    The loading status of the resource panel. Exactly one kind holds at a time and a status is always replaced as a whole.

    Attributes
    ----------
    kind : awsome.state.StatusKind
        The kind of status.
    message : str
        The error message, for error statuses.
    """

    kind: StatusKind
    message: str = ""

    @classmethod
    def idle(cls):
        return cls(StatusKind.IDLE)

    @classmethod
    def loading(cls):
        return cls(StatusKind.LOADING)

    @classmethod
    def loaded(cls):
        return cls(StatusKind.LOADED)

    @classmethod
    def error(cls, message):
        return cls(StatusKind.ERROR, str(message))

    @property
    def is_loading(self):
        return self.kind is StatusKind.LOADING

    @property
    def is_error(self):
        return self.kind is StatusKind.ERROR


@dataclass(frozen=True)
class AppState:
    """
    The complete state of the application.

    Attributes
    ----------
    service : awsome.services.Service
        The service whose resources are listed.
    status : awsome.state.Status
        The loading status of the resource list.
    rows : tuple(tuple(str))
        The listed resources, one row of display fields each.
    selected : int
        Cursor into rows. None if and only if rows is empty.
    favorites : frozenset(awsome.services.Service)
        Services marked as favorite. Only kept for the lifetime of the process.
    popup_open : bool
        Whether the service selector popup is open. While it is, input is routed to the popup.
    popup_index : int
        The highlighted entry of the service selector popup.
    generation : int
        Incremented on every refresh and service switch. Results of fetches started in an older generation are discarded.
    message : str
        The status line message.
    """

    service: Service = Service.EC2
    status: Status = field(default_factory=Status.idle)
    rows: Tuple[Tuple[str, ...], ...] = ()
    selected: Optional[int] = None
    favorites: FrozenSet[Service] = frozenset()
    popup_open: bool = False
    popup_index: int = 0
    generation: int = 0
    message: str = DEFAULT_MESSAGE

    @property
    def highlighted_service(self):
        """
        The service highlighted in the service selector popup.
        """
        return Service.ordered()[self.popup_index]

    @property
    def selected_row(self):
        """
        The row under the cursor, or None if there are no rows.
        """
        if self.selected is None:
            return None
        return self.rows[self.selected]

    def favorite_services(self):
        """
        Returns the favorite services in display order.

        Returns
        -------
        list(awsome.services.Service)
            The favorite services.
        """
        return [service for service in Service.ordered() if service in self.favorites]


@dataclass(frozen=True)
class NavigateUp:
    pass


@dataclass(frozen=True)
class NavigateDown:
    pass


@dataclass(frozen=True)
class OpenPopup:
    pass


@dataclass(frozen=True)
class ClosePopup:
    pass


@dataclass(frozen=True)
class ToggleFavorite:
    service: Service


@dataclass(frozen=True)
class SelectService:
    service: Service


@dataclass(frozen=True)
class Refresh:
    pass


@dataclass(frozen=True)
class ShowSelection:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class ProviderResult:
    """
    The outcome of a fetch, tagged with the service and generation it was requested for.

    Attributes
    ----------
    service : awsome.services.Service
        The service the fetch was requested for.
    generation : int
        The generation of the state when the fetch was requested.
    rows : tuple(tuple(str))
        The fetched rows, if the fetch succeeded.
    error : str
        The error message, if the fetch failed.
    """

    service: Service
    generation: int
    rows: Tuple[Tuple[str, ...], ...] = ()
    error: Optional[str] = None

    @property
    def failed(self):
        return self.error is not None


@dataclass(frozen=True)
class Fetch:
    """
    Effect requesting that the resources of a service are fetched in the background.
    """

    service: Service
    generation: int


@dataclass(frozen=True)
class Exit:
    """
    Effect requesting that the main loop terminates after the current frame.
    """


def _clamp_move(index, length, delta):
    if length == 0:
        return None
    if index is None:
        return 0
    return min(max(index + delta, 0), length - 1)


def _navigate(state, delta):
    if state.popup_open:
        index = _clamp_move(state.popup_index, len(Service.ordered()), delta)
        return replace(state, popup_index=index), None
    return replace(state, selected=_clamp_move(state.selected, len(state.rows), delta)), None


def _navigate_up(state, event):
    return _navigate(state, -1)


def _navigate_down(state, event):
    return _navigate(state, 1)


def _open_popup(state, event):
    return (
        replace(
            state,
            popup_open=True,
            popup_index=Service.ordered().index(state.service),
        ),
        None,
    )


def _close_popup(state, event):
    return replace(state, popup_open=False), None


def _toggle_favorite(state, event):
    return replace(state, favorites=state.favorites ^ {event.service}), None


def _select_service(state, event):
    return (
        replace(
            state,
            service=event.service,
            status=Status.idle(),
            rows=(),
            selected=None,
            popup_open=False,
            generation=state.generation + 1,
            message=f"Switched to {event.service.display_name}. Press r to refresh.",
        ),
        None,
    )


def _refresh(state, event):
    generation = state.generation + 1
    return (
        replace(
            state,
            status=Status.loading(),
            generation=generation,
            message=f"Loading {state.service.display_name} resources...",
        ),
        Fetch(state.service, generation),
    )


def _provider_result(state, event):
    if (
        event.service is not state.service
        or event.generation != state.generation
        or not state.status.is_loading
    ):
        return state, None
    display_name = state.service.display_name
    if event.failed:
        return (
            replace(
                state,
                status=Status.error(event.error),
                message=f"Error loading {display_name}: {event.error}",
            ),
            None,
        )
    rows = tuple(tuple(row) for row in event.rows)
    if rows:
        message = f"Loaded {len(rows)} resources ({display_name})"
    else:
        message = f"No resources found for {display_name}"
    return (
        replace(
            state,
            status=Status.loaded(),
            rows=rows,
            selected=0 if rows else None,
            message=message,
        ),
        None,
    )


def _show_selection(state, event):
    row = state.selected_row
    if row is None:
        return state, None
    return replace(state, message=f"Selected: {' '.join(row)}"), None


def _quit(state, event):
    return state, Exit()


_HANDLERS = {
    NavigateUp: _navigate_up,
    NavigateDown: _navigate_down,
    OpenPopup: _open_popup,
    ClosePopup: _close_popup,
    ToggleFavorite: _toggle_favorite,
    SelectService: _select_service,
    Refresh: _refresh,
    ProviderResult: _provider_result,
    ShowSelection: _show_selection,
    Quit: _quit,
}


def apply(state, event):
    """
    Computes the state following an event.

    Parameters
    ----------
    state : awsome.state.AppState
        The current state. Never modified.
    event : object
        One of the event classes defined in this module.

    Returns
    -------
    tuple(awsome.state.AppState, object)
        The next state, and either None or an effect (Fetch or Exit) that the caller must carry out.

    Raises
    ------
    TypeError
        If the event is not a known event.
    """
    try:
        handler = _HANDLERS[type(event)]
    except KeyError:
        raise TypeError(f"Unknown event {event!r}") from None
    return handler(state, event)
