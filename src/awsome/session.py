"""
Module for the session, which owns the application state and drives the UI.
"""
import sys
import threading
import time

from .aws import AWS
from .common import Common
from .errors import ProviderError
from .keymap import translate
from .provider import ResourceProvider
from .services import Service
from .state import AppState, Exit, Fetch, ProviderResult, apply
from .termui.alignment import BottomLeftAnchor, CenterAnchor, Dimension, TopLeftAnchor
from .termui.control import Border
from .termui.ui import UI
from .views import HeaderBar, ResourcePanel, ServicePopup, StatusBar

SPINNER_INTERVAL = 0.1
"""
How often the loading spinner advances, in seconds.
"""


class Session:
    """
    The session is the only owner of the application state. Every change to the state goes through dispatch().

    Fetches run on daemon threads. A finished fetch posts its result into the inbox, which the session drains on the UI thread in its
    ticker, so fetch threads never touch the state directly.

    Attributes
    ----------
    ui : awsome.termui.ui.UI
        The UI singleton.
    provider : awsome.provider.ResourceProvider
        The provider used to fetch resources.
    state : awsome.state.AppState
        The current state.
    mutex : threading.Lock
        Controls access to the inbox.
    inbox : list(awsome.state.ProviderResult)
        Results posted by fetch threads, waiting to be applied.
    fetch_thread : threading.Thread
        The most recently started fetch thread.
    spinner : int
        The current frame of the loading spinner.
    last_spin : float
        Timestamp of the last spinner frame change.
    header : awsome.views.HeaderBar
        The header control.
    resource_main : awsome.views.ResourcePanel
        The resource list control.
    message_display : awsome.views.StatusBar
        The footer control.
    popup : awsome.views.ServicePopup
        The service selector, if open.
    """

    def __init__(self, config, provider=None, ui=None):
        """
        Initializes a Session object.

        Parameters
        ----------
        config : awsome.config.config.Config
            The loaded configuration.
        provider : awsome.provider.ResourceProvider, optional
            The resource provider. If omitted, one is created for the configured region.
        ui : awsome.termui.ui.UI, optional
            The UI to drive. If omitted, a new UI is created for the current terminal.
        """
        self.ui = UI() if ui is None else ui
        self.provider = (
            ResourceProvider(AWS(config.region)) if provider is None else provider
        )
        self.state = AppState(favorites=self.default_favorites(config))
        self.mutex = threading.Lock()
        self.inbox = []
        self.fetch_thread = None
        self.spinner = 0
        self.last_spin = time.time()

        self.header = HeaderBar(
            self.ui.top_block,
            TopLeftAnchor(0, 0),
            Dimension("100%", 3),
            session=self,
            weight=-1,
            border=Border(Common.border("default"), Common.color("generic_border")),
        )
        self.resource_main = ResourcePanel(
            self.ui.top_block,
            TopLeftAnchor(0, 3),
            Dimension("100%", "100%-6"),
            session=self,
        )
        self.message_display = StatusBar(
            self.ui.top_block,
            BottomLeftAnchor(0, 0),
            Dimension("100%", 3),
            session=self,
            weight=-1,
        )
        self.popup = None
        self.ui.tickers.append(self.tick)

    @staticmethod
    def default_favorites(config):
        """
        Resolves the favorite services configured to be marked on startup.

        Parameters
        ----------
        config : awsome.config.config.Config
            The loaded configuration.

        Returns
        -------
        frozenset(awsome.services.Service)
            The favorite services. Unknown names are logged and skipped.
        """
        favorites = set()
        names = config["default_favorites"] if "default_favorites" in config else []
        for name in names or []:
            try:
                favorites.add(Service.from_short_name(name))
            except KeyError:
                Common.error(
                    f'Unknown service "{name}" in default_favorites',
                    "Configuration Error",
                    "Core",
                    subcategory="Favorites",
                )
        return frozenset(favorites)

    def handle_key(self, key):
        """
        Translates a keystroke into an event and dispatches it.

        Parameters
        ----------
        key : blessed.keyboard.Keystroke
            The raw inkey() from the keyboard event.

        Returns
        -------
        bool
            True if the key is bound in the current state, False otherwise.
        """
        event = translate(self.state, key)
        if event is None:
            return False
        self.dispatch(event)
        return True

    def dispatch(self, event):
        """
        Applies an event to the state and carries out the resulting effect.

        Parameters
        ----------
        event : object
            One of the events defined in awsome.state.
        """
        self.state, effect = apply(self.state, event)
        self.ui.dirty = True
        self.sync_popup()
        if isinstance(effect, Fetch):
            self.asynch(effect)
        elif isinstance(effect, Exit):
            self.ui.set_exit()

    def sync_popup(self):
        """
        Opens or closes the service selector control to match the state.
        """
        if self.state.popup_open and self.popup is None:
            self.popup = ServicePopup(
                self.ui.top_block,
                CenterAnchor(0, 0),
                Dimension("60%|58", "60%|8"),
                session=self,
                weight=-10,
            )
        elif not self.state.popup_open and self.popup is not None:
            self.ui.top_block.remove_block(self.popup)
            self.popup = None

    def asynch(self, effect):
        """
        Starts a fetch thread for a Fetch effect.

        Parameters
        ----------
        effect : awsome.state.Fetch
            The fetch to carry out.
        """
        self.fetch_thread = threading.Thread(
            target=self.fetch, args=(effect,), daemon=True
        )
        self.fetch_thread.start()

    def fetch(self, effect):
        """
        Fetches the resources requested by a Fetch effect and posts the tagged result into the inbox. Runs on a fetch thread.

        The result is posted before the outcome is logged, so a failing log never leaves the state loading.

        Parameters
        ----------
        effect : awsome.state.Fetch
            The fetch to carry out.
        """
        service = effect.service
        failure = None
        try:
            rows = self.provider.fetch(service)
        except Exception as error:  # pylint: disable=broad-except # Any failure ends the refresh as an error result
            failure = error
            message = (
                str(error)
                if isinstance(error, ProviderError)
                else f"{type(error).__name__}: {error}"
            )
            result = ProviderResult(service, effect.generation, error=message)
        else:
            result = ProviderResult(service, effect.generation, rows=tuple(rows))
        with self.mutex:
            self.inbox.append(result)
        self.log_fetch(service, result, failure)

    @staticmethod
    def log_fetch(service, result, failure):
        """
        Records the outcome of a fetch in the log. Errors of the log itself are written to stderr.

        Parameters
        ----------
        service : awsome.services.Service
            The fetched service.
        result : awsome.state.ProviderResult
            The posted result.
        failure : Exception
            The error raised by the provider, or None.
        """
        try:
            if failure is None:
                Common.success(
                    f"Loaded {len(result.rows)} resources",
                    f"{service.display_name} loaded",
                    "AWS",
                    subcategory=service.short_name,
                )
            elif isinstance(failure, ProviderError):
                Common.error(
                    str(failure),
                    failure.kind,
                    "AWS",
                    subcategory=service.short_name,
                    code=failure.code,
                )
            else:
                Common.log_exception(failure, "AWS", subcategory=service.short_name)
        except Exception as error:  # pylint: disable=broad-except # Logging runs after the result is posted
            print(
                f"Failed to log {service.display_name} fetch: {type(error).__name__}: {error}",
                file=sys.stderr,
            )

    def tick(self):
        """
        Ticker function. Called on every main loop cycle. Applies the results posted by fetch threads and advances the loading spinner.
        """
        with self.mutex:
            pending = self.inbox
            self.inbox = []
        for result in pending:
            self.dispatch(result)
        now = time.time()
        if self.state.status.is_loading and now - self.last_spin > SPINNER_INTERVAL:
            self.last_spin = now
            self.spinner += 1
            self.ui.dirty = True
