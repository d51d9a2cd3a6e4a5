"""
Process-wide state of awsome: the configuration, the session and the persistent log.
"""
import json
import sys
import threading
import traceback
from datetime import datetime, timezone

import yaml

from .config.config import Config
from .termui.color import Color, Palette8Bit
from .termui.control import Border, BorderStyle


def datetime_hack(x):
    """
    ``default`` hook for json.dumps, which cannot serialize datetimes on its own.

    Parameters
    ----------
    x : object
        The value json.dumps gave up on.

    Returns
    -------
    str
        The ISO 8601 form of the datetime.

    Raises
    ------
    TypeError
        If x is not a datetime.
    """
    if isinstance(x, datetime):
        return x.isoformat()
    raise TypeError(f"Object of type {type(x).__name__} is not JSON serializable")


class Common:
    """
    Namespace holding what the whole application shares.

    Attributes
    ----------
    Configuration : awsome.config.config.Config
        The loaded configuration. None until initialize() runs.
    Session : awsome.session.Session
        The running session.
    _logholder : awsome.common.LogHolder
        The persistent log.
    initialized : bool
        Whether initialize() has run.
    """

    Configuration: Config = None
    Session = None
    _logholder = None
    initialized = False

    @classmethod
    def initialize(cls, path=None):
        """
        Loads the configuration and the log. Does nothing when called again.

        Parameters
        ----------
        path : str, optional
            The configuration directory. Defaults to ~/.config/awsome.
        """
        if cls.initialized:
            return
        cls.Configuration = Config(path)
        cls.Configuration.initialize()
        cls._logholder = LogHolder(cls.Configuration)
        cls.initialized = True

    @classmethod
    def _scheme_entry(cls, section, name, fallback):
        if cls.Configuration is None:
            raise ValueError("Configuration is not initialized.")
        entries = cls.Configuration.scheme[section]
        if name in entries:
            return entries[name]
        if fallback is None:
            raise KeyError(f'Undefined {section[:-1]} "{name}"')
        return cls._scheme_entry(section, fallback, None)

    @classmethod
    def color(cls, name, fallback=None):
        """
        Looks up a color of the style scheme.

        Parameters
        ----------
        name : str
            The color name.
        fallback : str, optional
            Name of the color used when the scheme does not define name.

        Returns
        -------
        awsome.termui.color.Color
            The color.

        Raises
        ------
        KeyError
            If neither color is defined.
        """
        entry = cls._scheme_entry("colors", name, fallback)
        return Color(Palette8Bit(), entry["foreground"], background=entry["background"])

    @classmethod
    def border(cls, name, fallback=None):
        """
        Looks up a border style of the style scheme. Works like color().
        """
        entry = cls._scheme_entry("borders", name, fallback)
        return BorderStyle(
            [entry[key] for key in ("horizontal", "vertical", "TL", "TR", "BL", "BR")]
        )

    @classmethod
    def main(cls):
        """
        Hands control to the UI main loop of the session.
        """
        cls.Session.ui.main()

    @classmethod
    def log(
        cls,
        message,
        summary,
        category,
        message_type,
        subcategory=None,
        resource=None,
        **kwargs,
    ):
        """
        Records an event in the persistent log. Before initialize() runs, the event goes to stderr instead.

        Parameters
        ----------
        message : str
            The full description of the event.
        summary : str
            A few words describing the event.
        category : str
            The part of the application the event belongs to, such as "AWS" or "Core".
        message_type : str
            One of "success", "info" or "error".
        subcategory : str, optional
            Narrows down the category, such as the service being listed.
        resource : str, optional
            The identifier of the resource involved.
        **kwargs : dict
            Extra context, stored as JSON.
        """
        if cls._logholder is None:
            print(f"[{message_type}] {summary}: {message}", file=sys.stderr)
            return
        cls._logholder.log(
            message,
            summary,
            category,
            message_type,
            subcategory=subcategory,
            resource=resource,
            **kwargs,
        )

    @classmethod
    def info(cls, message, summary, category, **kwargs):
        cls.log(message, summary, category, "info", **kwargs)

    @classmethod
    def success(cls, message, summary, category, **kwargs):
        cls.log(message, summary, category, "success", **kwargs)

    @classmethod
    def error(cls, message, summary, category, **kwargs):
        cls.log(message, summary, category, "error", **kwargs)

    @classmethod
    def log_exception(cls, exception, category, **kwargs):
        """
        Logs an exception as an error along with its traceback. The exception type becomes the summary.
        """
        trace = "".join(traceback.format_tb(exception.__traceback__))
        cls.error(
            f"{exception}\nTraceback:\n{trace}",
            type(exception).__name__,
            category,
            **kwargs,
        )


def default_border(prefix, title, title_info=None):
    """
    Builds the border of a control from the scheme entries named after it.

    For a prefix of "status", the style comes from the "status" border and the colors from "status_border", "status_border_title" and
    "status_border_title_info". Undefined entries fall back to the generic ones.

    Parameters
    ----------
    prefix : str
        The scheme prefix of the control.
    title : str
        The border title.
    title_info : str, optional
        Text following the title.

    Returns
    -------
    awsome.termui.control.Border
        The border.
    """
    return Border(
        Common.border(prefix, "default"),
        Common.color(f"{prefix}_border", "generic_border"),
        title,
        Common.color(f"{prefix}_border_title", "border_title"),
        title_info,
        Common.color(f"{prefix}_border_title_info", "border_title_info"),
    )


class LogHolder:
    """
    The persistent log, kept as log.yaml in the configuration directory with the newest entry first.

    Whenever the log is written, entries older than log_retention.max_age seconds and entries past the first log_retention.max_lines are
    dropped. A non-positive limit is disabled.

    Attributes
    ----------
    config : awsome.config.config.Config
        Holds the retention limits.
    path : pathlib.Path
        The log file.
    raw_entries : list(dict)
        The entries, newest first.
    mutex : threading.Lock
        Serializes writers. Fetch threads log too.
    """

    def __init__(self, config):
        self.config = config
        self.path = config.path / "log.yaml"
        self.mutex = threading.Lock()
        self.raw_entries = []
        if self.path.exists():
            with self.path.open("r", encoding="utf-8") as file:
                self.raw_entries = yaml.safe_load(file.read()) or []

    def expunge(self):
        """
        Drops the entries which exceed the retention limits.
        """
        retention = self.config["log_retention"] if "log_retention" in self.config else {}
        keep = len(self.raw_entries)
        max_lines = retention.get("max_lines", -1)
        max_age = retention.get("max_age", -1)
        if max_lines > 0:
            keep = min(keep, max_lines)
        if max_age > 0:
            oldest = datetime.now(timezone.utc).timestamp() - max_age
            for idx, entry in enumerate(self.raw_entries[:keep]):
                if entry["timestamp"] < oldest:
                    keep = idx
                    break
        del self.raw_entries[keep:]

    def log(
        self,
        message,
        summary,
        category,
        message_type,
        subcategory=None,
        resource=None,
        **kwargs,
    ):
        """
        Adds an entry and rewrites the log file. See Common.log() for the parameters.
        """
        entry = {
            "summary": summary,
            "category": category,
            "subcategory": subcategory,
            "type": message_type,
            "message": message,
            "resource": resource,
            "timestamp": datetime.now(timezone.utc).timestamp(),
            "context": json.dumps(kwargs, default=datetime_hack),
        }
        with self.mutex:
            self.raw_entries.insert(0, entry)
            self.expunge()
            with self.path.open("w", encoding="utf-8") as file:
                file.write(yaml.dump(self.raw_entries, allow_unicode=True))
