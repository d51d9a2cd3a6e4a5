import signal

import pytest

from awsome.common import Common
from awsome.session import Session
from awsome.termui.common import Commons
from awsome.termui.ui import UI


class FakeTerm:
    """
    Stands in for a blessed Terminal of a fixed size. Rendering only reads the size.
    """

    def __init__(self, width=80, height=24):
        self.width = width
        self.height = height


def reset_common():
    Common.Configuration = None
    Common.Session = None
    Common._logholder = None
    Common.initialized = False


@pytest.fixture
def config_dir(tmp_path):
    reset_common()
    path = tmp_path / "awsome"
    Common.initialize(path)
    yield path
    reset_common()


@pytest.fixture
def ui():
    previous = signal.getsignal(signal.SIGINT)
    Commons.UIInstance = None
    instance = UI(term=FakeTerm())
    yield instance
    Commons.UIInstance = None
    signal.signal(signal.SIGINT, previous)


class StaticProvider:
    """
    Provider returning canned rows per service, or raising a canned error.
    """

    def __init__(self, rows=None, error=None):
        self.rows = rows or {}
        self.error = error
        self.calls = []

    def fetch(self, service):
        self.calls.append(service)
        if self.error is not None:
            raise self.error
        return list(self.rows.get(service, []))


@pytest.fixture
def make_session(config_dir, ui):
    def factory(rows=None, error=None):
        session = Session(
            Common.Configuration, provider=StaticProvider(rows, error), ui=ui
        )
        Common.Session = session
        return session

    return factory
