"""
The awsome console entrypoint.
"""
import os
import sys

from .common import Common
from .session import Session


def main(*args, **kwargs):
    """
    Starts awsome and blocks until the user quits.

    When stdin and stdout are the same terminal, stderr is sent to the configured error_log so stray output does not corrupt the screen.
    """
    Common.initialize()
    saved_stderr = None
    if os.fstat(0) == os.fstat(1):
        saved_stderr = sys.stderr
        # pylint: disable=consider-using-with # Closed in the finally block below.
        sys.stderr = open(
            Common.Configuration["error_log"], "w", buffering=1, encoding="utf-8"
        )
    try:
        Common.Session = Session(Common.Configuration)
        Common.info(
            "Session started",
            "Startup",
            "Core",
            region=Common.Configuration.region,
        )
        Common.main()
    finally:
        if saved_stderr is not None:
            sys.stderr.close()
            sys.stderr = saved_stderr
