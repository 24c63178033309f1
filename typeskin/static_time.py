"""
Static-Time Window
==================
Function contracts get deep verification (up to 256 sampled calls) only
while the program is still defining things. The window:

  1. opens when typeskin is imported
  2. is closed exactly once, by a zero-delay task posted to the event loop
  3. never reopens

The close must land *after* the synchronous definition phase, so it is
posted with `loop.call_soon`: every attach() in the current synchronous
step still sees the window open, and anything attached from a later
callback gets a single-iteration check.

If no asyncio loop is running at import time, nothing is posted. A loop
started later runs after the definition phase, so the first consultation
from inside a running loop closes the window on the spot. A program that
never runs a loop stays in static time throughout; hosts can end it
explicitly with close_static_time().
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class StaticTimeWindow:
    """Write-once flag: open -> closed."""

    def __init__(self) -> None:
        self._open = True
        self._scheduled = False

    @property
    def is_open(self) -> bool:
        if self._open and not self._scheduled and _loop_running():
            self.close()
        return self._open

    def close(self) -> None:
        if self._open:
            self._open = False
            logger.debug("static-time window closed")

    def schedule_close(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> bool:
        """Post the close to `loop` (or the running loop). Returns True once posted."""
        if self._scheduled or not self._open:
            return self._scheduled
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                return False
        loop.call_soon(self.close)
        self._scheduled = True
        logger.debug("static-time close scheduled on %r", loop)
        return True


WINDOW = StaticTimeWindow()
WINDOW.schedule_close()


def is_static_time() -> bool:
    return WINDOW.is_open


def close_static_time() -> None:
    """End static time now. Later contract checks run a single iteration."""
    WINDOW.close()
