"""Self-expiring status message shown on the bottom line."""

from __future__ import annotations

import time
from typing import Callable


class StatusMessage:
    """The latest notification and the time it was set.

    Setting a new message replaces the old one.  Nothing ever clears it;
    :meth:`visible_text` just stops returning it once *timeout* seconds
    have passed.
    """

    def __init__(
        self,
        max_length: int = 127,
        timeout: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_length = max_length
        self._timeout = timeout
        self._clock = clock
        self.text: str = ""
        self.timestamp: float | None = None

    def set(self, fmt: str, *args: object) -> None:
        """Format *fmt* with *args* (``str.format`` style) and store the result.

        The text is cut to the maximum message length.
        """
        text = fmt.format(*args) if args else fmt
        self.text = text[: self._max_length]
        self.timestamp = self._clock()

    def visible_text(self, now: float | None = None) -> str:
        """Return the message if it is still inside its display window, else ``""``."""
        if not self.text or self.timestamp is None:
            return ""
        if now is None:
            now = self._clock()
        if now - self.timestamp < self._timeout:
            return self.text
        return ""
