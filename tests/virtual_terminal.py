"""Virtual terminal for testing -- implements the Terminal protocol in-memory.

This module provides a ``VirtualTerminal`` class that satisfies the
``zilo.terminal.Terminal`` protocol without performing any real I/O.
Input is a script of bytes (``None`` entries stand for read timeouts) and
all output is captured in a buffer for assertions.
"""

from __future__ import annotations

from typing import Iterable


class VirtualTerminal:
    """In-memory terminal that replays scripted input and records writes.

    Parameters
    ----------
    rows:
        Number of terminal rows (height).
    columns:
        Number of terminal columns (width).
    script:
        Input bytes, optionally mixed with ``None`` timeouts.
    """

    # Reads past the end of the script before the terminal assumes a test
    # forgot to send Ctrl-Q and gives up instead of spinning forever.
    MAX_IDLE_READS = 1000

    def __init__(
        self,
        rows: int = 24,
        columns: int = 80,
        script: bytes | Iterable[int | None] = b"",
    ) -> None:
        self.rows = rows
        self.columns = columns
        self._script: list[int | None] = list(script)
        self._pos = 0
        self._idle_reads = 0
        self._buffer: list[bytes] = []
        self.calls: list[str] = []
        self.raw = False

    # -- Terminal protocol: raw mode ----------------------------------------

    def enable_raw_mode(self) -> None:
        self.calls.append("enable")
        self.raw = True

    def restore_mode(self) -> None:
        self.calls.append("restore")
        self.raw = False

    def query_dimensions(self) -> tuple[int, int]:
        self.calls.append("query_dimensions")
        return self.rows, self.columns

    # -- Terminal protocol: I/O ---------------------------------------------

    def read_byte(self, timeout: float) -> int | None:
        if self._pos >= len(self._script):
            self._idle_reads += 1
            if self._idle_reads > self.MAX_IDLE_READS:
                raise RuntimeError("input script exhausted")
            return None
        byte = self._script[self._pos]
        self._pos += 1
        return byte

    def write(self, data: bytes) -> None:
        self.calls.append("write")
        self._buffer.append(bytes(data))

    # -- Test helpers -------------------------------------------------------

    def feed(self, data: bytes | Iterable[int | None]) -> None:
        """Append more input to the script."""
        self._script.extend(data)

    @property
    def consumed(self) -> int:
        """Number of script entries read so far (timeouts included)."""
        return self._pos

    @property
    def output(self) -> bytes:
        """Everything written to the terminal as one byte string."""
        return b"".join(self._buffer)

    @property
    def writes(self) -> list[bytes]:
        return list(self._buffer)

    @property
    def write_count(self) -> int:
        return len(self._buffer)

    @property
    def restore_count(self) -> int:
        return self.calls.count("restore")

    @property
    def enable_count(self) -> int:
        return self.calls.count("enable")

    def clear_buffer(self) -> None:
        self._buffer.clear()
