"""Terminal abstraction for raw-mode byte-level I/O.

Provides a ``Terminal`` protocol, the ``ProcessTerminal`` implementation
backed by the process's controlling tty, and ``raw_mode``, a context
manager that guarantees the original terminal attributes come back on
every exit path.
"""

from __future__ import annotations

import errno
import logging
import os
import re
import select
import sys
import termios
from contextlib import contextmanager
from typing import Iterator, Protocol, TypeVar

from zilo.config import EditorConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_MOVE_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"
_CURSOR_POSITION_REQUEST = b"\x1b[6n"

_CURSOR_REPORT_RE = re.compile(rb"^\x1b\[(\d+);(\d+)R?$")

_REPORT_MAX_BYTES = 31


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TerminalError(OSError):
    """A terminal call failed; the editor cannot continue.

    ``operation`` names the failing call, e.g. ``"tcsetattr"`` or ``"read"``.
    """

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        code, message = _describe(cause)
        super().__init__(code, message)
        self.operation = operation

    def __str__(self) -> str:
        return f"{self.operation}: {self.strerror}"


def _describe(cause: BaseException | None) -> tuple[int, str]:
    if isinstance(cause, OSError) and cause.errno is not None:
        return cause.errno, cause.strerror or os.strerror(cause.errno)
    if isinstance(cause, termios.error) and len(cause.args) >= 2:
        return cause.args[0], str(cause.args[1])
    if cause is not None:
        return errno.EIO, str(cause) or os.strerror(errno.EIO)
    return errno.EIO, os.strerror(errno.EIO)


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def enable_raw_mode(self) -> None: ...

    def restore_mode(self) -> None: ...

    def query_dimensions(self) -> tuple[int, int]: ...

    def read_byte(self, timeout: float) -> int | None: ...

    def write(self, data: bytes) -> None: ...


T = TypeVar("T", bound=Terminal)


@contextmanager
def raw_mode(terminal: T) -> Iterator[T]:
    """Hold *terminal* in raw mode for the duration of the ``with`` block."""
    terminal.enable_raw_mode()
    try:
        yield terminal
    finally:
        terminal.restore_mode()


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by stdin/stdout file descriptors.

    Raw mode is configured through :mod:`termios` with ``VMIN=0`` and a short
    ``VTIME`` so a read never blocks for long; :meth:`read_byte` additionally
    waits with :func:`select.select` for the requested timeout.
    """

    def __init__(
        self,
        config: EditorConfig | None = None,
        stdin_fd: int | None = None,
        stdout_fd: int | None = None,
    ) -> None:
        self._config = config or EditorConfig()
        self._in_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self._out_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
        self._original_termios: list | None = None
        self._write_log_path: str = self._config.write_log_path

    # -- raw mode -----------------------------------------------------------

    @property
    def is_raw(self) -> bool:
        return self._original_termios is not None

    def enable_raw_mode(self) -> None:
        """Save the current attributes and switch the input fd to raw mode."""
        try:
            original = termios.tcgetattr(self._in_fd)
        except termios.error as exc:
            raise TerminalError("tcgetattr", exc) from exc

        attrs = list(original)
        attrs[0] &= ~(
            termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
        )
        attrs[1] &= ~termios.OPOST
        attrs[2] |= termios.CS8
        attrs[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        cc = list(attrs[6])
        cc[termios.VMIN] = 0
        cc[termios.VTIME] = self._config.vtime
        attrs[6] = cc

        try:
            termios.tcsetattr(self._in_fd, termios.TCSAFLUSH, attrs)
        except termios.error as exc:
            raise TerminalError("tcsetattr", exc) from exc

        self._original_termios = original
        logger.debug("raw mode enabled on fd %d", self._in_fd)

    def restore_mode(self) -> None:
        """Put back the attributes saved by :meth:`enable_raw_mode`."""
        original = self._original_termios
        if original is None:
            return
        self._original_termios = None
        try:
            termios.tcsetattr(self._in_fd, termios.TCSAFLUSH, original)
        except termios.error as exc:
            raise TerminalError("tcsetattr", exc) from exc
        logger.debug("terminal mode restored on fd %d", self._in_fd)

    # -- dimensions ---------------------------------------------------------

    def query_dimensions(self) -> tuple[int, int]:
        """Return ``(rows, cols)``, asking the tty driver first and the terminal second."""
        try:
            size = os.get_terminal_size(self._in_fd)
        except OSError:
            size = None

        if size is not None and size.columns > 0:
            logger.info("terminal size %dx%d (ioctl)", size.lines, size.columns)
            return size.lines, size.columns

        rows, cols = cursor_report_dimensions(self, self._config.read_timeout)
        logger.info("terminal size %dx%d (cursor report)", rows, cols)
        return rows, cols

    # -- byte I/O -----------------------------------------------------------

    def read_byte(self, timeout: float) -> int | None:
        """Return one input byte, or ``None`` if none arrives within *timeout*.

        End of input is fatal and raises :class:`TerminalError`.
        """
        try:
            ready, _, _ = select.select([self._in_fd], [], [], timeout)
        except OSError as exc:
            raise TerminalError("read", exc) from exc
        if not ready:
            return None

        try:
            data = os.read(self._in_fd, 1)
        except BlockingIOError:
            return None
        except OSError as exc:
            raise TerminalError("read", exc) from exc

        if not data:
            # Readable but empty: end of input or hangup.
            raise TerminalError("read", OSError(errno.EIO, os.strerror(errno.EIO)))
        return data[0]

    def write(self, data: bytes) -> None:
        """Write all of *data* to the output fd, and to the write log if set."""
        view = memoryview(data)
        try:
            while view:
                written = os.write(self._out_fd, view)
                view = view[written:]
        except OSError as exc:
            raise TerminalError("write", exc) from exc

        if self._write_log_path:
            try:
                with open(self._write_log_path, "ab") as f:
                    f.write(data)
            except OSError:
                pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_cursor_report(data: bytes) -> tuple[int, int] | None:
    """Parse a ``ESC [ rows ; cols R`` cursor position report."""
    match = _CURSOR_REPORT_RE.match(data)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def cursor_report_dimensions(terminal: Terminal, timeout: float) -> tuple[int, int]:
    """Measure the screen by parking the cursor bottom-right and asking where it is.

    Raises :class:`TerminalError` when the terminal does not answer with a
    well-formed report.
    """
    terminal.write(_MOVE_BOTTOM_RIGHT + _CURSOR_POSITION_REQUEST)

    response = bytearray()
    while len(response) < _REPORT_MAX_BYTES:
        byte = terminal.read_byte(timeout)
        if byte is None or byte == ord("R"):
            break
        response.append(byte)

    dimensions = parse_cursor_report(bytes(response))
    if dimensions is None:
        raise TerminalError("get_term_size")
    return dimensions
