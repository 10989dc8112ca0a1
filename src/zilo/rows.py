"""Row buffer model: the document as an ordered list of rows.

Each :class:`Row` keeps the bytes read from the file (``raw``) and a cached
tab-expanded copy (``render``) that every other part of the editor uses for
column arithmetic.  The cache is rebuilt synchronously whenever ``raw``
changes, so a stale render form is never observable.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Iterator

from zilo.config import TAB_STOP

logger = logging.getLogger(__name__)

_TAB = 0x09
_SPACE = 0x20


def expand_tabs(raw: bytes, tab_stop: int = TAB_STOP) -> bytes:
    """Return *raw* with every tab expanded to the next multiple of *tab_stop*.

    A tab always emits at least one space and at most *tab_stop* spaces.
    Every other byte is copied unchanged and advances the column by one.
    """
    if _TAB not in raw:
        return bytes(raw)

    out = bytearray()
    for byte in raw:
        if byte == _TAB:
            out.append(_SPACE)
            while len(out) % tab_stop != 0:
                out.append(_SPACE)
        else:
            out.append(byte)
    return bytes(out)


class Row:
    """One line of the document, without its line terminator."""

    __slots__ = ("_raw", "_render", "_tab_stop")

    def __init__(self, raw: bytes = b"", tab_stop: int = TAB_STOP) -> None:
        self._tab_stop = tab_stop
        self._raw = bytearray(raw)
        self._render = b""
        self.update()

    @property
    def raw(self) -> bytes:
        return bytes(self._raw)

    @property
    def render(self) -> bytes:
        return self._render

    @property
    def size(self) -> int:
        return len(self._raw)

    @property
    def render_size(self) -> int:
        return len(self._render)

    def update(self) -> None:
        self._render = expand_tabs(self._raw, self._tab_stop)

    def __repr__(self) -> str:
        return f"Row({self.raw!r})"


class Document:
    """Ordered rows of the file being viewed.

    Storage is a plain list, which already grows by over-allocation, so a
    long run of :meth:`append_row` calls costs amortised linear time.
    """

    def __init__(self, tab_stop: int = TAB_STOP) -> None:
        self._tab_stop = tab_stop
        self._rows: list[Row] = []

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def __getitem__(self, index: int) -> Row:
        return self._rows[self._check_index(index)]

    def append_row(self, data: bytes) -> Row:
        """Append a new row built from *data* and return it."""
        row = Row(data, self._tab_stop)
        self._rows.append(row)
        return row

    def render_of(self, index: int) -> bytes:
        """Return the tab-expanded bytes of row *index*.

        Raises ``IndexError`` for indices outside ``[0, row_count)``;
        callers bounds-check first.
        """
        return self._rows[self._check_index(index)].render

    def render_length(self, index: int) -> int:
        """Render length of row *index*, or 0 past the last row."""
        if 0 <= index < len(self._rows):
            return self._rows[index].render_size
        return 0

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._rows):
            raise IndexError(
                f"row index {index} out of range for {len(self._rows)} rows"
            )
        return index


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def strip_line_ending(line: bytes) -> bytes:
    """Strip any run of trailing ``\\n`` / ``\\r`` bytes from *line*."""
    return line.rstrip(b"\r\n")


def load_lines(document: Document, lines: Iterable[bytes]) -> int:
    """Append *lines* to *document*, returning how many rows were added.

    Line terminators are stripped first; lines left empty by stripping are
    not appended.
    """
    added = 0
    for line in lines:
        stripped = strip_line_ending(line)
        if stripped:
            document.append_row(stripped)
            added += 1
    return added


def open_file(path: str | os.PathLike[str], tab_stop: int = TAB_STOP) -> Document:
    """Read *path* into a new :class:`Document`.

    ``OSError`` from opening or reading the file propagates unchanged.
    """
    document = Document(tab_stop)
    with open(path, "rb") as f:
        load_lines(document, f)
    logger.info("loaded %s (%d rows)", os.fspath(path), document.row_count)
    return document
