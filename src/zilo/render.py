"""Compose a full screen frame into one byte buffer.

The whole frame is built in memory and handed to the terminal in a single
write so the screen never shows a half-drawn state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from zilo.utils import truncate_to_width, visible_width

if TYPE_CHECKING:
    from zilo.editor import EditorSession

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_LINE = b"\x1b[K"
CLEAR_SCREEN = b"\x1b[2J"
REVERSE_VIDEO = b"\x1b[7m"
RESET_ATTRIBUTES = b"\x1b[m"
CRLF = b"\r\n"

EMPTY_ROW_MARKER = b"~"
NO_NAME = "[No Name]"


def cursor_position(row: int, col: int) -> bytes:
    """Escape sequence moving the cursor to 0-based screen cell (*row*, *col*)."""
    return f"\x1b[{row + 1};{col + 1}H".encode("ascii")


# ---------------------------------------------------------------------------
# Frame parts
# ---------------------------------------------------------------------------


def draw_rows(buf: bytearray, session: EditorSession) -> None:
    document = session.document
    viewport = session.viewport
    cols = session.screen_cols

    for y in range(session.screen_rows):
        file_row = y + viewport.row_offset
        if file_row < document.row_count:
            render = document.render_of(file_row)
            start = viewport.col_offset
            length = max(0, min(len(render) - start, cols))
            buf += render[start : start + length]
        else:
            buf += EMPTY_ROW_MARKER
        buf += CLEAR_LINE
        buf += CRLF


def status_line(session: EditorSession) -> str:
    """Text of the status line, exactly ``screen_cols`` columns wide or less.

    File name and line count on the left, ``current/total`` on the right
    when it fits after the left part.
    """
    cols = session.screen_cols
    total = session.document.row_count
    name = truncate_to_width(
        session.filename or NO_NAME, session.config.status_filename_max
    )

    left = truncate_to_width(f"{name} - {total} lines", cols)
    right = f"{session.cursor.row + 1}/{total}"

    gap = cols - visible_width(left)
    if gap >= len(right):
        return left + " " * (gap - len(right)) + right
    return left + " " * gap


def draw_status_bar(buf: bytearray, session: EditorSession) -> None:
    buf += REVERSE_VIDEO
    buf += status_line(session).encode("utf-8", errors="replace")
    buf += RESET_ATTRIBUTES
    buf += CRLF


def draw_message_bar(buf: bytearray, session: EditorSession, now: float | None = None) -> None:
    buf += CLEAR_LINE
    message = session.status.visible_text(now)
    if message:
        text = truncate_to_width(message, session.screen_cols)
        buf += text.encode("utf-8", errors="replace")


def render_frame(session: EditorSession, now: float | None = None) -> bytes:
    """Build the complete frame for *session*'s current state.

    The viewport is expected to have been scrolled for the current cursor
    already; this function only reads session state.
    """
    buf = bytearray()
    buf += HIDE_CURSOR
    buf += CURSOR_HOME

    draw_rows(buf, session)
    draw_status_bar(buf, session)
    draw_message_bar(buf, session, now)

    buf += cursor_position(
        session.cursor.row - session.viewport.row_offset,
        session.cursor.col - session.viewport.col_offset,
    )
    buf += SHOW_CURSOR
    return bytes(buf)


def clear_screen_sequence() -> bytes:
    return CLEAR_SCREEN + CURSOR_HOME
