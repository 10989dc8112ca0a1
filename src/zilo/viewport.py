"""Cursor motion and the scrolling window into the document.

Columns are measured in render coordinates (after tab expansion).  The
cursor row may equal the row count, which is the empty line past the end
of the document.
"""

from __future__ import annotations

from dataclasses import dataclass

from zilo.keys import Key, KeyId
from zilo.rows import Document


@dataclass
class Cursor:
    row: int = 0
    col: int = 0


@dataclass
class Viewport:
    """Top-left corner of the visible window, in render coordinates."""

    row_offset: int = 0
    col_offset: int = 0

    def scroll(self, cursor: Cursor, visible_rows: int, visible_cols: int) -> None:
        """Move the window the least distance that puts *cursor* inside it.

        A cursor that jumped far above or below the window snaps the window
        straight to it.  Calling this again with the same arguments changes
        nothing.
        """
        visible_rows = max(visible_rows, 1)
        visible_cols = max(visible_cols, 1)

        if cursor.row < self.row_offset:
            self.row_offset = cursor.row
        if cursor.row >= self.row_offset + visible_rows:
            self.row_offset = cursor.row - visible_rows + 1

        if cursor.col < self.col_offset:
            self.col_offset = cursor.col
        if cursor.col >= self.col_offset + visible_cols:
            self.col_offset = cursor.col - visible_cols + 1


def clamp_column(cursor: Cursor, document: Document) -> None:
    """Pull the cursor column back onto the current row's render text."""
    limit = document.render_length(cursor.row)
    if cursor.col > limit:
        cursor.col = limit


def move_cursor(cursor: Cursor, document: Document, key: KeyId) -> None:
    """Move *cursor* one cell for an arrow *key*, wrapping at line ends.

    Left at column 0 goes to the end of the previous row, right at the end
    of a row goes to column 0 of the next one.  Up and down keep the column
    only as far as the new row allows; there is no remembered column.
    """
    row_count = document.row_count
    on_row = cursor.row < row_count

    if key == Key.left:
        if cursor.col != 0:
            cursor.col -= 1
        elif cursor.row > 0:
            cursor.row -= 1
            cursor.col = document.render_length(cursor.row)
    elif key == Key.right:
        if on_row:
            if cursor.col < document.render_length(cursor.row):
                cursor.col += 1
            else:
                cursor.row += 1
                cursor.col = 0
    elif key == Key.up:
        if cursor.row > 0:
            cursor.row -= 1
    elif key == Key.down:
        if cursor.row < row_count:
            cursor.row += 1

    clamp_column(cursor, document)


def move_home(cursor: Cursor) -> None:
    cursor.col = 0


def move_end(cursor: Cursor, document: Document) -> None:
    cursor.col = document.render_length(cursor.row)


def move_page(cursor: Cursor, document: Document, key: KeyId, visible_rows: int) -> None:
    """Move half a screen up or down, one row at a time."""
    step = Key.up if key == Key.page_up else Key.down
    for _ in range(visible_rows // 2):
        move_cursor(cursor, document, step)
