"""Editor session and the read-decode-mutate-render loop.

All mutable editor state lives in one :class:`EditorSession` owned by the
:class:`Editor` loop; key dispatch is the only place it changes.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Callable

from zilo.config import EditorConfig
from zilo.decoder import KeyDecoder
from zilo.keys import ARROW_KEYS, Key, KeyEvent
from zilo.render import clear_screen_sequence, render_frame
from zilo.rows import Document, open_file
from zilo.status import StatusMessage
from zilo.terminal import Terminal, raw_mode
from zilo.viewport import Cursor, Viewport, move_cursor, move_end, move_home, move_page

logger = logging.getLogger(__name__)

HELP_MESSAGE = "HELP: Ctrl-Q = quit"

QUIT_KEY = Key.ctrl("q")

# Status line and message line sit below the text area.
RESERVED_ROWS = 2


class EditorSession:
    """Document, cursor, viewport, and status message for one editing session."""

    def __init__(
        self,
        screen_rows: int,
        screen_cols: int,
        config: EditorConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or EditorConfig()
        self.document = Document(self.config.tab_stop)
        self.filename: str | None = None
        self.cursor = Cursor()
        self.viewport = Viewport()
        self.screen_rows = max(screen_rows, 1)
        self.screen_cols = max(screen_cols, 1)
        self.status = StatusMessage(
            max_length=self.config.status_message_max,
            timeout=self.config.message_timeout,
            clock=clock,
        )

    @classmethod
    def for_terminal(
        cls,
        rows: int,
        cols: int,
        config: EditorConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> EditorSession:
        """Session for a terminal of *rows* x *cols*, minus the two bottom lines."""
        return cls(rows - RESERVED_ROWS, cols, config, clock)

    def open(self, path: str | os.PathLike[str]) -> None:
        self.document = open_file(path, self.config.tab_stop)
        self.filename = os.fspath(path)

    def set_status_message(self, fmt: str, *args: object) -> None:
        self.status.set(fmt, *args)

    def scroll(self) -> None:
        self.viewport.scroll(self.cursor, self.screen_rows, self.screen_cols)

    def process_key(self, event: KeyEvent) -> bool:
        """Apply one key event. Returns ``False`` once the user asked to quit."""
        key = event.key

        if key == QUIT_KEY:
            return False

        if key == Key.home:
            move_home(self.cursor)
        elif key == Key.end:
            move_end(self.cursor, self.document)
        elif key in (Key.page_up, Key.page_down):
            move_page(self.cursor, self.document, key, self.screen_rows)
        elif key in ARROW_KEYS:
            move_cursor(self.cursor, self.document, key)
        else:
            logger.debug("ignoring key %r (%r)", key, event.data)
        return True


class Editor:
    """Drives a session against a terminal until the user quits."""

    def __init__(self, terminal: Terminal, session: EditorSession) -> None:
        self._terminal = terminal
        self._session = session

    @property
    def session(self) -> EditorSession:
        return self._session

    def refresh_screen(self) -> None:
        self._session.scroll()
        self._terminal.write(render_frame(self._session))

    def run(self) -> None:
        decoder = KeyDecoder(self._terminal, self._session.config.read_timeout)
        self.refresh_screen()
        for event in decoder.keys():
            if not self._session.process_key(event):
                break
            self.refresh_screen()

        self._terminal.write(clear_screen_sequence())
        logger.info("quit")


def run(
    terminal: Terminal,
    filename: str | os.PathLike[str] | None = None,
    config: EditorConfig | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> EditorSession:
    """Open *filename* (if any) and edit it on *terminal* until Ctrl-Q.

    Raw mode is held for the whole call and released on every exit path.
    Errors are not handled here; they propagate after the terminal has been
    restored.
    """
    with raw_mode(terminal):
        rows, cols = terminal.query_dimensions()
        session = EditorSession.for_terminal(rows, cols, config, clock)
        if filename is not None:
            session.open(filename)
        session.set_status_message(HELP_MESSAGE)
        Editor(terminal, session).run()
    return session
