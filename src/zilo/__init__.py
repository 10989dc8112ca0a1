"""zilo: minimal full-screen terminal text viewer."""

import logging

from zilo.config import EditorConfig
from zilo.decoder import ByteSource, KeyDecoder
from zilo.editor import Editor, EditorSession, run
from zilo.keys import Key, KeyEvent, KeyId, ctrl_key, key_name
from zilo.render import render_frame
from zilo.rows import Document, Row, expand_tabs, load_lines, open_file
from zilo.status import StatusMessage
from zilo.terminal import ProcessTerminal, Terminal, TerminalError, raw_mode
from zilo.viewport import Cursor, Viewport, move_cursor

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Config
    "EditorConfig",
    # Input decoding
    "ByteSource",
    "KeyDecoder",
    "Key",
    "KeyEvent",
    "KeyId",
    "ctrl_key",
    "key_name",
    # Document
    "Document",
    "Row",
    "expand_tabs",
    "load_lines",
    "open_file",
    # Cursor and viewport
    "Cursor",
    "Viewport",
    "move_cursor",
    # Rendering
    "StatusMessage",
    "render_frame",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    "TerminalError",
    "raw_mode",
    # Editor
    "Editor",
    "EditorSession",
    "run",
]
