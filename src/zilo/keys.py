"""Logical key identifiers and the escape sequences that produce them.

Keys are identified by plain strings in the same format throughout the
editor: ``"a"`` for a printable character, ``"ctrl+q"`` for a control
character, and names such as ``"up"`` or ``"pageDown"`` for special keys.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str

ESC = 0x1B


# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"


ARROW_KEYS: frozenset[KeyId] = frozenset({Key.up, Key.down, Key.left, Key.right})


# ---------------------------------------------------------------------------
# Escape sequence tables
# ---------------------------------------------------------------------------

# ESC [ <letter>
CSI_LETTER_KEYS: dict[int, KeyId] = {
    ord("A"): Key.up,
    ord("B"): Key.down,
    ord("C"): Key.right,
    ord("D"): Key.left,
    ord("H"): Key.home,
    ord("F"): Key.end,
}

# ESC [ <digit> ~
CSI_TILDE_KEYS: dict[int, KeyId] = {
    ord("1"): Key.home,
    ord("3"): Key.delete,
    ord("4"): Key.end,
    ord("5"): Key.page_up,
    ord("6"): Key.page_down,
    ord("7"): Key.home,
    ord("8"): Key.end,
}

# ESC O <letter>
SS3_KEYS: dict[int, KeyId] = {
    ord("H"): Key.home,
    ord("F"): Key.end,
}


# ---------------------------------------------------------------------------
# Key event
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyEvent:
    """One decoded keypress.

    ``key`` is the logical identifier; ``data`` holds the raw bytes that
    were consumed to produce it.
    """

    key: KeyId
    data: bytes


# ---------------------------------------------------------------------------
# Single-byte helpers
# ---------------------------------------------------------------------------


def ctrl_key(ch: str) -> int:
    """Return the byte a terminal sends for Ctrl + *ch* (``ctrl_key("q") == 0x11``)."""
    return ord(ch) & 0x1F


def key_name(byte: int) -> KeyId:
    """Return the key identifier for a single byte outside an escape sequence."""
    if byte == ESC:
        return Key.escape
    if byte in (0x0D, 0x0A):
        return Key.enter
    if byte == 0x09:
        return Key.tab
    if byte == 0x20:
        return Key.space
    if byte in (0x7F, 0x08):
        return Key.backspace
    if byte == 0x00:
        return Key.ctrl("space")
    if 1 <= byte <= 26:
        return Key.ctrl(chr(byte + ord("a") - 1))
    if 28 <= byte <= 31:
        return Key.ctrl("\\]^_"[byte - 28])
    return chr(byte)
