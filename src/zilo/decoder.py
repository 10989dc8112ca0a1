"""Decode raw terminal bytes into one logical key event per read.

Escape sequences arrive as several bytes, and a lone Esc keypress looks
exactly like the start of one.  The decoder tells them apart only by a
bounded lookahead: after ``ESC`` every further byte is read with a short
timeout, and any read that times out or any byte that does not continue a
known sequence makes the whole thing decode to a bare ``escape`` event.
Unknown sequences are never an error.
"""

from __future__ import annotations

from typing import Iterator, Protocol

from zilo.keys import (
    CSI_LETTER_KEYS,
    CSI_TILDE_KEYS,
    ESC,
    SS3_KEYS,
    Key,
    KeyEvent,
    key_name,
)

_BRACKET = ord("[")
_SS3 = ord("O")
_TILDE = ord("~")
_DIGIT_0 = ord("0")
_DIGIT_9 = ord("9")


class ByteSource(Protocol):
    """Anything that can hand out terminal input one byte at a time."""

    def read_byte(self, timeout: float) -> int | None:
        """Return the next byte, or ``None`` when *timeout* seconds pass first."""
        ...


class KeyDecoder:
    """Escape-sequence state machine over a :class:`ByteSource`."""

    def __init__(self, source: ByteSource, timeout: float = 0.1) -> None:
        self._source = source
        self._timeout = timeout

    def read_key(self) -> KeyEvent:
        """Block until a byte arrives, then decode exactly one key event."""
        byte = self._source.read_byte(self._timeout)
        while byte is None:
            byte = self._source.read_byte(self._timeout)

        if byte != ESC:
            return KeyEvent(key_name(byte), bytes((byte,)))
        return self._read_escape()

    def keys(self) -> Iterator[KeyEvent]:
        """Lazily yield key events for as long as the caller keeps iterating."""
        while True:
            yield self.read_key()

    # -- escape sequences ---------------------------------------------------

    def _read_escape(self) -> KeyEvent:
        seq = bytearray((ESC,))

        introducer = self._lookahead(seq)
        if introducer is None:
            return _bare_escape(seq)

        if introducer == _BRACKET:
            return self._read_csi(seq)
        if introducer == _SS3:
            return self._read_ss3(seq)
        return _bare_escape(seq)

    def _read_csi(self, seq: bytearray) -> KeyEvent:
        byte = self._lookahead(seq)
        if byte is None:
            return _bare_escape(seq)

        if _DIGIT_0 <= byte <= _DIGIT_9:
            final = self._lookahead(seq)
            if final == _TILDE and byte in CSI_TILDE_KEYS:
                return KeyEvent(CSI_TILDE_KEYS[byte], bytes(seq))
            return _bare_escape(seq)

        key = CSI_LETTER_KEYS.get(byte)
        if key is None:
            return _bare_escape(seq)
        return KeyEvent(key, bytes(seq))

    def _read_ss3(self, seq: bytearray) -> KeyEvent:
        byte = self._lookahead(seq)
        key = SS3_KEYS.get(byte) if byte is not None else None
        if key is None:
            return _bare_escape(seq)
        return KeyEvent(key, bytes(seq))

    def _lookahead(self, seq: bytearray) -> int | None:
        byte = self._source.read_byte(self._timeout)
        if byte is not None:
            seq.append(byte)
        return byte


def _bare_escape(seq: bytearray) -> KeyEvent:
    return KeyEvent(Key.escape, bytes(seq))
