"""Display-width helpers for the status and message lines.

Document rows are handled as single-column bytes, but the status line
carries a file name and the message line free text, and both must be cut at
the terminal width without splitting a character or overrunning the line.
"""

from __future__ import annotations

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def _is_control(g: str) -> bool:
    cp = ord(g[0])
    return cp < 0x20 or 0x7F <= cp <= 0x9F


def _grapheme_width(g: str) -> int:
    """Terminal width of one grapheme cluster; control characters count 0."""
    if not g or _is_control(g):
        return 0
    return max(_wcwidth.wcswidth(g), _wcwidth.wcwidth(g[0]), 0)


def _is_ascii(text: str) -> bool:
    return all(0x20 <= ord(ch) <= 0x7E for ch in text)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def visible_width(text: str) -> int:
    """Number of terminal columns *text* occupies."""
    if not text:
        return 0
    if _is_ascii(text):
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(text))
    return _cache_width(text, total)


def truncate_to_width(text: str, max_width: int) -> str:
    """Return the longest prefix of *text* that fits in *max_width* columns.

    Never splits a grapheme cluster; a non-positive width yields ``""``.
    Control characters are dropped so the result cannot carry escapes.
    """
    if max_width <= 0:
        return ""
    if _is_ascii(text):
        return text[:max_width]

    result: list[str] = []
    cols = 0
    for g in grapheme.graphemes(text):
        if _is_control(g):
            continue
        w = _grapheme_width(g)
        if cols + w > max_width:
            break
        result.append(g)
        cols += w
    return "".join(result)
