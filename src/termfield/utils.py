"""Character helpers: printable-character checks, ANSI-aware width measurement.

These decide which keys a text field inserts and how wide rendered
(possibly styled) output is.
"""

from __future__ import annotations

import re

import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Regex patterns for ANSI sequences
# ---------------------------------------------------------------------------

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"        # CSI
    r"|\x1b\]8;;[^\x07]*\x07"       # OSC 8
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"  # APC
)

_SGR_RE = re.compile(r"\x1b\[[0-9;]*m")

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


def char_width(ch: str) -> int:
    """Return the number of cells *ch* occupies, or -1 for control characters."""
    return _wcwidth.wcwidth(ch)


def is_printable(key: str) -> bool:
    """Return ``True`` if *key* is a single printable character.

    Wide glyphs and combining marks qualify; the field moves one character
    at a time regardless of how many cells a character occupies.
    """
    return len(key) == 1 and key.isprintable()


def strip_ansi(text: str) -> str:
    return _STRIP_RE.sub("", text)


def visible_width(text: str) -> int:
    """Return the terminal display width of *text*, ignoring ANSI sequences."""
    if not text:
        return 0

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    plain = strip_ansi(text)
    width = 0
    for ch in plain:
        w = char_width(ch)
        if w > 0:
            width += w
    return _cache_width(text, width)


def truncate_to_width(text: str, max_width: int, ellipsis: str = "") -> str:
    """Truncate plain *text* so it occupies at most *max_width* cells.

    When truncation happens and *ellipsis* fits, it replaces the tail.
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    target = max_width - visible_width(ellipsis)
    if target < 0:
        target = max_width
        ellipsis = ""

    result: list[str] = []
    used = 0
    for ch in text:
        w = max(char_width(ch), 0)
        if used + w > target:
            break
        result.append(ch)
        used += w
    return "".join(result) + ellipsis


def crop_ansi_line(line: str, max_width: int) -> str:
    """Crop a line of SGR-styled text to *max_width* cells.

    Only SGR sequences are expected (as produced by ``ScreenSurface``); they
    are kept intact and a reset is appended when anything was cut.
    """
    if visible_width(line) <= max_width:
        return line

    out: list[str] = []
    used = 0
    pos = 0
    while pos < len(line):
        match = _SGR_RE.match(line, pos)
        if match:
            out.append(match.group(0))
            pos = match.end()
            continue
        ch = line[pos]
        w = max(char_width(ch), 0)
        if used + w > max_width:
            break
        out.append(ch)
        used += w
        pos += 1
    out.append("\x1b[0m")
    return "".join(out)
