"""Terminal text utilities: ANSI stripping, width measurement, row counting.

Provides functions for measuring the visible terminal width of strings that
carry escape sequences, padding them to a column, and counting how many
physical rows a painted frame occupies once the terminal soft-wraps it.
"""

from __future__ import annotations

import math
import re
import unicodedata

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Regex patterns for ANSI / OSC / APC sequences
# ---------------------------------------------------------------------------

_STRIP_RE = re.compile(
    r"(?:\x1b\]|\x9d)[^\x07\x1b]*(?:\x07|\x1b\\)"  # OSC: ESC] ... (BEL | ST)
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"  # APC: ESC_ ... (BEL | ST)
    r"|(?:\x1b\[|\x9b)[0-?]*[ -/]*[@-~]"  # CSI: params, intermediates, final byte
    r"|\x1b[()#][0-9A-Za-z]"  # charset selection / DEC line attributes
    r"|\x1b[@-Z\\-_]"  # two-byte Fe escapes
)

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


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Zero-width characters (control, combining marks, etc.) -> 0
    2. Emoji (VS16, ZWJ sequences, regional indicators, skin tones) -> 2
    3. Otherwise delegate to wcwidth for the first codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:  # Skin tone modifiers
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:  # Regional indicators
            return 2

    first = g[0]
    if ord(first) >= 0x1F000:
        return 2

    cat = unicodedata.category(first)
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(first), 0)


# ---------------------------------------------------------------------------
# strip_ansi / visible_width
# ---------------------------------------------------------------------------


def strip_ansi(text: str) -> str:
    """Return *text* with every ANSI escape sequence removed."""
    return _STRIP_RE.sub("", text)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text* in display columns.

    Wide East Asian characters count as two columns, zero-width marks as none.

    * Strips CSI, OSC and APC escape sequences.
    * Counts a tab as one column.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    stripped = _STRIP_RE.sub("", text)
    if not stripped:
        return 0

    stripped = stripped.replace("\t", " ")

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(stripped):
        total += _grapheme_width(g)

    return _cache_width(stripped, total)


def pad_to_width(text: str, width: int) -> str:
    """Right-pad *text* with spaces so its visible width is *width*."""
    return text + " " * max(0, width - visible_width(text))


# ---------------------------------------------------------------------------
# Soft-wrap row counting
# ---------------------------------------------------------------------------


def line_rows(line: str, columns: int) -> int:
    """Return the number of physical rows *line* occupies at *columns* width.

    A line wider than the terminal continues on the next row without an
    explicit newline, so the count is ``ceil(width / columns)``.  An empty
    line still occupies one row.
    """
    if columns <= 0:
        return 1
    return max(1, math.ceil(visible_width(line) / columns))


def frame_rows(frame: str, columns: int) -> int:
    """Return the number of physical rows a painted *frame* occupies.

    *frame* is the exact text previously written; a trailing newline leaves
    the cursor at the start of the next row and does not count as a row.
    """
    if not frame:
        return 0
    lines = frame.split("\n")
    if frame.endswith("\n"):
        lines.pop()
    return sum(line_rows(line, columns) for line in lines)
