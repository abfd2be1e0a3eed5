"""Styling functions for prompt output.

Every style is a pure ``Callable[[str], str]`` so callers can swap a palette
without touching layout code.  Styles nest: when the wrapped text already
contains the style's close code, the open code is re-emitted after it so the
outer style survives the inner one.
"""

from __future__ import annotations

import os
import sys
from typing import Callable

Style = Callable[[str], str]


def is_color_supported() -> bool:
    """Return whether stdout should receive SGR color codes.

    ``NO_COLOR`` / ``--no-color`` disable, ``FORCE_COLOR`` / ``--color``
    force; otherwise a TTY whose ``TERM`` is not ``dumb``.
    """
    argv = sys.argv
    if "NO_COLOR" in os.environ or "--no-color" in argv:
        return False
    if "FORCE_COLOR" in os.environ or "--color" in argv:
        return True
    if sys.platform == "win32":
        return True
    try:
        is_tty = sys.stdout.isatty()
    except (AttributeError, ValueError):
        is_tty = False
    return is_tty and os.environ.get("TERM", "") != "dumb"


def _identity(text: str) -> str:
    return text


def _formatter(open_code: str, close_code: str, replace: str | None = None) -> Style:
    if replace is None:
        replace = open_code

    def style(text: str) -> str:
        text = str(text)
        index = text.find(close_code, len(open_code))
        if index < 0:
            return open_code + text + close_code
        parts: list[str] = []
        cursor = 0
        while index >= 0:
            parts.append(text[cursor:index])
            parts.append(replace)
            cursor = index + len(close_code)
            index = text.find(close_code, cursor)
        parts.append(text[cursor:])
        return open_code + "".join(parts) + close_code

    return style


class Colors:
    """A palette of style functions, either real SGR wrappers or identities."""

    def __init__(self, enabled: bool) -> None:
        self.enabled = enabled
        f = _formatter if enabled else (lambda *_args: _identity)

        self.reset: Style = f("\x1b[0m", "\x1b[0m")
        self.bold: Style = f("\x1b[1m", "\x1b[22m", "\x1b[22m\x1b[1m")
        self.dim: Style = f("\x1b[2m", "\x1b[22m", "\x1b[22m\x1b[2m")
        self.italic: Style = f("\x1b[3m", "\x1b[23m")
        self.underline: Style = f("\x1b[4m", "\x1b[24m")
        self.inverse: Style = f("\x1b[7m", "\x1b[27m")
        self.hidden: Style = f("\x1b[8m", "\x1b[28m")
        self.strikethrough: Style = f("\x1b[9m", "\x1b[29m")

        self.red: Style = f("\x1b[31m", "\x1b[39m")
        self.green: Style = f("\x1b[32m", "\x1b[39m")
        self.yellow: Style = f("\x1b[33m", "\x1b[39m")
        self.blue: Style = f("\x1b[34m", "\x1b[39m")
        self.magenta: Style = f("\x1b[35m", "\x1b[39m")
        self.cyan: Style = f("\x1b[36m", "\x1b[39m")
        self.white: Style = f("\x1b[37m", "\x1b[39m")
        self.gray: Style = f("\x1b[90m", "\x1b[39m")

        self.bg_cyan: Style = f("\x1b[46m", "\x1b[49m")
        self.bg_white: Style = f("\x1b[47m", "\x1b[49m")


def create_colors(enabled: bool | None = None) -> Colors:
    """Build a palette; *enabled* defaults to :func:`is_color_supported`."""
    if enabled is None:
        enabled = is_color_supported()
    return Colors(enabled)


_colors = create_colors()

reset = _colors.reset
bold = _colors.bold
dim = _colors.dim
italic = _colors.italic
underline = _colors.underline
inverse = _colors.inverse
hidden = _colors.hidden
strikethrough = _colors.strikethrough
red = _colors.red
green = _colors.green
yellow = _colors.yellow
blue = _colors.blue
magenta = _colors.magenta
cyan = _colors.cyan
white = _colors.white
gray = _colors.gray
bg_cyan = _colors.bg_cyan
bg_white = _colors.bg_white
