"""Terminal output abstraction for prompt rendering.

Provides a ``Terminal`` protocol covering the output operations the renderer
needs (writes, live geometry, cursor movement, erasing) and a concrete
``ProcessTerminal`` backed by ``sys.stdout``.
"""

from __future__ import annotations

import os
import sys
from typing import Callable, Protocol

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CURSOR_TO_COLUMN_START = "\x1b[999D"
_ERASE_DOWN = "\x1b[J"
_CURSOR_UP_FMT = "\x1b[{}A"

_DEFAULT_COLUMNS = 80
_DEFAULT_ROWS = 24


def cursor_up(count: int) -> str:
    """Return the sequence moving the cursor up *count* rows (empty for 0)."""
    if count <= 0:
        return ""
    return _CURSOR_UP_FMT.format(count)


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal output operations."""

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def cursor_to_column_start(self) -> None: ...

    def move_up(self, lines: int) -> None: ...

    def erase_down(self) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdout``.

    Geometry is read from the device on every access so a resize between two
    renders is picked up.  When ``PI_PROMPTS_WRITE_LOG`` names a file, every
    write is mirrored to it.
    """

    def __init__(self) -> None:
        self._write_log_path: str = os.environ.get("PI_PROMPTS_WRITE_LOG", "")

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (AttributeError, ValueError, OSError):
            return _DEFAULT_COLUMNS

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).lines
        except (AttributeError, ValueError, OSError):
            return _DEFAULT_ROWS

    # -- write --------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to stdout and optionally to the write log."""
        self._raw_write(data)

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8") as f:
                    f.write(data)
            except OSError:
                pass

    # -- cursor / screen manipulation --------------------------------------

    def cursor_to_column_start(self) -> None:
        self.write(_CURSOR_TO_COLUMN_START)

    def move_up(self, lines: int) -> None:
        self.write(cursor_up(lines))

    def erase_down(self) -> None:
        self.write(_ERASE_DOWN)

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)

    # -- private: raw write ------------------------------------------------

    def _raw_write(self, data: str) -> None:
        """Write directly to stdout, bypassing buffering."""
        sys.stdout.write(data)
        sys.stdout.flush()


# ---------------------------------------------------------------------------
# Shared terminal
# ---------------------------------------------------------------------------

_terminal: Terminal | None = None


def get_terminal() -> Terminal:
    """Return the process-wide terminal, creating a ``ProcessTerminal`` lazily."""
    global _terminal
    if _terminal is None:
        _terminal = ProcessTerminal()
    return _terminal


def set_terminal(terminal: Terminal | None) -> None:
    """Replace the process-wide terminal; ``None`` restores the default."""
    global _terminal
    _terminal = terminal


def block(terminal: Terminal) -> Callable[[], None]:
    """Hide the cursor for the duration of a live region.

    Returns the callable that releases the block.  Releasing twice is safe.
    """
    terminal.hide_cursor()
    released = False

    def unblock() -> None:
        nonlocal released
        if released:
            return
        released = True
        terminal.show_cursor()

    return unblock
