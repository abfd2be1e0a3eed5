"""Spinner: a single animated terminal line that always ends on a static frame.

The spinner repaints its line on a fixed interval with a cycling glyph and
0-3 animated dots.  ``stop`` replaces the animated line with one static line
whose glyph reflects the exit code.  Exit hooks registered for the lifetime
of the spinner make sure that static line is written on every exit path.
"""

from __future__ import annotations

import asyncio
import logging
import math
import re
from dataclasses import dataclass
from types import TracebackType
from typing import Callable, ClassVar

from pi.prompts import colors
from pi.prompts.lifecycle import (
    CODE_CANCEL,
    CODE_ERROR,
    CODE_SUCCESS,
    ProcessHooks,
    register_exit_hooks,
)
from pi.prompts.symbols import Symbols, get_symbols
from pi.prompts.terminal import Terminal, block, get_terminal
from pi.prompts.timer import PeriodicTask

logger = logging.getLogger(__name__)

_TRAILING_DOTS_RE = re.compile(r"\.+$")
_DOTS_STEP = 0.125
_MAX_DOTS = 3


@dataclass
class FrameState:
    """Mutable animation state owned by one running spinner."""

    active: bool = False
    message: str = ""
    frame_index: int = 0
    dots_timer: float = 0.0


def advance_frame(state: FrameState, frame_count: int) -> tuple[int, str]:
    """Return the glyph index and dot suffix to paint, then step *state*."""
    index = state.frame_index
    dots = "." * min(math.floor(state.dots_timer), _MAX_DOTS)
    state.frame_index = index + 1 if index + 1 < frame_count else 0
    state.dots_timer = state.dots_timer + _DOTS_STEP if state.dots_timer < frame_count else 0.0
    return index, dots


class Spinner:
    """Animated status line.

    Example::

        spinner = Spinner()
        spinner.start("Installing dependencies")
        ...
        spinner.stop("Installed")
    """

    _running: ClassVar[Spinner | None] = None

    def __init__(
        self,
        terminal: Terminal | None = None,
        symbols: Symbols | None = None,
        hooks: ProcessHooks | None = None,
        interval: float | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._terminal = terminal or get_terminal()
        self._symbols = symbols or get_symbols()
        self._hooks = hooks
        self._interval = interval if interval is not None else self._symbols.spinner_interval
        self._loop = loop
        self._state = FrameState()
        self._task: PeriodicTask | None = None
        self._deregister_hooks: Callable[[], None] | None = None
        self._unblock: Callable[[], None] | None = None

    @property
    def is_active(self) -> bool:
        return self._state.active

    @property
    def state(self) -> FrameState:
        return self._state

    # -- lifecycle ----------------------------------------------------------

    def start(self, message: str = "") -> None:
        if Spinner._running is not None:
            raise RuntimeError("A spinner is already running; stop it before starting another")
        Spinner._running = self

        self._state = FrameState(active=True, message=_TRAILING_DOTS_RE.sub("", message))
        try:
            self._unblock = block(self._terminal)
            self._terminal.write(f"{colors.gray(self._symbols.bar)}\n")
            self._deregister_hooks = register_exit_hooks(self._handle_exit, self._hooks)
            self._render_frame()
            self._task = PeriodicTask(self._interval, self._render_frame, self._loop)
            self._task.start()
        except BaseException:
            self._release()
            raise
        logger.debug("Spinner started: %s", self._state.message)

    def stop(self, message: str | None = None, code: int = CODE_SUCCESS) -> None:
        if not self._state.active:
            return
        if message is not None:
            self._state.message = message
        self._state.active = False
        self._cancel_task()

        s = self._symbols
        if code == CODE_SUCCESS:
            step = colors.green(s.step_submit)
        elif code == CODE_CANCEL:
            step = colors.red(s.step_cancel)
        else:
            step = colors.red(s.step_error)

        try:
            self._terminal.cursor_to_column_start()
            self._terminal.erase_down()
            self._terminal.write(f"{step}  {self._state.message}\n")
        finally:
            self._release()
        logger.debug("Spinner stopped with code %d", code)

    def message(self, message: str = "") -> None:
        """Replace the displayed message; shown on the next tick."""
        self._state.message = message

    # -- internals ----------------------------------------------------------

    def _cancel_task(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _release(self) -> None:
        """Give back the running slot, exit hooks and cursor."""
        self._state.active = False
        self._cancel_task()
        if Spinner._running is self:
            Spinner._running = None
        if self._deregister_hooks is not None:
            self._deregister_hooks()
            self._deregister_hooks = None
        if self._unblock is not None:
            unblock, self._unblock = self._unblock, None
            unblock()

    def _handle_exit(self, code: int) -> None:
        if self._state.active:
            self.stop("Something went wrong" if code > CODE_CANCEL else "Canceled", code)

    def _render_frame(self) -> None:
        if not self._state.active:
            return
        frames = self._symbols.spinner_frames
        index, dots = advance_frame(self._state, len(frames))
        self._terminal.cursor_to_column_start()
        self._terminal.erase_down()
        self._terminal.write(f"{colors.magenta(frames[index])}  {self._state.message}{dots}")

    # -- context manager ----------------------------------------------------

    def __enter__(self) -> Spinner:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.stop()
        elif issubclass(exc_type, (KeyboardInterrupt, asyncio.CancelledError)):
            self.stop("Canceled", CODE_CANCEL)
        else:
            self.stop("Something went wrong", CODE_ERROR)
