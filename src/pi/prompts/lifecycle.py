"""Process-level exit hooks that let a live region finish its frame.

``register_exit_hooks`` attaches one callback to the five ways a process can
leave a spinner mid-animation (uncaught exception, unhandled asyncio
exception, SIGINT, SIGTERM, interpreter exit) and returns the handle that
detaches it again.  Hooks never swallow the event: once the callback has
run, the previous handler or default disposition takes over.
"""

from __future__ import annotations

import asyncio
import atexit
import logging
import os
import signal
import sys
from types import FrameType, TracebackType
from typing import Any, Callable, Literal, Protocol

logger = logging.getLogger(__name__)

ExitEvent = Literal[
    "uncaught_exception",
    "unhandled_exception",
    "sigint",
    "sigterm",
    "exit",
]

EXIT_EVENTS: tuple[ExitEvent, ...] = (
    "uncaught_exception",
    "unhandled_exception",
    "sigint",
    "sigterm",
    "exit",
)

CODE_SUCCESS = 0
CODE_CANCEL = 1
CODE_ERROR = 2

EXIT_CODES: dict[ExitEvent, int] = {
    "uncaught_exception": CODE_ERROR,
    "unhandled_exception": CODE_ERROR,
    "sigint": CODE_CANCEL,
    "sigterm": CODE_CANCEL,
    "exit": CODE_CANCEL,
}

_SIGNALS: dict[ExitEvent, signal.Signals] = {
    "sigint": signal.SIGINT,
    "sigterm": signal.SIGTERM,
}


class ProcessHooks(Protocol):
    """Registry of handlers for process-level exit events."""

    def add(self, event: ExitEvent, handler: Callable[[], None]) -> None: ...

    def remove(self, event: ExitEvent, handler: Callable[[], None]) -> None: ...


# ---------------------------------------------------------------------------
# SystemProcessHooks
# ---------------------------------------------------------------------------


class SystemProcessHooks:
    """``ProcessHooks`` backed by the interpreter's real hook points.

    One dispatcher per event is installed when its first handler is added and
    removed, restoring the previous hook, when its last handler goes.
    """

    def __init__(self) -> None:
        self._handlers: dict[ExitEvent, list[Callable[[], None]]] = {
            event: [] for event in EXIT_EVENTS
        }
        self._prev_excepthook: Callable[..., Any] | None = None
        self._prev_signal_handlers: dict[ExitEvent, Any] = {}
        self._loop: asyncio.AbstractEventLoop | None = None
        self._prev_loop_handler: Callable[..., Any] | None = None

    def add(self, event: ExitEvent, handler: Callable[[], None]) -> None:
        handlers = self._handlers[event]
        if not handlers:
            self._install(event)
        handlers.append(handler)

    def remove(self, event: ExitEvent, handler: Callable[[], None]) -> None:
        handlers = self._handlers[event]
        if handler in handlers:
            handlers.remove(handler)
            if not handlers:
                self._uninstall(event)

    def _dispatch(self, event: ExitEvent) -> None:
        logger.debug("Exit event %s firing %d handler(s)", event, len(self._handlers[event]))
        for handler in list(self._handlers[event]):
            try:
                handler()
            except Exception:
                logger.debug("Exit handler for %s raised", event, exc_info=True)

    # -- install / uninstall -----------------------------------------------

    def _install(self, event: ExitEvent) -> None:
        if event == "uncaught_exception":
            self._prev_excepthook = sys.excepthook
            sys.excepthook = self._on_uncaught_exception
        elif event == "unhandled_exception":
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("No running event loop; unhandled exception hook skipped")
                return
            self._loop = loop
            self._prev_loop_handler = loop.get_exception_handler()
            loop.set_exception_handler(self._on_loop_exception)
        elif event in _SIGNALS:
            signum = _SIGNALS[event]
            try:
                previous = signal.signal(signum, self._on_signal)
                # None: the handler was not installed from Python
                self._prev_signal_handlers[event] = (
                    previous if previous is not None else signal.SIG_DFL
                )
            except ValueError:
                # signal.signal only works from the main thread
                logger.debug("Cannot install %s handler outside the main thread", signum.name)
        elif event == "exit":
            atexit.register(self._on_exit)

    def _uninstall(self, event: ExitEvent) -> None:
        if event == "uncaught_exception":
            if sys.excepthook == self._on_uncaught_exception:
                sys.excepthook = self._prev_excepthook or sys.__excepthook__
            self._prev_excepthook = None
        elif event == "unhandled_exception":
            loop = self._loop
            if loop is not None and loop.get_exception_handler() == self._on_loop_exception:
                loop.set_exception_handler(self._prev_loop_handler)
            self._loop = None
            self._prev_loop_handler = None
        elif event in _SIGNALS:
            if event in self._prev_signal_handlers:
                previous = self._prev_signal_handlers.pop(event)
                try:
                    signal.signal(_SIGNALS[event], previous)
                except ValueError:
                    logger.debug("Cannot restore %s handler outside the main thread", event)
        elif event == "exit":
            atexit.unregister(self._on_exit)

    # -- dispatchers --------------------------------------------------------

    def _on_uncaught_exception(
        self,
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        previous = self._prev_excepthook or sys.__excepthook__
        try:
            self._dispatch("uncaught_exception")
        finally:
            previous(exc_type, exc, tb)

    def _on_loop_exception(
        self,
        loop: asyncio.AbstractEventLoop,
        context: dict[str, Any],
    ) -> None:
        previous = self._prev_loop_handler
        try:
            self._dispatch("unhandled_exception")
        finally:
            if previous is not None:
                previous(loop, context)
            else:
                loop.default_exception_handler(context)

    def _on_signal(self, signum: int, frame: FrameType | None) -> None:
        event: ExitEvent = "sigint" if signum == signal.SIGINT else "sigterm"
        previous = self._prev_signal_handlers.get(event, signal.SIG_DFL)
        try:
            self._dispatch(event)
        finally:
            if callable(previous):
                previous(signum, frame)
            elif previous == signal.SIG_DFL:
                signal.signal(signum, signal.SIG_DFL)
                os.kill(os.getpid(), signum)

    def _on_exit(self) -> None:
        self._dispatch("exit")


_system_hooks: SystemProcessHooks | None = None


def get_process_hooks() -> ProcessHooks:
    """Return the shared ``SystemProcessHooks`` instance."""
    global _system_hooks
    if _system_hooks is None:
        _system_hooks = SystemProcessHooks()
    return _system_hooks


# ---------------------------------------------------------------------------
# register_exit_hooks
# ---------------------------------------------------------------------------


def register_exit_hooks(
    on_exit: Callable[[int], None],
    hooks: ProcessHooks | None = None,
) -> Callable[[], None]:
    """Call ``on_exit(code)`` when the process leaves abnormally.

    Signals and interpreter exit report ``CODE_CANCEL``, faults report
    ``CODE_ERROR``.  Returns an idempotent function that removes every hook.
    """
    registry = hooks if hooks is not None else get_process_hooks()
    handlers: dict[ExitEvent, Callable[[], None]] = {}

    for event in EXIT_EVENTS:
        code = EXIT_CODES[event]

        def handler(code: int = code) -> None:
            on_exit(code)

        handlers[event] = handler
        registry.add(event, handler)

    def deregister() -> None:
        while handlers:
            event, handler = handlers.popitem()
            registry.remove(event, handler)

    return deregister
