"""TaskLog: a live block of streamed output under a heading.

Every write erases the previously painted block and repaints the whole
accumulated output.  The erase height is the number of physical rows the
previous block occupied at the current terminal width, so long lines that
the terminal soft-wrapped are erased completely.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from pi.prompts import colors
from pi.prompts.symbols import Symbols, get_symbols
from pi.prompts.terminal import Terminal, get_terminal
from pi.prompts.utils import frame_rows

logger = logging.getLogger(__name__)


@dataclass
class LogBuffer:
    output: str = ""
    frame: str = ""


class TaskLog:
    """Streaming log for a long-running task.

    *parser* may rewrite the whole accumulated output before each paint.
    *limit* keeps only the last *limit* lines on screen while streaming;
    ``fail`` always dumps everything.
    """

    def __init__(
        self,
        title: str,
        parser: Callable[[str], str] | None = None,
        limit: int | None = None,
        terminal: Terminal | None = None,
        symbols: Symbols | None = None,
    ) -> None:
        self._terminal = terminal or get_terminal()
        self._symbols = symbols or get_symbols()
        self._parser = parser
        self._limit = limit
        self._buffer = LogBuffer()
        self._finished = False

        self._terminal.write(f"{colors.dim(self._symbols.bar)}\n")
        self._terminal.write(f"{colors.green(self._symbols.step_submit)}  {title}\n")

    @property
    def buffer(self) -> LogBuffer:
        return self._buffer

    @property
    def finished(self) -> bool:
        return self._finished

    def write(self, data: str) -> None:
        """Append *data* and repaint the block."""
        if self._finished:
            raise RuntimeError("Cannot write to a finished task log")
        self._clear()
        self._buffer.output += data
        self._print(self._limit)

    def fail(self, message: str) -> None:
        """Replace the heading with an error line and keep the output below it."""
        self._finish()
        self._clear(erase_title=True)
        self._terminal.write(f"{colors.red(self._symbols.error)}  {message}\n")
        self._print()

    def success(self, message: str) -> None:
        """Replace the heading and output with a single success line."""
        self._finish()
        self._clear(erase_title=True)
        self._terminal.write(f"{colors.green(self._symbols.success)}  {message}\n")

    # -- internals ----------------------------------------------------------

    def _finish(self) -> None:
        if self._finished:
            raise RuntimeError("Task log already finished")
        self._finished = True
        logger.debug("Task log finished after %d chars", len(self._buffer.output))

    def _clear(self, erase_title: bool = False) -> None:
        rows = frame_rows(self._buffer.frame, self._terminal.columns)
        if erase_title:
            rows += 1
        if rows == 0:
            return
        self._terminal.move_up(rows)
        self._terminal.erase_down()

    def _print(self, limit: int | None = None) -> None:
        output = self._parser(self._buffer.output) if self._parser else self._buffer.output
        lines = output.split("\n")
        if limit:
            lines = lines[-limit:]
        bar = colors.dim(self._symbols.bar)
        frame = "".join(f"{bar}  {line}\n" for line in lines)
        self._buffer.frame = frame
        self._terminal.write(colors.dim(frame))
