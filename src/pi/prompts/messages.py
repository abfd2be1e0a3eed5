"""One-shot static output: intro/outro/cancel lines and log messages."""

from __future__ import annotations

from pi.prompts import colors
from pi.prompts.symbols import get_symbols
from pi.prompts.terminal import Terminal, get_terminal


def intro(title: str = "", terminal: Terminal | None = None) -> None:
    s = get_symbols()
    (terminal or get_terminal()).write(f"{colors.gray(s.bar_start)}  {title}\n")


def outro(message: str = "", terminal: Terminal | None = None) -> None:
    s = get_symbols()
    (terminal or get_terminal()).write(
        f"{colors.gray(s.bar)}\n{colors.gray(s.bar_end)}  {message}\n\n"
    )


def cancel(message: str = "", terminal: Terminal | None = None) -> None:
    s = get_symbols()
    (terminal or get_terminal()).write(f"{colors.gray(s.bar_end)}  {colors.red(message)}\n\n")


class _Log:
    """Bar-prefixed log lines with a leading status symbol."""

    def message(
        self,
        message: str = "",
        symbol: str | None = None,
        terminal: Terminal | None = None,
    ) -> None:
        bar = colors.gray(get_symbols().bar)
        if symbol is None:
            symbol = bar
        parts = [bar]
        if message:
            first, *rest = message.split("\n")
            parts.append(f"{symbol}  {first}")
            parts.extend(f"{bar}  {line}" for line in rest)
        (terminal or get_terminal()).write("\n".join(parts) + "\n")

    def info(self, message: str, terminal: Terminal | None = None) -> None:
        self.message(message, colors.blue(get_symbols().info), terminal)

    def success(self, message: str, terminal: Terminal | None = None) -> None:
        self.message(message, colors.green(get_symbols().success), terminal)

    def step(self, message: str, terminal: Terminal | None = None) -> None:
        self.message(message, colors.green(get_symbols().step_submit), terminal)

    def warn(self, message: str, terminal: Terminal | None = None) -> None:
        self.message(message, colors.yellow(get_symbols().warn), terminal)

    warning = warn

    def error(self, message: str, terminal: Terminal | None = None) -> None:
        self.message(message, colors.red(get_symbols().error), terminal)


log = _Log()
