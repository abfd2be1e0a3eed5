"""Bordered note/box output: a single static paint sized to its content."""

from __future__ import annotations

from pi.prompts import colors
from pi.prompts.symbols import get_symbols
from pi.prompts.terminal import Terminal, get_terminal
from pi.prompts.utils import visible_width


def box_content_width(lines: list[str], title: str) -> int:
    """Inner width of a box: widest body line or title, plus two columns."""
    widest = max((visible_width(line) for line in lines), default=0)
    return max(widest, visible_width(title)) + 2


def render_box(message: str = "", title: str = "", dimmed: bool = True) -> str:
    """Return the text of a box around *message* headed by *title*."""
    s = get_symbols()
    lines = f"\n{message}\n".split("\n")
    title_width = visible_width(title)
    width = box_content_width(lines, title)

    body = "\n".join(
        f"{colors.gray(s.bar)}  {colors.dim(line) if dimmed else line}"
        f"{' ' * (width - visible_width(line))}{colors.gray(s.bar)}"
        for line in lines
    )
    rule = s.bar_h * max(width - title_width - 1, 1) + s.corner_top_right
    bottom = s.connect_left + s.bar_h * (width + 2) + s.corner_bottom_right
    return (
        f"{colors.gray(s.bar)}\n"
        f"{colors.green(s.step_submit)}  {colors.reset(title)} {colors.gray(rule)}\n"
        f"{body}\n"
        f"{colors.gray(bottom)}\n"
    )


def build_box(
    message: str = "",
    title: str = "",
    dimmed: bool = True,
    terminal: Terminal | None = None,
) -> None:
    (terminal or get_terminal()).write(render_box(message, title, dimmed))


def note(message: str = "", title: str = "", terminal: Terminal | None = None) -> None:
    """Write a box whose body is dimmed."""
    build_box(message, title, True, terminal)


def box(message: str = "", title: str = "", terminal: Terminal | None = None) -> None:
    """Write a box whose body keeps its own styling."""
    build_box(message, title, False, terminal)
