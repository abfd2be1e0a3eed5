"""Viewport windowing for list prompts.

Keeps the cursor row visible inside a fixed number of rows.  The window is
recomputed from the cursor and list length on every render; nothing is
carried between calls.
"""

from __future__ import annotations

import math
from typing import Callable, Sequence, TypeVar

from pi.prompts import colors
from pi.prompts.terminal import get_terminal

T = TypeVar("T")

MIN_VISIBLE = 5
# Rows reserved for the title, bars and footer around a list.
RESERVED_ROWS = 4
LOOKAHEAD_BELOW = 3
LOOKAHEAD_ABOVE = 2
ELLIPSIS = "..."


def effective_max_items(
    count: int,
    max_items: int | None = None,
    rows: int | None = None,
) -> int:
    """Return how many rows a list of *count* items may occupy.

    The caller's *max_items* is bounded by the rows the terminal leaves over,
    the result is never below ``MIN_VISIBLE`` and never above *count*.
    """
    if rows is None:
        rows = get_terminal().rows
    requested = math.inf if max_items is None else max_items
    row_budget = max(rows - RESERVED_ROWS, 0)
    limit = max(min(row_budget, max(requested, MIN_VISIBLE)), MIN_VISIBLE)
    return int(min(limit, count))


def window_start(cursor: int, count: int, max_visible: int) -> int:
    """Return the index of the first visible item for *cursor*."""
    start = 0
    if cursor >= start + max_visible - LOOKAHEAD_BELOW:
        start = max(min(cursor - max_visible + LOOKAHEAD_BELOW, count - max_visible), 0)
    elif cursor < start + LOOKAHEAD_ABOVE:
        start = max(cursor - LOOKAHEAD_ABOVE, 0)
    return start


def limit_options(
    options: Sequence[T],
    cursor: int,
    style: Callable[[T, bool], str],
    max_items: int | None = None,
    rows: int | None = None,
) -> list[str]:
    """Render the visible window of *options* around *cursor*.

    *style* receives each visible option and whether it is the cursor row.
    When the list does not fit, the first and/or last rendered row is
    replaced by a dim ellipsis to signal more items above/below.
    """
    count = len(options)
    if count == 0:
        return []
    if not 0 <= cursor < count:
        raise ValueError(f"Cursor {cursor} outside list of {count} options")

    max_visible = effective_max_items(count, max_items, rows)
    start = window_start(cursor, count, max_visible)
    truncated = max_visible < count
    show_top = truncated and start > 0
    show_bottom = truncated and start + max_visible < count

    visible = options[start : start + max_visible]
    last = len(visible) - 1
    lines: list[str] = []
    for i, option in enumerate(visible):
        if (i == 0 and show_top) or (i == last and show_bottom):
            lines.append(colors.dim(ELLIPSIS))
        else:
            lines.append(style(option, start + i == cursor))
    return lines
