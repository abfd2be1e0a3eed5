"""Render templates: turn a prompt snapshot into the frame for its state.

Each ``render_*`` function is handed to a prompt engine as its render
callback.  The engine calls it on every state change and writes the
returned string; the templates never write themselves.
"""

from __future__ import annotations

from typing import Any, Callable, Literal, Sequence

from pi.prompts import colors
from pi.prompts.symbols import get_symbols
from pi.prompts.types import (
    ConfirmPromptView,
    GroupMultiSelectPromptView,
    MultiSelectPromptView,
    Option,
    PasswordPromptView,
    PromptState,
    SelectPromptView,
    TextPromptView,
)
from pi.prompts.viewport import limit_options

OptionState = Literal[
    "inactive",
    "active",
    "selected",
    "active-selected",
    "group-active",
    "group-active-selected",
    "submitted",
    "cancelled",
]


def state_symbol(state: PromptState) -> str:
    s = get_symbols()
    if state == "cancel":
        return colors.red(s.step_cancel)
    if state == "error":
        return colors.yellow(s.step_error)
    if state == "submit":
        return colors.green(s.step_submit)
    return colors.cyan(s.step_active)


def _title(state: PromptState, message: str) -> str:
    return f"{colors.gray(get_symbols().bar)}\n{state_symbol(state)}  {message}\n"


def _hint(option: Option[Any]) -> str:
    return colors.dim(f"({option.hint})") if option.hint else ""


def _error_footer(error: str) -> str:
    s = get_symbols()
    lines = error.split("\n")
    footer = [f"{colors.yellow(s.bar_end)}  {colors.yellow(lines[0])}"]
    footer.extend(f"   {line}" for line in lines[1:])
    return "\n".join(footer)


def required_message() -> str:
    """Error text shown when a required multiselect is submitted empty."""
    def key(name: str) -> str:
        return colors.gray(colors.bg_white(colors.inverse(f" {name} ")))

    hint = f"Press {key('space')} to select, {key('enter')} to submit"
    return f"Please select at least one option.\n{colors.reset(colors.dim(hint))}"


# ---------------------------------------------------------------------------
# text / password / confirm
# ---------------------------------------------------------------------------


def render_text(
    prompt: TextPromptView,
    message: str,
    placeholder: str | None = None,
) -> str:
    s = get_symbols()
    title = _title(prompt.state, message)
    if placeholder:
        placeholder_view = colors.inverse(placeholder[0]) + colors.dim(placeholder[1:])
    else:
        placeholder_view = colors.inverse(colors.hidden("_"))
    value = prompt.value_with_cursor if prompt.value else placeholder_view

    if prompt.state == "error":
        return (
            f"{title.strip()}\n{colors.yellow(s.bar)}  {value}\n"
            f"{colors.yellow(s.bar_end)}  {colors.yellow(prompt.error)}\n"
        )
    if prompt.state == "submit":
        return f"{title}{colors.gray(s.bar)}  {colors.dim(prompt.value or placeholder or '')}"
    if prompt.state == "cancel":
        raw = prompt.value or ""
        trailer = f"\n{colors.gray(s.bar)}" if raw.strip() else ""
        return f"{title}{colors.gray(s.bar)}  {colors.strikethrough(colors.dim(raw))}{trailer}"
    return f"{title}{colors.cyan(s.bar)}  {value}\n{colors.cyan(s.bar_end)}\n"


def render_password(prompt: PasswordPromptView, message: str) -> str:
    s = get_symbols()
    title = _title(prompt.state, message)
    masked = prompt.masked

    if prompt.state == "error":
        return (
            f"{title.strip()}\n{colors.yellow(s.bar)}  {masked}\n"
            f"{colors.yellow(s.bar_end)}  {colors.yellow(prompt.error)}\n"
        )
    if prompt.state == "submit":
        return f"{title}{colors.gray(s.bar)}  {colors.dim(masked)}"
    if prompt.state == "cancel":
        trailer = f"\n{colors.gray(s.bar)}" if masked else ""
        return f"{title}{colors.gray(s.bar)}  {colors.strikethrough(colors.dim(masked))}{trailer}"
    return f"{title}{colors.cyan(s.bar)}  {prompt.value_with_cursor}\n{colors.cyan(s.bar_end)}\n"


def render_confirm(
    prompt: ConfirmPromptView,
    message: str,
    active: str = "Yes",
    inactive: str = "No",
) -> str:
    s = get_symbols()
    title = _title(prompt.state, message)
    value = active if prompt.value else inactive

    if prompt.state == "submit":
        return f"{title}{colors.gray(s.bar)}  {colors.dim(value)}"
    if prompt.state == "cancel":
        return f"{title}{colors.gray(s.bar)}  {colors.strikethrough(colors.dim(value))}\n{colors.gray(s.bar)}"

    def choice(label: str, chosen: bool) -> str:
        if chosen:
            return f"{colors.green(s.radio_active)} {label}"
        return f"{colors.dim(s.radio_inactive)} {colors.dim(label)}"

    return (
        f"{title}{colors.cyan(s.bar)}  {choice(active, prompt.value)} {colors.dim('/')} "
        f"{choice(inactive, not prompt.value)}\n{colors.cyan(s.bar_end)}\n"
    )


# ---------------------------------------------------------------------------
# select / select_key
# ---------------------------------------------------------------------------


def _select_option(option: Option[Any], state: OptionState) -> str:
    s = get_symbols()
    label = option.display_label
    if state == "selected":
        return colors.dim(label)
    if state == "active":
        return f"{colors.green(s.radio_active)} {label} {_hint(option)}"
    if state == "cancelled":
        return colors.strikethrough(colors.dim(label))
    return f"{colors.dim(s.radio_inactive)} {colors.dim(label)}"


def render_select(
    prompt: SelectPromptView,
    message: str,
    max_items: int | None = None,
    rows: int | None = None,
) -> str:
    s = get_symbols()
    title = _title(prompt.state, message)
    current = prompt.options[prompt.cursor]

    if prompt.state == "submit":
        return f"{title}{colors.gray(s.bar)}  {_select_option(current, 'selected')}"
    if prompt.state == "cancel":
        return f"{title}{colors.gray(s.bar)}  {_select_option(current, 'cancelled')}\n{colors.gray(s.bar)}"

    lines = limit_options(
        prompt.options,
        prompt.cursor,
        lambda option, active: _select_option(option, "active" if active else "inactive"),
        max_items=max_items,
        rows=rows,
    )
    joined = f"\n{colors.cyan(s.bar)}  ".join(lines)
    return f"{title}{colors.cyan(s.bar)}  {joined}\n{colors.cyan(s.bar_end)}\n"


def _select_key_option(option: Option[Any], state: OptionState) -> str:
    label = option.display_label
    if state == "selected":
        return colors.dim(label)
    if state == "cancelled":
        return colors.strikethrough(colors.dim(label))
    if state == "active":
        key = colors.bg_cyan(colors.gray(f" {option.value} "))
    else:
        key = colors.gray(colors.bg_white(colors.inverse(f" {option.value} ")))
    return f"{key} {label} {_hint(option)}"


def render_select_key(prompt: SelectPromptView, message: str) -> str:
    """Render a select whose options are chosen by pressing their key."""
    s = get_symbols()
    title = _title(prompt.state, message)

    if prompt.state == "submit":
        chosen = next(o for o in prompt.options if o.value == prompt.value)
        return f"{title}{colors.gray(s.bar)}  {_select_key_option(chosen, 'selected')}"
    if prompt.state == "cancel":
        return (
            f"{title}{colors.gray(s.bar)}  "
            f"{_select_key_option(prompt.options[0], 'cancelled')}\n{colors.gray(s.bar)}"
        )

    joined = f"\n{colors.cyan(s.bar)}  ".join(
        _select_key_option(option, "active" if i == prompt.cursor else "inactive")
        for i, option in enumerate(prompt.options)
    )
    return f"{title}{colors.cyan(s.bar)}  {joined}\n{colors.cyan(s.bar_end)}\n"


# ---------------------------------------------------------------------------
# multiselect
# ---------------------------------------------------------------------------


def _multi_option(option: Option[Any], state: OptionState) -> str:
    s = get_symbols()
    label = option.display_label
    if state == "active":
        return f"{colors.cyan(s.checkbox_active)} {label} {_hint(option)}"
    if state == "selected":
        return f"{colors.green(s.checkbox_selected)} {colors.dim(label)}"
    if state == "cancelled":
        return colors.strikethrough(colors.dim(label))
    if state == "active-selected":
        return f"{colors.green(s.checkbox_selected)} {label} {_hint(option)}"
    if state == "submitted":
        return colors.dim(label)
    return f"{colors.dim(s.checkbox_inactive)} {colors.dim(label)}"


def _chosen_labels(
    options: Sequence[Option[Any]],
    value: Sequence[Any],
    render: Callable[[Option[Any]], str],
) -> str:
    return colors.dim(", ").join(render(o) for o in options if o.value in value)


def render_multiselect(
    prompt: MultiSelectPromptView,
    message: str,
    max_items: int | None = None,
    rows: int | None = None,
) -> str:
    s = get_symbols()
    title = _title(prompt.state, message)

    def style(option: Option[Any], active: bool) -> str:
        selected = option.value in prompt.value
        if active and selected:
            return _multi_option(option, "active-selected")
        if selected:
            return _multi_option(option, "selected")
        return _multi_option(option, "active" if active else "inactive")

    if prompt.state == "submit":
        labels = _chosen_labels(
            prompt.options, prompt.value, lambda o: _multi_option(o, "submitted")
        )
        return f"{title}{colors.gray(s.bar)}  {labels or colors.dim('none')}"
    if prompt.state == "cancel":
        labels = _chosen_labels(
            prompt.options, prompt.value, lambda o: _multi_option(o, "cancelled")
        )
        trailer = f"{labels}\n{colors.gray(s.bar)}" if labels.strip() else ""
        return f"{title}{colors.gray(s.bar)}  {trailer}"

    lines = limit_options(prompt.options, prompt.cursor, style, max_items=max_items, rows=rows)
    if prompt.state == "error":
        joined = f"\n{colors.yellow(s.bar)}  ".join(lines)
        return f"{title}{colors.yellow(s.bar)}  {joined}\n{_error_footer(prompt.error)}\n"
    joined = f"\n{colors.cyan(s.bar)}  ".join(lines)
    return f"{title}{colors.cyan(s.bar)}  {joined}\n{colors.cyan(s.bar_end)}\n"


# ---------------------------------------------------------------------------
# group multiselect
# ---------------------------------------------------------------------------


def _group_option(
    option: Option[Any],
    state: OptionState,
    options: Sequence[Option[Any]],
    selectable_groups: bool,
    spaced_groups: bool,
) -> str:
    s = get_symbols()
    label = option.display_label
    is_item = option.is_group_item
    if is_item:
        index = next(i for i, o in enumerate(options) if o is option)
        following = options[index + 1] if index + 1 < len(options) else None
        is_last = following is None or following.is_group_header
        prefix = f"{s.bar_end if is_last else s.bar} " if selectable_groups else " "
    else:
        prefix = ""
    spacing = f"\n{colors.cyan(s.bar)}  " if spaced_groups and not is_item else ""

    if state == "active":
        return f"{spacing}{colors.dim(prefix)}{colors.cyan(s.checkbox_active)} {label} {_hint(option)}"
    if state == "group-active":
        return f"{spacing}{prefix}{colors.cyan(s.checkbox_active)} {colors.dim(label)}"
    if state == "group-active-selected":
        return f"{spacing}{prefix}{colors.green(s.checkbox_selected)} {colors.dim(label)}"
    if state == "selected":
        return f"{spacing}{colors.dim(prefix)}{colors.green(s.checkbox_selected)} {colors.dim(label)}"
    if state == "cancelled":
        return colors.strikethrough(colors.dim(label))
    if state == "active-selected":
        return f"{spacing}{colors.dim(prefix)}{colors.green(s.checkbox_selected)} {label} {_hint(option)}"
    if state == "submitted":
        return colors.dim(label)
    checkbox = f"{colors.dim(s.checkbox_inactive)} " if is_item or selectable_groups else ""
    return f"{spacing}{colors.dim(prefix)}{checkbox}{colors.dim(label)}"


def render_group_multiselect(
    prompt: GroupMultiSelectPromptView,
    message: str,
    selectable_groups: bool = False,
    spaced_groups: bool = False,
) -> str:
    s = get_symbols()
    title = _title(prompt.state, message)
    options = prompt.options

    if prompt.state == "submit":
        labels = _chosen_labels(options, prompt.value, lambda o: colors.dim(o.display_label))
        return f"{title}{colors.gray(s.bar)}  {labels}"
    if prompt.state == "cancel":
        labels = _chosen_labels(
            options, prompt.value, lambda o: colors.strikethrough(colors.dim(o.display_label))
        )
        trailer = f"{labels}\n{colors.gray(s.bar)}" if labels.strip() else ""
        return f"{title}{colors.gray(s.bar)}  {trailer}"

    cursor_value = options[prompt.cursor].value

    def row(i: int, option: Option[Any]) -> str:
        selected = option.value in prompt.value or (
            option.is_group_header and prompt.is_group_selected(str(option.value))
        )
        active = i == prompt.cursor
        group_active = not active and option.is_group_item and option.group == cursor_value
        if group_active:
            state: OptionState = "group-active-selected" if selected else "group-active"
        elif active and selected:
            state = "active-selected"
        elif selected:
            state = "selected"
        else:
            state = "active" if active else "inactive"
        return _group_option(option, state, options, selectable_groups, spaced_groups)

    rows = [row(i, option) for i, option in enumerate(options)]
    if prompt.state == "error":
        joined = f"\n{colors.yellow(s.bar)}  ".join(rows)
        return f"{title}{colors.yellow(s.bar)}  {joined}\n{_error_footer(prompt.error)}\n"
    joined = f"\n{colors.cyan(s.bar)}  ".join(rows)
    return f"{title}{colors.cyan(s.bar)}  {joined}\n{colors.cyan(s.bar_end)}\n"
