"""pi-prompts: rendering core for interactive terminal prompts."""

# Static output
from pi.prompts.box import box, build_box, note, render_box

# Orchestration helpers
from pi.prompts.flow import CANCEL, Task, group, is_cancel, tasks

# Exit hooks
from pi.prompts.lifecycle import (
    CODE_CANCEL,
    CODE_ERROR,
    CODE_SUCCESS,
    ProcessHooks,
    SystemProcessHooks,
    register_exit_hooks,
)
from pi.prompts.messages import cancel, intro, log, outro

# Live regions
from pi.prompts.spinner import FrameState, Spinner
from pi.prompts.task_log import LogBuffer, TaskLog

# Glyphs
from pi.prompts.symbols import Symbols, get_symbols, is_unicode_supported, set_symbols

# Render templates
from pi.prompts.templates import (
    render_confirm,
    render_group_multiselect,
    render_multiselect,
    render_password,
    render_select,
    render_select_key,
    render_text,
    required_message,
    state_symbol,
)

# Terminal interface and implementation
from pi.prompts.terminal import ProcessTerminal, Terminal, get_terminal, set_terminal
from pi.prompts.types import (
    ConfirmPromptView,
    GroupMultiSelectPromptView,
    MultiSelectPromptView,
    Option,
    PasswordPromptView,
    PromptState,
    PromptView,
    SelectPromptView,
    TextPromptView,
)

# Utilities
from pi.prompts.utils import frame_rows, line_rows, pad_to_width, strip_ansi, visible_width
from pi.prompts.viewport import effective_max_items, limit_options, window_start

__all__ = [
    # Static output
    "box",
    "build_box",
    "cancel",
    "intro",
    "log",
    "note",
    "outro",
    "render_box",
    # Orchestration
    "CANCEL",
    "Task",
    "group",
    "is_cancel",
    "tasks",
    # Exit hooks
    "CODE_CANCEL",
    "CODE_ERROR",
    "CODE_SUCCESS",
    "ProcessHooks",
    "SystemProcessHooks",
    "register_exit_hooks",
    # Live regions
    "FrameState",
    "LogBuffer",
    "Spinner",
    "TaskLog",
    # Glyphs
    "Symbols",
    "get_symbols",
    "is_unicode_supported",
    "set_symbols",
    # Templates
    "render_confirm",
    "render_group_multiselect",
    "render_multiselect",
    "render_password",
    "render_select",
    "render_select_key",
    "render_text",
    "required_message",
    "state_symbol",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    "get_terminal",
    "set_terminal",
    # Types
    "ConfirmPromptView",
    "GroupMultiSelectPromptView",
    "MultiSelectPromptView",
    "Option",
    "PasswordPromptView",
    "PromptState",
    "PromptView",
    "SelectPromptView",
    "TextPromptView",
    # Utilities
    "effective_max_items",
    "frame_rows",
    "limit_options",
    "line_rows",
    "pad_to_width",
    "strip_ansi",
    "visible_width",
    "window_start",
]
