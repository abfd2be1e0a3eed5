"""Glyph sets for prompt output, chosen once from the terminal's unicode support."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass


def is_unicode_supported() -> bool:
    """Return whether the terminal can be expected to render box-drawing glyphs.

    ``PI_PROMPTS_UNICODE=0|1`` overrides detection.
    """
    override = os.environ.get("PI_PROMPTS_UNICODE")
    if override is not None:
        return override.strip().lower() not in ("0", "false", "no", "")

    if sys.platform != "win32":
        # Linux console (kernel TTY)
        return os.environ.get("TERM") != "linux"

    env = os.environ
    return (
        bool(env.get("WT_SESSION"))  # Windows Terminal
        or bool(env.get("TERMINUS_SUBLIME"))
        or env.get("ConEmuTask") == "{cmd::Cmder}"
        or env.get("TERM_PROGRAM") in ("Terminus-Sublime", "vscode")
        or env.get("TERM") in ("xterm-256color", "alacritty")
        or env.get("TERMINAL_EMULATOR") == "JetBrains-JediTerm"
    )


@dataclass(frozen=True)
class Symbols:
    """Every glyph the prompt renderer draws."""

    step_active: str
    step_cancel: str
    step_error: str
    step_submit: str

    bar_start: str
    bar: str
    bar_end: str

    radio_active: str
    radio_inactive: str
    checkbox_active: str
    checkbox_selected: str
    checkbox_inactive: str
    password_mask: str

    bar_h: str
    corner_top_right: str
    connect_left: str
    corner_bottom_right: str

    info: str
    success: str
    warn: str
    error: str

    spinner_frames: tuple[str, ...]
    spinner_interval: float

    @classmethod
    def unicode(cls) -> Symbols:
        return cls(
            step_active="◆",
            step_cancel="■",
            step_error="▲",
            step_submit="◇",
            bar_start="┌",
            bar="│",
            bar_end="└",
            radio_active="●",
            radio_inactive="○",
            checkbox_active="◻",
            checkbox_selected="◼",
            checkbox_inactive="◻",
            password_mask="▪",
            bar_h="─",
            corner_top_right="╮",
            connect_left="├",
            corner_bottom_right="╯",
            info="●",
            success="◆",
            warn="▲",
            error="■",
            spinner_frames=("◒", "◐", "◓", "◑"),
            spinner_interval=0.08,
        )

    @classmethod
    def ascii(cls) -> Symbols:
        return cls(
            step_active="*",
            step_cancel="x",
            step_error="x",
            step_submit="o",
            bar_start="T",
            bar="|",
            bar_end="—",
            radio_active=">",
            radio_inactive=" ",
            checkbox_active="[•]",
            checkbox_selected="[+]",
            checkbox_inactive="[ ]",
            password_mask="•",
            bar_h="-",
            corner_top_right="+",
            connect_left="+",
            corner_bottom_right="+",
            info="•",
            success="*",
            warn="!",
            error="x",
            spinner_frames=("•", "o", "O", "0"),
            spinner_interval=0.12,
        )


UNICODE = is_unicode_supported()

_symbols = Symbols.unicode() if UNICODE else Symbols.ascii()


def get_symbols() -> Symbols:
    """Return the glyph set selected at startup."""
    return _symbols


def set_symbols(symbols: Symbols) -> None:
    """Replace the process-wide glyph set (tests and embedding applications)."""
    global _symbols
    _symbols = symbols
