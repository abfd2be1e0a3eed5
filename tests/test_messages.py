"""Tests for intro/outro/cancel and log lines."""

from __future__ import annotations

from pi.prompts.messages import cancel, intro, log, outro
from pi.prompts.utils import strip_ansi

from .virtual_terminal import VirtualTerminal


def _output(term: VirtualTerminal) -> str:
    return strip_ansi(term.output)


class TestSessionLines:
    def test_intro(self) -> None:
        term = VirtualTerminal()
        intro("create-app", terminal=term)
        assert _output(term) == "┌  create-app\n"

    def test_outro(self) -> None:
        term = VirtualTerminal()
        outro("All done", terminal=term)
        assert _output(term) == "│\n└  All done\n\n"

    def test_cancel(self) -> None:
        term = VirtualTerminal()
        cancel("Operation cancelled", terminal=term)
        assert _output(term) == "└  Operation cancelled\n\n"


class TestLog:
    def test_message_without_symbol_uses_bar(self) -> None:
        term = VirtualTerminal()
        log.message("hello", terminal=term)
        assert _output(term) == "│\n│  hello\n"

    def test_multiline_message_prefixes_each_line(self) -> None:
        term = VirtualTerminal()
        log.info("first\nsecond", terminal=term)
        assert _output(term) == "│\n●  first\n│  second\n"

    def test_empty_message_writes_bar_only(self) -> None:
        term = VirtualTerminal()
        log.message(terminal=term)
        assert _output(term) == "│\n"

    def test_level_symbols(self) -> None:
        expected = {
            log.info: "●",
            log.success: "◆",
            log.step: "◇",
            log.warn: "▲",
            log.error: "■",
        }
        for method, symbol in expected.items():
            term = VirtualTerminal()
            method("x", terminal=term)
            assert _output(term) == f"│\n{symbol}  x\n"

    def test_warning_alias(self) -> None:
        term = VirtualTerminal()
        log.warning("careful", terminal=term)
        assert _output(term) == "│\n▲  careful\n"

    def test_single_write_per_message(self) -> None:
        term = VirtualTerminal()
        log.error("a\nb\nc", terminal=term)
        assert term.write_count == 1
