"""Tests for the note/box bordered output."""

from __future__ import annotations

from pi.prompts import colors
from pi.prompts.box import box, box_content_width, note, render_box
from pi.prompts.utils import strip_ansi, visible_width

from .virtual_terminal import VirtualTerminal


def _body_rows(rendered: str) -> list[str]:
    # bar line, title line, body..., bottom border, trailing ""
    return strip_ansi(rendered).split("\n")[2:-2]


class TestBoxContentWidth:
    def test_widest_line_plus_two(self) -> None:
        assert box_content_width(["abc", "abcdefghij", "a"], "title!") == 12

    def test_title_wider_than_body(self) -> None:
        assert box_content_width(["ab"], "a long title") == 14

    def test_ignores_escape_codes(self) -> None:
        assert box_content_width(["\x1b[31mabc\x1b[39m"], "") == 5


class TestRenderBox:
    """Every body row is padded to the same visible width."""

    def test_mixed_width_lines(self) -> None:
        rendered = render_box("abc\nabcdefghij\na", "title!")
        rows = _body_rows(rendered)
        # blank padding row + 3 lines + blank padding row
        assert len(rows) == 5
        # "│  " + content padded to 12 + "│"
        assert {visible_width(row) for row in rows} == {3 + 12 + 1}
        for row in rows:
            assert row.startswith("│  ")
            assert row.endswith("│")
            assert visible_width(row[3:-1]) == 12

    def test_styled_body_lines_align(self, color_palette) -> None:
        rendered = render_box(f"{colors.red('red')}\nplain text", "T", dimmed=False)
        rows = rendered.split("\n")[2:-2]
        assert "\x1b[31mred\x1b[39m" in rows[1]
        assert {visible_width(row) for row in rows} == {3 + 12 + 1}

    def test_top_border_rule_length(self) -> None:
        lines = strip_ansi(render_box("abc\nabcdefghij\na", "title!")).split("\n")
        assert lines[0] == "│"
        # rule = contentWidth - titleWidth - 1 = 12 - 6 - 1
        assert lines[1] == "◇  title! " + "─" * 5 + "╮"

    def test_top_border_rule_at_least_one(self) -> None:
        lines = strip_ansi(render_box("a", "a much longer title")).split("\n")
        # contentWidth = 19 + 2 -> rule = 21 - 19 - 1 = 1
        assert lines[1].endswith(" ─╮")

    def test_bottom_border_length(self) -> None:
        lines = strip_ansi(render_box("abc\nabcdefghij\na", "title!")).split("\n")
        assert lines[-2] == "├" + "─" * 14 + "╯"
        assert lines[-1] == ""

    def test_empty_message(self) -> None:
        rows = _body_rows(render_box("", ""))
        assert len(rows) == 3
        assert {visible_width(row) for row in rows} == {3 + 2 + 1}


class TestBoxOutput:
    def test_note_writes_once(self) -> None:
        term = VirtualTerminal()
        note("hello", "Heads up", terminal=term)
        assert term.write_count == 1
        assert term.output == render_box("hello", "Heads up", dimmed=True)

    def test_box_is_not_dimmed(self) -> None:
        term = VirtualTerminal()
        box("hello", "Heads up", terminal=term)
        assert term.output == render_box("hello", "Heads up", dimmed=False)

    def test_note_body_dimmed_and_box_body_plain(self, color_palette) -> None:
        noted = VirtualTerminal()
        boxed = VirtualTerminal()
        note("hello", "Heads up", terminal=noted)
        box("hello", "Heads up", terminal=boxed)

        note_rows = noted.output.split("\n")[2:-2]
        box_rows = boxed.output.split("\n")[2:-2]
        assert all("\x1b[2m" in row for row in note_rows)
        assert not any("\x1b[2m" in row for row in box_rows)
        assert "\x1b[2mhello\x1b[22m" in note_rows[1]
        assert strip_ansi(noted.output) == strip_ansi(boxed.output)
