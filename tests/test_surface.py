"""Tests for colour resolution and the in-memory ScreenSurface."""

from __future__ import annotations

import pytest

from termfield.surface import COLOURS, Attr, ScreenSurface, resolve_colour


class TestResolveColour:
    def test_known_names(self) -> None:
        assert resolve_colour("black") == 0
        assert resolve_colour("white") == 7
        assert set(COLOURS) == {
            "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white",
        }

    def test_case_insensitive(self) -> None:
        assert resolve_colour("Red") == 1

    def test_none_is_default(self) -> None:
        assert resolve_colour(None) is None

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown colour"):
            resolve_colour("mauve")


class TestScreenSurfaceWrite:
    """Writes land in the grid and are clipped to its bounds."""

    def test_write_text(self) -> None:
        screen = ScreenSurface(2, 6)
        screen.write(1, 2, "abc")
        assert screen.text_lines() == ["      ", "  abc "]

    def test_write_clipped_horizontally(self) -> None:
        screen = ScreenSurface(1, 4)
        screen.write(0, 2, "abcdef")
        assert screen.text_lines() == ["  ab"]

    def test_write_off_screen_rows_ignored(self) -> None:
        screen = ScreenSurface(1, 4)
        screen.write(5, 0, "abc")
        screen.write(-1, 0, "abc")
        assert screen.text_lines() == ["    "]

    def test_write_records_attr_and_pair(self) -> None:
        screen = ScreenSurface(1, 3)
        screen.write(0, 0, "x", Attr.BOLD, 2)
        cell = screen.cell(0, 0)
        assert (cell.char, cell.attr, cell.pair) == ("x", Attr.BOLD, 2)


class TestScreenSurfaceAttributes:
    def test_change_attr_keeps_glyphs(self) -> None:
        screen = ScreenSurface(1, 5)
        screen.write(0, 0, "hello")
        screen.change_attr(0, 1, 3, Attr.UNDERLINE, 0)
        assert screen.text_lines() == ["hello"]
        assert screen.cell(0, 0).attr == Attr.NORMAL
        assert all(screen.cell(0, c).attr == Attr.UNDERLINE for c in (1, 2, 3))
        assert screen.cell(0, 4).attr == Attr.NORMAL

    def test_change_attr_clipped(self) -> None:
        screen = ScreenSurface(1, 3)
        screen.change_attr(0, 2, 10, Attr.STANDOUT, 0)
        assert screen.cell(0, 2).attr == Attr.STANDOUT

    def test_colour_pairs_allocated_once(self) -> None:
        screen = ScreenSurface(1, 1)
        first = screen.colour_pair("red", "black")
        second = screen.colour_pair("green", "black")
        assert first == 1
        assert second == 2
        assert screen.colour_pair("red", "black") == first
        assert screen.pair_colours(first) == (1, 0)

    def test_default_pair(self) -> None:
        screen = ScreenSurface(1, 1)
        assert screen.colour_pair(None, None) == 0
        assert screen.pair_colours(0) == (None, None)

    def test_bell_counts(self) -> None:
        screen = ScreenSurface(1, 1)
        screen.bell()
        screen.bell()
        assert screen.bells == 2


class TestScreenSurfaceRenderLines:
    def test_plain_lines_have_no_escapes(self) -> None:
        screen = ScreenSurface(1, 3)
        screen.write(0, 0, "abc")
        assert screen.render_lines() == ["abc"]

    def test_styled_run(self) -> None:
        screen = ScreenSurface(1, 3)
        screen.write(0, 0, "abc")
        screen.change_attr(0, 1, 1, Attr.STANDOUT, 0)
        assert screen.render_lines() == ["a\x1b[0;7mb\x1b[0mc"]

    def test_colour_and_reset_at_end(self) -> None:
        screen = ScreenSurface(1, 2)
        pair = screen.colour_pair("red", "black")
        screen.write(0, 0, "ab", Attr.UNDERLINE, pair)
        assert screen.render_lines() == ["\x1b[0;4;31;40mab\x1b[0m"]
