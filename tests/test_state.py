"""Tests for FieldState invariants and its single mutation entry point."""

from __future__ import annotations

import pytest

from termfield.state import DEFAULT_DISPLAY_WIDTH, DEFAULT_MAX_LENGTH, FieldState


class TestFieldStateDefaults:
    """A freshly constructed state matches the documented defaults."""

    def test_defaults(self) -> None:
        state = FieldState()
        assert state.buffer == ""
        assert state.cursor == 0
        assert state.viewport_start == 0
        assert state.display_width == DEFAULT_DISPLAY_WIDTH == 10
        assert state.max_length == DEFAULT_MAX_LENGTH == 255
        assert state.is_password is False
        assert state.is_read_only is False

    def test_unbounded_max_length(self) -> None:
        state = FieldState(buffer="x" * 1000, max_length=None)
        assert len(state.buffer) == 1000
        assert state.at_capacity is False


class TestFieldStateConstruction:
    """Out-of-range initial values are rejected with ValueError."""

    def test_zero_display_width_rejected(self) -> None:
        with pytest.raises(ValueError, match="display_width"):
            FieldState(display_width=0)

    def test_negative_max_length_rejected(self) -> None:
        with pytest.raises(ValueError, match="max_length"):
            FieldState(max_length=-1)

    def test_cursor_past_end_rejected(self) -> None:
        with pytest.raises(ValueError, match="cursor"):
            FieldState(buffer="abc", cursor=4)

    def test_negative_cursor_rejected(self) -> None:
        with pytest.raises(ValueError, match="cursor"):
            FieldState(buffer="abc", cursor=-1)

    def test_viewport_past_end_rejected(self) -> None:
        with pytest.raises(ValueError, match="viewport_start"):
            FieldState(buffer="abc", viewport_start=4)

    def test_buffer_over_max_length_rejected(self) -> None:
        with pytest.raises(ValueError, match="exceeds max_length"):
            FieldState(buffer="abcd", max_length=3)

    def test_cursor_equal_to_length_allowed(self) -> None:
        state = FieldState(buffer="abc", cursor=3)
        assert state.cursor == 3


class TestFieldStateUpdate:
    """update() validates the whole candidate state atomically."""

    def test_update_cursor(self) -> None:
        state = FieldState(buffer="hello")
        state.update(cursor=5)
        assert state.cursor == 5

    def test_update_several_fields(self) -> None:
        state = FieldState(buffer="hello", cursor=5)
        state.update(buffer="hi", cursor=2, viewport_start=0)
        assert (state.buffer, state.cursor, state.viewport_start) == ("hi", 2, 0)

    def test_rejected_update_leaves_state_untouched(self) -> None:
        state = FieldState(buffer="hello", cursor=5, viewport_start=1)
        with pytest.raises(ValueError):
            state.update(buffer="hi")  # cursor 5 would be out of range
        assert state.buffer == "hello"
        assert state.cursor == 5
        assert state.viewport_start == 1

    def test_update_rejects_non_string_buffer(self) -> None:
        state = FieldState()
        with pytest.raises(ValueError, match="string"):
            state.update(buffer=["a", "b"])

    def test_update_respects_max_length(self) -> None:
        state = FieldState(buffer="ab", max_length=2)
        with pytest.raises(ValueError):
            state.update(buffer="abc")

    def test_at_capacity(self) -> None:
        assert FieldState(buffer="abc", max_length=3).at_capacity is True
        assert FieldState(buffer="ab", max_length=3).at_capacity is False

    def test_attributes_are_read_only(self) -> None:
        state = FieldState()
        with pytest.raises(AttributeError):
            state.cursor = 3  # type: ignore[misc]

    def test_repr_mentions_buffer(self) -> None:
        assert "buffer='abc'" in repr(FieldState(buffer="abc"))
