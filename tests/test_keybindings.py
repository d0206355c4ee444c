"""Tests for the field keybindings manager."""

from __future__ import annotations

import pytest

from termfield.keybindings import (
    DEFAULT_FIELD_KEYBINDINGS,
    FIELD_ACTIONS,
    FieldKeybindingsManager,
    get_field_keybindings,
    set_field_keybindings,
)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaultBindings:
    """Every action has a default binding."""

    def test_all_actions_bound(self) -> None:
        assert set(DEFAULT_FIELD_KEYBINDINGS) == set(FIELD_ACTIONS)

    @pytest.mark.parametrize(
        "data,action",
        [
            ("\x1b[D", "cursorLeft"),
            ("\x02", "cursorLeft"),
            ("\x1b[C", "cursorRight"),
            ("\x06", "cursorRight"),
            ("\x1b[H", "cursorLineStart"),
            ("\x01", "cursorLineStart"),
            ("\x1b[F", "cursorLineEnd"),
            ("\x05", "cursorLineEnd"),
            ("\x7f", "deleteCharBackward"),
            ("\x08", "deleteCharBackward"),
        ],
    )
    def test_default_matches(self, data: str, action: str) -> None:
        mgr = FieldKeybindingsManager()
        assert mgr.matches(data, action) is True  # type: ignore[arg-type]
        assert mgr.action_for(data) == action

    def test_printable_has_no_action(self) -> None:
        mgr = FieldKeybindingsManager()
        assert mgr.action_for("a") is None

    def test_get_keys(self) -> None:
        mgr = FieldKeybindingsManager()
        assert mgr.get_keys("cursorLineStart") == ["home", "ctrl+a"]
        assert mgr.get_keys("deleteCharBackward") == ["backspace"]


# ---------------------------------------------------------------------------
# Overrides
# ---------------------------------------------------------------------------


class TestCustomBindings:
    """User config replaces the defaults for the actions it names."""

    def test_override_single_key(self) -> None:
        mgr = FieldKeybindingsManager(config={"cursorLineStart": "ctrl+g"})
        assert mgr.matches("\x07", "cursorLineStart") is True
        assert mgr.matches("\x01", "cursorLineStart") is False
        # Other actions keep defaults
        assert mgr.matches("\x1b[D", "cursorLeft") is True

    def test_override_with_list(self) -> None:
        mgr = FieldKeybindingsManager(config={"cursorLeft": ["left", "ctrl+h"]})
        assert mgr.get_keys("cursorLeft") == ["left", "ctrl+h"]

    def test_unbound_action(self) -> None:
        mgr = FieldKeybindingsManager(config={"cursorRight": []})
        assert mgr.matches("\x1b[C", "cursorRight") is False
        assert mgr.action_for("\x1b[C") is None

    def test_unknown_action_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown field actions"):
            FieldKeybindingsManager(config={"yank": "ctrl+y"})  # type: ignore[dict-item]

    def test_set_config_resets_to_defaults_first(self) -> None:
        mgr = FieldKeybindingsManager(config={"cursorLineEnd": "ctrl+k"})
        mgr.set_config({})
        assert mgr.matches("\x05", "cursorLineEnd") is True
        assert mgr.matches("\x0b", "cursorLineEnd") is False


# ---------------------------------------------------------------------------
# Global singleton - get_field_keybindings / set_field_keybindings
# ---------------------------------------------------------------------------


class TestGlobalKeybindings:
    """get_field_keybindings / set_field_keybindings manage a global instance."""

    def teardown_method(self):
        # Reset global to ensure test isolation
        import termfield.keybindings as kb_module
        kb_module._global_field_keybindings = None

    def test_get_returns_same_instance(self):
        assert get_field_keybindings() is get_field_keybindings()

    def test_set_replaces_global(self):
        custom = FieldKeybindingsManager(config={"cursorLineStart": "ctrl+g"})
        set_field_keybindings(custom)
        assert get_field_keybindings() is custom
        assert get_field_keybindings().matches("\x07", "cursorLineStart") is True
