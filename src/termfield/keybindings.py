"""Text field keybindings manager."""

from __future__ import annotations

from typing import Literal, get_args

from termfield.keys import KeyId, matches_key

FieldAction = Literal[
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Deletion
    "deleteCharBackward",
]

FIELD_ACTIONS: tuple[FieldAction, ...] = get_args(FieldAction)

FieldKeybindingsConfig = dict[FieldAction, KeyId | list[KeyId]]

DEFAULT_FIELD_KEYBINDINGS: dict[FieldAction, KeyId | list[KeyId]] = {
    # Cursor movement
    "cursorLeft": ["left", "ctrl+b"],
    "cursorRight": ["right", "ctrl+f"],
    "cursorLineStart": ["home", "ctrl+a"],
    "cursorLineEnd": ["end", "ctrl+e"],
    # Deletion
    "deleteCharBackward": "backspace",
}


class FieldKeybindingsManager:
    """Manages keybindings for text fields."""

    def __init__(
        self, config: FieldKeybindingsConfig | None = None
    ) -> None:
        self._action_to_keys: dict[FieldAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: FieldKeybindingsConfig) -> None:
        unknown = set(config) - set(FIELD_ACTIONS)
        if unknown:
            raise ValueError(f"Unknown field actions: {', '.join(sorted(unknown))}")

        self._action_to_keys.clear()

        # Start with defaults
        for action, keys in DEFAULT_FIELD_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def matches(self, data: str, action: FieldAction) -> bool:
        """Check if input matches a specific action."""
        keys = self._action_to_keys.get(action)
        if not keys:
            return False
        for key in keys:
            if matches_key(data, key):
                return True
        return False

    def action_for(self, data: str) -> FieldAction | None:
        """Return the first action bound to *data*, or ``None``."""
        for action in FIELD_ACTIONS:
            if self.matches(data, action):
                return action
        return None

    def get_keys(self, action: FieldAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: FieldKeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_field_keybindings: FieldKeybindingsManager | None = None


def get_field_keybindings() -> FieldKeybindingsManager:
    global _global_field_keybindings
    if _global_field_keybindings is None:
        _global_field_keybindings = FieldKeybindingsManager()
    return _global_field_keybindings


def set_field_keybindings(manager: FieldKeybindingsManager) -> None:
    global _global_field_keybindings
    _global_field_keybindings = manager
