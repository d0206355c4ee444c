"""termfield: Single-line editable text field for character-cell terminals."""

# Field state
from termfield.state import DEFAULT_DISPLAY_WIDTH, DEFAULT_MAX_LENGTH, FieldState

# Render pipeline
from termfield.render import MASK_GLYPH, RenderedField, correct_drift, render_field

# Edit state machine
from termfield.edit import EditResult, apply_key, insert_before, remove_at

# Errors
from termfield.errors import TextFieldConfigError

# Keybindings
from termfield.keybindings import (
    DEFAULT_FIELD_KEYBINDINGS,
    FieldAction,
    FieldKeybindingsManager,
    get_field_keybindings,
    set_field_keybindings,
)

# Keyboard input handling
from termfield.keys import Key, KeyId, is_key_release, matches_key, parse_key

# Drawing surfaces
from termfield.surface import COLOURS, Attr, Cell, DrawingSurface, ScreenSurface, resolve_colour

# Utilities
from termfield.utils import is_printable, truncate_to_width, visible_width

# Widget
from termfield.widget import KeySource, TextField, TextFieldOptions

__all__ = [
    # Field state
    "DEFAULT_DISPLAY_WIDTH",
    "DEFAULT_MAX_LENGTH",
    "FieldState",
    # Render
    "MASK_GLYPH",
    "RenderedField",
    "correct_drift",
    "render_field",
    # Edit
    "EditResult",
    "apply_key",
    "insert_before",
    "remove_at",
    # Errors
    "TextFieldConfigError",
    # Keybindings
    "DEFAULT_FIELD_KEYBINDINGS",
    "FieldAction",
    "FieldKeybindingsManager",
    "get_field_keybindings",
    "set_field_keybindings",
    # Keys
    "Key",
    "KeyId",
    "is_key_release",
    "matches_key",
    "parse_key",
    # Surface
    "COLOURS",
    "Attr",
    "Cell",
    "DrawingSurface",
    "ScreenSurface",
    "resolve_colour",
    # Utilities
    "is_printable",
    "truncate_to_width",
    "visible_width",
    # Widget
    "KeySource",
    "TextField",
    "TextFieldOptions",
]
