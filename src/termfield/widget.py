"""TextField widget - single-line editable text field with horizontal scrolling."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Mapping, Optional

from termfield.edit import EditResult, apply_key
from termfield.errors import TextFieldConfigError
from termfield.keybindings import FieldAction, FieldKeybindingsManager, get_field_keybindings
from termfield.keys import Key, is_key_release, parse_key
from termfield.render import RenderedField, render_field
from termfield.state import DEFAULT_DISPLAY_WIDTH, DEFAULT_MAX_LENGTH, FieldState
from termfield.surface import Attr, DrawingSurface, ScreenSurface, resolve_colour
from termfield.utils import crop_ansi_line, truncate_to_width

logger = logging.getLogger(__name__)

KeySource = Callable[[], Optional[str]]

_ACTION_KEYS: dict[FieldAction, str] = {
    "cursorLeft": Key.left,
    "cursorRight": Key.right,
    "cursorLineStart": Key.home,
    "cursorLineEnd": Key.end,
    "deleteCharBackward": Key.backspace,
}

# Box-drawing glyphs for the border
_TOP_LEFT = "┌"
_TOP_RIGHT = "┐"
_BOTTOM_LEFT = "└"
_BOTTOM_RIGHT = "┘"
_HORIZONTAL = "─"
_VERTICAL = "│"


@dataclass
class TextFieldOptions:
    """Construction options for ``TextField``. Only ``x`` and ``y`` are required."""

    x: int | None = None
    y: int | None = None
    caption: str | None = None
    caption_colour: str | None = None
    display_width: int = DEFAULT_DISPLAY_WIDTH
    max_length: int | None = DEFAULT_MAX_LENGTH
    mask: str | None = None  # accepted for compatibility, not applied
    value: str = ""
    foreground: str | None = None
    background: str | None = "black"
    border: bool = True
    border_colour: str | None = None
    focus_switch: str = "\t\n"
    cursor_pos: int = 0
    viewport_start: int = 0
    is_password: bool = False
    is_read_only: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TextFieldOptions:
        """Build options from a plain mapping, rejecting unknown keys."""
        _check_option_names(data)
        return cls(**data)


def _check_option_names(data: Mapping[str, Any]) -> None:
    known = {f.name for f in fields(TextFieldOptions)}
    unknown = set(data) - known
    if unknown:
        raise TextFieldConfigError(
            f"Unknown text field option(s): {', '.join(sorted(unknown))}"
        )


_OPTIONAL_TEXT_OPTIONS = (
    "caption",
    "mask",
    "foreground",
    "background",
    "border_colour",
    "caption_colour",
)


def _check_type(name: str, value: Any, expected: type) -> None:
    if isinstance(value, bool) or not isinstance(value, expected):
        raise TextFieldConfigError(
            f"{name} must be {expected.__name__}, got {type(value).__name__}"
        )


def _validate(options: TextFieldOptions) -> None:
    missing = [name for name in ("x", "y") if getattr(options, name) is None]
    if missing:
        raise TextFieldConfigError(
            f"Missing required option(s): {', '.join(missing)}"
        )
    for name in ("x", "y", "display_width", "cursor_pos", "viewport_start"):
        _check_type(name, getattr(options, name), int)
    if options.max_length is not None:
        _check_type("max_length", options.max_length, int)
    for name in ("value", "focus_switch"):
        _check_type(name, getattr(options, name), str)
    for name in _OPTIONAL_TEXT_OPTIONS:
        if getattr(options, name) is not None:
            _check_type(name, getattr(options, name), str)
    if options.display_width < 1:
        raise TextFieldConfigError(
            f"display_width must be at least 1, got {options.display_width}"
        )
    if options.max_length is not None and options.max_length < 1:
        raise TextFieldConfigError(
            f"max_length must be at least 1, got {options.max_length}"
        )
    if options.cursor_pos < 0:
        raise TextFieldConfigError(f"cursor_pos must be >= 0, got {options.cursor_pos}")
    if options.viewport_start < 0:
        raise TextFieldConfigError(
            f"viewport_start must be >= 0, got {options.viewport_start}"
        )
    for name in ("foreground", "background", "border_colour", "caption_colour"):
        try:
            resolve_colour(getattr(options, name))
        except ValueError as e:
            raise TextFieldConfigError(f"Invalid {name}: {e}") from e


class TextField:
    """Single-line text field with a fixed-width viewport.

    The field owns a ``FieldState``; keystrokes go through the edit state
    machine and drawing goes through the render pipeline, which also
    reconciles the cursor and viewport after programmatic changes.
    """

    def __init__(
        self,
        options: TextFieldOptions | None = None,
        *,
        keybindings: FieldKeybindingsManager | None = None,
        **overrides: Any,
    ) -> None:
        if options is None:
            options = TextFieldOptions.from_dict(overrides)
        elif overrides:
            _check_option_names(overrides)
            options = replace(options, **overrides)
        _validate(options)

        self._options = options
        self._keybindings = keybindings

        value = options.value
        if options.max_length is not None:
            value = value[: options.max_length]
        self._state = FieldState(
            buffer=value,
            cursor=min(options.cursor_pos, len(value)),
            viewport_start=min(options.viewport_start, len(value)),
            display_width=options.display_width,
            max_length=options.max_length,
            is_password=options.is_password,
            is_read_only=options.is_read_only,
        )

        self.on_bell: Callable[[], None] | None = None
        self.on_focus_switch: Callable[[str], None] | None = None

        # Focusable interface
        self.focused: bool = False

        logger.debug(
            "Created text field at (%s, %s) width=%d max_length=%s",
            options.x,
            options.y,
            options.display_width,
            options.max_length,
        )

    # -- accessors ----------------------------------------------------------

    @property
    def options(self) -> TextFieldOptions:
        return self._options

    @property
    def state(self) -> FieldState:
        return self._state

    @property
    def value(self) -> str:
        return self._state.buffer

    @property
    def cursor_pos(self) -> int:
        return self._state.cursor

    @property
    def viewport_start(self) -> int:
        return self._state.viewport_start

    @property
    def footprint(self) -> tuple[int, int]:
        """Return ``(lines, columns)`` occupied on screen, border included."""
        width = self._options.display_width
        if self._options.border:
            return (3, width + 2)
        return (1, width)

    def get_value(self) -> str:
        return self._state.buffer

    def set_value(self, value: str) -> None:
        max_length = self._state.max_length
        if max_length is not None:
            value = value[:max_length]
        self._state.update(
            buffer=value,
            cursor=min(self._state.cursor, len(value)),
            viewport_start=min(self._state.viewport_start, len(value)),
        )

    # -- input --------------------------------------------------------------

    def _bell(self) -> None:
        if self.on_bell:
            self.on_bell()

    def input_key(self, key: str) -> EditResult:
        """Apply one logical key (a ``Key`` name or a single character)."""
        return apply_key(self._state, key, self._bell)

    def is_focus_switch(self, data: str) -> bool:
        """Return ``True`` if raw *data* should move focus away from the field."""
        switch = self._options.focus_switch
        if not data or not switch:
            return False
        if len(data) == 1 and data in switch:
            return True
        key = parse_key(data)
        if "\t" in switch and key in (Key.tab, "shift+tab"):
            return True
        if ("\n" in switch or "\r" in switch) and key == Key.enter:
            return True
        return False

    def decode(self, data: str) -> str | None:
        """Translate raw terminal *data* into a logical key for ``input_key``."""
        if is_key_release(data):
            return None
        kb = self._keybindings or get_field_keybindings()
        action = kb.action_for(data)
        if action is not None:
            return _ACTION_KEYS[action]
        key = parse_key(data)
        if key == Key.space:
            return " "
        return key

    def handle_input(self, data: str) -> EditResult | None:
        """Process raw terminal input.

        Focus-switch keys are handed to ``on_focus_switch`` and never edit
        the field; ``None`` is returned for them and for undecodable input.
        """
        if self.is_focus_switch(data):
            logger.debug("Focus switch on %r", data)
            if self.on_focus_switch:
                self.on_focus_switch(data)
            return None

        key = self.decode(data)
        if key is None:
            logger.debug("Dropped undecodable input %r", data)
            return None
        return self.input_key(key)

    def execute(self, surface: DrawingSurface, key_source: KeySource) -> str:
        """Run an input loop until a focus-switch key arrives, then return it.

        The field is redrawn with its cursor before every read. Rejections
        ring ``surface.bell`` unless ``on_bell`` was set.
        """
        restore_bell = self.on_bell is None
        if restore_bell:
            self.on_bell = surface.bell
        try:
            while True:
                self.draw(surface, show_cursor=True)
                data = key_source()
                if data is None:
                    continue
                if self.is_focus_switch(data):
                    logger.debug("Leaving input loop on %r", data)
                    return data
                key = self.decode(data)
                if key is not None:
                    self.input_key(key)
        finally:
            if restore_bell:
                self.on_bell = None

    # -- drawing ------------------------------------------------------------

    def invalidate(self) -> None:
        pass

    def draw(self, surface: DrawingSurface, show_cursor: bool = False) -> RenderedField:
        """Draw the field at its configured position on *surface*."""
        return self._draw_at(surface, self._options.y, self._options.x, show_cursor)  # type: ignore[arg-type]

    def _draw_at(
        self, surface: DrawingSurface, row: int, col: int, show_cursor: bool
    ) -> RenderedField:
        opts = self._options
        width = opts.display_width
        pair = surface.colour_pair(opts.foreground, opts.background)

        if opts.border:
            self._draw_border(surface, row, col)
            row += 1
            col += 1

        rendered = render_field(self._state)
        surface.write(row, col, rendered.segment, Attr.NORMAL, pair)

        # Underline the field when there is no border to frame it
        if not opts.border:
            surface.change_attr(row, col, width, Attr.UNDERLINE, pair)

        if show_cursor and rendered.cursor_cell is not None:
            cursor_attr = Attr.STANDOUT
            if not opts.border:
                cursor_attr |= Attr.UNDERLINE
            surface.change_attr(row, col + rendered.cursor_cell, 1, cursor_attr, pair)

        return rendered

    def _draw_border(self, surface: DrawingSurface, row: int, col: int) -> None:
        opts = self._options
        width = opts.display_width
        border_pair = surface.colour_pair(opts.border_colour, opts.background)

        surface.write(row, col, _TOP_LEFT + _HORIZONTAL * width + _TOP_RIGHT, Attr.NORMAL, border_pair)
        surface.write(row + 1, col, _VERTICAL, Attr.NORMAL, border_pair)
        surface.write(row + 1, col + width + 1, _VERTICAL, Attr.NORMAL, border_pair)
        surface.write(
            row + 2, col, _BOTTOM_LEFT + _HORIZONTAL * width + _BOTTOM_RIGHT, Attr.NORMAL, border_pair
        )

        if opts.caption:
            caption = truncate_to_width(opts.caption, width)
            caption_pair = surface.colour_pair(
                opts.caption_colour or opts.foreground, opts.background
            )
            surface.write(row, col + 1, caption, Attr.BOLD, caption_pair)

    def render(self, width: int) -> list[str]:
        """Render the field into ANSI-styled lines no wider than *width*.

        The cursor is shown while the field is focused.
        """
        lines, columns = self.footprint
        surface = ScreenSurface(lines, columns)
        self._draw_at(surface, 0, 0, show_cursor=self.focused)
        return [crop_ansi_line(line, max(width, 0)) for line in surface.render_lines()]
