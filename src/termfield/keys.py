"""Keyboard input decoding for terminal text fields.

Turns raw terminal input (legacy CSI/SS3 escape sequences, control bytes,
kitty ``CSI u`` sequences and plain characters) into named key identifiers
such as ``"left"``, ``"ctrl+a"`` or ``"backspace"``. Printable characters
decode to themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str

# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants and modifier combinators."""

    # Special keys
    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# Caps lock / num lock bits reported by kitty; never part of a key id
LOCK_MASK = 64 + 128

CODEPOINTS: dict[str, int] = {
    "escape": 27,
    "tab": 9,
    "enter": 13,
    "space": 32,
    "backspace": 127,
    "kp_enter": 57414,
}

# Legacy escape sequences -> key names
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[Z": "shift+tab",
}

_LETTER_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

_TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    7: "home",
    8: "end",
}

# Kitty functional-key codepoints (private use area) that a text field cares about
_KITTY_FUNCTIONAL_CODEPOINTS: dict[int, str] = {
    57348: "insert",
    57349: "delete",
    57350: "left",
    57351: "right",
    57352: "up",
    57353: "down",
    57354: "pageUp",
    57355: "pageDown",
    57356: "home",
    57357: "end",
}

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# CSI u format: \x1b[<codepoint>(:<shifted>(:<base>))?(;<modifier>(:<event>))?u
_KITTY_CSI_U_RE = re.compile(
    r"^\x1b\[(\d+)(?::(\d*)(?::(\d+))?)?(?:;(\d+)(?::(\d+))?)?u$"
)

# Modified cursor keys: \x1b[1;<modifier>(:<event>)?[ABCDHF]
_MODIFIED_LETTER_RE = re.compile(r"^\x1b\[1;(\d+)(?::(\d+))?([ABCDHF])$")

# Modified functional keys: \x1b[<number>;<modifier>(:<event>)?~
_MODIFIED_TILDE_RE = re.compile(r"^\x1b\[(\d+);(\d+)(?::(\d+))?~$")

# xterm modifyOtherKeys: \x1b[27;<modifier>;<keycode>~
_MODIFY_OTHER_KEYS_RE = re.compile(r"^\x1b\[27;(\d+);(\d+)~$")


@dataclass
class ParsedKittySequence:
    codepoint: int
    modifier: int
    event_type: int  # 1 = press, 2 = repeat, 3 = release


def parse_kitty_sequence(data: str) -> ParsedKittySequence | None:
    """Parse a kitty ``CSI u`` sequence, or return ``None``."""
    match = _KITTY_CSI_U_RE.match(data)
    if not match:
        return None
    return ParsedKittySequence(
        codepoint=int(match.group(1)),
        modifier=int(match.group(4)) if match.group(4) else 1,
        event_type=int(match.group(5)) if match.group(5) else 1,
    )


def is_key_release(data: str) -> bool:
    """Return ``True`` for kitty key-release events, which carry no edit."""
    parsed = parse_kitty_sequence(data)
    if parsed is not None:
        return parsed.event_type == 3
    for pattern in (_MODIFIED_LETTER_RE, _MODIFIED_TILDE_RE):
        match = pattern.match(data)
        if match:
            event = match.group(2) if pattern is _MODIFIED_LETTER_RE else match.group(3)
            return event == "3"
    return False


def _modifier_prefix(modifier: int) -> str:
    mod = (modifier - 1) & ~LOCK_MASK
    prefix = ""
    if mod & MODIFIERS["ctrl"]:
        prefix += "ctrl+"
    if mod & MODIFIERS["shift"]:
        prefix += "shift+"
    if mod & MODIFIERS["alt"]:
        prefix += "alt+"
    return prefix


def _codepoint_key(cp: int, prefix: str) -> str | None:
    for name, code in CODEPOINTS.items():
        if cp == code:
            return prefix + ("enter" if name == "kp_enter" else name)

    functional = _KITTY_FUNCTIONAL_CODEPOINTS.get(cp)
    if functional is not None:
        return prefix + functional

    if cp > 0:
        ch = chr(cp)
        if ch.isprintable():
            if not prefix:
                return ch
            return prefix + ch.lower()
    return None


# ---------------------------------------------------------------------------
# parse_key
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:  # noqa: C901
    """Parse raw terminal input and return the key identifier, or ``None``.

    Plain printable characters are returned unchanged (``"a"``, ``"A"``,
    ``"é"``); everything else uses the ``modifier+name`` form.
    """
    if not data:
        return None

    # --- Kitty protocol ---
    parsed = parse_kitty_sequence(data)
    if parsed is not None:
        return _codepoint_key(parsed.codepoint, _modifier_prefix(parsed.modifier))

    # --- modifyOtherKeys ---
    mok = _MODIFY_OTHER_KEYS_RE.match(data)
    if mok:
        return _codepoint_key(int(mok.group(2)), _modifier_prefix(int(mok.group(1))))

    # --- Legacy escape sequences ---
    if data in LEGACY_KEY_SEQUENCES:
        return LEGACY_KEY_SEQUENCES[data]

    modified = _MODIFIED_LETTER_RE.match(data)
    if modified:
        return _modifier_prefix(int(modified.group(1))) + _LETTER_KEYS[modified.group(3)]

    modified = _MODIFIED_TILDE_RE.match(data)
    if modified:
        name = _TILDE_KEYS.get(int(modified.group(1)))
        if name is None:
            return None
        return _modifier_prefix(int(modified.group(2))) + name

    # --- Simple single-byte keys ---
    if data == "\x1b":
        return "escape"
    if data == "\r" or data == "\n":
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data == "\x7f" or data == "\x08":
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch == "\x7f" or ch == "\x08":
            return "alt+backspace"
        if 1 <= ord(ch) <= 26:
            return "ctrl+alt+" + chr(ord(ch) + ord("a") - 1)
        if ch.isprintable():
            return "alt+" + ch.lower()

    # --- Plain printable character ---
    if len(data) == 1 and data.isprintable():
        return data

    return None


# ---------------------------------------------------------------------------
# matches_key
# ---------------------------------------------------------------------------


def normalize_key_id(key_id: str) -> str:
    """Put the modifiers of *key_id* in canonical ``ctrl+shift+alt+`` order."""
    if len(key_id) == 1:
        return key_id
    parts = key_id.split("+")
    # A trailing "+" is the plus key itself
    if key_id.endswith("+"):
        parts = parts[:-2] + ["+"]
    mods = {p.lower() for p in parts[:-1]}
    base = parts[-1]
    prefix = "".join(f"{m}+" for m in ("ctrl", "shift", "alt") if m in mods)
    if base.lower() == "esc":
        base = "escape"
    elif base.lower() == "return":
        base = "enter"
    return prefix + base


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if raw terminal *data* decodes to *key_id*."""
    if not key_id:
        return False
    parsed = parse_key(data)
    if parsed is None:
        return False
    if parsed == " " and key_id == "space":
        return True
    return normalize_key_id(parsed) == normalize_key_id(key_id)
