"""Exceptions raised by termfield."""

from __future__ import annotations


class TextFieldConfigError(ValueError):
    """Raised when a text field is constructed from an invalid configuration.

    Construction failures are the only errors a caller sees; keystroke
    rejections are reported through the bell instead.
    """
