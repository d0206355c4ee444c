"""Field state - the buffer, cursor and viewport of a single-line text field."""

from __future__ import annotations

DEFAULT_DISPLAY_WIDTH = 10
DEFAULT_MAX_LENGTH = 255

_UNSET = object()


class FieldState:
    """Mutable state owned by one text field.

    All attributes are read-only properties. ``update`` is the single
    mutation entry point and is only called by the render pipeline and the
    edit state machine; it validates the complete candidate state before
    committing anything, so a rejected update leaves the state untouched.

    Invariants:
        * ``0 <= cursor <= len(buffer)``
        * ``0 <= viewport_start <= len(buffer)``
        * ``max_length is None or len(buffer) <= max_length``

    The windowed relationship between cursor and viewport is restored by
    rendering (drift correction), not enforced here.
    """

    __slots__ = (
        "_buffer",
        "_cursor",
        "_viewport_start",
        "_display_width",
        "_max_length",
        "_is_password",
        "_is_read_only",
    )

    def __init__(
        self,
        buffer: str = "",
        cursor: int = 0,
        viewport_start: int = 0,
        display_width: int = DEFAULT_DISPLAY_WIDTH,
        max_length: int | None = DEFAULT_MAX_LENGTH,
        is_password: bool = False,
        is_read_only: bool = False,
    ) -> None:
        if display_width < 1:
            raise ValueError(f"display_width must be >= 1, got {display_width}")
        if max_length is not None and max_length < 0:
            raise ValueError(f"max_length must be >= 0, got {max_length}")

        self._display_width = display_width
        self._max_length = max_length
        self._is_password = is_password
        self._is_read_only = is_read_only

        self._check(buffer, cursor, viewport_start)
        self._buffer = buffer
        self._cursor = cursor
        self._viewport_start = viewport_start

    # -- read access --------------------------------------------------------

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def viewport_start(self) -> int:
        return self._viewport_start

    @property
    def display_width(self) -> int:
        return self._display_width

    @property
    def max_length(self) -> int | None:
        return self._max_length

    @property
    def is_password(self) -> bool:
        return self._is_password

    @property
    def is_read_only(self) -> bool:
        return self._is_read_only

    @property
    def at_capacity(self) -> bool:
        """True when another character would exceed ``max_length``."""
        return self._max_length is not None and len(self._buffer) >= self._max_length

    # -- mutation -----------------------------------------------------------

    def update(
        self,
        *,
        buffer: str | object = _UNSET,
        cursor: int | object = _UNSET,
        viewport_start: int | object = _UNSET,
    ) -> None:
        """Replace any of ``buffer``, ``cursor`` and ``viewport_start`` at once.

        Raises ``ValueError`` if the resulting state would break an
        invariant; nothing is changed in that case.
        """
        new_buffer = self._buffer if buffer is _UNSET else buffer
        new_cursor = self._cursor if cursor is _UNSET else cursor
        new_start = self._viewport_start if viewport_start is _UNSET else viewport_start

        self._check(new_buffer, new_cursor, new_start)  # type: ignore[arg-type]

        self._buffer = new_buffer  # type: ignore[assignment]
        self._cursor = new_cursor  # type: ignore[assignment]
        self._viewport_start = new_start  # type: ignore[assignment]

    def _check(self, buffer: str, cursor: int, viewport_start: int) -> None:
        if not isinstance(buffer, str):
            raise ValueError(f"buffer must be a string, got {type(buffer).__name__}")
        length = len(buffer)
        if self._max_length is not None and length > self._max_length:
            raise ValueError(
                f"buffer length {length} exceeds max_length {self._max_length}"
            )
        if not 0 <= cursor <= length:
            raise ValueError(f"cursor {cursor} out of range [0, {length}]")
        if not 0 <= viewport_start <= length:
            raise ValueError(
                f"viewport_start {viewport_start} out of range [0, {length}]"
            )

    def __repr__(self) -> str:
        return (
            f"FieldState(buffer={self._buffer!r}, cursor={self._cursor}, "
            f"viewport_start={self._viewport_start}, "
            f"display_width={self._display_width}, max_length={self._max_length}, "
            f"is_password={self._is_password}, is_read_only={self._is_read_only})"
        )
