"""Tracking which keys are held down."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)

KEY_COUNT = 256


def _key_code(key: int | str) -> int:
    code = ord(key) if isinstance(key, str) else int(key)
    if not 0 <= code < KEY_COUNT:
        raise ValueError(f"key code out of range: {code}")
    return code


class InputManager:
    """Remembers the pressed state of each of the 256 keyboard codes."""

    def __init__(self) -> None:
        self._pressed = [False] * KEY_COUNT

    def handle_key_press(self, key: int | str) -> None:
        """Mark the key as held down."""
        code = _key_code(key)
        log.debug("key pressed: %d", code)
        self._pressed[code] = True

    def handle_key_release(self, key: int | str) -> None:
        """Mark the key as released."""
        code = _key_code(key)
        log.debug("key released: %d", code)
        self._pressed[code] = False

    def is_key_pressed(self, key: int | str) -> bool:
        """Return whether the key is currently held down."""
        return self._pressed[_key_code(key)]