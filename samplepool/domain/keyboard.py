"""Module: keyboard.py.

Author: Michael Economou
Date: 2026-03-02

Domain types for keyboard input handling.

Pure domain layer - no UI dependencies. The Qt adapter converts key events
into KeyPress values; the browser controller dispatches on them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag, auto


class KeyboardModifier(Flag):
    """Keyboard modifier keys (Ctrl, Shift, Alt).

    Uses Flag enum for bitwise operations (multiple modifiers can be active).

    Example:
        >>> mods = KeyboardModifier.CTRL | KeyboardModifier.SHIFT
        >>> bool(mods & KeyboardModifier.CTRL)
        True
        >>> bool(mods & KeyboardModifier.ALT)
        False

    """

    NONE = 0
    CTRL = auto()
    SHIFT = auto()
    ALT = auto()
    META = auto()  # Windows key / Command key

    @property
    def has_command(self) -> bool:
        """Ctrl on Linux/Windows, Cmd on macOS."""
        return bool(self & (KeyboardModifier.CTRL | KeyboardModifier.META))

    @property
    def has_shift(self) -> bool:
        return bool(self & KeyboardModifier.SHIFT)


class Key(Enum):
    """Keys the dual-pane browser reacts to."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    SPACE = auto()
    A = auto()
    ESCAPE = auto()
    BACKSPACE = auto()
    OTHER = auto()


@dataclass(frozen=True, slots=True)
class KeyPress:
    key: Key
    modifiers: KeyboardModifier = KeyboardModifier.NONE

    @property
    def has_command(self) -> bool:
        return self.modifiers.has_command

    @property
    def has_shift(self) -> bool:
        return self.modifiers.has_shift
