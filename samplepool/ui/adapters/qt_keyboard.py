"""Module: qt_keyboard.py.

Author: Michael Economou
Date: 2026-03-02

Qt keyboard adapter - converts Qt keyboard types to domain types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt5.QtCore import Qt

from samplepool.domain.keyboard import Key, KeyboardModifier, KeyPress

if TYPE_CHECKING:
    from PyQt5.QtGui import QKeyEvent

_KEY_MAP = {
    Qt.Key_Up: Key.UP,
    Qt.Key_Down: Key.DOWN,
    Qt.Key_Left: Key.LEFT,
    Qt.Key_Right: Key.RIGHT,
    Qt.Key_Return: Key.ENTER,
    Qt.Key_Enter: Key.ENTER,
    Qt.Key_Space: Key.SPACE,
    Qt.Key_A: Key.A,
    Qt.Key_Escape: Key.ESCAPE,
    Qt.Key_Backspace: Key.BACKSPACE,
}


def qt_modifiers_to_domain(qt_modifiers: Qt.KeyboardModifiers) -> KeyboardModifier:
    """Convert Qt keyboard modifiers to domain KeyboardModifier.

    Example:
        >>> qt_mods = Qt.ControlModifier | Qt.ShiftModifier
        >>> domain_mods = qt_modifiers_to_domain(qt_mods)
        >>> bool(domain_mods & KeyboardModifier.CTRL)
        True

    """
    result = KeyboardModifier.NONE

    if qt_modifiers & Qt.ControlModifier:
        result |= KeyboardModifier.CTRL
    if qt_modifiers & Qt.ShiftModifier:
        result |= KeyboardModifier.SHIFT
    if qt_modifiers & Qt.AltModifier:
        result |= KeyboardModifier.ALT
    if qt_modifiers & Qt.MetaModifier:
        result |= KeyboardModifier.META

    return result


def qt_key_to_domain(qt_key: int) -> Key:
    return _KEY_MAP.get(qt_key, Key.OTHER)


def key_event_to_press(event: QKeyEvent) -> KeyPress:
    """Convert a QKeyEvent into a KeyPress."""
    return KeyPress(qt_key_to_domain(event.key()), qt_modifiers_to_domain(event.modifiers()))
