"""
Tests for keyboard domain types.

Author: Michael Economou
Date: 2026-03-02
"""

from samplepool.domain.keyboard import Key, KeyboardModifier, KeyPress


def test_command_is_ctrl_or_meta():
    assert KeyboardModifier.CTRL.has_command
    assert KeyboardModifier.META.has_command
    assert not KeyboardModifier.ALT.has_command
    assert not KeyboardModifier.NONE.has_command


def test_combined_modifiers():
    mods = KeyboardModifier.CTRL | KeyboardModifier.SHIFT
    assert mods.has_command
    assert mods.has_shift


def test_key_press_defaults_to_no_modifiers():
    press = KeyPress(Key.ENTER)
    assert not press.has_command
    assert not press.has_shift
    assert KeyPress(Key.DOWN, KeyboardModifier.SHIFT).has_shift
