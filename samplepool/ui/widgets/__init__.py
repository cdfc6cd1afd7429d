"""Widgets composing the dual-pane browser window."""
