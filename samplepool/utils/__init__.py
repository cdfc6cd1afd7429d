"""Utility packages: logging, events, shared helpers and application paths."""
