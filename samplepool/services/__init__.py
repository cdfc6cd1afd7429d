"""Concrete services backing the application ports."""
