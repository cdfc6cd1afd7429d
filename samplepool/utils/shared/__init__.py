"""Shared utilities package.

JSON configuration persistence and formatting helpers.
"""
