"""Module: qt_drop.py

Author: Michael Economou
Date: 2026-03-02

Qt mime data helpers for the two drag & drop sources.

In-app drags carry a JSON array of paths under INTERNAL_DRAG_MIME_TYPE;
drops from the file manager carry file URLs.
"""

from __future__ import annotations

from collections.abc import Iterable

from PyQt5.QtCore import QMimeData

from samplepool.config import INTERNAL_DRAG_MIME_TYPE
from samplepool.core.ingestion import encode_drag_payload


def build_internal_mime_data(paths: Iterable[str]) -> QMimeData:
    mime = QMimeData()
    mime.setData(INTERNAL_DRAG_MIME_TYPE, encode_drag_payload(paths))
    return mime


def is_internal_drag(mime: QMimeData) -> bool:
    return mime.hasFormat(INTERNAL_DRAG_MIME_TYPE)


def internal_payload(mime: QMimeData) -> bytes:
    return bytes(mime.data(INTERNAL_DRAG_MIME_TYPE))


def external_paths(mime: QMimeData) -> list[str]:
    """Local file paths of an OS drop (remote URLs are ignored)."""
    if not mime.hasUrls():
        return []
    return [url.toLocalFile() for url in mime.urls() if url.isLocalFile()]


def accepts_drop(mime: QMimeData) -> bool:
    return is_internal_drag(mime) or mime.hasUrls()
