"""Module: listing_view.py

Author: Michael Economou
Date: 2026-03-02

Sorting and filtering of a pane listing, as a pure view transform.

The view never reorders or mutates the listing itself: it yields
``(index, entry)`` pairs where ``index`` is the position in the unfiltered
listing. Cursor, selection and click handling keep working on those indices,
so changing a filter or the sort order does not move the selection.

Directories always come before files, whatever the sort column or direction.
"""

from __future__ import annotations

import locale
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from samplepool.models.file_entry import FileEntry


class SortColumn(Enum):
    NAME = "name"
    SIZE = "size"
    FORMAT = "format"
    BIT_RATE = "bit_rate"
    SAMPLE_RATE = "sample_rate"
    CHANNELS = "channels"


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True, slots=True)
class SortSpec:
    column: SortColumn = SortColumn.NAME
    direction: SortDirection = SortDirection.ASC

    def clicked(self, column: SortColumn) -> SortSpec:
        """Header click: same column flips direction, another column starts ascending."""
        if column is self.column:
            return SortSpec(column, self.direction.toggled())
        return SortSpec(column, SortDirection.ASC)


@dataclass(frozen=True, slots=True)
class ListingFilter:
    """Filter criteria, combined with AND. ``None`` means "all"."""

    search_text: str = ""
    hide_directories: bool = False
    channels: int | None = None
    sample_rate: int | None = None
    bit_rate: int | None = None
    file_format: str | None = None

    @property
    def is_active(self) -> bool:
        return bool(
            self.search_text.strip()
            or self.hide_directories
            or self.channels is not None
            or self.sample_rate is not None
            or self.bit_rate is not None
            or self.file_format
        )

    def accepts(self, entry: FileEntry) -> bool:
        needle = self.search_text.strip().casefold()
        if needle and needle not in entry.name.casefold():
            return False
        if entry.is_directory:
            return not self.hide_directories
        if self.channels is not None and entry.channels != self.channels:
            return False
        if self.sample_rate is not None and entry.sample_rate != self.sample_rate:
            return False
        if self.bit_rate is not None and entry.bit_rate != self.bit_rate:
            return False
        return not (self.file_format and entry.format != self.file_format)


def name_key(name: str) -> str:
    """Case-insensitive, locale-aware collation key."""
    return locale.strxfrm(name.casefold())


def _numeric(value: int | None) -> int:
    return -1 if value is None else value


def _sort_key(column: SortColumn):
    if column is SortColumn.SIZE:
        return lambda pair: (pair[1].size, name_key(pair[1].name))
    if column is SortColumn.FORMAT:
        return lambda pair: (pair[1].format, name_key(pair[1].name))
    if column is SortColumn.BIT_RATE:
        return lambda pair: (_numeric(pair[1].bit_rate), name_key(pair[1].name))
    if column is SortColumn.SAMPLE_RATE:
        return lambda pair: (_numeric(pair[1].sample_rate), name_key(pair[1].name))
    if column is SortColumn.CHANNELS:
        return lambda pair: (_numeric(pair[1].channels), name_key(pair[1].name))
    return lambda pair: name_key(pair[1].name)


def build_view(
    listing: Sequence[FileEntry],
    sort: SortSpec | None = None,
    listing_filter: ListingFilter | None = None,
) -> list[tuple[int, FileEntry]]:
    """Return the visible rows of ``listing`` as ``(original_index, entry)`` pairs."""
    sort = sort or SortSpec()
    listing_filter = listing_filter or ListingFilter()

    visible = [(i, entry) for i, entry in enumerate(listing) if listing_filter.accepts(entry)]
    directories = [pair for pair in visible if pair[1].is_directory]
    files = [pair for pair in visible if not pair[1].is_directory]

    key = _sort_key(sort.column)
    reverse = sort.direction is SortDirection.DESC
    directories.sort(key=key, reverse=reverse)
    files.sort(key=key, reverse=reverse)
    return directories + files


def distinct_values(listing: Sequence[FileEntry], attribute: str) -> list:
    """Sorted distinct non-empty values of ``attribute`` among files (filter choices)."""
    values = {
        getattr(entry, attribute)
        for entry in listing
        if not entry.is_directory and getattr(entry, attribute) not in (None, "")
    }
    return sorted(values)
