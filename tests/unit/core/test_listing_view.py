"""
Tests for listing sorting and filtering.

Author: Michael Economou
Date: 2026-03-02
"""

from __future__ import annotations

import pytest

from samplepool.core.listing_view import (
    ListingFilter,
    SortColumn,
    SortDirection,
    SortSpec,
    build_view,
    distinct_values,
)
from samplepool.models.file_entry import FileEntry


@pytest.fixture
def listing():
    return [
        FileEntry("Loops", "/s/Loops", is_directory=True),
        FileEntry("kick.wav", "/s/kick.wav", size=300, channels=1, bit_rate=24, sample_rate=48000),
        FileEntry("Snare.aif", "/s/Snare.aif", size=100, channels=2, bit_rate=16, sample_rate=44100),
        FileEntry("hat.mp3", "/s/hat.mp3", size=200),
        FileEntry("fx", "/s/fx", is_directory=True),
    ]


def names(rows):
    return [entry.name for _, entry in rows]


class TestSortSpec:
    def test_same_column_flips_direction(self):
        sort_spec = SortSpec().clicked(SortColumn.NAME)
        assert sort_spec.direction is SortDirection.DESC

    def test_new_column_starts_ascending(self):
        sort_spec = SortSpec(SortColumn.NAME, SortDirection.DESC).clicked(SortColumn.SIZE)
        assert sort_spec == SortSpec(SortColumn.SIZE, SortDirection.ASC)


class TestBuildView:
    """Directories first, then files in the chosen order."""

    def test_default_is_name_ascending(self, listing):
        assert names(build_view(listing)) == ["fx", "Loops", "hat.mp3", "kick.wav", "Snare.aif"]

    def test_indices_refer_to_unfiltered_listing(self, listing):
        rows = build_view(listing)
        for index, entry in rows:
            assert listing[index] is entry

    def test_descending_keeps_directories_first(self, listing):
        rows = build_view(listing, SortSpec(SortColumn.NAME, SortDirection.DESC))
        assert names(rows) == ["Loops", "fx", "Snare.aif", "kick.wav", "hat.mp3"]

    @pytest.mark.parametrize("direction", list(SortDirection))
    @pytest.mark.parametrize("column", list(SortColumn))
    def test_directories_first_for_every_sort(self, listing, column, direction):
        rows = build_view(listing, SortSpec(column, direction))

        kinds = [entry.is_directory for _, entry in rows]
        assert kinds == [True, True, False, False, False]
        assert sorted(index for index, _ in rows) == list(range(len(listing)))

    def test_sort_by_size(self, listing):
        rows = build_view(listing, SortSpec(SortColumn.SIZE))
        assert names(rows)[2:] == ["Snare.aif", "hat.mp3", "kick.wav"]

    def test_missing_audio_values_sort_first(self, listing):
        rows = build_view(listing, SortSpec(SortColumn.SAMPLE_RATE))
        assert names(rows)[2:] == ["hat.mp3", "Snare.aif", "kick.wav"]

    def test_sort_by_format(self, listing):
        rows = build_view(listing, SortSpec(SortColumn.FORMAT))
        assert names(rows)[2:] == ["Snare.aif", "hat.mp3", "kick.wav"]


class TestListingFilter:
    """Filter criteria are combined."""

    def test_inactive_by_default(self):
        assert not ListingFilter().is_active

    def test_search_is_case_insensitive(self, listing):
        rows = build_view(listing, listing_filter=ListingFilter(search_text="SNA"))
        assert names(rows) == ["Snare.aif"]

    def test_hide_directories(self, listing):
        rows = build_view(listing, listing_filter=ListingFilter(hide_directories=True))
        assert names(rows) == ["hat.mp3", "kick.wav", "Snare.aif"]

    def test_audio_criteria_keep_directories(self, listing):
        """Folders stay visible so the user can still navigate."""
        rows = build_view(listing, listing_filter=ListingFilter(channels=2))
        assert names(rows) == ["fx", "Loops", "Snare.aif"]

    def test_criteria_are_combined(self, listing):
        criteria = ListingFilter(hide_directories=True, sample_rate=48000, bit_rate=24)
        assert criteria.is_active
        assert names(build_view(listing, listing_filter=criteria)) == ["kick.wav"]

    def test_format_filter(self, listing):
        rows = build_view(listing, listing_filter=ListingFilter(file_format="AIF"))
        assert names(rows)[2:] == ["Snare.aif"]


def test_distinct_values(listing):
    assert distinct_values(listing, "sample_rate") == [44100, 48000]
    assert distinct_values(listing, "format") == ["AIF", "MP3", "WAV"]
