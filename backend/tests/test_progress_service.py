"""Tests for progress mapping."""

import pytest

from app.schemas.progress import (
    ChaptersProgressUpdate,
    PagesProgressUpdate,
    PercentProgressUpdate,
    TimeProgressUpdate,
)
from app.schemas.readable import BookReadable, FanficReadable, ProgressMode
from app.services.progress_service import (
    apply_progress_update,
    build_progress_snapshot,
    clamp_percent,
)


class TestClampPercent:
    @pytest.mark.parametrize(
        "value,expected",
        [(-5, 0), (0, 0), (42.4, 42), (99.6, 100), (250, 100), (float("nan"), 0), (float("inf"), 0)],
    )
    def test_clamp(self, value, expected):
        assert clamp_percent(value) == expected

    @pytest.mark.parametrize("value,expected", [(2.5, 3), (12.5, 13), (0.5, 1), (49.5, 50)])
    def test_halves_round_up(self, value, expected):
        assert clamp_percent(value) == expected


class TestProgressSnapshot:
    """Test tracker snapshots."""

    def test_book_has_pages_and_time_trackers(self):
        book = BookReadable(title="Book", page_count=300, current_page=30, progress_percent=10)
        snapshot = build_progress_snapshot(book)

        assert snapshot.percent.percent == 10
        kinds = [tracker.kind for tracker in snapshot.trackers]
        assert kinds == ["pages", "time"]

        pages = snapshot.trackers[0]
        assert pages.enabled
        assert (pages.current, pages.total) == (30, 300)
        assert not snapshot.trackers[1].enabled

    def test_book_without_pages_is_disabled(self):
        snapshot = build_progress_snapshot(BookReadable(title="Book"))
        assert not snapshot.trackers[0].enabled

    def test_fanfic_chapter_total_fallbacks(self):
        """Total chapters fall back to available, then the legacy count."""
        with_total = FanficReadable(title="Fic", available_chapters=5, total_chapters=10)
        with_available = FanficReadable(title="Fic", available_chapters=5)
        legacy_only = FanficReadable(title="Fic", chapter_count=7)

        assert build_progress_snapshot(with_total).trackers[0].total == 10
        assert build_progress_snapshot(with_available).trackers[0].total == 5
        assert build_progress_snapshot(legacy_only).trackers[0].total == 7

    def test_time_tracker_enabled_with_time_fields(self):
        book = BookReadable(title="Audio", time_current_seconds=600, time_total_seconds=3600)
        time_tracker = build_progress_snapshot(book).trackers[-1]

        assert time_tracker.kind == "time"
        assert time_tracker.enabled
        assert time_tracker.total_seconds == 3600


class TestApplyProgressUpdate:
    """Test applying progress updates."""

    def test_percent_update_syncs_pages(self):
        book = BookReadable(title="Book", page_count=200)
        updated = apply_progress_update(book, PercentProgressUpdate(percent=25.2))

        assert updated.progress_percent == 25
        assert updated.current_page == 50
        assert updated.progress_mode == ProgressMode.PERCENT
        assert book.progress_percent == 0

    def test_percent_update_syncs_chapters(self):
        fic = FanficReadable(title="Fic", available_chapters=8, total_chapters=10)
        updated = apply_progress_update(fic, PercentProgressUpdate(percent=50))

        assert updated.current_chapter == 5

    def test_pages_update_clamps_to_page_count(self):
        book = BookReadable(title="Book", page_count=200, progress_percent=10)
        updated = apply_progress_update(book, PagesProgressUpdate(current_page=250))

        assert updated.current_page == 200
        assert updated.progress_percent == 100
        assert updated.progress_mode == ProgressMode.UNITS

    def test_pages_update_without_total_keeps_percent(self):
        book = BookReadable(title="Book", progress_percent=33)
        updated = apply_progress_update(book, PagesProgressUpdate(current_page=-4))

        assert updated.current_page == 0
        assert updated.progress_percent == 33

    def test_pages_update_ignored_for_fanfic(self):
        fic = FanficReadable(title="Fic")
        assert apply_progress_update(fic, PagesProgressUpdate(current_page=10)) is fic

    def test_chapters_update(self):
        fic = FanficReadable(title="Fic", available_chapters=12, total_chapters=20)
        updated = apply_progress_update(fic, ChaptersProgressUpdate(current_chapter=5))

        assert updated.current_chapter == 5
        assert updated.progress_percent == 25

    def test_chapters_update_clamps_to_available_when_total_unknown(self):
        fic = FanficReadable(title="Fic", available_chapters=4)
        updated = apply_progress_update(fic, ChaptersProgressUpdate(current_chapter=9))

        assert updated.current_chapter == 4
        assert updated.progress_percent == 100

    def test_chapters_update_ignored_for_books(self):
        book = BookReadable(title="Book")
        assert apply_progress_update(book, ChaptersProgressUpdate(current_chapter=3)) is book

    def test_time_update_sets_time_fields(self):
        book = BookReadable(title="Audio")
        updated = apply_progress_update(
            book, TimeProgressUpdate(current_seconds=1800, total_seconds=7200)
        )

        assert updated.time_current_seconds == 1800
        assert updated.time_total_seconds == 7200
        assert updated.progress_percent == 25
        assert updated.progress_mode == ProgressMode.TIME

    def test_time_update_without_any_total_keeps_percent(self):
        fic = FanficReadable(title="Podfic", progress_percent=60)
        updated = apply_progress_update(fic, TimeProgressUpdate(current_seconds=100))

        assert updated.progress_percent == 60
        assert updated.time_current_seconds == 100
        assert updated.time_total_seconds is None

    def test_time_update_without_total_uses_stored_total(self):
        book = BookReadable(title="Audio", time_current_seconds=600, time_total_seconds=7200)
        updated = apply_progress_update(book, TimeProgressUpdate(current_seconds=1800))

        assert updated.time_current_seconds == 1800
        assert updated.time_total_seconds == 7200
        assert updated.progress_percent == 25

    def test_time_update_with_total_replaces_stored_total(self):
        book = BookReadable(title="Audio", time_current_seconds=600, time_total_seconds=7200)
        updated = apply_progress_update(
            book, TimeProgressUpdate(current_seconds=1800, total_seconds=3600)
        )

        assert updated.time_total_seconds == 3600
        assert updated.progress_percent == 50
