"""
Progress mapping.

Turns a readable into a set of progress trackers (percent plus pages,
chapters or time) and applies a progress update made in one of those modes,
keeping the canonical percent in sync. Pure functions; persisting the result
is the repository's job.
"""

import math

from app.schemas.progress import (
    ChaptersProgressUpdate,
    PagesProgressUpdate,
    PercentProgressUpdate,
    PercentTracker,
    ProgressSnapshot,
    ProgressUpdate,
    TimeProgressUpdate,
    TimeTracker,
    UnitTracker,
)
from app.schemas.readable import FanficReadable, ProgressMode, ReadableItem


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def clamp_percent(value: float) -> int:
    """Round and clamp to 0-100. Non-finite input becomes 0."""
    if not math.isfinite(value):
        return 0
    return max(0, min(100, round_half_up(value)))


def percent_from_ratio(current: float | None, total: float | None) -> int | None:
    if current is None or total is None:
        return None
    if not math.isfinite(current) or not math.isfinite(total) or total <= 0:
        return None
    return clamp_percent(current / total * 100)


def _non_negative_whole(value: float) -> int:
    if not math.isfinite(value):
        return 0
    return max(0, round_half_up(value))


def chapter_total(item: FanficReadable) -> int | None:
    """Best known chapter total: planned total, else available, else the legacy count."""
    for candidate in (item.total_chapters, item.available_chapters, item.chapter_count):
        if candidate is not None:
            return candidate
    return None


def build_progress_snapshot(item: ReadableItem) -> ProgressSnapshot:
    trackers = []

    if item.type == "book":
        total, current = item.page_count, item.current_page
        trackers.append(
            UnitTracker(
                kind="pages",
                label="Pages",
                enabled=bool(total and total > 0) or bool(current and current > 0),
                current=current,
                total=total,
            )
        )
    elif item.type == "fanfic":
        total, current = chapter_total(item), item.current_chapter
        trackers.append(
            UnitTracker(
                kind="chapters",
                label="Chapters",
                enabled=bool(total and total > 0) or bool(current and current > 0),
                current=current,
                total=total,
            )
        )

    trackers.append(
        TimeTracker(
            enabled=item.time_current_seconds is not None or item.time_total_seconds is not None,
            current_seconds=item.time_current_seconds,
            total_seconds=item.time_total_seconds,
        )
    )

    return ProgressSnapshot(
        percent=PercentTracker(percent=clamp_percent(item.progress_percent)),
        trackers=trackers,
    )


def _apply_percent(item: ReadableItem, update: PercentProgressUpdate) -> ReadableItem:
    percent = clamp_percent(update.percent)
    changes = {"progress_percent": percent, "progress_mode": ProgressMode.PERCENT}

    # Keep the unit position roughly in sync when the total is known
    if item.type == "book":
        if item.page_count:
            changes["current_page"] = max(0, round_half_up(percent / 100 * item.page_count))
    elif item.type == "fanfic":
        total = chapter_total(item)
        if total:
            changes["current_chapter"] = max(0, round_half_up(percent / 100 * total))

    return item.model_copy(update=changes)


def _apply_pages(item: ReadableItem, update: PagesProgressUpdate) -> ReadableItem:
    if item.type != "book":
        return item

    total = item.page_count
    current = _non_negative_whole(update.current_page)
    if total:
        current = min(current, total)

    percent = percent_from_ratio(current, total)
    return item.model_copy(
        update={
            "current_page": current,
            "progress_percent": percent if percent is not None else item.progress_percent,
            "progress_mode": ProgressMode.UNITS,
        }
    )


def _apply_chapters(item: ReadableItem, update: ChaptersProgressUpdate) -> ReadableItem:
    if item.type != "fanfic":
        return item

    total = chapter_total(item)
    current = _non_negative_whole(update.current_chapter)
    if total is not None:
        current = min(current, total)

    percent = percent_from_ratio(current, total)
    return item.model_copy(
        update={
            "current_chapter": current,
            "progress_percent": percent if percent is not None else item.progress_percent,
            "progress_mode": ProgressMode.UNITS,
        }
    )


def _apply_time(item: ReadableItem, update: TimeProgressUpdate) -> ReadableItem:
    current = _non_negative_whole(update.current_seconds)
    # An update without a total keeps the stored one
    total = item.time_total_seconds
    if update.total_seconds is not None and math.isfinite(update.total_seconds):
        total = max(0, round_half_up(update.total_seconds))

    percent = percent_from_ratio(current, total)
    return item.model_copy(
        update={
            "time_current_seconds": current,
            "time_total_seconds": total,
            "progress_percent": percent if percent is not None else item.progress_percent,
            "progress_mode": ProgressMode.TIME,
        }
    )


def apply_progress_update(item: ReadableItem, update: ProgressUpdate) -> ReadableItem:
    """
    Apply a progress update and return the updated readable.

    Pages updates only apply to books and chapters updates only to fanfic;
    anything else returns the item unchanged. Unit positions are clamped to
    the known total and the percent is re-derived from the ratio when it can
    be. The item's progress_mode is set to the mode that was used.
    """
    if update.kind == "percent":
        return _apply_percent(item, update)
    if update.kind == "pages":
        return _apply_pages(item, update)
    if update.kind == "chapters":
        return _apply_chapters(item, update)
    if update.kind == "time":
        return _apply_time(item, update)
    return item
