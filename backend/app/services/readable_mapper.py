"""
Readable row mapper.

Converts flat `readables` rows (nullable columns, JSON array strings) into
domain readables and back.

Mapping never raises. Malformed JSON, unknown enum values, wrong types and
missing optional columns all fall back to defaults:

- JSON list columns -> []
- progress_mode -> "units"
- status -> "to-read", book source -> "manual", AO3 rating -> None
- unknown mood tags and non-string list entries are dropped
- priority clamped to 1-5 (missing -> 3), progress_percent clamped to 0-100
- non-numeric integer columns -> None

Fanfic chapter progress evolved from a single `chapter_count` column to an
available/total pair. Old rows are reconciled on read (see
`reconcile_chapters`) and the legacy column is re-derived on write, so no
destructive migration is needed.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, TypeVar

from app.core.logging import get_context_logger, get_logger
from app.data.moods import MoodTag
from app.schemas.readable import (
    Ao3Rating,
    BookReadable,
    BookSource,
    FanficReadable,
    ProgressMode,
    ReadableItem,
    ReadableStatus,
)

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)

ReadableRow = dict[str, Any]

# Every column of the `readables` table, in write order.
ROW_COLUMNS = (
    "id",
    "type",
    "title",
    "author",
    "description",
    "status",
    "priority",
    "source",
    "source_id",
    "page_count",
    "current_page",
    "ao3_work_id",
    "ao3_url",
    "fandoms_json",
    "relationships_json",
    "characters_json",
    "ao3_tags_json",
    "rating",
    "warnings_json",
    "chapter_count",
    "current_chapter",
    "available_chapters",
    "total_chapters",
    "is_complete",
    "word_count",
    "genres_json",
    "mood_tags_json",
    "created_at",
    "updated_at",
    "started_at",
    "finished_at",
    "dnf_at",
    "notes",
    "progress_percent",
    "time_current_seconds",
    "time_total_seconds",
    "progress_mode",
)

DEFAULT_PRIORITY = 3


def utc_now_iso() -> str:
    """Current UTC instant as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Decode helpers
# ---------------------------------------------------------------------------


def decode_json_list(value: Any) -> list:
    """Decode a JSON array column.

    Null, empty, invalid JSON and JSON that is not an array all decode to an
    empty list. This is the single place that defaulting happens.
    """
    if not value or not isinstance(value, (str, bytes)):
        return []
    try:
        parsed = json.loads(value)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Undecodable JSON list column: {type(e).__name__}")
        return []
    return parsed if isinstance(parsed, list) else []


def encode_json_list(values: list) -> str:
    return json.dumps([v.value if isinstance(v, Enum) else v for v in values], ensure_ascii=False)


def _string_list(value: Any) -> list[str]:
    return [entry for entry in decode_json_list(value) if isinstance(entry, str)]


def _mood_tags(value: Any) -> list[MoodTag]:
    tags = []
    for entry in decode_json_list(value):
        try:
            tags.append(MoodTag(entry))
        except (ValueError, TypeError):
            logger.debug(f"Dropping unknown mood tag {entry!r}")
    return tags


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return None


def _as_str(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _as_enum(enum_cls: type[E], value: Any, default: E | None) -> E | None:
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return default


def _as_tristate(value: Any) -> bool | None:
    if value is None:
        return None
    return _as_int(value) == 1


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


# ---------------------------------------------------------------------------
# Chapter reconciliation
# ---------------------------------------------------------------------------


def reconcile_chapters(
    legacy_count: int | None,
    available: int | None,
    total: int | None,
    complete: bool | None,
) -> tuple[int | None, int | None]:
    """Derive (available_chapters, total_chapters) for a stored fanfic.

    1. Only the legacy count is known: a complete work has that many chapters
       available and in total; otherwise it is available-so-far with an
       unknown total.
    2. Only the total is known: a complete work has all of it available.
       If the legacy count equals the total on an incomplete work, the total
       was a duplicated legacy value, so it becomes the available count and
       the total is cleared.
    3. Anything else is returned as stored.
    """
    if available is None and total is None and legacy_count is not None:
        if complete:
            return legacy_count, legacy_count
        return legacy_count, None

    if available is None and total is not None:
        if complete:
            return total, total
        if legacy_count is not None and legacy_count == total:
            return legacy_count, None

    return available, total


def derive_stored_chapters(
    legacy_count: int | None,
    available: int | None,
    total: int | None,
    complete: bool | None,
) -> tuple[int | None, int | None, int | None]:
    """Return (available, total, legacy column value) for writing a fanfic.

    The legacy column gets the most "finished" known quantity: total, else
    the legacy count, else available.
    """
    if available is None and total is None and legacy_count is not None:
        available = legacy_count
        total = legacy_count if complete else None
    elif available is not None and total is None and complete:
        total = available

    for candidate in (total, legacy_count, available):
        if candidate is not None:
            return available, total, candidate
    return available, total, None


def _check_chapter_quality(
    readable_id: str,
    legacy_count: int | None,
    available: int | None,
    total: int | None,
) -> None:
    log = get_context_logger(__name__, readable_id=readable_id)
    if available is None and total is not None:
        log.warning(
            f"Unresolved chapter progress for {readable_id}: "
            f"total={total} legacy={legacy_count} with no available count"
        )
    elif available is not None and total is not None and total < available:
        log.warning(
            f"Chapter data for {readable_id} has total ({total}) below available ({available})"
        )


# ---------------------------------------------------------------------------
# Row -> domain
# ---------------------------------------------------------------------------


def _common_fields(row: Mapping[str, Any]) -> dict[str, Any]:
    priority = _as_int(row.get("priority"))
    progress = _as_int(row.get("progress_percent"))
    time_current = _as_int(row.get("time_current_seconds"))
    time_total = _as_int(row.get("time_total_seconds"))

    return {
        "id": _as_str(row.get("id")) or "",
        "title": _as_str(row.get("title")) or "",
        "author": _as_str(row.get("author")) or "",
        "description": _as_str(row.get("description")),
        "status": _as_enum(ReadableStatus, row.get("status"), ReadableStatus.TO_READ),
        "priority": _clamp(priority, 1, 5) if priority is not None else DEFAULT_PRIORITY,
        "mood_tags": _mood_tags(row.get("mood_tags_json")),
        "progress_percent": _clamp(progress, 0, 100) if progress is not None else 0,
        "progress_mode": _as_enum(ProgressMode, row.get("progress_mode"), ProgressMode.UNITS),
        "time_current_seconds": time_current if time_current is None or time_current >= 0 else None,
        "time_total_seconds": time_total if time_total is None or time_total >= 0 else None,
        "created_at": _as_str(row.get("created_at")),
        "updated_at": _as_str(row.get("updated_at")),
        "started_at": _as_str(row.get("started_at")),
        "finished_at": _as_str(row.get("finished_at")),
        "dnf_at": _as_str(row.get("dnf_at")),
        "notes": _as_str(row.get("notes")),
    }


def _non_negative(value: Any) -> int | None:
    number = _as_int(value)
    return number if number is None or number >= 0 else None


def map_row_to_domain(row: Mapping[str, Any]) -> ReadableItem:
    """Convert a stored `readables` row into a `BookReadable` or `FanficReadable`."""
    common = _common_fields(row)
    row_type = row.get("type")

    if row_type == "book":
        return BookReadable(
            **common,
            source=_as_enum(BookSource, row.get("source"), BookSource.MANUAL),
            source_id=_as_str(row.get("source_id")),
            page_count=_non_negative(row.get("page_count")),
            current_page=_non_negative(row.get("current_page")),
            genres=_string_list(row.get("genres_json")),
        )

    if row_type != "fanfic":
        logger.warning(f"Readable {common['id']} has unknown type {row_type!r}; reading as fanfic")

    legacy_count = _as_int(row.get("chapter_count"))
    complete = _as_tristate(row.get("is_complete"))
    available, total = reconcile_chapters(
        legacy_count,
        _as_int(row.get("available_chapters")),
        _as_int(row.get("total_chapters")),
        complete,
    )
    _check_chapter_quality(common["id"], legacy_count, available, total)

    return FanficReadable(
        **common,
        ao3_work_id=_as_str(row.get("ao3_work_id")) or "",
        ao3_url=_as_str(row.get("ao3_url")) or "",
        fandoms=_string_list(row.get("fandoms_json")),
        relationships=_string_list(row.get("relationships_json")),
        characters=_string_list(row.get("characters_json")),
        ao3_tags=_string_list(row.get("ao3_tags_json")),
        warnings=_string_list(row.get("warnings_json")),
        rating=_as_enum(Ao3Rating, row.get("rating"), None),
        chapter_count=legacy_count,
        available_chapters=available,
        total_chapters=total,
        current_chapter=_as_int(row.get("current_chapter")),
        complete=complete,
        word_count=_non_negative(row.get("word_count")),
    )


# ---------------------------------------------------------------------------
# Domain -> row
# ---------------------------------------------------------------------------


def build_row_from_domain(item: ReadableItem, now: str | None = None) -> ReadableRow:
    """Build a full `readables` row ready for INSERT or UPDATE.

    `updated_at` is always set to `now` (current UTC instant by default) and
    `created_at` falls back to it when the item has none yet.
    """
    now = now or utc_now_iso()

    row: ReadableRow = dict.fromkeys(ROW_COLUMNS)
    row.update(
        {
            "id": item.id,
            "type": item.type,
            "title": item.title,
            "author": item.author,
            "description": item.description,
            "status": item.status.value,
            "priority": item.priority,
            "mood_tags_json": encode_json_list(item.mood_tags),
            "created_at": item.created_at or now,
            "updated_at": now,
            "started_at": item.started_at,
            "finished_at": item.finished_at,
            "dnf_at": item.dnf_at,
            "notes": item.notes,
            "progress_percent": item.progress_percent,
            "progress_mode": item.progress_mode.value,
            "time_current_seconds": item.time_current_seconds,
            "time_total_seconds": item.time_total_seconds,
        }
    )

    if item.type == "book":
        row.update(
            {
                "source": item.source.value,
                "source_id": item.source_id,
                "page_count": item.page_count,
                "current_page": item.current_page,
                "genres_json": encode_json_list(item.genres),
            }
        )
    elif item.type == "fanfic":
        available, total, legacy_column = derive_stored_chapters(
            item.chapter_count,
            item.available_chapters,
            item.total_chapters,
            item.complete,
        )
        row.update(
            {
                "source": "ao3",
                "ao3_work_id": item.ao3_work_id,
                "ao3_url": item.ao3_url,
                "fandoms_json": encode_json_list(item.fandoms),
                "relationships_json": encode_json_list(item.relationships),
                "characters_json": encode_json_list(item.characters),
                "ao3_tags_json": encode_json_list(item.ao3_tags),
                "warnings_json": encode_json_list(item.warnings),
                "rating": item.rating.value if item.rating is not None else None,
                "chapter_count": legacy_column,
                "available_chapters": available,
                "total_chapters": total,
                "current_chapter": item.current_chapter,
                "is_complete": None if item.complete is None else int(item.complete),
                "word_count": item.word_count,
            }
        )

    return row
