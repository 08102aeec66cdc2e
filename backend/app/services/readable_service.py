"""
Readable repository.

Every read goes through `map_row_to_domain` and every write through
`build_row_from_domain`, so callers only ever see normalized domain items.
"""

from datetime import datetime, timezone
from typing import Iterable

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.readable import Readable
from app.schemas.progress import ProgressUpdate
from app.schemas.readable import ReadableItem, ReadableStatus, generate_id
from app.services.progress_service import apply_progress_update, clamp_percent
from app.services.readable_mapper import build_row_from_domain, map_row_to_domain, utc_now_iso

logger = get_logger(__name__)


class ReadableNotFoundError(LookupError):
    """Raised when a write targets a readable id that is not stored."""

    def __init__(self, readable_id: str):
        super().__init__(f"Readable with id {readable_id} not found")
        self.readable_id = readable_id


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def earliest_timestamp(values: Iterable[str | None]) -> str | None:
    """Earliest parseable ISO-8601 value, re-serialized as UTC. None if none parse."""
    parsed = [ts for ts in (_parse_timestamp(v) for v in values) if ts is not None]
    if not parsed:
        return None
    earliest = min(parsed).astimezone(timezone.utc)
    return earliest.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def compute_created_at(
    existing_created_at: str | None,
    started_at: str | None,
    finished_at: str | None,
    dnf_at: str | None,
    now: str,
) -> str:
    """created_at is never later than any reading date; falls back to `now`."""
    return earliest_timestamp([existing_created_at, started_at, finished_at, dnf_at]) or now


def _to_domain(records: list[Readable]) -> list[ReadableItem]:
    return [map_row_to_domain(record.as_row()) for record in records]


def _get_record(db: Session, readable_id: str) -> Readable:
    record = db.get(Readable, readable_id)
    if record is None:
        raise ReadableNotFoundError(readable_id)
    return record


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def get_all(db: Session) -> list[ReadableItem]:
    """All readables, newest first."""
    return _to_domain(db.query(Readable).order_by(Readable.created_at.desc()).all())


def get_all_to_read(db: Session) -> list[ReadableItem]:
    """The queue: to-read items by priority, then newest first."""
    records = (
        db.query(Readable)
        .filter(Readable.status == ReadableStatus.TO_READ.value)
        .order_by(Readable.priority.desc(), Readable.created_at.desc())
        .all()
    )
    return _to_domain(records)


def get_all_finished(db: Session) -> list[ReadableItem]:
    """Finished items, most recently updated first."""
    records = (
        db.query(Readable)
        .filter(Readable.status == ReadableStatus.FINISHED.value)
        .order_by(Readable.updated_at.desc())
        .all()
    )
    return _to_domain(records)


def get_by_status(db: Session, status: ReadableStatus) -> list[ReadableItem]:
    records = (
        db.query(Readable)
        .filter(Readable.status == status.value)
        .order_by(Readable.created_at.desc())
        .all()
    )
    return _to_domain(records)


def get_by_id(db: Session, readable_id: str) -> ReadableItem | None:
    record = db.get(Readable, readable_id)
    if record is None:
        return None
    return map_row_to_domain(record.as_row())


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def insert(db: Session, item: ReadableItem, now: str | None = None) -> ReadableItem:
    """
    Store a new readable under a freshly generated id.

    Reading dates missing for the item's status are stamped with `now`, and
    created_at is pulled back to the earliest reading date if one is older.
    """
    now = now or utc_now_iso()

    started_at, finished_at, dnf_at = item.started_at, item.finished_at, item.dnf_at
    if item.status == ReadableStatus.READING and not started_at:
        started_at = now
    elif item.status == ReadableStatus.FINISHED and not finished_at:
        finished_at = now
    elif item.status == ReadableStatus.DNF and not dnf_at:
        dnf_at = now

    prepared = item.model_copy(
        update={
            "id": generate_id(),
            "started_at": started_at,
            "finished_at": finished_at,
            "dnf_at": dnf_at,
            "created_at": compute_created_at(now, started_at, finished_at, dnf_at, now),
        }
    )

    row = build_row_from_domain(prepared, now)
    db.add(Readable(**row))
    db.commit()

    logger.info(
        f"Added {prepared.type} {prepared.id}",
        extra={"extra_fields": {"readable_id": prepared.id, "status": prepared.status.value}},
    )
    return map_row_to_domain(row)


def update(db: Session, item: ReadableItem, now: str | None = None) -> ReadableItem:
    """
    Replace a stored readable with `item`.

    The item is authoritative, including explicit nulls for cleared dates.
    created_at is recomputed from the stored value and the reading dates but
    never moves forward.
    """
    now = now or utc_now_iso()
    record = _get_record(db, item.id)

    final = item.model_copy(
        update={
            "created_at": compute_created_at(
                record.created_at, item.started_at, item.finished_at, item.dnf_at, now
            )
        }
    )

    row = build_row_from_domain(final, now)
    record.apply_row(row)
    db.commit()
    return map_row_to_domain(row)


def update_status(
    db: Session, readable_id: str, status: ReadableStatus, now: str | None = None
) -> ReadableItem:
    """
    Change status and stamp the matching date if it is not already set.

    finished also sets progress to 100. Moving back to to-read keeps the
    existing dates and progress.
    """
    now = now or utc_now_iso()
    record = _get_record(db, readable_id)

    if status == ReadableStatus.READING:
        record.started_at = record.started_at or now
    elif status == ReadableStatus.FINISHED:
        record.progress_percent = 100
        record.finished_at = record.finished_at or now
    elif status == ReadableStatus.DNF:
        record.dnf_at = record.dnf_at or now

    record.status = status.value
    record.updated_at = now
    db.commit()

    logger.info(f"Readable {readable_id} marked {status.value}")
    return map_row_to_domain(record.as_row())


def update_progress(
    db: Session, readable_id: str, progress_percent: float, now: str | None = None
) -> ReadableItem:
    """Set progress to the rounded, 0-100 clamped percent."""
    record = _get_record(db, readable_id)
    record.progress_percent = clamp_percent(progress_percent)
    record.updated_at = now or utc_now_iso()
    db.commit()
    return map_row_to_domain(record.as_row())


def update_notes(
    db: Session, readable_id: str, notes: str | None, now: str | None = None
) -> ReadableItem:
    record = _get_record(db, readable_id)
    record.notes = notes
    record.updated_at = now or utc_now_iso()
    db.commit()
    return map_row_to_domain(record.as_row())


def save_progress_update(
    db: Session, readable_id: str, progress_update: ProgressUpdate, now: str | None = None
) -> ReadableItem:
    """Apply a pages/chapters/time/percent update and persist the result."""
    record = _get_record(db, readable_id)
    current = map_row_to_domain(record.as_row())
    return update(db, apply_progress_update(current, progress_update), now)


def delete(db: Session, readable_id: str) -> bool:
    """Delete a readable. Returns False if it did not exist."""
    record = db.get(Readable, readable_id)
    if record is None:
        return False
    db.delete(record)
    db.commit()
    logger.info(f"Deleted readable {readable_id}")
    return True
