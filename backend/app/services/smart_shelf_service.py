"""
Smart shelf row mapping and repository.

A shelf stores its `LibraryFilterState` as JSON. On read the stored JSON is
merged over the default state, so shelves saved before a filter field existed
still load, and unreadable JSON falls back to the defaults.
"""

import json
from typing import Any, Mapping

from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.smart_shelf import SmartShelf as SmartShelfRecord
from app.schemas.library_filters import DEFAULT_LIBRARY_FILTER_STATE, LibraryFilterState
from app.schemas.readable import generate_id
from app.schemas.smart_shelf import SmartShelf, SmartShelfCreate, SmartShelfUpdate
from app.services.readable_mapper import utc_now_iso

logger = get_logger(__name__)

UNTITLED_SHELF_NAME = "Untitled shelf"

# Key spellings written by older clients
_LEGACY_FILTER_KEYS = {
    "searchQuery": "search_query",
    "searchTerms": "search_terms",
    "workState": "work_state",
    "moodTags": "mood_tags",
    "sortField": "sort_field",
    "sortDirection": "sort_direction",
}


def _decode_filter_json(value: Any) -> dict[str, Any]:
    if not value or not isinstance(value, (str, bytes)):
        return {}
    try:
        parsed = json.loads(value)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Undecodable shelf filter JSON: {type(e).__name__}")
        return {}
    if not isinstance(parsed, dict):
        return {}
    return {_LEGACY_FILTER_KEYS.get(key, key): val for key, val in parsed.items()}


def parse_filter_json(value: Any) -> LibraryFilterState:
    """Decode stored filter JSON merged over the default filter state.

    Fields that fail validation are dropped back to their defaults.
    """
    stored = _decode_filter_json(value)
    defaults = DEFAULT_LIBRARY_FILTER_STATE.model_dump()

    try:
        return LibraryFilterState.model_validate({**defaults, **stored})
    except ValidationError as e:
        invalid = {error["loc"][0] for error in e.errors() if error["loc"]}
        logger.warning(f"Ignoring invalid shelf filter fields: {sorted(map(str, invalid))}")
        cleaned = {key: val for key, val in stored.items() if key not in invalid}

    try:
        return LibraryFilterState.model_validate({**defaults, **cleaned})
    except ValidationError:
        return LibraryFilterState()


def map_smart_shelf_row_to_domain(row: Mapping[str, Any]) -> SmartShelf:
    return SmartShelf(
        id=row["id"],
        name=row["name"],
        filter=parse_filter_json(row.get("filter_json")),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def build_smart_shelf_insert_row(data: SmartShelfCreate, shelf_id: str, now: str) -> dict[str, Any]:
    return {
        "id": shelf_id,
        "name": data.name.strip() or UNTITLED_SHELF_NAME,
        "filter_json": data.filter.model_dump_json(),
        "created_at": now,
        "updated_at": now,
    }


def build_smart_shelf_update_row(
    existing: Mapping[str, Any], patch: SmartShelfUpdate, now: str
) -> dict[str, Any]:
    """Apply a patch to a stored row. A blank name keeps the existing name."""
    name = existing["name"]
    if patch.name is not None:
        name = patch.name.strip() or existing["name"]

    filter_json = existing["filter_json"]
    if patch.filter is not None:
        filter_json = patch.filter.model_dump_json()

    return {**existing, "name": name, "filter_json": filter_json, "updated_at": now}


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


def get_all(db: Session) -> list[SmartShelf]:
    """All shelves, oldest first."""
    records = db.query(SmartShelfRecord).order_by(SmartShelfRecord.created_at.asc()).all()
    return [map_smart_shelf_row_to_domain(record.as_row()) for record in records]


def get_by_id(db: Session, shelf_id: str) -> SmartShelf | None:
    record = db.get(SmartShelfRecord, shelf_id)
    if record is None:
        return None
    return map_smart_shelf_row_to_domain(record.as_row())


def create(db: Session, data: SmartShelfCreate, now: str | None = None) -> SmartShelf:
    row = build_smart_shelf_insert_row(data, generate_id(), now or utc_now_iso())
    db.add(SmartShelfRecord(**row))
    db.commit()
    logger.info(f"Created smart shelf {row['id']} ({row['name']})")
    return map_smart_shelf_row_to_domain(row)


def update(
    db: Session, shelf_id: str, patch: SmartShelfUpdate, now: str | None = None
) -> SmartShelf | None:
    """Rename and/or refilter a shelf. Returns None if it does not exist."""
    record = db.get(SmartShelfRecord, shelf_id)
    if record is None:
        return None

    row = build_smart_shelf_update_row(record.as_row(), patch, now or utc_now_iso())
    record.name = row["name"]
    record.filter_json = row["filter_json"]
    record.updated_at = row["updated_at"]
    db.commit()
    return map_smart_shelf_row_to_domain(row)


def delete(db: Session, shelf_id: str) -> bool:
    record = db.get(SmartShelfRecord, shelf_id)
    if record is None:
        return False
    db.delete(record)
    db.commit()
    return True
