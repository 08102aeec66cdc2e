"""Tests for smart shelves."""

import json

from sqlalchemy.orm import Session

from app.data.moods import MoodTag
from app.schemas.library_filters import LibraryFilterState
from app.schemas.smart_shelf import SmartShelfCreate, SmartShelfUpdate
from app.services import smart_shelf_service
from app.services.smart_shelf_service import (
    build_smart_shelf_insert_row,
    build_smart_shelf_update_row,
    map_smart_shelf_row_to_domain,
)

NOW = "2024-06-01T10:00:00.000Z"
LATER = "2024-06-02T10:00:00.000Z"


def shelf_row(filter_json: str) -> dict:
    return {
        "id": "shelf-1",
        "name": "Cozy fic",
        "filter_json": filter_json,
        "created_at": NOW,
        "updated_at": NOW,
    }


class TestShelfRowMapping:
    """Test mapping stored shelf rows."""

    def test_stored_filter_is_merged_over_defaults(self):
        shelf = map_smart_shelf_row_to_domain(shelf_row('{"type": "fanfic", "mood_tags": ["cozy"]}'))

        assert shelf.filter.type == "fanfic"
        assert shelf.filter.mood_tags == [MoodTag.COZY]
        assert shelf.filter.sort_field == "createdAt"
        assert shelf.filter.sort_direction == "desc"
        assert shelf.filter.work_state == "all"

    def test_unparsable_filter_uses_defaults(self):
        for bad in ("{not json", "", "[1, 2]"):
            shelf = map_smart_shelf_row_to_domain(shelf_row(bad))
            assert shelf.filter == LibraryFilterState()

    def test_deeply_nested_filter_uses_defaults(self):
        assert smart_shelf_service.parse_filter_json("{" * 100000) == LibraryFilterState()
        assert smart_shelf_service.parse_filter_json("[" * 100000) == LibraryFilterState()

    def test_invalid_field_falls_back_per_field(self):
        shelf = map_smart_shelf_row_to_domain(
            shelf_row('{"type": "podcast", "rating": "E", "sort_field": "title"}')
        )

        assert shelf.filter.type == "all"
        assert shelf.filter.rating == "E"
        assert shelf.filter.sort_field == "title"

    def test_camel_case_keys_from_older_clients(self):
        shelf = map_smart_shelf_row_to_domain(
            shelf_row('{"searchTerms": ["omens"], "workState": "wip", "sortDirection": "asc"}')
        )

        assert shelf.filter.search_terms == ["omens"]
        assert shelf.filter.work_state == "wip"
        assert shelf.filter.sort_direction == "asc"


class TestShelfRowBuilders:
    """Test building shelf rows."""

    def test_blank_name_becomes_untitled(self):
        row = build_smart_shelf_insert_row(SmartShelfCreate(name="   "), "id-1", NOW)

        assert row["name"] == "Untitled shelf"
        assert row["created_at"] == row["updated_at"] == NOW
        assert json.loads(row["filter_json"])["sort_field"] == "createdAt"

    def test_rename_with_blank_keeps_name(self):
        existing = shelf_row("{}")
        row = build_smart_shelf_update_row(existing, SmartShelfUpdate(name="  "), LATER)

        assert row["name"] == "Cozy fic"
        assert row["filter_json"] == "{}"
        assert row["updated_at"] == LATER
        assert row["created_at"] == NOW

    def test_refilter_keeps_name(self):
        existing = shelf_row("{}")
        patch = SmartShelfUpdate(filter=LibraryFilterState(status="reading"))
        row = build_smart_shelf_update_row(existing, patch, LATER)

        assert row["name"] == "Cozy fic"
        assert json.loads(row["filter_json"])["status"] == "reading"


class TestShelfRepository:
    """Test the shelf repository."""

    def test_create_and_list_oldest_first(self, db: Session):
        first = smart_shelf_service.create(db, SmartShelfCreate(name="First"), now=NOW)
        second = smart_shelf_service.create(
            db,
            SmartShelfCreate(name="Second", filter=LibraryFilterState(type="book")),
            now=LATER,
        )

        shelves = smart_shelf_service.get_all(db)

        assert [shelf.id for shelf in shelves] == [first.id, second.id]
        assert shelves[1].filter.type == "book"

    def test_update(self, db: Session):
        shelf = smart_shelf_service.create(db, SmartShelfCreate(name="Queue"), now=NOW)
        updated = smart_shelf_service.update(
            db, shelf.id, SmartShelfUpdate(name="Renamed"), now=LATER
        )

        assert updated.name == "Renamed"
        assert updated.updated_at == LATER
        assert smart_shelf_service.get_by_id(db, shelf.id).name == "Renamed"

    def test_update_unknown_shelf_returns_none(self, db: Session):
        assert smart_shelf_service.update(db, "missing", SmartShelfUpdate(name="x")) is None

    def test_delete(self, db: Session):
        shelf = smart_shelf_service.create(db, SmartShelfCreate(name="Temp"))

        assert smart_shelf_service.delete(db, shelf.id)
        assert smart_shelf_service.get_by_id(db, shelf.id) is None
        assert not smart_shelf_service.delete(db, shelf.id)
