"""
Library filtering and sorting.

Applies a `LibraryFilterState` to an in-memory list of readables. Search is a
normalized substring match against a per-item haystack; all search terms must
match. Mood tags match if any selected tag is on the item.
"""

import re
from typing import Sequence

from app.schemas.library_filters import (
    LibraryFilterState,
    LibrarySortDirection,
    LibrarySortField,
)
from app.schemas.readable import ReadableItem, ReadableStatus

_SEPARATORS = re.compile(r"[-_]+")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_WHITESPACE = re.compile(r"\s+")

_STRING_SORT_ATTRS = {
    "title": "title",
    "author": "author",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}
_NUMERIC_SORT_ATTRS = {
    "priority": "priority",
    "progressPercent": "progress_percent",
}


def normalize_for_search(text: str) -> str:
    """
    Normalize text for search matching.

    Lowercases, treats hyphens and underscores as spaces, strips other
    punctuation and collapses whitespace, so "Fast-Paced" and "fast paced"
    normalize the same.
    """
    text = _SEPARATORS.sub(" ", text.lower())
    text = _NON_ALNUM.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def _searchable_text(item: ReadableItem) -> str:
    parts = [item.title, item.author]
    if item.description:
        parts.append(item.description)
    parts.extend(tag.value for tag in item.mood_tags)

    if item.type == "fanfic":
        parts.extend(item.fandoms)
        parts.extend(item.relationships)
        parts.extend(item.characters)
        parts.extend(item.ao3_tags)
        parts.extend(item.warnings)
    elif item.type == "book":
        parts.extend(item.genres)

    return " ".join(part for part in parts if part)


def _search_tokens(filter_state: LibraryFilterState) -> list[str]:
    tokens = []
    if filter_state.search_query.strip():
        tokens.append(filter_state.search_query.strip())
    tokens.extend(term.strip() for term in filter_state.search_terms if term.strip())
    return tokens


def is_item_complete(item: ReadableItem) -> bool:
    """Finished, DNF, or at 100% counts as complete for the work-state filter."""
    if item.status in (ReadableStatus.FINISHED, ReadableStatus.DNF):
        return True
    return item.progress_percent >= 100


def matches_filter(item: ReadableItem, filter_state: LibraryFilterState) -> bool:
    tokens = _search_tokens(filter_state)
    if tokens:
        haystack = normalize_for_search(_searchable_text(item))
        for token in tokens:
            needle = normalize_for_search(token)
            if needle and needle not in haystack:
                return False

    if filter_state.status != "all" and item.status != filter_state.status:
        return False

    if filter_state.type != "all" and item.type != filter_state.type:
        return False

    if filter_state.rating != "all":
        rating = item.rating if item.type == "fanfic" else None
        if rating is None or rating != filter_state.rating:
            return False

    if filter_state.work_state != "all":
        complete = is_item_complete(item)
        if filter_state.work_state == "complete" and not complete:
            return False
        if filter_state.work_state == "wip" and complete:
            return False

    if filter_state.mood_tags:
        if not set(filter_state.mood_tags) & set(item.mood_tags):
            return False

    return True


def filter_readables(
    items: Sequence[ReadableItem], filter_state: LibraryFilterState
) -> list[ReadableItem]:
    """Apply only the filtering part of the state, keeping input order."""
    return [item for item in items if matches_filter(item, filter_state)]


def sort_readables(
    items: Sequence[ReadableItem],
    sort_field: LibrarySortField,
    sort_direction: LibrarySortDirection,
) -> list[ReadableItem]:
    """Sort readables. String fields compare case-insensitively; ties keep input order."""
    reverse = sort_direction == "desc"

    if sort_field in _STRING_SORT_ATTRS:
        attr = _STRING_SORT_ATTRS[sort_field]
        return sorted(items, key=lambda item: (getattr(item, attr) or "").casefold(), reverse=reverse)

    if sort_field in _NUMERIC_SORT_ATTRS:
        attr = _NUMERIC_SORT_ATTRS[sort_field]
        return sorted(items, key=lambda item: getattr(item, attr), reverse=reverse)

    return list(items)


def filter_and_sort_readables(
    items: Sequence[ReadableItem], filter_state: LibraryFilterState
) -> list[ReadableItem]:
    """Apply the full library filter state and return a new filtered, sorted list."""
    filtered = filter_readables(items, filter_state)
    return sort_readables(filtered, filter_state.sort_field, filter_state.sort_direction)
