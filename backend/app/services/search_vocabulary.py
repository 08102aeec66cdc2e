from typing import Sequence

from app.data.moods import mood_label
from app.schemas.readable import ReadableItem
from app.schemas.stats import SearchToken, SearchTokenSource
from app.services.library_filter_service import normalize_for_search


def _add_token(
    tokens: dict[str, SearchToken],
    raw_label: str | None,
    source: SearchTokenSource,
) -> None:
    if not raw_label:
        return
    label = raw_label.strip()
    normalized = normalize_for_search(label)
    if not normalized:
        return

    key = f"{source}::{normalized}"
    existing = tokens.get(key)
    if existing is not None:
        existing.frequency += 1
        return

    tokens[key] = SearchToken(id=key, label=label, normalized=normalized, source=source)


def build_search_vocabulary(items: Sequence[ReadableItem]) -> list[SearchToken]:
    """
    Build search chip suggestions from the library.

    Tokens come from mood labels, fanfic metadata (fandoms, relationships,
    characters, AO3 tags, warnings), book genres and authors. Tokens with the
    same source and normalized text are merged and counted; the first label
    seen is kept.
    """
    tokens: dict[str, SearchToken] = {}

    for item in items:
        for tag in item.mood_tags:
            _add_token(tokens, mood_label(tag), "mood")

        if item.type == "fanfic":
            for fandom in item.fandoms:
                _add_token(tokens, fandom, "fandom")
            for relationship in item.relationships:
                _add_token(tokens, relationship, "relationship")
            for character in item.characters:
                _add_token(tokens, character, "character")
            for tag in item.ao3_tags:
                _add_token(tokens, tag, "ao3-tag")
            for warning in item.warnings:
                _add_token(tokens, warning, "warning")
        elif item.type == "book":
            for genre in item.genres:
                _add_token(tokens, genre, "genre")

        _add_token(tokens, item.author, "author")

    return list(tokens.values())
