from pydantic import BaseModel, Field

from app.data.moods import MoodTag
from app.schemas.readable import ReadableItem


class SuggestionFilters(BaseModel):
    include_books: bool = True
    include_fanfic: bool = True
    min_word_count: int | None = Field(None, ge=0)
    max_word_count: int | None = Field(None, ge=0)


class SuggestionContext(BaseModel):
    """What the reader asked for: current moods plus type/length preferences."""

    mood_tags: list[MoodTag] = Field(default_factory=list)
    filters: SuggestionFilters = Field(default_factory=SuggestionFilters)


class SuggestionResult(BaseModel):
    item: ReadableItem
    score: float
    reason: str  # Human-readable explanation of the pick
