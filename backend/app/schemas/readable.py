"""
Domain model for readables.

A readable is either a book or a fanfic. `ReadableItem` is a tagged union
discriminated on the `type` field; code that needs variant-specific fields
branches on `item.type` before touching them.
"""

from enum import Enum
from typing import Annotated, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, Field, TypeAdapter

from app.data.moods import MoodTag


class ReadableStatus(str, Enum):
    TO_READ = "to-read"
    READING = "reading"
    FINISHED = "finished"
    DNF = "DNF"


class ProgressMode(str, Enum):
    UNITS = "units"  # pages for books, chapters for fanfic
    TIME = "time"
    PERCENT = "percent"


class BookSource(str, Enum):
    MANUAL = "manual"
    GOOGLE_BOOKS = "googleBooks"
    OPEN_LIBRARY = "openLibrary"
    GOODREADS = "goodreads"


class Ao3Rating(str, Enum):
    GENERAL = "G"
    TEEN = "T"
    MATURE = "M"
    EXPLICIT = "E"
    NOT_RATED = "NR"


def generate_id() -> str:
    return uuid4().hex


class ReadableBase(BaseModel):
    """Fields shared by every readable."""

    id: str = Field(default_factory=generate_id)
    title: str
    author: str = ""
    description: str | None = None
    status: ReadableStatus = ReadableStatus.TO_READ
    priority: int = Field(3, ge=1, le=5)
    mood_tags: list[MoodTag] = Field(default_factory=list)

    # Progress
    progress_percent: int = Field(0, ge=0, le=100)
    progress_mode: ProgressMode = ProgressMode.UNITS
    time_current_seconds: int | None = Field(None, ge=0)
    time_total_seconds: int | None = Field(None, ge=0)

    # ISO-8601 timestamps; created_at/updated_at are filled in on first write
    created_at: str | None = None
    updated_at: str | None = None
    started_at: str | None = None
    finished_at: str | None = None
    dnf_at: str | None = None

    notes: str | None = None


class BookReadable(ReadableBase):
    type: Literal["book"] = "book"
    source: BookSource = BookSource.MANUAL
    source_id: str | None = None
    page_count: int | None = Field(None, ge=0)
    current_page: int | None = Field(None, ge=0)
    genres: list[str] = Field(default_factory=list)


class FanficReadable(ReadableBase):
    type: Literal["fanfic"] = "fanfic"
    source: Literal["ao3"] = "ao3"
    ao3_work_id: str = ""
    ao3_url: str = ""
    fandoms: list[str] = Field(default_factory=list)
    relationships: list[str] = Field(default_factory=list)
    characters: list[str] = Field(default_factory=list)
    ao3_tags: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    rating: Ao3Rating | None = None

    # Legacy single chapter count kept for older rows. Prefer the pair below.
    chapter_count: int | None = None
    # Chapters posted so far (X in AO3's "X/Y")
    available_chapters: int | None = None
    # Planned chapters (Y in "X/Y"), None while AO3 shows "?"
    total_chapters: int | None = None
    current_chapter: int | None = None
    complete: bool | None = None
    word_count: int | None = Field(None, ge=0)


ReadableItem = Annotated[Union[BookReadable, FanficReadable], Field(discriminator="type")]

readable_adapter: TypeAdapter[ReadableItem] = TypeAdapter(ReadableItem)


class StatusUpdate(BaseModel):
    status: ReadableStatus


class ProgressPercentUpdate(BaseModel):
    progress_percent: float


class NotesUpdate(BaseModel):
    notes: str | None = None
