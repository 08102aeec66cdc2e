from typing import Any

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class Readable(Base):
    """One trackable book or fanfic.

    The table is a superset shape covering both variants; columns that do not
    apply to a row's `type` are null. List-valued fields are stored as JSON
    array strings and timestamps as ISO-8601 text.
    """

    __tablename__ = "readables"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    type: Mapped[str] = mapped_column(String(16), index=True)  # book, fanfic

    # Common fields
    title: Mapped[str] = mapped_column(String(500))
    author: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(16), index=True)  # to-read, reading, finished, DNF
    priority: Mapped[int] = mapped_column(Integer, default=3)  # 1-5 scale
    mood_tags_json: Mapped[str | None] = mapped_column(Text)

    # Book fields
    source: Mapped[str | None] = mapped_column(String(32))  # manual, googleBooks, ..., ao3
    source_id: Mapped[str | None] = mapped_column(String(100))
    page_count: Mapped[int | None] = mapped_column(Integer)
    current_page: Mapped[int | None] = mapped_column(Integer)
    genres_json: Mapped[str | None] = mapped_column(Text)

    # Fanfic fields
    ao3_work_id: Mapped[str | None] = mapped_column(String(32))
    ao3_url: Mapped[str | None] = mapped_column(String(500))
    fandoms_json: Mapped[str | None] = mapped_column(Text)
    relationships_json: Mapped[str | None] = mapped_column(Text)
    characters_json: Mapped[str | None] = mapped_column(Text)
    ao3_tags_json: Mapped[str | None] = mapped_column(Text)
    rating: Mapped[str | None] = mapped_column(String(4))  # G, T, M, E, NR
    warnings_json: Mapped[str | None] = mapped_column(Text)
    chapter_count: Mapped[int | None] = mapped_column(Integer)  # legacy single count
    current_chapter: Mapped[int | None] = mapped_column(Integer)
    available_chapters: Mapped[int | None] = mapped_column(Integer)
    total_chapters: Mapped[int | None] = mapped_column(Integer)
    is_complete: Mapped[int | None] = mapped_column(Integer)  # 0/1/null
    word_count: Mapped[int | None] = mapped_column(Integer)

    # Progress
    progress_percent: Mapped[int] = mapped_column(Integer, default=0)
    progress_mode: Mapped[str | None] = mapped_column(String(16))  # units, time, percent
    time_current_seconds: Mapped[int | None] = mapped_column(Integer)
    time_total_seconds: Mapped[int | None] = mapped_column(Integer)
    notes: Mapped[str | None] = mapped_column(Text)

    # Timestamps (ISO-8601 strings)
    created_at: Mapped[str] = mapped_column(String(40), index=True)
    updated_at: Mapped[str] = mapped_column(String(40))
    started_at: Mapped[str | None] = mapped_column(String(40))
    finished_at: Mapped[str | None] = mapped_column(String(40))
    dnf_at: Mapped[str | None] = mapped_column(String(40))

    def as_row(self) -> dict[str, Any]:
        """Return the flat column -> value record for this readable."""
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}

    def apply_row(self, row: dict[str, Any]) -> None:
        """Overwrite every column except the primary key from `row`."""
        for column in self.__table__.columns:
            if column.key != "id" and column.key in row:
                setattr(self, column.key, row[column.key])
