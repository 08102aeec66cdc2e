from typing import Any

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class SmartShelf(Base):
    """A named, saved library filter preset."""

    __tablename__ = "smart_shelves"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    filter_json: Mapped[str] = mapped_column(Text)  # serialized LibraryFilterState

    created_at: Mapped[str] = mapped_column(String(40), index=True)
    updated_at: Mapped[str] = mapped_column(String(40))

    def as_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "filter_json": self.filter_json,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
