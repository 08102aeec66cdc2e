from pydantic import BaseModel, Field

from app.schemas.library_filters import LibraryFilterState


class SmartShelf(BaseModel):
    """A named, saved library filter."""

    id: str
    name: str
    filter: LibraryFilterState
    created_at: str
    updated_at: str


class SmartShelfCreate(BaseModel):
    name: str = ""
    filter: LibraryFilterState = Field(default_factory=LibraryFilterState)


class SmartShelfUpdate(BaseModel):
    """Partial update. Omitted fields keep their stored values."""

    name: str | None = None
    filter: LibraryFilterState | None = None
