from typing import Literal

from pydantic import BaseModel, Field

from app.data.moods import MoodTag
from app.schemas.readable import Ao3Rating, ReadableStatus

LibrarySortField = Literal[
    "createdAt",
    "updatedAt",
    "title",
    "author",
    "priority",
    "progressPercent",
]
LibrarySortDirection = Literal["asc", "desc"]
WorkState = Literal["all", "complete", "wip"]


class LibraryFilterState(BaseModel):
    """Filter and sort choices for the library view.

    Smart shelves store this object as JSON, so new fields must have defaults.
    """

    # Legacy single query, kept for older shelves. New clients use search_terms.
    search_query: str = ""
    # Every term must match (AND)
    search_terms: list[str] = Field(default_factory=list)

    status: Literal["all"] | ReadableStatus = "all"
    type: Literal["all", "book", "fanfic"] = "all"
    rating: Literal["all"] | Ao3Rating = "all"
    work_state: WorkState = "all"
    # Any tag may match (OR)
    mood_tags: list[MoodTag] = Field(default_factory=list)

    sort_field: LibrarySortField = "createdAt"
    sort_direction: LibrarySortDirection = "desc"

    def is_default(self) -> bool:
        """True when no filter narrows the library and the sort is the default."""
        default = LibraryFilterState()
        return (
            self.search_query.strip() == ""
            and not self.search_terms
            and self.status == default.status
            and self.type == default.type
            and self.rating == default.rating
            and self.work_state == default.work_state
            and not self.mood_tags
            and self.sort_field == default.sort_field
            and self.sort_direction == default.sort_direction
        )


DEFAULT_LIBRARY_FILTER_STATE = LibraryFilterState()
