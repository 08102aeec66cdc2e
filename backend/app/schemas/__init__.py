from app.schemas.library_filters import LibraryFilterState
from app.schemas.progress import ProgressSnapshot, ProgressUpdate
from app.schemas.readable import (
    BookReadable,
    FanficReadable,
    ReadableItem,
    ReadableStatus,
)
from app.schemas.smart_shelf import SmartShelf, SmartShelfCreate, SmartShelfUpdate
from app.schemas.stats import SearchToken, StatsOverview
from app.schemas.suggestion import SuggestionContext, SuggestionFilters, SuggestionResult

__all__ = [
    "BookReadable",
    "FanficReadable",
    "ReadableItem",
    "ReadableStatus",
    "LibraryFilterState",
    "SmartShelf",
    "SmartShelfCreate",
    "SmartShelfUpdate",
    "ProgressSnapshot",
    "ProgressUpdate",
    "SuggestionContext",
    "SuggestionFilters",
    "SuggestionResult",
    "StatsOverview",
    "SearchToken",
]
