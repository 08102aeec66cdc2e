from app.services import (
    library_filter_service,
    progress_service,
    readable_service,
    smart_shelf_service,
    stats_service,
)
from app.services.library_filter_service import (
    filter_and_sort_readables,
    filter_readables,
    normalize_for_search,
    sort_readables,
)
from app.services.readable_mapper import (
    build_row_from_domain,
    decode_json_list,
    map_row_to_domain,
)
from app.services.readable_service import ReadableNotFoundError
from app.services.search_vocabulary import build_search_vocabulary
from app.services.suggestion_engine import (
    ScoredCandidate,
    passes_filters,
    pick_weighted_random,
    run_suggestion_engine,
    score_item,
)

__all__ = [
    "readable_service",
    "smart_shelf_service",
    "library_filter_service",
    "progress_service",
    "stats_service",
    # Row mapping
    "map_row_to_domain",
    "build_row_from_domain",
    "decode_json_list",
    "ReadableNotFoundError",
    # Suggestions
    "ScoredCandidate",
    "passes_filters",
    "score_item",
    "pick_weighted_random",
    "run_suggestion_engine",
    # Library
    "filter_and_sort_readables",
    "filter_readables",
    "sort_readables",
    "normalize_for_search",
    "build_search_vocabulary",
]
