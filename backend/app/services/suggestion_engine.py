"""
Suggestion engine.

Picks one readable for the reader from a candidate list:

1. Filter by type (books / fanfic) and approximate length
2. Score each remaining item from mood overlap, priority and a small type nudge
3. Pick one at random, weighted by score

Everything here is a pure function of its inputs apart from the random source,
which callers can inject (`rand`) to make picks reproducible.
"""

import random
from dataclasses import dataclass
from typing import Callable, Sequence

from app.core.logging import get_logger
from app.schemas.readable import ReadableItem
from app.schemas.suggestion import SuggestionContext, SuggestionFilters, SuggestionResult

logger = get_logger(__name__)

# Returns a uniform float in [0, 1)
RandomSource = Callable[[], float]

WORDS_PER_PAGE = 300
MOOD_MATCH_WEIGHT = 10
PRIORITY_WEIGHT = 5
BOOK_TYPE_BONUS = 2
FANFIC_TYPE_BONUS = 3  # slight lean toward fanfic when both types are allowed
MIN_SCORE = 1


@dataclass
class ScoredCandidate:
    """A readable that passed filtering, with its selection weight."""

    item: ReadableItem
    score: int
    reason: str


def approx_word_count(item: ReadableItem) -> int | None:
    """
    Approximate length in words.

    Fanfic uses its word count; books use page_count * 300. None if unknown.
    """
    if item.type == "fanfic":
        return item.word_count
    if item.type == "book" and item.page_count is not None:
        return item.page_count * WORDS_PER_PAGE
    return None


def passes_filters(item: ReadableItem, filters: SuggestionFilters) -> bool:
    """Return True if the item passes the type and length filters.

    Items of unknown length always pass the length filter.
    """
    if item.type == "book" and not filters.include_books:
        return False
    if item.type == "fanfic" and not filters.include_fanfic:
        return False

    approx_words = approx_word_count(item)
    if approx_words is None:
        return True

    if filters.min_word_count is not None and approx_words < filters.min_word_count:
        return False
    if filters.max_word_count is not None and approx_words > filters.max_word_count:
        return False

    return True


def score_item(item: ReadableItem, context: SuggestionContext) -> ScoredCandidate | None:
    """Score a readable for the given context, or None if it is filtered out."""
    filters = context.filters

    if not passes_filters(item, filters):
        return None

    selected_moods = set(context.mood_tags)
    mood_overlap = sum(1 for tag in item.mood_tags if tag in selected_moods)

    mood_score = mood_overlap * MOOD_MATCH_WEIGHT if context.mood_tags else 0
    priority_score = item.priority * PRIORITY_WEIGHT

    type_score = 0
    if filters.include_books and filters.include_fanfic:
        type_score = BOOK_TYPE_BONUS if item.type == "book" else FANFIC_TYPE_BONUS

    score = max(MIN_SCORE, mood_score + priority_score + type_score)

    reason_parts = []
    if not context.mood_tags:
        reason_parts.append("No mood selected, using priority and filters")
    elif mood_overlap > 0:
        reason_parts.append(f"Matches {mood_overlap} of your selected mood tag(s)")
    else:
        reason_parts.append("Does not match your selected mood tags but fits your filters")

    reason_parts.append(f"Priority {item.priority}")
    reason_parts.append("Book" if item.type == "book" else "Fanfic")

    approx_words = approx_word_count(item)
    if approx_words is not None:
        if filters.min_word_count is not None or filters.max_word_count is not None:
            reason_parts.append("Within your length range")
        else:
            reason_parts.append(f"Approx. {approx_words:,} words")

    return ScoredCandidate(item=item, score=score, reason=". ".join(reason_parts) + ".")


def pick_weighted_random(
    candidates: Sequence[ScoredCandidate],
    rand: RandomSource = random.random,
) -> ScoredCandidate | None:
    """
    Pick one candidate with probability proportional to its score.

    Draws a threshold in [0, total_weight) and walks the cumulative weights.
    Falls back to a uniform pick if the weights sum to zero or less, and to the
    last candidate if float rounding walks off the end.
    """
    if not candidates:
        return None

    total_weight = sum(candidate.score for candidate in candidates)
    if total_weight <= 0:
        index = min(int(rand() * len(candidates)), len(candidates) - 1)
        return candidates[index]

    threshold = rand() * total_weight
    for candidate in candidates:
        if threshold < candidate.score:
            return candidate
        threshold -= candidate.score

    return candidates[-1]


def run_suggestion_engine(
    items: Sequence[ReadableItem],
    context: SuggestionContext,
    rand: RandomSource = random.random,
) -> SuggestionResult | None:
    """
    Choose one readable for the context.

    Returns None when no item survives filtering.
    """
    scored = []
    for item in items:
        candidate = score_item(item, context)
        if candidate is not None:
            scored.append(candidate)

    logger.debug(f"Suggestion candidates: {len(scored)} of {len(items)} passed filters")

    picked = pick_weighted_random(scored, rand)
    if picked is None:
        return None

    return SuggestionResult(item=picked.item, score=picked.score, reason=picked.reason)
