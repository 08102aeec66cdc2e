from sqlalchemy.orm import Session

from app.schemas.stats import MoodStats, StatsOverview, TypeStats
from app.services import readable_service


def get_stats_overview(db: Session) -> StatsOverview:
    """Count the to-read queue by mood tag and by type."""
    items = readable_service.get_all_to_read(db)

    mood_counts: dict[str, int] = {}
    type_counts = {"book": 0, "fanfic": 0}

    for item in items:
        type_counts[item.type] += 1
        for tag in item.mood_tags:
            mood_counts[tag.value] = mood_counts.get(tag.value, 0) + 1

    return StatsOverview(
        total=len(items),
        by_mood=[MoodStats(mood_tag=tag, count=count) for tag, count in mood_counts.items()],
        by_type=[TypeStats(type=kind, count=count) for kind, count in type_counts.items()],
    )
