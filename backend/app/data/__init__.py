from app.data.moods import MOOD_BY_TAG, MOOD_DEFINITIONS, MoodTag, mood_label

__all__ = [
    "MoodTag",
    "MOOD_DEFINITIONS",
    "MOOD_BY_TAG",
    "mood_label",
]
