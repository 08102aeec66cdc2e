"""
Mood tag definitions.

Mood tags annotate readables and express what the reader is in the mood for
right now. The slug values are stored in `readables.mood_tags_json`, so they
must never be renamed; labels and descriptions can change freely.
"""

from enum import Enum


class MoodTag(str, Enum):
    COZY = "cozy"
    DARK = "dark"
    HOPEFUL = "hopeful"
    WHOLESOME = "wholesome"
    FAST_PACED = "fast-paced"
    SLOW_BURN = "slow-burn"
    LIGHT = "light"
    DENSE = "dense"
    MIND_BENDING = "mind-bending"
    ROMANTIC = "romantic"
    FUNNY = "funny"
    EPIC = "epic"
    MYSTERIOUS = "mysterious"
    SMUT = "smut"


MOOD_DEFINITIONS = [
    {
        "tag": MoodTag.COZY,
        "label": "Cozy",
        "description": "Low-stakes, safe, comfortable vibes.",
    },
    {
        "tag": MoodTag.DARK,
        "label": "Dark",
        "description": "Heavier themes, darker tone.",
    },
    {
        "tag": MoodTag.HOPEFUL,
        "label": "Hopeful",
        "description": "Uplifting tone, light at the end of the tunnel.",
    },
    {
        "tag": MoodTag.WHOLESOME,
        "label": "Wholesome",
        "description": "Soft, kind, emotionally safe.",
    },
    {
        "tag": MoodTag.FAST_PACED,
        "label": "Fast paced",
        "description": "Quick-moving, lots of plot momentum.",
    },
    {
        "tag": MoodTag.SLOW_BURN,
        "label": "Slow burn",
        "description": "Gradual build-up, especially for relationships.",
    },
    {
        "tag": MoodTag.LIGHT,
        "label": "Light",
        "description": "Easy to read, low emotional weight.",
    },
    {
        "tag": MoodTag.DENSE,
        "label": "Dense",
        "description": "Complex, layered, or heavy on worldbuilding.",
    },
    {
        "tag": MoodTag.MIND_BENDING,
        "label": "Mind bending",
        "description": "Twisty, weird, or reality-bending.",
    },
    {
        "tag": MoodTag.ROMANTIC,
        "label": "Romantic",
        "description": "Romance-forward or relationship-focused.",
    },
    {
        "tag": MoodTag.FUNNY,
        "label": "Funny",
        "description": "Humorous, comedic, or cracky.",
    },
    {
        "tag": MoodTag.EPIC,
        "label": "Epic",
        "description": "Big stakes, long arcs, or sweeping scope.",
    },
    {
        "tag": MoodTag.MYSTERIOUS,
        "label": "Mysterious",
        "description": "Mystery, investigation, or secrets.",
    },
    {
        "tag": MoodTag.SMUT,
        "label": "Smut",
        "description": "Explicit, sex-forward, steamy vibes.",
    },
]

MOOD_BY_TAG = {definition["tag"].value: definition for definition in MOOD_DEFINITIONS}


def mood_label(tag: str) -> str:
    """Human-facing label for a mood slug, prettified if it is unknown."""
    definition = MOOD_BY_TAG.get(str(getattr(tag, "value", tag)))
    if definition:
        return definition["label"]
    return str(tag).replace("-", " ").title()
