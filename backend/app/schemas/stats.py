from typing import Literal

from pydantic import BaseModel


class MoodStats(BaseModel):
    mood_tag: str
    count: int


class TypeStats(BaseModel):
    type: Literal["book", "fanfic"]
    count: int


class StatsOverview(BaseModel):
    """Counts over the to-read queue."""

    total: int
    by_mood: list[MoodStats]
    by_type: list[TypeStats]


class MoodDefinitionResponse(BaseModel):
    tag: str
    label: str
    description: str


SearchTokenSource = Literal[
    "mood",
    "fandom",
    "relationship",
    "character",
    "ao3-tag",
    "warning",
    "genre",
    "author",
]


class SearchToken(BaseModel):
    """One suggestion chip for the library search box."""

    id: str  # "<source>::<normalized>"
    label: str
    normalized: str
    source: SearchTokenSource
    frequency: int = 1
