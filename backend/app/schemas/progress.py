"""
Progress trackers and progress updates.

A tracker is what the client shows for one way of measuring progress
(percent, pages, chapters, time). An update is what the reader just did in
one of those modes.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class PercentTracker(BaseModel):
    kind: Literal["percent"] = "percent"
    label: str = "Percent"
    enabled: bool = True
    percent: int


class UnitTracker(BaseModel):
    kind: Literal["pages", "chapters"]
    label: str
    enabled: bool
    current: int | None = None
    total: int | None = None


class TimeTracker(BaseModel):
    kind: Literal["time"] = "time"
    label: str = "Time"
    enabled: bool
    current_seconds: int | None = None
    total_seconds: int | None = None


ProgressTracker = Annotated[
    Union[PercentTracker, UnitTracker, TimeTracker], Field(discriminator="kind")
]


class ProgressSnapshot(BaseModel):
    """The canonical percent tracker plus the unit/time trackers for an item."""

    percent: PercentTracker
    trackers: list[ProgressTracker]


class PercentProgressUpdate(BaseModel):
    kind: Literal["percent"] = "percent"
    percent: float


class PagesProgressUpdate(BaseModel):
    kind: Literal["pages"] = "pages"
    current_page: float


class ChaptersProgressUpdate(BaseModel):
    kind: Literal["chapters"] = "chapters"
    current_chapter: float


class TimeProgressUpdate(BaseModel):
    kind: Literal["time"] = "time"
    current_seconds: float
    total_seconds: float | None = None


ProgressUpdate = Annotated[
    Union[
        PercentProgressUpdate,
        PagesProgressUpdate,
        ChaptersProgressUpdate,
        TimeProgressUpdate,
    ],
    Field(discriminator="kind"),
]
