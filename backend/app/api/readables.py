from typing import Annotated, Union

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.library_filters import LibraryFilterState
from app.schemas.progress import (
    ChaptersProgressUpdate,
    PagesProgressUpdate,
    PercentProgressUpdate,
    ProgressSnapshot,
    TimeProgressUpdate,
)
from app.schemas.readable import (
    BookReadable,
    FanficReadable,
    NotesUpdate,
    ProgressPercentUpdate,
    ReadableItem,
    ReadableStatus,
    StatusUpdate,
)
from app.schemas.stats import SearchToken
from app.services import library_filter_service, progress_service, readable_service
from app.services.readable_service import ReadableNotFoundError
from app.services.search_vocabulary import build_search_vocabulary

router = APIRouter()

ReadableBody = Annotated[Union[BookReadable, FanficReadable], Body(discriminator="type")]
ProgressUpdateBody = Annotated[
    Union[
        PercentProgressUpdate,
        PagesProgressUpdate,
        ChaptersProgressUpdate,
        TimeProgressUpdate,
    ],
    Body(discriminator="kind"),
]


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Readable not found")


@router.get("", response_model=list[ReadableItem])
async def list_readables(
    status: ReadableStatus | None = Query(None, description="Only readables with this status"),
    db: Session = Depends(get_db),
):
    """List readables, newest first."""
    if status is None:
        return readable_service.get_all(db)
    if status == ReadableStatus.TO_READ:
        return readable_service.get_all_to_read(db)
    if status == ReadableStatus.FINISHED:
        return readable_service.get_all_finished(db)
    return readable_service.get_by_status(db, status)


@router.post("", response_model=ReadableItem, status_code=201)
async def create_readable(
    item: ReadableBody,
    db: Session = Depends(get_db),
):
    """
    Add a book or fanfic.

    A new id is always assigned. Reading dates for the given status are
    stamped if missing.
    """
    return readable_service.insert(db, item)


@router.post("/search", response_model=list[ReadableItem])
async def search_readables(
    filter_state: LibraryFilterState,
    db: Session = Depends(get_db),
):
    """Filter and sort the whole library with a library filter state."""
    items = readable_service.get_all(db)
    return library_filter_service.filter_and_sort_readables(items, filter_state)


@router.get("/vocabulary", response_model=list[SearchToken])
async def get_search_vocabulary(db: Session = Depends(get_db)):
    """Search chip suggestions built from the library."""
    return build_search_vocabulary(readable_service.get_all(db))


@router.get("/{readable_id}", response_model=ReadableItem)
async def get_readable(
    readable_id: str,
    db: Session = Depends(get_db),
):
    item = readable_service.get_by_id(db, readable_id)
    if not item:
        raise _not_found()
    return item


@router.put("/{readable_id}", response_model=ReadableItem)
async def update_readable(
    readable_id: str,
    item: ReadableBody,
    db: Session = Depends(get_db),
):
    """Replace a readable. The path id wins over any id in the body."""
    try:
        return readable_service.update(db, item.model_copy(update={"id": readable_id}))
    except ReadableNotFoundError:
        raise _not_found()


@router.delete("/{readable_id}", status_code=204)
async def delete_readable(
    readable_id: str,
    db: Session = Depends(get_db),
):
    if not readable_service.delete(db, readable_id):
        raise _not_found()


@router.patch("/{readable_id}/status", response_model=ReadableItem)
async def update_readable_status(
    readable_id: str,
    update: StatusUpdate,
    db: Session = Depends(get_db),
):
    """Change status. Finishing sets progress to 100%."""
    try:
        return readable_service.update_status(db, readable_id, update.status)
    except ReadableNotFoundError:
        raise _not_found()


@router.patch("/{readable_id}/progress", response_model=ReadableItem)
async def update_readable_progress(
    readable_id: str,
    update: ProgressPercentUpdate,
    db: Session = Depends(get_db),
):
    try:
        return readable_service.update_progress(db, readable_id, update.progress_percent)
    except ReadableNotFoundError:
        raise _not_found()


@router.patch("/{readable_id}/notes", response_model=ReadableItem)
async def update_readable_notes(
    readable_id: str,
    update: NotesUpdate,
    db: Session = Depends(get_db),
):
    try:
        return readable_service.update_notes(db, readable_id, update.notes)
    except ReadableNotFoundError:
        raise _not_found()


@router.get("/{readable_id}/progress", response_model=ProgressSnapshot)
async def get_readable_progress(
    readable_id: str,
    db: Session = Depends(get_db),
):
    """Percent plus the pages/chapters/time trackers for a readable."""
    item = readable_service.get_by_id(db, readable_id)
    if not item:
        raise _not_found()
    return progress_service.build_progress_snapshot(item)


@router.post("/{readable_id}/progress", response_model=ReadableItem)
async def record_readable_progress(
    readable_id: str,
    update: ProgressUpdateBody,
    db: Session = Depends(get_db),
):
    """
    Record progress in one mode (percent, pages, chapters or time).

    The percent is re-derived from the unit ratio when the total is known.
    """
    try:
        return readable_service.save_progress_update(db, readable_id, update)
    except ReadableNotFoundError:
        raise _not_found()
