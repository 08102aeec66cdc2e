from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.readable import ReadableItem
from app.schemas.smart_shelf import SmartShelf, SmartShelfCreate, SmartShelfUpdate
from app.services import library_filter_service, readable_service, smart_shelf_service

router = APIRouter()


@router.get("", response_model=list[SmartShelf])
async def list_shelves(db: Session = Depends(get_db)):
    """List smart shelves, oldest first."""
    return smart_shelf_service.get_all(db)


@router.post("", response_model=SmartShelf, status_code=201)
async def create_shelf(
    data: SmartShelfCreate,
    db: Session = Depends(get_db),
):
    """Save the given library filters as a shelf. A blank name becomes "Untitled shelf"."""
    return smart_shelf_service.create(db, data)


@router.get("/{shelf_id}", response_model=SmartShelf)
async def get_shelf(
    shelf_id: str,
    db: Session = Depends(get_db),
):
    shelf = smart_shelf_service.get_by_id(db, shelf_id)
    if not shelf:
        raise HTTPException(status_code=404, detail="Shelf not found")
    return shelf


@router.patch("/{shelf_id}", response_model=SmartShelf)
async def update_shelf(
    shelf_id: str,
    patch: SmartShelfUpdate,
    db: Session = Depends(get_db),
):
    """Rename and/or refilter a shelf."""
    shelf = smart_shelf_service.update(db, shelf_id, patch)
    if not shelf:
        raise HTTPException(status_code=404, detail="Shelf not found")
    return shelf


@router.delete("/{shelf_id}", status_code=204)
async def delete_shelf(
    shelf_id: str,
    db: Session = Depends(get_db),
):
    if not smart_shelf_service.delete(db, shelf_id):
        raise HTTPException(status_code=404, detail="Shelf not found")


@router.get("/{shelf_id}/readables", response_model=list[ReadableItem])
async def get_shelf_readables(
    shelf_id: str,
    db: Session = Depends(get_db),
):
    """The library as seen through a shelf's filters."""
    shelf = smart_shelf_service.get_by_id(db, shelf_id)
    if not shelf:
        raise HTTPException(status_code=404, detail="Shelf not found")
    items = readable_service.get_all(db)
    return library_filter_service.filter_and_sort_readables(items, shelf.filter)
