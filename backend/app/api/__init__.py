from fastapi import APIRouter

from app.api import moods, readables, shelves, stats, suggestions

router = APIRouter()

router.include_router(readables.router, prefix="/readables", tags=["readables"])
router.include_router(shelves.router, prefix="/shelves", tags=["shelves"])
router.include_router(suggestions.router, prefix="/suggestions", tags=["suggestions"])
router.include_router(moods.router, prefix="/moods", tags=["moods"])
router.include_router(stats.router, prefix="/stats", tags=["stats"])
