from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.stats import StatsOverview
from app.services import stats_service

router = APIRouter()


@router.get("", response_model=StatsOverview)
async def get_stats(db: Session = Depends(get_db)):
    """Counts of the to-read queue by mood tag and by type."""
    return stats_service.get_stats_overview(db)
