from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.logging import get_logger
from app.schemas.suggestion import SuggestionContext, SuggestionResult
from app.services import readable_service
from app.services.suggestion_engine import run_suggestion_engine

router = APIRouter()
logger = get_logger(__name__)


@router.post("", response_model=SuggestionResult | None)
async def suggest_readable(
    context: SuggestionContext,
    db: Session = Depends(get_db),
):
    """
    Pick something to read next from the to-read queue.

    Candidates are scored by mood overlap and priority, then one is drawn at
    random weighted by score. Returns null when nothing passes the filters.
    Suggestions are not stored.
    """
    queue = readable_service.get_all_to_read(db)
    result = run_suggestion_engine(queue, context)

    if result is None:
        logger.info(f"No suggestion: none of {len(queue)} queued readables passed the filters")
    else:
        logger.info(
            f"Suggested {result.item.type} {result.item.id}",
            extra={"extra_fields": {"readable_id": result.item.id, "score": result.score}},
        )
    return result
