from fastapi import APIRouter

from app.data.moods import MOOD_DEFINITIONS
from app.schemas.stats import MoodDefinitionResponse

router = APIRouter()


@router.get("", response_model=list[MoodDefinitionResponse])
async def list_moods():
    """All mood tags with their labels and descriptions."""
    return [
        MoodDefinitionResponse(
            tag=definition["tag"].value,
            label=definition["label"],
            description=definition["description"],
        )
        for definition in MOOD_DEFINITIONS
    ]
