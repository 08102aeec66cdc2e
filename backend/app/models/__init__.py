from app.models.readable import Readable
from app.models.smart_shelf import SmartShelf

__all__ = [
    "Readable",
    "SmartShelf",
]
