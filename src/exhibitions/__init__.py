"""
Exhibition Module

Per-exhibition state the booking engine works against:

- registry.py: ExhibitionRegistry holding metadata, pricing configuration
  and the layout store of every exhibition
- router.py: FastAPI endpoints to publish exhibitions and layouts and read
  hall summaries
- schemas.py: Pydantic models for exhibition metadata
"""

from .router import router
from .registry import ExhibitionRegistry
from .schemas import Exhibition, ExhibitionStatus, ExhibitionUpsert

__all__ = [
    "router",
    "ExhibitionRegistry",
    "Exhibition",
    "ExhibitionStatus",
    "ExhibitionUpsert"
]
