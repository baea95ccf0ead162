"""
Layout Module

Immutable, versioned venue layouts (spaces, halls, stalls, stall types):

- store.py: LayoutStore holding the current snapshot with atomic,
  version-ordered replacement and id lookups
- schemas.py: Pydantic models for the layout snapshot
"""

from .store import LayoutStore, LayoutHandle
from .schemas import (
    Layout, Space, Hall, Stall, StallType, StallStatus, CanvasSettings,
    HallSummary, Bounds
)

__all__ = [
    "LayoutStore",
    "LayoutHandle",
    "Layout",
    "Space",
    "Hall",
    "Stall",
    "StallType",
    "StallStatus",
    "CanvasSettings",
    "HallSummary",
    "Bounds"
]
