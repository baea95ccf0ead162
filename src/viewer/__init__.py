"""
Layout Viewer Module

Interactive state of the canvas layout viewer for one browsing session:

- viewport.py: ViewportController for zoom, pan, fit-to-screen and
  screen/logical coordinate mapping
- selection.py: SelectionManager for stall selection, hover, hit-testing,
  filters and per-stall render state
- session.py: LayoutViewerSession wiring viewport, selection and the
  pricing engine together so calculations follow every selection change
- schemas.py: Pydantic models for viewport, controls and render state
"""

from .viewport import ViewportController
from .selection import SelectionManager
from .session import LayoutViewerSession
from .schemas import (
    CanvasViewport, CanvasPoint, CanvasBounds, CanvasSize, LayoutControls,
    StallRenderInfo, SelectionFilters
)

__all__ = [
    "ViewportController",
    "SelectionManager",
    "LayoutViewerSession",
    "CanvasViewport",
    "CanvasPoint",
    "CanvasBounds",
    "CanvasSize",
    "LayoutControls",
    "StallRenderInfo",
    "SelectionFilters"
]
