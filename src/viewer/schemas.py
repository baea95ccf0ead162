from pydantic import Field
from typing import Optional, Tuple
from decimal import Decimal

from src.layouts.schemas import Hall, Stall, StallType
from src.schemas import CamelModel, FrozenCamelModel

# Canvas viewport and interaction types
class CanvasViewport(FrozenCamelModel):
    """Pan/zoom state of the layout canvas"""
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    width: float = Field(800.0, gt=0)
    height: float = Field(600.0, gt=0)

class CanvasPoint(FrozenCamelModel):
    """A point on the canvas, in screen pixels or layout units"""
    x: float
    y: float

class CanvasBounds(FrozenCamelModel):
    """Axis-aligned canvas bounds"""
    left: float
    top: float
    right: float
    bottom: float

class CanvasSize(FrozenCamelModel):
    width: float
    height: float

class LayoutControls(FrozenCamelModel):
    """Enabled state of the zoom controls"""
    can_zoom_in: bool
    can_zoom_out: bool
    can_reset: bool
    zoom_level: float
    min_zoom: float
    max_zoom: float

# Rendering
class StallRenderInfo(FrozenCamelModel):
    """Everything the drawing layer needs to paint one stall"""
    stall: Stall
    stall_type: Optional[StallType] = None
    hall: Optional[Hall] = None
    is_selected: bool
    is_hovered: bool
    is_available: bool
    display_position: CanvasPoint
    display_size: CanvasSize

class SelectionFilters(CamelModel):
    """Stall list filters of the layout viewer"""
    stall_type_id: Optional[str] = None
    price_range: Optional[Tuple[Decimal, Decimal]] = None
    available_only: bool = True
