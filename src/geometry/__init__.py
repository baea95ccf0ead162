"""
Stall Geometry Module

Stall shapes and their measurements, in meters:

- service.py: area, bounding size and sub-rectangle placement for
  rectangle and L-shaped stalls, plus pixel to meter conversion
- schemas.py: Pydantic models for the tagged stall dimension variants
"""

from .service import (
    area, bounding_size, component_rects, validate_dimensions, pixels_to_meters
)
from .schemas import (
    Point, Size, Rect, RectangleDimensions, LShapeDimensions, LShapeExtents,
    LShapeOrientation, StallDimensions
)

__all__ = [
    "area",
    "bounding_size",
    "component_rects",
    "validate_dimensions",
    "pixels_to_meters",
    "Point",
    "Size",
    "Rect",
    "RectangleDimensions",
    "LShapeDimensions",
    "LShapeExtents",
    "LShapeOrientation",
    "StallDimensions"
]
