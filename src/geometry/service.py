from typing import List, Tuple
from decimal import Decimal

from src.config import settings
from src.exceptions import InvalidGeometry
from src.geometry.schemas import (
    LShapeDimensions, LShapeOrientation, Rect, RectangleDimensions, Size
)

_L_SHAPE_FIELDS = ("rect1_width", "rect1_height", "rect2_width", "rect2_height")

def _require_positive(name: str, value) -> Decimal:
    if value is None:
        raise InvalidGeometry(f"Missing extent '{name}'")
    if value <= 0:
        raise InvalidGeometry(f"Extent '{name}' must be positive, got {value}")
    return value

def _l_shape_extents(dimensions: LShapeDimensions) -> Tuple[Decimal, Decimal, Decimal, Decimal]:
    """Return (w1, h1, w2, h2) after checking every sub-rectangle field"""
    if dimensions.l_shape is None:
        raise InvalidGeometry("L-shape stall is missing its sub-rectangle extents")
    extents = dimensions.l_shape
    return tuple(
        _require_positive(name, getattr(extents, name)) for name in _L_SHAPE_FIELDS
    )

def validate_dimensions(dimensions) -> None:
    """Raise InvalidGeometry unless every declared extent is present and positive"""
    if isinstance(dimensions, RectangleDimensions):
        _require_positive("width", dimensions.width)
        _require_positive("height", dimensions.height)
    elif isinstance(dimensions, LShapeDimensions):
        _l_shape_extents(dimensions)
        # Nominal extents are optional on an L-shape but must be sane when given
        if dimensions.width is not None:
            _require_positive("width", dimensions.width)
        if dimensions.height is not None:
            _require_positive("height", dimensions.height)
    else:
        raise InvalidGeometry(f"Unknown stall shape: {type(dimensions).__name__}")

def area(dimensions) -> Decimal:
    """Floor area in square meters"""
    if isinstance(dimensions, RectangleDimensions):
        width = _require_positive("width", dimensions.width)
        height = _require_positive("height", dimensions.height)
        return width * height
    if isinstance(dimensions, LShapeDimensions):
        w1, h1, w2, h2 = _l_shape_extents(dimensions)
        return w1 * h1 + w2 * h2
    raise InvalidGeometry(f"Unknown stall shape: {type(dimensions).__name__}")

def bounding_size(dimensions) -> Size:
    """Extents of the smallest box containing the whole stall"""
    if isinstance(dimensions, RectangleDimensions):
        return Size(
            width=_require_positive("width", dimensions.width),
            height=_require_positive("height", dimensions.height),
        )
    if isinstance(dimensions, LShapeDimensions):
        w1, h1, w2, h2 = _l_shape_extents(dimensions)
        if dimensions.l_shape.orientation == LShapeOrientation.HORIZONTAL:
            return Size(width=w1 + w2, height=max(h1, h2))
        return Size(width=max(w1, w2), height=h1 + h2)
    raise InvalidGeometry(f"Unknown stall shape: {type(dimensions).__name__}")

def component_rects(dimensions) -> List[Rect]:
    """
    Positioned sub-rectangles inside the bounding box.

    Horizontal puts rect2 to the right of rect1, vertical puts it below.
    For a notched corner the arm holding the notch is rect2: "top-*" puts
    rect2 above rect1, "bottom-*" below it, and "*-left" right-aligns both
    arms so the notch opens on the left ("*-right" left-aligns them).
    """
    if isinstance(dimensions, RectangleDimensions):
        size = bounding_size(dimensions)
        return [Rect(x=Decimal("0"), y=Decimal("0"), width=size.width, height=size.height)]
    if isinstance(dimensions, LShapeDimensions):
        w1, h1, w2, h2 = _l_shape_extents(dimensions)
        orientation = dimensions.l_shape.orientation
        zero = Decimal("0")
        if orientation == LShapeOrientation.HORIZONTAL:
            return [
                Rect(x=zero, y=zero, width=w1, height=h1),
                Rect(x=w1, y=zero, width=w2, height=h2),
            ]
        if orientation == LShapeOrientation.VERTICAL:
            return [
                Rect(x=zero, y=zero, width=w1, height=h1),
                Rect(x=zero, y=h1, width=w2, height=h2),
            ]

        total_width = max(w1, w2)
        notch_on_left = orientation in (LShapeOrientation.TOP_LEFT, LShapeOrientation.BOTTOM_LEFT)
        x1 = total_width - w1 if notch_on_left else zero
        x2 = total_width - w2 if notch_on_left else zero
        if orientation in (LShapeOrientation.TOP_LEFT, LShapeOrientation.TOP_RIGHT):
            return [
                Rect(x=x1, y=h2, width=w1, height=h1),
                Rect(x=x2, y=zero, width=w2, height=h2),
            ]
        return [
            Rect(x=x1, y=zero, width=w1, height=h1),
            Rect(x=x2, y=h1, width=w2, height=h2),
        ]
    raise InvalidGeometry(f"Unknown stall shape: {type(dimensions).__name__}")

def pixels_to_meters(size: Size, pixels_per_meter: Decimal = None) -> RectangleDimensions:
    """Convert a pixel size from the layout editor into rectangle dimensions"""
    ratio = pixels_per_meter or settings.PIXELS_PER_METER
    return RectangleDimensions(
        width=Decimal(size.width) / ratio,
        height=Decimal(size.height) / ratio,
    )
