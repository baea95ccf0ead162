from pydantic import Field
from typing import Annotated, Literal, Optional, Union
from decimal import Decimal
from enum import Enum

from src.schemas import FrozenCamelModel

class LShapeOrientation(str, Enum):
    """Which corner of the bounding box is notched, or the stacking axis"""
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

class Point(FrozenCamelModel):
    """A point in layout or screen units"""
    x: Decimal = Decimal("0")
    y: Decimal = Decimal("0")

class Size(FrozenCamelModel):
    """Width and height extents"""
    width: Decimal
    height: Decimal

class Rect(FrozenCamelModel):
    """Axis-aligned rectangle positioned inside a stall's bounding box"""
    x: Decimal
    y: Decimal
    width: Decimal
    height: Decimal

class RectangleDimensions(FrozenCamelModel):
    """Plain rectangular stall, extents in meters"""
    shape_type: Literal["rectangle"] = "rectangle"
    width: Decimal
    height: Decimal

class LShapeExtents(FrozenCamelModel):
    """The two sub-rectangles of an L-shaped stall"""
    rect1_width: Optional[Decimal] = Field(None, alias="rect1Width")
    rect1_height: Optional[Decimal] = Field(None, alias="rect1Height")
    rect2_width: Optional[Decimal] = Field(None, alias="rect2Width")
    rect2_height: Optional[Decimal] = Field(None, alias="rect2Height")
    orientation: LShapeOrientation = LShapeOrientation.TOP_LEFT

class LShapeDimensions(FrozenCamelModel):
    """L-shaped stall; width/height are the nominal extents kept for display"""
    shape_type: Literal["l-shape"] = "l-shape"
    width: Optional[Decimal] = None
    height: Optional[Decimal] = None
    l_shape: Optional[LShapeExtents] = None

StallDimensions = Annotated[
    Union[RectangleDimensions, LShapeDimensions],
    Field(discriminator="shape_type"),
]
