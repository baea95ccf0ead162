from pydantic import Field, computed_field, model_validator
from typing import List, Optional
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from src.geometry.schemas import Point, Size, StallDimensions
from src.geometry.service import area, pixels_to_meters
from src.schemas import FrozenCamelModel

class StallStatus(str, Enum):
    """Stall status enumeration"""
    AVAILABLE = "available"
    BOOKED = "booked"
    BLOCKED = "blocked"

class CanvasSettings(FrozenCamelModel):
    """Saved canvas display settings of a space"""
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0

class Space(FrozenCamelModel):
    """The overall floor-plan region of an exhibition"""
    id: str
    name: str = ""
    width: Decimal = Field(..., gt=0)
    height: Decimal = Field(..., gt=0)
    canvas_settings: CanvasSettings = CanvasSettings()

class Hall(FrozenCamelModel):
    """A sub-region of a space containing stalls"""
    id: str
    space_id: str
    name: str
    position: Point = Point()
    size: Size
    color: str = "#f0f0f0"

class StallType(FrozenCamelModel):
    """Stall category with default pricing and amenities"""
    id: str
    name: str
    description: str = ""
    color: str = "#4caf50"
    default_rate: Optional[Decimal] = None
    default_size: Optional[Size] = None
    included_amenities: List[str] = []
    available_amenities: List[str] = []
    is_active: bool = True

class Stall(FrozenCamelModel):
    """An individually bookable unit of floor area"""
    id: str
    stall_number: str
    hall_id: str
    stall_type_id: str
    position: Point = Point()  # relative to the hall origin
    size: Size  # layout units, used for drawing and hit-testing
    dimensions: StallDimensions  # meters, authoritative for area
    rate_per_sqm: Optional[Decimal] = None
    base_price: Optional[Decimal] = None
    status: StallStatus = StallStatus.AVAILABLE

    @model_validator(mode="before")
    @classmethod
    def fill_dimensions(cls, data):
        """Default the shape tag and derive meters from pixels when dimensions are absent"""
        if not isinstance(data, dict):
            return data
        dimensions = data.get("dimensions")
        if isinstance(dimensions, dict):
            if "shapeType" not in dimensions and "shape_type" not in dimensions:
                data = {**data, "dimensions": {**dimensions, "shapeType": "rectangle"}}
        elif dimensions is None and data.get("size") is not None:
            size = Size.model_validate(data["size"])
            data = {**data, "dimensions": pixels_to_meters(size).model_dump(by_alias=True)}
        return data

    @computed_field
    @property
    def total_price(self) -> Optional[Decimal]:
        """Area times rate, in cents; never read from the payload"""
        if self.rate_per_sqm is None:
            return None
        return (area(self.dimensions) * self.rate_per_sqm).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    @property
    def is_available(self) -> bool:
        return self.status == StallStatus.AVAILABLE

class Layout(FrozenCamelModel):
    """One published version of an exhibition floor plan"""
    exhibition_id: str
    spaces: List[Space] = []
    halls: List[Hall] = []
    stalls: List[Stall] = []
    stall_types: List[StallType] = []
    version: int = Field(1, ge=1)
    is_active: bool = True

class HallSummary(FrozenCamelModel):
    """Hall with stall counts derived from the current snapshot"""
    hall: Hall
    stall_count: int
    available_stalls: int

class Bounds(FrozenCamelModel):
    """Axis-aligned bounds in layout units"""
    left: Decimal
    top: Decimal
    right: Decimal
    bottom: Decimal

    @property
    def width(self) -> Decimal:
        return self.right - self.left

    @property
    def height(self) -> Decimal:
        return self.bottom - self.top
