"""Unit tests for stall geometry.

Run with: pytest tests/test_geometry.py -v
"""

import pytest
from decimal import Decimal

from src.exceptions import InvalidGeometry
from src.geometry import (
    LShapeDimensions, LShapeExtents, LShapeOrientation, RectangleDimensions, Size,
    area, bounding_size, component_rects, pixels_to_meters, validate_dimensions
)
from src.layouts.schemas import Stall


def l_shape(orientation=LShapeOrientation.TOP_LEFT, w1=10, h1=5, w2=4, h2=3):
    return LShapeDimensions(
        l_shape=LShapeExtents(
            rect1_width=Decimal(w1), rect1_height=Decimal(h1),
            rect2_width=Decimal(w2), rect2_height=Decimal(h2),
            orientation=orientation
        )
    )


class TestArea:
    """Tests for floor area."""

    def test_rectangle_area(self):
        """Rectangle area is width times height."""
        assert area(RectangleDimensions(width=Decimal("20"), height=Decimal("15"))) == Decimal("300")

    def test_l_shape_area_sums_both_rectangles(self):
        """An L-shape of 10x5 and 4x3 covers 62 square meters."""
        assert area(l_shape()) == Decimal("62")

    def test_l_shape_area_ignores_nominal_extents(self):
        """Nominal width and height on an L-shape do not change its area."""
        dimensions = l_shape().model_copy(update={"width": Decimal("100"), "height": Decimal("100")})
        assert area(dimensions) == Decimal("62")

    def test_fractional_extents(self):
        """Decimal extents keep full precision."""
        assert area(RectangleDimensions(width=Decimal("2.5"), height=Decimal("3.3"))) == Decimal("8.25")


class TestValidation:
    """Tests for malformed dimensions."""

    def test_missing_l_shape_extent(self):
        """An L-shape missing a sub-rectangle field is rejected."""
        dimensions = LShapeDimensions(l_shape=LShapeExtents(rect1_width=Decimal("10")))
        with pytest.raises(InvalidGeometry):
            area(dimensions)

    def test_missing_l_shape_block(self):
        """An L-shape without its sub-rectangles is rejected."""
        with pytest.raises(InvalidGeometry):
            validate_dimensions(LShapeDimensions(width=Decimal("10"), height=Decimal("8")))

    @pytest.mark.parametrize("width,height", [("0", "5"), ("5", "-1")])
    def test_non_positive_rectangle(self, width, height):
        """Zero or negative rectangle extents are rejected."""
        with pytest.raises(InvalidGeometry):
            validate_dimensions(RectangleDimensions(width=Decimal(width), height=Decimal(height)))

    def test_non_positive_l_shape_extent(self):
        """A zero-height arm is rejected."""
        with pytest.raises(InvalidGeometry):
            bounding_size(l_shape(h2=0))

    def test_unknown_shape(self):
        """Anything that is not a known stall shape is rejected."""
        with pytest.raises(InvalidGeometry):
            area(Size(width=Decimal("1"), height=Decimal("1")))

    def test_error_message_names_the_field(self):
        """The error names the offending extent."""
        with pytest.raises(InvalidGeometry) as exc_info:
            validate_dimensions(l_shape(w2=0))
        assert "rect2_width" in exc_info.value.message


class TestBoundingSize:
    """Tests for the bounding box of a stall."""

    def test_rectangle(self):
        """A rectangle is its own bounding box."""
        size = bounding_size(RectangleDimensions(width=Decimal("6"), height=Decimal("4")))
        assert (size.width, size.height) == (Decimal("6"), Decimal("4"))

    def test_horizontal_l_shape(self):
        """Horizontal arms sit side by side."""
        size = bounding_size(l_shape(LShapeOrientation.HORIZONTAL))
        assert (size.width, size.height) == (Decimal("14"), Decimal("5"))

    @pytest.mark.parametrize("orientation", [
        LShapeOrientation.VERTICAL,
        LShapeOrientation.TOP_LEFT,
        LShapeOrientation.TOP_RIGHT,
        LShapeOrientation.BOTTOM_LEFT,
        LShapeOrientation.BOTTOM_RIGHT,
    ])
    def test_stacked_l_shape(self, orientation):
        """Every other orientation stacks the arms vertically."""
        size = bounding_size(l_shape(orientation))
        assert (size.width, size.height) == (Decimal("10"), Decimal("8"))


class TestComponentRects:
    """Tests for sub-rectangle placement."""

    def test_top_left_notch(self):
        """Top-left puts the short arm on top, right-aligned."""
        rect1, rect2 = component_rects(l_shape(LShapeOrientation.TOP_LEFT))
        assert (rect1.x, rect1.y) == (Decimal("0"), Decimal("3"))
        assert (rect2.x, rect2.y) == (Decimal("6"), Decimal("0"))

    def test_bottom_right_notch(self):
        """Bottom-right puts the short arm below, left-aligned."""
        rect1, rect2 = component_rects(l_shape(LShapeOrientation.BOTTOM_RIGHT))
        assert (rect1.x, rect1.y) == (Decimal("0"), Decimal("0"))
        assert (rect2.x, rect2.y) == (Decimal("0"), Decimal("5"))

    def test_horizontal(self):
        """Horizontal puts the second arm to the right of the first."""
        _, rect2 = component_rects(l_shape(LShapeOrientation.HORIZONTAL))
        assert (rect2.x, rect2.y) == (Decimal("10"), Decimal("0"))

    @pytest.mark.parametrize("orientation", list(LShapeOrientation))
    def test_rects_fit_the_box_without_overlap(self, orientation):
        """Sub-rectangles stay inside the bounding box and do not overlap."""
        dimensions = l_shape(orientation)
        box = bounding_size(dimensions)
        rect1, rect2 = component_rects(dimensions)

        for rect in (rect1, rect2):
            assert rect.x >= 0 and rect.y >= 0
            assert rect.x + rect.width <= box.width
            assert rect.y + rect.height <= box.height

        overlap_x = min(rect1.x + rect1.width, rect2.x + rect2.width) - max(rect1.x, rect2.x)
        overlap_y = min(rect1.y + rect1.height, rect2.y + rect2.height) - max(rect1.y, rect2.y)
        assert overlap_x <= 0 or overlap_y <= 0
        assert rect1.width * rect1.height + rect2.width * rect2.height == area(dimensions)


class TestParsing:
    """Tests for reading dimensions from layout JSON."""

    def test_l_shape_from_camel_case(self):
        """L-shape extents are read from their camelCase keys."""
        stall = Stall.model_validate({
            "id": "x", "stallNumber": "X-1", "hallId": "h", "stallTypeId": "t",
            "size": {"width": 100, "height": 80},
            "dimensions": {
                "shapeType": "l-shape",
                "lShape": {"rect1Width": 10, "rect1Height": 5, "rect2Width": 4, "rect2Height": 3}
            }
        })
        assert isinstance(stall.dimensions, LShapeDimensions)
        assert stall.dimensions.l_shape.orientation == LShapeOrientation.TOP_LEFT
        assert area(stall.dimensions) == Decimal("62")

    def test_missing_shape_type_defaults_to_rectangle(self):
        """Dimensions without a shape tag are a rectangle."""
        stall = Stall.model_validate({
            "id": "x", "stallNumber": "X-1", "hallId": "h", "stallTypeId": "t",
            "size": {"width": 100, "height": 80},
            "dimensions": {"width": 3, "height": 2}
        })
        assert isinstance(stall.dimensions, RectangleDimensions)

    def test_missing_dimensions_derived_from_pixels(self):
        """Stalls without dimensions are measured from their pixel size."""
        stall = Stall.model_validate({
            "id": "x", "stallNumber": "X-1", "hallId": "h", "stallTypeId": "t",
            "size": {"width": 300, "height": 200}
        })
        assert area(stall.dimensions) == Decimal("24")

    def test_pixels_to_meters(self):
        """Fifty pixels make one meter by default."""
        dimensions = pixels_to_meters(Size(width=Decimal("100"), height=Decimal("50")))
        assert (dimensions.width, dimensions.height) == (Decimal("2"), Decimal("1"))

    def test_pixels_to_meters_custom_ratio(self):
        """The pixel ratio can be overridden."""
        dimensions = pixels_to_meters(Size(width=Decimal("100"), height=Decimal("50")), Decimal("25"))
        assert (dimensions.width, dimensions.height) == (Decimal("4"), Decimal("2"))
