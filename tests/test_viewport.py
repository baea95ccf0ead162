"""Tests for viewport zoom, pan and coordinate mapping."""

import pytest

from src.layouts.schemas import Bounds
from src.viewer.schemas import CanvasBounds, CanvasPoint
from src.viewer.viewport import ViewportController


class TestZoom:
    """Tests for zoom clamping and anchoring."""

    def test_defaults(self, viewport):
        """A new viewport shows content at 100% with no pan."""
        assert viewport.zoom == 1.0
        assert (viewport.state.pan_x, viewport.state.pan_y) == (0.0, 0.0)

    def test_zoom_out_is_clamped(self, viewport):
        """Zoom never goes below the floor however often it is reduced."""
        for _ in range(50):
            viewport.zoom_out()
            assert viewport.zoom >= 0.1
        assert viewport.zoom == 0.1

    def test_zoom_in_is_clamped(self, viewport):
        """Zoom never exceeds the ceiling."""
        for _ in range(50):
            viewport.zoom_in()
        assert viewport.zoom == 3.0

    def test_set_zoom_clamps(self, viewport):
        """Explicit zoom values are clamped too."""
        viewport.set_zoom(10)
        assert viewport.zoom == 3.0
        viewport.set_zoom(0)
        assert viewport.zoom == 0.1

    def test_zoom_step(self, viewport):
        """One step multiplies the zoom by 1.2."""
        viewport.zoom_in()
        assert viewport.zoom == pytest.approx(1.2)

    def test_center_stays_put(self, viewport):
        """The logical point under the center does not move when zooming."""
        viewport.pan_by(37, -12)
        before = viewport.screen_to_logical(viewport.center)
        viewport.zoom_in()
        viewport.zoom_in()
        after = viewport.screen_to_logical(viewport.center)
        assert after.x == pytest.approx(before.x)
        assert after.y == pytest.approx(before.y)

    def test_custom_anchor_stays_put(self, viewport):
        """Zooming around a cursor keeps the point under it fixed."""
        cursor = CanvasPoint(x=120, y=450)
        before = viewport.screen_to_logical(cursor)
        viewport.set_zoom(2.5, anchor=cursor)
        after = viewport.logical_to_screen(before)
        assert after.x == pytest.approx(cursor.x)
        assert after.y == pytest.approx(cursor.y)


class TestMapping:
    """Tests for screen/logical conversion."""

    def test_round_trip(self, viewport):
        """Screen to logical and back is the identity."""
        viewport.set_zoom(1.7)
        viewport.pan_by(-80, 25)
        point = CanvasPoint(x=333, y=77)
        back = viewport.logical_to_screen(viewport.screen_to_logical(point))
        assert back.x == pytest.approx(point.x)
        assert back.y == pytest.approx(point.y)

    def test_visible_bounds(self, viewport):
        """At zoom 2 with no pan the viewport shows half the logical extent."""
        viewport.set_zoom(2, anchor=CanvasPoint(x=0, y=0))
        bounds = viewport.visible_bounds()
        assert (bounds.left, bounds.top) == (0, 0)
        assert (bounds.right, bounds.bottom) == (400, 300)

    def test_resize_rejects_non_positive(self, viewport):
        """Viewport size must stay positive."""
        with pytest.raises(ValueError):
            viewport.resize(0, 600)


class TestFitAndReset:
    """Tests for fit-to-screen and reset."""

    def test_fit_centers_content_inside_margin(self, viewport):
        """Fitted content is centered and clear of the margin."""
        viewport.fit_to_screen(Bounds(left=0, top=0, right=2000, bottom=1500))

        assert viewport.zoom == pytest.approx(500 / 1500)
        center = viewport.logical_to_screen(CanvasPoint(x=1000, y=750))
        assert center.x == pytest.approx(400)
        assert center.y == pytest.approx(300)

        top_left = viewport.logical_to_screen(CanvasPoint(x=0, y=0))
        bottom_right = viewport.logical_to_screen(CanvasPoint(x=2000, y=1500))
        assert top_left.x >= 50 - 1e-9 and top_left.y >= 50 - 1e-9
        assert bottom_right.x <= 750 + 1e-9 and bottom_right.y <= 550 + 1e-9

    def test_fit_never_enlarges(self, viewport):
        """Small content is shown at 100%."""
        viewport.fit_to_screen(CanvasBounds(left=10, top=10, right=110, bottom=60))
        assert viewport.zoom == 1.0

    def test_fit_ignores_empty_bounds(self, viewport):
        """Empty content leaves the view alone."""
        viewport.pan_by(10, 10)
        before = viewport.state
        viewport.fit_to_screen(CanvasBounds(left=0, top=0, right=0, bottom=0))
        assert viewport.state == before

    def test_reset_view(self, viewport):
        """Reset restores zoom 1 and no pan."""
        viewport.set_zoom(2.2)
        viewport.pan_by(15, 15)
        viewport.reset_view()
        assert viewport.zoom == 1.0
        assert (viewport.state.pan_x, viewport.state.pan_y) == (0.0, 0.0)
        assert not viewport.controls().can_reset

    def test_controls_follow_limits(self):
        """Zoom buttons are disabled at the limits."""
        viewport = ViewportController(min_zoom=0.5, max_zoom=2.0)
        viewport.set_zoom(0.5)
        controls = viewport.controls()
        assert not controls.can_zoom_out
        assert controls.can_zoom_in
        assert controls.can_reset
        assert controls.min_zoom == 0.5
