import logging
from typing import Optional, Union

from src.config import settings
from src.layouts.schemas import Bounds
from src.viewer.schemas import CanvasBounds, CanvasPoint, CanvasViewport, LayoutControls

logger = logging.getLogger(__name__)

class ViewportController:
    """
    Zoom and pan state of one layout canvas.

    Screen and logical coordinates are related by
    ``logical = (screen - pan) / zoom``. Zooming keeps the logical point under
    the viewport center where it is, unless the caller passes another anchor
    (for example the cursor position of a wheel event).
    """

    def __init__(
        self,
        width: Optional[float] = None,
        height: Optional[float] = None,
        min_zoom: Optional[float] = None,
        max_zoom: Optional[float] = None,
        zoom_step: Optional[float] = None,
        fit_margin: Optional[float] = None
    ):
        self.min_zoom = min_zoom if min_zoom is not None else settings.MIN_ZOOM
        self.max_zoom = max_zoom if max_zoom is not None else settings.MAX_ZOOM
        self.zoom_step = zoom_step if zoom_step is not None else settings.ZOOM_STEP
        self.fit_margin = fit_margin if fit_margin is not None else settings.FIT_MARGIN
        self._state = CanvasViewport(
            zoom=self._clamp(1.0),
            width=width if width is not None else settings.DEFAULT_VIEWPORT_WIDTH,
            height=height if height is not None else settings.DEFAULT_VIEWPORT_HEIGHT
        )

    @property
    def state(self) -> CanvasViewport:
        return self._state

    @property
    def zoom(self) -> float:
        return self._state.zoom

    @property
    def center(self) -> CanvasPoint:
        return CanvasPoint(x=self._state.width / 2, y=self._state.height / 2)

    def _clamp(self, zoom: float) -> float:
        return min(max(zoom, self.min_zoom), self.max_zoom)

    def _update(self, **changes) -> CanvasViewport:
        self._state = self._state.model_copy(update=changes)
        return self._state

    # Coordinate mapping
    def screen_to_logical(self, point: CanvasPoint) -> CanvasPoint:
        state = self._state
        return CanvasPoint(
            x=(point.x - state.pan_x) / state.zoom,
            y=(point.y - state.pan_y) / state.zoom
        )

    def logical_to_screen(self, point: CanvasPoint) -> CanvasPoint:
        state = self._state
        return CanvasPoint(
            x=point.x * state.zoom + state.pan_x,
            y=point.y * state.zoom + state.pan_y
        )

    def visible_bounds(self) -> CanvasBounds:
        """Logical region currently on screen"""
        top_left = self.screen_to_logical(CanvasPoint(x=0, y=0))
        bottom_right = self.screen_to_logical(
            CanvasPoint(x=self._state.width, y=self._state.height)
        )
        return CanvasBounds(
            left=top_left.x, top=top_left.y, right=bottom_right.x, bottom=bottom_right.y
        )

    # Zoom
    def set_zoom(self, zoom: float, anchor: Optional[CanvasPoint] = None) -> CanvasViewport:
        """Change zoom while the logical point under ``anchor`` stays on screen at ``anchor``"""
        new_zoom = self._clamp(zoom)
        anchor = anchor or self.center
        logical = self.screen_to_logical(anchor)
        return self._update(
            zoom=new_zoom,
            pan_x=anchor.x - logical.x * new_zoom,
            pan_y=anchor.y - logical.y * new_zoom
        )

    def zoom_in(self, anchor: Optional[CanvasPoint] = None) -> CanvasViewport:
        return self.set_zoom(self._state.zoom * self.zoom_step, anchor)

    def zoom_out(self, anchor: Optional[CanvasPoint] = None) -> CanvasViewport:
        return self.set_zoom(self._state.zoom / self.zoom_step, anchor)

    # Pan and size
    def pan_by(self, dx: float, dy: float) -> CanvasViewport:
        return self._update(pan_x=self._state.pan_x + dx, pan_y=self._state.pan_y + dy)

    def resize(self, width: float, height: float) -> CanvasViewport:
        if width <= 0 or height <= 0:
            raise ValueError("Viewport size must be positive")
        return self._update(width=width, height=height)

    def reset_view(self) -> CanvasViewport:
        return self._update(zoom=self._clamp(1.0), pan_x=0.0, pan_y=0.0)

    def fit_to_screen(self, content_bounds: Union[Bounds, CanvasBounds]) -> CanvasViewport:
        """Zoom and center so the whole content box is visible inside the margin"""
        left = float(content_bounds.left)
        top = float(content_bounds.top)
        content_width = float(content_bounds.right) - left
        content_height = float(content_bounds.bottom) - top
        if content_width <= 0 or content_height <= 0:
            return self._state

        state = self._state
        available_width = max(state.width - self.fit_margin * 2, 1.0)
        available_height = max(state.height - self.fit_margin * 2, 1.0)

        # Never scale content beyond 100%
        zoom = self._clamp(min(available_width / content_width, available_height / content_height, 1.0))
        pan_x = (state.width - content_width * zoom) / 2 - left * zoom
        pan_y = (state.height - content_height * zoom) / 2 - top * zoom

        logger.debug("Fit %sx%s content at zoom %.3f", content_width, content_height, zoom)
        return self._update(zoom=zoom, pan_x=pan_x, pan_y=pan_y)

    def controls(self) -> LayoutControls:
        state = self._state
        return LayoutControls(
            can_zoom_in=state.zoom < self.max_zoom,
            can_zoom_out=state.zoom > self.min_zoom,
            can_reset=state.zoom != 1.0 or state.pan_x != 0.0 or state.pan_y != 0.0,
            zoom_level=state.zoom,
            min_zoom=self.min_zoom,
            max_zoom=self.max_zoom
        )
