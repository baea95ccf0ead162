import logging
from typing import Callable, Dict, List, Optional
from decimal import Decimal

from src.exceptions import NotFound, StallUnavailable
from src.geometry import bounding_size, component_rects
from src.geometry.schemas import LShapeDimensions
from src.layouts.schemas import Stall
from src.layouts.store import LayoutStore
from src.pricing.schemas import DiscountConfig, PricingConfig, SelectedStall
from src.pricing.service import PricingEngine
from src.viewer.schemas import (
    CanvasPoint, CanvasSize, SelectionFilters, StallRenderInfo
)
from src.viewer.viewport import ViewportController

logger = logging.getLogger(__name__)

SelectionListener = Callable[["SelectionManager"], None]

class SelectionManager:
    """
    Stall selection and hover state of one browsing session.

    The manager keeps stall ids (in selection order) plus a denormalized
    copy of each selected stall for display. Availability is always read
    from the live ``LayoutStore``, never from the copy.
    """

    def __init__(
        self,
        store: LayoutStore,
        viewport: ViewportController,
        filters: Optional[SelectionFilters] = None,
        engine: Optional[PricingEngine] = None
    ):
        self._store = store
        self._viewport = viewport
        self._engine = engine or PricingEngine()
        self._selected: Dict[str, SelectedStall] = {}
        self._hovered: Optional[str] = None
        self._listeners: List[SelectionListener] = []
        self.filters = filters or SelectionFilters()

    # Listeners
    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Call ``listener`` after every successful selection change; returns an unsubscribe function"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)

    # Transitions
    def select(self, stall_id: str) -> None:
        stall = self._store.get_stall(stall_id)
        if not stall.is_available:
            logger.warning("Rejected selection of stall %s: %s", stall.stall_number, stall.status.value)
            raise StallUnavailable([stall_id], [stall.stall_number])

        if stall_id not in self._selected:
            self._selected[stall_id] = self._denormalize(stall)
            logger.debug("Selected stall %s", stall.stall_number)
        self._notify()

    def deselect(self, stall_id: str) -> None:
        if self._selected.pop(stall_id, None) is not None:
            logger.debug("Deselected stall %s", stall_id)
        self._notify()

    def toggle(self, stall_id: str) -> bool:
        """Flip selection of a stall; returns whether it is selected afterwards"""
        if stall_id in self._selected:
            self.deselect(stall_id)
            return False
        self.select(stall_id)
        return True

    def clear_selection(self) -> None:
        self._selected.clear()
        self._notify()

    def set_stall_discount(self, stall_id: str, discount: Optional[DiscountConfig]) -> None:
        """Attach (or clear) a per-stall discount override on a selected stall"""
        selected = self._selected.get(stall_id)
        if selected is None:
            raise NotFound("Selected stall", [stall_id])
        self._selected[stall_id] = selected.model_copy(update={"discount": discount})
        self._notify()

    def set_hovered(self, stall_id: Optional[str]) -> None:
        if stall_id is not None and not self._store.has_stall(stall_id):
            raise NotFound("Stall", [stall_id])
        self._hovered = stall_id

    def _denormalize(self, stall: Stall) -> SelectedStall:
        stall_type = self._store.find_stall_type(stall.stall_type_id)
        hall = self._store.get_hall(stall.hall_id)
        return SelectedStall(stall=stall, stall_type=stall_type, hall_name=hall.name)

    # Queries
    @property
    def selected_ids(self) -> List[str]:
        return list(self._selected)

    @property
    def hovered_id(self) -> Optional[str]:
        return self._hovered

    @property
    def has_selection(self) -> bool:
        return bool(self._selected)

    def selected_stalls(self) -> List[SelectedStall]:
        return list(self._selected.values())

    def is_selected(self, stall_id: str) -> bool:
        return stall_id in self._selected

    def is_hovered(self, stall_id: str) -> bool:
        return self._hovered == stall_id

    def is_available(self, stall_id: str) -> bool:
        return self._store.has_stall(stall_id) and self._store.get_stall(stall_id).is_available

    def revalidate(self) -> List[str]:
        """Selected ids that are no longer available in the live layout"""
        return [stall_id for stall_id in self._selected if not self.is_available(stall_id)]

    # Hit-testing
    def stall_at(self, screen_point: CanvasPoint) -> Optional[str]:
        """Id of the top-most stall under a screen point"""
        if not self._store.is_loaded:
            return None
        logical = self._viewport.screen_to_logical(screen_point)

        # Later stalls are drawn on top
        for stall in reversed(self._store.list_stalls()):
            origin = self._store.stall_origin(stall.id)
            local_x = logical.x - float(origin.x)
            local_y = logical.y - float(origin.y)
            width = float(stall.size.width)
            height = float(stall.size.height)
            if not (0 <= local_x <= width and 0 <= local_y <= height):
                continue
            if isinstance(stall.dimensions, LShapeDimensions) and not self._inside_l_shape(stall, local_x, local_y):
                continue
            return stall.id
        return None

    def _inside_l_shape(self, stall: Stall, local_x: float, local_y: float) -> bool:
        box = bounding_size(stall.dimensions)
        scale_x = float(stall.size.width) / float(box.width)
        scale_y = float(stall.size.height) / float(box.height)
        for rect in component_rects(stall.dimensions):
            left = float(rect.x) * scale_x
            top = float(rect.y) * scale_y
            if (left <= local_x <= left + float(rect.width) * scale_x
                    and top <= local_y <= top + float(rect.height) * scale_y):
                return True
        return False

    def click(self, screen_point: CanvasPoint) -> Optional[str]:
        """Toggle the stall under a screen point; returns its id, or None on background"""
        stall_id = self.stall_at(screen_point)
        if stall_id is not None:
            self.toggle(stall_id)
        return stall_id

    def hover_at(self, screen_point: CanvasPoint) -> Optional[str]:
        stall_id = self.stall_at(screen_point)
        self.set_hovered(stall_id)
        return stall_id

    # Rendering
    def render_info(self, stall_id: str) -> StallRenderInfo:
        stall = self._store.get_stall(stall_id)
        handle = self._store.handle
        origin = self._store.stall_origin(stall_id)
        zoom = self._viewport.zoom
        return StallRenderInfo(
            stall=stall,
            stall_type=handle.stall_types.get(stall.stall_type_id),
            hall=handle.halls.get(stall.hall_id),
            is_selected=self.is_selected(stall_id),
            is_hovered=self.is_hovered(stall_id),
            is_available=stall.is_available,
            display_position=self._viewport.logical_to_screen(
                CanvasPoint(x=float(origin.x), y=float(origin.y))
            ),
            display_size=CanvasSize(
                width=float(stall.size.width) * zoom,
                height=float(stall.size.height) * zoom
            )
        )

    def render_infos(self, filtered: bool = False) -> List[StallRenderInfo]:
        stalls = self.filtered_stalls() if filtered else self._store.list_stalls()
        return [self.render_info(stall.id) for stall in stalls]

    # Filters
    def set_filters(self, **changes) -> SelectionFilters:
        self.filters = self.filters.model_copy(update=changes)
        return self.filters

    def list_price(self, stall: Stall) -> Decimal:
        """Price of a stall at its own rate, else its type's default rate"""
        rate = self._engine.resolve_rate(self._denormalize(stall), PricingConfig())
        return self._engine.stall_total_price(stall, rate)

    def filtered_stalls(self) -> List[Stall]:
        stalls = self._store.list_stalls()
        filters = self.filters

        if filters.available_only:
            stalls = [stall for stall in stalls if stall.is_available]

        if filters.stall_type_id:
            stalls = [stall for stall in stalls if stall.stall_type_id == filters.stall_type_id]

        if filters.price_range:
            min_price, max_price = filters.price_range
            stalls = [stall for stall in stalls if min_price <= self.list_price(stall) <= max_price]

        return stalls
