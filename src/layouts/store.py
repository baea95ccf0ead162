import logging
from typing import Dict, Iterable, List, Optional
from decimal import Decimal
from types import MappingProxyType

from src.exceptions import LayoutVersionConflict, NotFound
from src.geometry import validate_dimensions
from src.geometry.schemas import Point
from src.layouts.schemas import (
    Bounds, Hall, HallSummary, Layout, Stall, StallStatus, StallType
)

logger = logging.getLogger(__name__)

class LayoutHandle:
    """Read-only indexed view over one layout version"""

    def __init__(self, layout: Layout):
        self.layout = layout
        self.version = layout.version
        self.stalls = MappingProxyType({stall.id: stall for stall in layout.stalls})
        self.halls = MappingProxyType({hall.id: hall for hall in layout.halls})
        self.stall_types = MappingProxyType({st.id: st for st in layout.stall_types})

        by_hall: Dict[str, List[Stall]] = {hall.id: [] for hall in layout.halls}
        for stall in layout.stalls:
            by_hall.setdefault(stall.hall_id, []).append(stall)
        self.stalls_by_hall = MappingProxyType(
            {hall_id: tuple(stalls) for hall_id, stalls in by_hall.items()}
        )

class LayoutStore:
    """
    Holds the current layout snapshot of one exhibition.

    The snapshot never changes in place: ``load`` builds a complete
    ``LayoutHandle`` first and then swaps it in with a single assignment, so
    readers see either the old version or the new one.
    """

    def __init__(self, layout: Optional[Layout] = None):
        self._handle: Optional[LayoutHandle] = None
        if layout is not None:
            self.load(layout)

    def load(self, layout: Layout) -> LayoutHandle:
        """Replace the current snapshot with a newer version"""
        current = self._handle
        if current is not None and layout.version <= current.version:
            raise LayoutVersionConflict(current.version, layout.version)

        for stall in layout.stalls:
            validate_dimensions(stall.dimensions)

        handle = LayoutHandle(layout)
        self._handle = handle
        logger.info(
            "Loaded layout v%s for exhibition %s (%d halls, %d stalls)",
            layout.version, layout.exhibition_id, len(layout.halls), len(layout.stalls)
        )
        return handle

    @property
    def handle(self) -> LayoutHandle:
        if self._handle is None:
            raise NotFound("Layout", ["<not loaded>"])
        return self._handle

    @property
    def is_loaded(self) -> bool:
        return self._handle is not None

    @property
    def version(self) -> int:
        return self.handle.version

    @property
    def layout(self) -> Layout:
        return self.handle.layout

    def get_stall(self, stall_id: str) -> Stall:
        stall = self.handle.stalls.get(stall_id)
        if stall is None:
            raise NotFound("Stall", [stall_id])
        return stall

    def get_hall(self, hall_id: str) -> Hall:
        hall = self.handle.halls.get(hall_id)
        if hall is None:
            raise NotFound("Hall", [hall_id])
        return hall

    def get_stall_type(self, stall_type_id: str) -> StallType:
        stall_type = self.handle.stall_types.get(stall_type_id)
        if stall_type is None:
            raise NotFound("Stall type", [stall_type_id])
        return stall_type

    def find_stall_type(self, stall_type_id: str) -> Optional[StallType]:
        """Stall type by id, or None when the layout does not declare it"""
        return self.handle.stall_types.get(stall_type_id)

    def has_stall(self, stall_id: str) -> bool:
        return self._handle is not None and stall_id in self._handle.stalls

    def list_stalls_by_hall(self, hall_id: str) -> List[Stall]:
        handle = self.handle
        if hall_id not in handle.halls:
            raise NotFound("Hall", [hall_id])
        return list(handle.stalls_by_hall.get(hall_id, ()))

    def list_halls(self) -> List[Hall]:
        return list(self.handle.layout.halls)

    def list_stalls(self) -> List[Stall]:
        return list(self.handle.layout.stalls)

    def hall_summary(self, hall_id: str) -> HallSummary:
        """Hall with counts recomputed from stall statuses"""
        stalls = self.list_stalls_by_hall(hall_id)
        return HallSummary(
            hall=self.get_hall(hall_id),
            stall_count=len(stalls),
            available_stalls=sum(1 for stall in stalls if stall.is_available),
        )

    def stall_origin(self, stall_id: str) -> Point:
        """Absolute top-left corner of a stall in layout units"""
        stall = self.get_stall(stall_id)
        hall = self.handle.halls.get(stall.hall_id)
        if hall is None:
            return stall.position
        return Point(x=hall.position.x + stall.position.x, y=hall.position.y + stall.position.y)

    def content_bounds(self) -> Bounds:
        """Bounding box of every space and hall in layout units"""
        layout = self.handle.layout
        lefts, tops, rights, bottoms = [], [], [], []
        for space in layout.spaces:
            lefts.append(Decimal("0"))
            tops.append(Decimal("0"))
            rights.append(space.width)
            bottoms.append(space.height)
        for hall in layout.halls:
            lefts.append(hall.position.x)
            tops.append(hall.position.y)
            rights.append(hall.position.x + hall.size.width)
            bottoms.append(hall.position.y + hall.size.height)
        if not lefts:
            zero = Decimal("0")
            return Bounds(left=zero, top=zero, right=zero, bottom=zero)
        return Bounds(left=min(lefts), top=min(tops), right=max(rights), bottom=max(bottoms))

    def with_stall_statuses(self, stall_ids: Iterable[str], status: StallStatus) -> LayoutHandle:
        """Publish the next version with the given stalls set to ``status``"""
        handle = self.handle
        targets = set(stall_ids)
        missing = sorted(targets - set(handle.stalls))
        if missing:
            raise NotFound("Stall", missing)

        stalls = [
            stall.model_copy(update={"status": status}) if stall.id in targets else stall
            for stall in handle.layout.stalls
        ]
        next_layout = handle.layout.model_copy(
            update={"stalls": stalls, "version": handle.version + 1}
        )
        return self.load(next_layout)
