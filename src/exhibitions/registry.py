import logging
from typing import Dict, List

from src.exceptions import NotFound
from src.exhibitions.schemas import Exhibition, ExhibitionUpsert
from src.layouts.schemas import Layout
from src.layouts.store import LayoutHandle, LayoutStore

logger = logging.getLogger(__name__)

class ExhibitionRegistry:
    """In-memory registry of exhibitions and their layout stores"""

    def __init__(self):
        self._exhibitions: Dict[str, Exhibition] = {}
        self._stores: Dict[str, LayoutStore] = {}

    def register(self, exhibition_id: str, data: ExhibitionUpsert) -> Exhibition:
        """Create or replace an exhibition's metadata and pricing"""
        store = self._stores.setdefault(exhibition_id, LayoutStore())
        exhibition = Exhibition(
            id=exhibition_id,
            layout_version=store.version if store.is_loaded else None,
            **data.model_dump()
        )
        self._exhibitions[exhibition_id] = exhibition
        logger.info("Registered exhibition %s (%s)", exhibition_id, exhibition.status.value)
        return exhibition

    def get(self, exhibition_id: str) -> Exhibition:
        exhibition = self._exhibitions.get(exhibition_id)
        if exhibition is None:
            raise NotFound("Exhibition", [exhibition_id])
        store = self._stores[exhibition_id]
        version = store.version if store.is_loaded else None
        if exhibition.layout_version != version:
            exhibition = exhibition.model_copy(update={"layout_version": version})
            self._exhibitions[exhibition_id] = exhibition
        return exhibition

    def list(self) -> List[Exhibition]:
        return [self.get(exhibition_id) for exhibition_id in self._exhibitions]

    def layout_store(self, exhibition_id: str) -> LayoutStore:
        self.get(exhibition_id)
        return self._stores[exhibition_id]

    def load_layout(self, exhibition_id: str, layout: Layout) -> LayoutHandle:
        if layout.exhibition_id != exhibition_id:
            raise ValueError("Layout belongs to a different exhibition")
        return self.layout_store(exhibition_id).load(layout)
