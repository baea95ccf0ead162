import logging
from typing import Optional

from src.bookings.assembler import BookingAssembler
from src.bookings.schemas import BookingFormData, BookingSource, CreateBookingDto
from src.layouts.store import LayoutStore
from src.pricing.schemas import BookingCalculations, PricingConfig
from src.pricing.service import PricingEngine
from src.viewer.selection import SelectionManager
from src.viewer.viewport import ViewportController

logger = logging.getLogger(__name__)

class LayoutViewerSession:
    """
    One exhibitor's browsing session over a layout.

    Owns its viewport and selection; every successful selection change
    recomputes ``calculations`` before the mutating call returns.
    """

    def __init__(
        self,
        exhibition_id: str,
        store: LayoutStore,
        config: PricingConfig,
        viewport: Optional[ViewportController] = None,
        engine: Optional[PricingEngine] = None,
        booking_source: BookingSource = BookingSource.PUBLIC,
        selection: Optional[SelectionManager] = None
    ):
        self.exhibition_id = exhibition_id
        self.store = store
        self.config = config
        self.booking_source = booking_source
        self.engine = engine or PricingEngine()
        self.viewport = viewport or ViewportController()
        self.selection = selection or SelectionManager(store, self.viewport, engine=self.engine)
        self.assembler = BookingAssembler(store, self.engine)
        self._calculations = self._recalculate()
        self.selection.subscribe(self._on_selection_changed)

    @property
    def calculations(self) -> BookingCalculations:
        return self._calculations

    @property
    def is_public(self) -> bool:
        return self.booking_source == BookingSource.PUBLIC

    def _recalculate(self) -> BookingCalculations:
        return self.engine.calculate(
            self.selection.selected_stalls(), self.config, public=self.is_public
        )

    def _on_selection_changed(self, selection: SelectionManager):
        self._calculations = self._recalculate()
        logger.debug(
            "Recalculated %d stalls, total %s",
            len(selection.selected_ids), self._calculations.total_amount
        )

    def fit_to_screen(self):
        return self.viewport.fit_to_screen(self.store.content_bounds())

    def assemble_booking(self, form: BookingFormData, exhibitor_id: Optional[str] = None) -> CreateBookingDto:
        return self.assembler.assemble(
            self.exhibition_id,
            self.selection,
            form,
            self.config,
            booking_source=self.booking_source,
            exhibitor_id=exhibitor_id
        )
