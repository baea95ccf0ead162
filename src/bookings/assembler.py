import logging
from typing import TYPE_CHECKING, Optional

from src.bookings.schemas import BookingFormData, BookingSource, CreateBookingDto
from src.exceptions import EmptySelection, StallUnavailable
from src.layouts.store import LayoutStore
from src.pricing.schemas import PricingConfig, SelectedStall
from src.pricing.service import PricingEngine

if TYPE_CHECKING:
    from src.viewer.selection import SelectionManager

logger = logging.getLogger(__name__)

class BookingAssembler:
    """Turns a stall selection and the booking form into a CreateBookingDto"""

    def __init__(self, store: LayoutStore, engine: Optional[PricingEngine] = None):
        self.store = store
        self.engine = engine or PricingEngine()

    def assemble(
        self,
        exhibition_id: str,
        selection: "SelectionManager",
        form: BookingFormData,
        config: PricingConfig,
        booking_source: BookingSource = BookingSource.PUBLIC,
        exhibitor_id: Optional[str] = None
    ) -> CreateBookingDto:
        """
        Build the submission payload from live layout data.

        Raises:
            EmptySelection: If nothing is selected.
            StallUnavailable: Naming every selected stall that is no longer
                available (booked, blocked or removed) in the live layout.
        """
        stall_ids = selection.selected_ids
        if not stall_ids:
            raise EmptySelection()

        # Last client-side staleness check before handing off
        stale = selection.revalidate()
        if stale:
            labels = [
                self.store.get_stall(stall_id).stall_number if self.store.has_stall(stall_id) else stall_id
                for stall_id in stale
            ]
            logger.warning("Stale stalls in selection: %s", ", ".join(labels))
            raise StallUnavailable(stale, labels)

        # Price from the live snapshot, keeping the session's per-stall overrides
        live_stalls = []
        for selected in selection.selected_stalls():
            stall = self.store.get_stall(selected.stall_id)
            live_stalls.append(SelectedStall(
                stall=stall,
                stall_type=self.store.find_stall_type(stall.stall_type_id),
                hall_name=self.store.get_hall(stall.hall_id).name,
                discount=selected.discount
            ))

        public = booking_source == BookingSource.PUBLIC
        calculations = self.engine.calculate(live_stalls, config, public=public, allow_empty=False)
        basic_amenities = self.engine.basic_amenity_quantities(
            config.basic_amenities, self.engine.total_area(live_stalls)
        )

        return CreateBookingDto(
            exhibition_id=exhibition_id,
            stall_ids=stall_ids,
            exhibitor_id=exhibitor_id,
            customer_name=form.customer_name,
            customer_email=form.customer_email,
            customer_phone=form.customer_phone,
            customer_address=form.customer_address,
            customer_gstin=form.customer_gstin,
            customer_pan=form.customer_pan,
            company_name=form.company_name,
            amount=calculations.total_amount,
            basic_amenities=basic_amenities,
            extra_amenities=form.extra_amenities,
            calculations=calculations,
            booking_source=booking_source,
            notes=form.notes,
            special_requirements=form.special_requirements
        )
