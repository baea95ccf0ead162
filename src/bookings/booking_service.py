from typing import Dict, List, Optional, Tuple
from datetime import datetime
from collections import Counter, defaultdict
import logging
import threading
import uuid

from src.bookings.schemas import (
    Booking, BookingSearchFilters, BookingSource, BookingStats, BookingStatus,
    CreateBookingDto, PaymentStatus, UpdateBookingStatusDto, UpdatePaymentStatusDto
)
from src.config import settings
from src.exceptions import (
    ExhibitionNotBookable, InvalidBookingTransition, NotFound, StallUnavailable
)
from src.exhibitions.registry import ExhibitionRegistry
from src.exhibitions.schemas import Exhibition
from src.layouts.schemas import StallStatus
from src.layouts.store import LayoutStore
from src.pricing.schemas import BookingCalculations, QuoteRequest, SelectedStall
from src.pricing.service import PricingEngine, ZERO, round2

logger = logging.getLogger(__name__)

# Allowed status changes; the stored status is the key
STATUS_TRANSITIONS = {
    BookingStatus.PENDING: {
        BookingStatus.CONFIRMED, BookingStatus.APPROVED,
        BookingStatus.REJECTED, BookingStatus.CANCELLED
    },
    BookingStatus.APPROVED: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.CANCELLED},
    BookingStatus.CANCELLED: set(),
    BookingStatus.REJECTED: set(),
}

RELEASING_STATUSES = {BookingStatus.CANCELLED, BookingStatus.REJECTED}

class BookingService:
    """Service for managing exhibition stall bookings"""

    def __init__(self, registry: ExhibitionRegistry, engine: Optional[PricingEngine] = None):
        self.registry = registry
        self.engine = engine or PricingEngine()
        self._booking_storage: Dict[str, Booking] = {}
        self._invoice_counters: Dict[Tuple[str, str, int], int] = defaultdict(int)
        self._lock = threading.Lock()

    def create(self, dto: CreateBookingDto, user_id: str) -> Booking:
        """
        Create a booking from a submitted selection.

        The submitted calculations are checked against a fresh recomputation
        of the base total and then stored unchanged.

        Raises:
            ExhibitionNotBookable: Exhibition is not published and active.
            NotFound: Some stall ids are not in the current layout.
            StallUnavailable: Some stalls are already booked or blocked.
            CalculationMismatch: Base total drifted beyond the tolerance.
        """
        exhibition = self.registry.get(dto.exhibition_id)
        if not exhibition.is_bookable:
            raise ExhibitionNotBookable(
                f"Exhibition {exhibition.id} is not available for booking"
            )

        # Availability check and booking must not interleave across requests
        with self._lock:
            store = self.registry.layout_store(exhibition.id)
            selected = self._selected_stalls(store, dto.stall_ids)
            recomputed = self.engine.calculate(
                selected,
                exhibition.pricing,
                public=dto.booking_source == BookingSource.PUBLIC,
                allow_empty=False
            )
            self.engine.verify_total_base(
                recomputed.total_base_amount, dto.calculations.total_base_amount
            )

            basic_amenities = self.engine.basic_amenity_quantities(
                exhibition.pricing.basic_amenities, self.engine.total_area(selected)
            )

            now = datetime.now()
            is_admin = dto.booking_source == BookingSource.ADMIN
            booking = Booking(
                id=str(uuid.uuid4()),
                exhibition_id=exhibition.id,
                stall_ids=list(dto.stall_ids),
                user_id=user_id,
                exhibitor_id=dto.exhibitor_id,
                customer_name=dto.customer_name,
                customer_email=dto.customer_email,
                customer_phone=dto.customer_phone,
                customer_address=dto.customer_address,
                customer_gstin=dto.customer_gstin,
                customer_pan=dto.customer_pan,
                company_name=dto.company_name,
                amount=dto.amount,
                basic_amenities=basic_amenities,
                extra_amenities=dto.extra_amenities,
                calculations=dto.calculations,
                status=BookingStatus.CONFIRMED if is_admin else BookingStatus.PENDING,
                booking_source=dto.booking_source,
                notes=dto.notes,
                special_requirements=dto.special_requirements,
                invoice_number=self._generate_invoice_number(exhibition, now),
                invoice_generated_at=now,
                approved_by=user_id if is_admin else None,
                approved_at=now if is_admin else None,
                created_at=now,
                updated_at=now
            )

            store.with_stall_statuses(booking.stall_ids, StallStatus.BOOKED)
            self._booking_storage[booking.id] = booking

            logger.info(
                "Created booking %s (%s) for %d stalls in exhibition %s, amount %s",
                booking.id, booking.invoice_number, len(booking.stall_ids),
                exhibition.id, booking.amount
            )
            return booking

    def quote(self, request: QuoteRequest) -> BookingCalculations:
        """Price stalls of an exhibition against its current layout and pricing"""

        exhibition = self.registry.get(request.exhibition_id)
        store = self.registry.layout_store(exhibition.id)
        selected = self._selected_stalls(store, request.stall_ids)
        return self.engine.calculate(selected, exhibition.pricing, public=request.public)

    def update_status(
        self,
        booking_id: str,
        dto: UpdateBookingStatusDto,
        user_id: Optional[str] = None
    ) -> Booking:
        """Move a booking through its workflow"""

        with self._lock:
            booking = self.get(booking_id)
            current = booking.status
            target = dto.status

            if target not in STATUS_TRANSITIONS[current]:
                raise InvalidBookingTransition(
                    f"Cannot change booking status from {current.value} to {target.value}"
                )

            now = datetime.now()
            if target == BookingStatus.APPROVED:
                booking.approved_by = user_id
                booking.approved_at = now
            elif target == BookingStatus.CANCELLED:
                booking.cancelled_by = user_id
                booking.cancelled_at = now
                booking.cancellation_reason = dto.cancellation_reason
            elif target == BookingStatus.REJECTED:
                booking.rejection_reason = dto.rejection_reason

            if target in RELEASING_STATUSES:
                self._release_stalls(booking)

            booking.status = target
            booking.updated_at = now

            logger.info("Booking %s moved from %s to %s", booking.id, current.value, target.value)
            return booking

    def update_payment_status(self, booking_id: str, dto: UpdatePaymentStatusDto) -> Booking:
        """Record a payment status change"""

        booking = self.get(booking_id)
        booking.payment_status = dto.payment_status
        if dto.payment_details is not None:
            booking.payment_details = dto.payment_details
        booking.updated_at = datetime.now()

        logger.info("Booking %s payment status is now %s", booking.id, dto.payment_status.value)
        return booking

    def get(self, booking_id: str) -> Booking:
        """Get booking by ID"""
        booking = self._booking_storage.get(booking_id)
        if booking is None:
            raise NotFound("Booking", [booking_id])
        return booking

    def list(self, filters: Optional[BookingSearchFilters] = None) -> List[Booking]:
        """List bookings, newest first"""

        bookings = list(self._booking_storage.values())
        if filters:
            bookings = self._apply_booking_filters(bookings, filters)
        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    def stats(self, exhibition_id: Optional[str] = None) -> BookingStats:
        """Booking counters and revenue, optionally for one exhibition"""

        bookings = self.list(BookingSearchFilters(exhibition_id=exhibition_id))

        by_status = Counter(b.status.value for b in bookings)
        by_payment_status = Counter(b.payment_status.value for b in bookings)
        by_source = Counter(b.booking_source.value for b in bookings)

        total_bookings = len(bookings)
        total_revenue = round2(sum((b.amount for b in bookings), ZERO))
        average = round2(total_revenue / total_bookings) if total_bookings else ZERO

        return BookingStats(
            total_bookings=total_bookings,
            total_revenue=total_revenue,
            total_stalls=sum(len(b.stall_ids) for b in bookings),
            average_booking_value=average,
            pending_bookings=by_status[BookingStatus.PENDING.value],
            confirmed_bookings=by_status[BookingStatus.CONFIRMED.value],
            approved_bookings=by_status[BookingStatus.APPROVED.value],
            rejected_bookings=by_status[BookingStatus.REJECTED.value],
            cancelled_bookings=by_status[BookingStatus.CANCELLED.value],
            pending_payments=by_payment_status[PaymentStatus.PENDING.value],
            paid_bookings=by_payment_status[PaymentStatus.PAID.value],
            by_status=dict(by_status),
            by_payment_status=dict(by_payment_status),
            by_source=dict(by_source)
        )

    def _selected_stalls(self, store: LayoutStore, stall_ids: List[str]) -> List[SelectedStall]:
        """Resolve stall ids against the live layout, rejecting unavailable stalls"""
        missing = [stall_id for stall_id in stall_ids if not store.has_stall(stall_id)]
        if missing:
            raise NotFound("Stall", missing)

        stalls = [store.get_stall(stall_id) for stall_id in stall_ids]
        unavailable = [stall for stall in stalls if not stall.is_available]
        if unavailable:
            raise StallUnavailable(
                [stall.id for stall in unavailable],
                [stall.stall_number for stall in unavailable]
            )

        return [
            SelectedStall(
                stall=stall,
                stall_type=store.find_stall_type(stall.stall_type_id),
                hall_name=store.get_hall(stall.hall_id).name
            )
            for stall in stalls
        ]

    def _release_stalls(self, booking: Booking):
        """Put a booking's stalls back on sale"""
        store = self.registry.layout_store(booking.exhibition_id)
        present = [stall_id for stall_id in booking.stall_ids if store.has_stall(stall_id)]
        if len(present) != len(booking.stall_ids):
            logger.warning(
                "Booking %s references stalls missing from the current layout", booking.id
            )
        if present:
            store.with_stall_statuses(present, StallStatus.AVAILABLE)

    def _generate_invoice_number(self, exhibition: Exhibition, when: datetime) -> str:
        """Sequential invoice number per exhibition, prefix and year"""
        prefix = exhibition.invoice_prefix or settings.DEFAULT_INVOICE_PREFIX
        key = (exhibition.id, prefix, when.year)
        self._invoice_counters[key] += 1
        return f"{prefix}/{when.year}/{self._invoice_counters[key]:04d}"

    def _apply_booking_filters(
        self,
        bookings: List[Booking],
        filters: BookingSearchFilters
    ) -> List[Booking]:
        """Apply search filters to booking list"""

        if filters.exhibition_id:
            bookings = [b for b in bookings if b.exhibition_id == filters.exhibition_id]

        if filters.status:
            bookings = [b for b in bookings if b.status == filters.status]

        if filters.payment_status:
            bookings = [b for b in bookings if b.payment_status == filters.payment_status]

        if filters.booking_source:
            bookings = [b for b in bookings if b.booking_source == filters.booking_source]

        if filters.date_from:
            bookings = [b for b in bookings if b.created_at.date() >= filters.date_from]

        if filters.date_to:
            bookings = [b for b in bookings if b.created_at.date() <= filters.date_to]

        if filters.search:
            term = filters.search.lower()
            bookings = [
                b for b in bookings
                if term in b.customer_name.lower()
                or term in b.company_name.lower()
                or term in b.customer_email.lower()
                or term in (b.invoice_number or "").lower()
            ]

        return bookings
