"""
Booking Module

This module turns a stall selection into a booking and manages the booking
afterwards. It includes:

- Assembling the submission payload from a live selection and form data
- Quoting stalls against the current layout and exhibition pricing
- Booking creation with stall re-validation and total verification
- Status workflow (approve, confirm, reject, cancel) with stall release
- Payment status tracking, search and statistics

Key Components:
- assembler.py: BookingAssembler building CreateBookingDto from a selection
- booking_service.py: Server-side booking management over the exhibition registry
- router.py: FastAPI endpoints for quotes and booking management
- schemas.py: Pydantic models for booking data structures

Features:
- Calculations are stored exactly as submitted and never recomputed
- Invoice numbers sequential per exhibition, prefix and year
- Cancelled and rejected bookings put their stalls back on sale
"""

from .router import router
from .assembler import BookingAssembler
from .booking_service import BookingService
from .schemas import (
    Booking, BookingFormData, BookingSearchFilters, BookingSource, BookingStats,
    BookingStatus, CreateBookingDto, PaymentDetails, PaymentStatus,
    UpdateBookingStatusDto, UpdatePaymentStatusDto
)

__all__ = [
    "router",
    "BookingAssembler",
    "BookingService",
    "Booking",
    "BookingFormData",
    "BookingSearchFilters",
    "BookingSource",
    "BookingStats",
    "BookingStatus",
    "CreateBookingDto",
    "PaymentDetails",
    "PaymentStatus",
    "UpdateBookingStatusDto",
    "UpdatePaymentStatusDto"
]
