from fastapi import APIRouter, Depends, status, Query
from typing import List, Optional
from datetime import date

from src.bookings.schemas import (
    Booking, BookingSearchFilters, BookingSource, BookingStats, BookingStatus,
    CreateBookingDto, PaymentStatus, UpdateBookingStatusDto, UpdatePaymentStatusDto
)
from src.bookings.booking_service import BookingService
from src.dependencies import get_booking_service, get_user_id, http_error
from src.exceptions import BookingEngineError
from src.pricing.schemas import BookingCalculations, QuoteRequest

router = APIRouter()

# Pricing Endpoints
@router.post("/quote", response_model=BookingCalculations)
def quote_stalls(
    request: QuoteRequest,
    booking_service: BookingService = Depends(get_booking_service)
):
    """Price a set of stalls against the current layout"""

    try:
        return booking_service.quote(request)
    except BookingEngineError as e:
        raise http_error(e)

# Booking Management Endpoints
@router.post("", response_model=Booking, status_code=status.HTTP_201_CREATED)
def create_booking(
    dto: CreateBookingDto,
    user_id: str = Depends(get_user_id),
    booking_service: BookingService = Depends(get_booking_service)
):
    """Create a new booking"""

    try:
        return booking_service.create(dto, user_id)
    except BookingEngineError as e:
        raise http_error(e)

@router.get("", response_model=List[Booking])
def list_bookings(
    exhibition_id: Optional[str] = Query(None, alias="exhibitionId", description="Filter by exhibition"),
    booking_status: Optional[BookingStatus] = Query(None, alias="status", description="Filter by booking status"),
    payment_status: Optional[PaymentStatus] = Query(None, alias="paymentStatus", description="Filter by payment status"),
    booking_source: Optional[BookingSource] = Query(None, alias="bookingSource", description="Filter by booking source"),
    date_from: Optional[date] = Query(None, alias="dateFrom", description="Filter from date"),
    date_to: Optional[date] = Query(None, alias="dateTo", description="Filter to date"),
    search: Optional[str] = Query(None, description="Customer, company, email or invoice number"),
    limit: int = Query(50, ge=1, le=100, description="Maximum results"),
    booking_service: BookingService = Depends(get_booking_service)
):
    """Search bookings with filters"""

    filters = BookingSearchFilters(
        exhibition_id=exhibition_id,
        status=booking_status,
        payment_status=payment_status,
        booking_source=booking_source,
        date_from=date_from,
        date_to=date_to,
        search=search
    )
    return booking_service.list(filters)[:limit]

@router.get("/stats", response_model=BookingStats)
def get_booking_stats(
    exhibition_id: Optional[str] = Query(None, alias="exhibitionId", description="Limit to one exhibition"),
    booking_service: BookingService = Depends(get_booking_service)
):
    """Get booking counters and revenue"""
    return booking_service.stats(exhibition_id)

@router.get("/{booking_id}", response_model=Booking)
def get_booking(
    booking_id: str,
    booking_service: BookingService = Depends(get_booking_service)
):
    """Get booking details by ID"""

    try:
        return booking_service.get(booking_id)
    except BookingEngineError as e:
        raise http_error(e)

@router.patch("/{booking_id}/status", response_model=Booking)
def update_booking_status(
    booking_id: str,
    dto: UpdateBookingStatusDto,
    user_id: str = Depends(get_user_id),
    booking_service: BookingService = Depends(get_booking_service)
):
    """Approve, confirm, reject or cancel a booking"""

    try:
        return booking_service.update_status(booking_id, dto, user_id)
    except BookingEngineError as e:
        raise http_error(e)

@router.patch("/{booking_id}/payment", response_model=Booking)
def update_payment_status(
    booking_id: str,
    dto: UpdatePaymentStatusDto,
    booking_service: BookingService = Depends(get_booking_service)
):
    """Record a payment status change"""

    try:
        return booking_service.update_payment_status(booking_id, dto)
    except BookingEngineError as e:
        raise http_error(e)
