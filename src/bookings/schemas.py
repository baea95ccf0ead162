from pydantic import Field, validator
from typing import Dict, List, Optional
from datetime import datetime, date
from decimal import Decimal
from enum import Enum

from src.pricing.schemas import (
    BasicAmenityBooking, BookingCalculations, ExtraAmenityBooking
)
from src.schemas import CamelModel

class BookingStatus(str, Enum):
    """Booking status enumeration"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    APPROVED = "approved"
    REJECTED = "rejected"

class PaymentStatus(str, Enum):
    """Payment status enumeration"""
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    PARTIAL = "partial"

class BookingSource(str, Enum):
    """Who created the booking"""
    ADMIN = "admin"
    EXHIBITOR = "exhibitor"
    PUBLIC = "public"

# Customer Information
class BookingFormData(CamelModel):
    """Customer fields entered on the booking form"""
    customer_name: str = Field(..., min_length=1)
    customer_email: str
    customer_phone: str
    customer_address: str
    customer_gstin: Optional[str] = Field(None, alias="customerGSTIN")
    customer_pan: Optional[str] = Field(None, alias="customerPAN")
    company_name: str
    notes: Optional[str] = None
    special_requirements: Optional[str] = None
    extra_amenities: List[ExtraAmenityBooking] = []

    @validator('customer_email')
    def validate_email(cls, v):
        if '@' not in v:
            raise ValueError('Customer email must be a valid email address')
        return v

# Booking Request Models
class CreateBookingDto(CamelModel):
    """Submittable booking payload"""
    exhibition_id: str
    stall_ids: List[str]
    exhibitor_id: Optional[str] = None
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    customer_gstin: Optional[str] = Field(None, alias="customerGSTIN")
    customer_pan: Optional[str] = Field(None, alias="customerPAN")
    company_name: str
    amount: Decimal
    basic_amenities: List[BasicAmenityBooking] = []
    extra_amenities: List[ExtraAmenityBooking] = []
    calculations: BookingCalculations
    booking_source: BookingSource = BookingSource.PUBLIC
    notes: Optional[str] = None
    special_requirements: Optional[str] = None

    @validator('stall_ids')
    def validate_stall_ids(cls, v):
        if not v:
            raise ValueError('At least one stall is required')
        if len(set(v)) != len(v):
            raise ValueError('Stall ids must be unique')
        return v

class UpdateBookingStatusDto(CamelModel):
    """Request to move a booking through its workflow"""
    status: BookingStatus
    rejection_reason: Optional[str] = None
    cancellation_reason: Optional[str] = None

class PaymentDetails(CamelModel):
    """Payment record attached to a booking"""
    method: str
    transaction_id: Optional[str] = None
    paid_at: datetime = Field(default_factory=datetime.now)
    gateway: Optional[str] = None
    reference: Optional[str] = None

class UpdatePaymentStatusDto(CamelModel):
    """Request to change the payment status of a booking"""
    payment_status: PaymentStatus
    payment_details: Optional[PaymentDetails] = None

# Booking Response Models
class Booking(CamelModel):
    """Booking with its frozen price breakdown"""
    id: str
    exhibition_id: str
    stall_ids: List[str]
    user_id: str
    exhibitor_id: Optional[str] = None
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    customer_gstin: Optional[str] = Field(None, alias="customerGSTIN")
    customer_pan: Optional[str] = Field(None, alias="customerPAN")
    company_name: str
    amount: Decimal
    basic_amenities: List[BasicAmenityBooking] = []
    extra_amenities: List[ExtraAmenityBooking] = []
    calculations: BookingCalculations
    status: BookingStatus = BookingStatus.PENDING
    rejection_reason: Optional[str] = None
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_details: Optional[PaymentDetails] = None
    booking_source: BookingSource = BookingSource.PUBLIC
    notes: Optional[str] = None
    special_requirements: Optional[str] = None
    invoice_number: Optional[str] = None
    invoice_generated_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    cancelled_by: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

class BookingSearchFilters(CamelModel):
    """Booking list filters"""
    exhibition_id: Optional[str] = None
    status: Optional[BookingStatus] = None
    payment_status: Optional[PaymentStatus] = None
    booking_source: Optional[BookingSource] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    search: Optional[str] = None

class BookingStats(CamelModel):
    """Booking counters and revenue"""
    total_bookings: int
    total_revenue: Decimal
    total_stalls: int
    average_booking_value: Decimal
    pending_bookings: int
    confirmed_bookings: int
    approved_bookings: int
    rejected_bookings: int
    cancelled_bookings: int
    pending_payments: int
    paid_bookings: int
    by_status: Dict[str, int] = {}
    by_payment_status: Dict[str, int] = {}
    by_source: Dict[str, int] = {}
