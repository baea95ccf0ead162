"""
Pricing Module

Booking price calculation for exhibition stalls:

- service.py: PricingEngine computing areas, base amounts, the single best
  discount, tax lines and totals, plus amenity quantities and the
  server-side calculation check
- schemas.py: Pydantic models for pricing configuration and the itemized
  BookingCalculations result
"""

from .service import PricingEngine, round2
from .schemas import (
    DiscountType, TaxConfig, DiscountConfig, StallRate, BasicAmenity,
    PricingConfig, SelectedStall, BookingDiscount, AppliedDiscount,
    StallCalculation, TaxCalculation, BookingCalculations,
    BasicAmenityBooking, ExtraAmenityBooking, QuoteRequest
)

__all__ = [
    "PricingEngine",
    "round2",
    "DiscountType",
    "TaxConfig",
    "DiscountConfig",
    "StallRate",
    "BasicAmenity",
    "PricingConfig",
    "SelectedStall",
    "BookingDiscount",
    "AppliedDiscount",
    "StallCalculation",
    "TaxCalculation",
    "BookingCalculations",
    "BasicAmenityBooking",
    "ExtraAmenityBooking",
    "QuoteRequest"
]
