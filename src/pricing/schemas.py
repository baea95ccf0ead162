from pydantic import Field
from typing import List, Optional
from decimal import Decimal
from enum import Enum

from src.geometry.schemas import StallDimensions
from src.layouts.schemas import Stall, StallType
from src.schemas import CamelModel, FrozenCamelModel

class DiscountType(str, Enum):
    """Discount type enumeration"""
    PERCENTAGE = "percentage"
    FIXED = "fixed"

# Exhibition pricing configuration
class TaxConfig(FrozenCamelModel):
    """A tax line configured on an exhibition"""
    name: str
    rate: Decimal = Field(..., ge=0)
    is_active: bool = True

class DiscountConfig(FrozenCamelModel):
    """A discount configured on an exhibition"""
    name: str
    type: DiscountType
    value: Decimal = Field(..., ge=0)
    is_active: bool = True

class StallRate(FrozenCamelModel):
    """Exhibition-specific rate per square meter for a stall type"""
    stall_type_id: str
    rate: Decimal = Field(..., ge=0)

class BasicAmenity(FrozenCamelModel):
    """Amenity included with every booking, scaled by booked area"""
    name: str
    type: str
    per_sqm: Decimal = Field(..., ge=0)
    quantity: int = 0
    description: Optional[str] = None

class PricingConfig(FrozenCamelModel):
    """Read-only pricing input attached to an exhibition"""
    tax_config: Optional[List[TaxConfig]] = None  # None means "use the default tax"
    discount_config: List[DiscountConfig] = []
    public_discount_config: List[DiscountConfig] = []
    stall_rates: List[StallRate] = []
    basic_amenities: List[BasicAmenity] = []

# Engine input
class SelectedStall(FrozenCamelModel):
    """Denormalized copy of a selected stall, as handed to the pricing engine"""
    stall: Stall
    stall_type: Optional[StallType] = None
    hall_name: str = ""
    discount: Optional[DiscountConfig] = None  # per-stall override

    @property
    def stall_id(self) -> str:
        return self.stall.id

# Engine output
class BookingDiscount(FrozenCamelModel):
    """Discount applied to a single stall"""
    name: str
    type: DiscountType
    value: Decimal
    amount: Decimal

class AppliedDiscount(FrozenCamelModel):
    """Discount applied to the booking, with its total reduction"""
    name: str
    type: DiscountType
    value: Decimal
    amount: Decimal

class StallCalculation(FrozenCamelModel):
    """Itemized price of one stall"""
    stall_id: str
    number: str
    base_amount: Decimal
    area: Decimal
    rate_per_sqm: Decimal
    dimensions: StallDimensions
    discount: Optional[BookingDiscount] = None
    amount_after_discount: Decimal

class TaxCalculation(FrozenCamelModel):
    """One tax line computed on the discounted total"""
    name: str
    rate: Decimal
    amount: Decimal

class BookingCalculations(FrozenCamelModel):
    """Deterministic, itemized price breakdown for a set of stalls"""
    stalls: List[StallCalculation] = []
    total_base_amount: Decimal = Decimal("0.00")
    total_discount_amount: Decimal = Decimal("0.00")
    applied_discounts: List[AppliedDiscount] = []
    total_amount_after_discount: Decimal = Decimal("0.00")
    taxes: List[TaxCalculation] = []
    total_tax_amount: Decimal = Decimal("0.00")
    total_amount: Decimal = Decimal("0.00")

# Amenities
class BasicAmenityBooking(CamelModel):
    """Basic amenity with the quantity earned by the booked area"""
    name: str
    type: str
    per_sqm: Decimal
    quantity: int = 0
    calculated_quantity: Decimal
    description: Optional[str] = None

class ExtraAmenityBooking(CamelModel):
    """Paid extra amenity chosen by the exhibitor"""
    id: str
    name: str
    type: str
    rate: Decimal = Field(..., ge=0)
    quantity: int = Field(1, ge=1)
    description: Optional[str] = None

# API
class QuoteRequest(CamelModel):
    """Request to price a set of stalls of an exhibition"""
    exhibition_id: str
    stall_ids: List[str]
    public: bool = True
