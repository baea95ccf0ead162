import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from decimal import Decimal, ROUND_HALF_UP

from src.config import settings
from src.exceptions import CalculationMismatch, EmptySelection
from src.geometry import area as stall_area
from src.layouts.schemas import Stall
from src.pricing.schemas import (
    AppliedDiscount, BasicAmenity, BasicAmenityBooking, BookingCalculations,
    BookingDiscount, DiscountConfig, DiscountType, ExtraAmenityBooking,
    PricingConfig, SelectedStall, StallCalculation, TaxCalculation, TaxConfig
)

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

def round2(value) -> Decimal:
    """Round a monetary value half-up to two decimal places"""
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

class PricingEngine:
    """
    Service for pricing a selection of stalls.

    ``calculate`` is a pure function of its arguments: the engine keeps no
    state between calls, and every monetary value is rounded as soon as it is
    produced so the same input always yields the same ``BookingCalculations``.
    """

    def __init__(
        self,
        default_rate: Optional[Decimal] = None,
        default_tax_name: Optional[str] = None,
        default_tax_rate: Optional[Decimal] = None,
        tolerance: Optional[Decimal] = None
    ):
        self.default_rate = default_rate if default_rate is not None else settings.DEFAULT_RATE_PER_SQM
        self.default_tax_name = default_tax_name or settings.DEFAULT_TAX_NAME
        self.default_tax_rate = default_tax_rate if default_tax_rate is not None else settings.DEFAULT_TAX_RATE
        self.tolerance = tolerance if tolerance is not None else settings.CALCULATION_TOLERANCE

    def calculate(
        self,
        selected_stalls: Sequence[SelectedStall],
        config: PricingConfig,
        public: bool = False,
        allow_empty: bool = True
    ) -> BookingCalculations:
        """Calculate the full price breakdown for the selected stalls"""

        if not selected_stalls and not allow_empty:
            raise EmptySelection()

        # Step 1: area and base amount per stall
        priced = []
        for selected in selected_stalls:
            area = stall_area(selected.stall.dimensions)
            rate = self.resolve_rate(selected, config)
            priced.append((selected, area, rate, round2(area * rate)))

        # Step 2: discounts
        discounts = config.public_discount_config if public else config.discount_config
        reductions, applied = self._calculate_discounts(
            [(selected.discount, base) for selected, _, _, base in priced],
            [d for d in discounts if d.is_active]
        )

        stall_calculations = []
        for (selected, area, rate, base), (discount, amount) in zip(priced, reductions):
            stall_calculations.append(StallCalculation(
                stall_id=selected.stall.id,
                number=selected.stall.stall_number,
                base_amount=base,
                area=area,
                rate_per_sqm=rate,
                dimensions=selected.stall.dimensions,
                discount=BookingDiscount(
                    name=discount.name,
                    type=discount.type,
                    value=discount.value,
                    amount=amount
                ) if discount is not None else None,
                amount_after_discount=round2(base - amount)
            ))

        # Step 3: aggregate totals
        total_base_amount = sum((c.base_amount for c in stall_calculations), ZERO)
        total_after_discount = sum((c.amount_after_discount for c in stall_calculations), ZERO)
        total_discount_amount = round2(total_base_amount - total_after_discount)

        # Step 4: taxes on the discounted total, never on each other
        taxes = self._calculate_taxes(config, total_after_discount)
        total_tax_amount = sum((tax.amount for tax in taxes), ZERO)

        calculations = BookingCalculations(
            stalls=stall_calculations,
            total_base_amount=round2(total_base_amount),
            total_discount_amount=total_discount_amount,
            applied_discounts=applied,
            total_amount_after_discount=round2(total_after_discount),
            taxes=taxes,
            total_tax_amount=round2(total_tax_amount),
            total_amount=round2(total_after_discount + total_tax_amount)
        )

        logger.debug(
            "Priced %d stalls: base=%s discount=%s tax=%s total=%s",
            len(stall_calculations), calculations.total_base_amount,
            calculations.total_discount_amount, calculations.total_tax_amount,
            calculations.total_amount
        )
        return calculations

    def resolve_rate(self, selected: SelectedStall, config: PricingConfig) -> Decimal:
        """
        Rate per square meter for a stall.

        Exhibition stall-type rates win over the rate stored on the stall,
        which wins over the stall type's default rate.
        """
        stall = selected.stall
        for stall_rate in config.stall_rates:
            if stall_rate.stall_type_id == stall.stall_type_id:
                return stall_rate.rate
        if stall.rate_per_sqm is not None and stall.rate_per_sqm > 0:
            return stall.rate_per_sqm
        if selected.stall_type is not None and selected.stall_type.default_rate:
            return selected.stall_type.default_rate
        return self.default_rate

    def _calculate_discounts(
        self,
        stalls: List[Tuple[Optional[DiscountConfig], Decimal]],
        active_discounts: List[DiscountConfig]
    ) -> Tuple[List[Tuple[Optional[DiscountConfig], Decimal]], List[AppliedDiscount]]:
        """Pick one discount per stall and return (discount, amount) pairs plus the applied list"""

        # Inactive overrides count as absent
        stalls = [
            (override if override is not None and override.is_active else None, base)
            for override, base in stalls
        ]
        reductions: List[Tuple[Optional[DiscountConfig], Decimal]] = [(None, ZERO)] * len(stalls)
        applied: List[AppliedDiscount] = []

        # Exhibition discount: best single discount over stalls without an override
        eligible = [i for i, (override, _) in enumerate(stalls) if override is None]
        eligible_bases = [stalls[i][1] for i in eligible]

        best: Optional[DiscountConfig] = None
        best_amounts: List[Decimal] = []
        best_total = ZERO
        for discount in active_discounts:
            amounts = self._discount_amounts(discount, eligible_bases)
            total = sum(amounts, ZERO)
            if total > best_total:
                best, best_amounts, best_total = discount, amounts, total

        if best is not None:
            for index, amount in zip(eligible, best_amounts):
                if amount > 0:
                    reductions[index] = (best, amount)
            applied.append(AppliedDiscount(
                name=best.name, type=best.type, value=best.value, amount=round2(best_total)
            ))

        # Per-stall overrides, grouped by discount in order of first use
        override_totals: Dict[Tuple[str, DiscountType, Decimal], Decimal] = {}
        for index, (override, base) in enumerate(stalls):
            if override is None:
                continue
            amount = self._discount_amounts(override, [base])[0]
            if amount <= 0:
                continue
            reductions[index] = (override, amount)
            key = (override.name, override.type, override.value)
            override_totals[key] = override_totals.get(key, ZERO) + amount

        for (name, discount_type, value), amount in override_totals.items():
            applied.append(AppliedDiscount(
                name=name, type=discount_type, value=value, amount=round2(amount)
            ))

        return reductions, applied

    def _discount_amounts(self, discount: DiscountConfig, bases: List[Decimal]) -> List[Decimal]:
        """Reduction per stall if ``discount`` were applied to all of ``bases``"""

        if not bases:
            return []

        if discount.type == DiscountType.PERCENTAGE:
            percentage = min(max(Decimal("0"), discount.value), HUNDRED)
            return [round2(base * percentage / HUNDRED) for base in bases]

        # Fixed: subtract once from the aggregate, spread by base-amount share
        total_base = sum(bases, ZERO)
        if total_base <= 0:
            return [ZERO for _ in bases]
        capped = min(round2(discount.value), total_base)

        amounts = []
        for base in bases[:-1]:
            amounts.append(min(round2(capped * base / total_base), base))
        remainder = capped - sum(amounts, ZERO)
        amounts.append(min(max(remainder, ZERO), bases[-1]))
        return amounts

    def _calculate_taxes(self, config: PricingConfig, taxable_amount: Decimal) -> List[TaxCalculation]:
        """Tax lines in declaration order, each computed on the discounted total"""

        if config.tax_config is None:
            tax_lines = [TaxConfig(name=self.default_tax_name, rate=self.default_tax_rate)]
        else:
            tax_lines = [tax for tax in config.tax_config if tax.is_active]

        return [
            TaxCalculation(
                name=tax.name,
                rate=tax.rate,
                amount=round2(taxable_amount * tax.rate / HUNDRED)
            )
            for tax in tax_lines
        ]

    def total_area(self, selected_stalls: Iterable[SelectedStall]) -> Decimal:
        """Combined floor area of the selection in square meters"""
        return sum((stall_area(s.stall.dimensions) for s in selected_stalls), Decimal("0"))

    def stall_total_price(self, stall: Stall, rate: Optional[Decimal] = None) -> Decimal:
        """Price of a stall at its own (or the given) rate"""
        effective_rate = rate if rate is not None else (stall.rate_per_sqm or self.default_rate)
        return round2(stall_area(stall.dimensions) * effective_rate)

    def basic_amenity_quantities(
        self,
        amenities: Iterable[BasicAmenity],
        total_area: Decimal
    ) -> List[BasicAmenityBooking]:
        """Scale each basic amenity by the booked floor area"""
        return [
            BasicAmenityBooking(
                name=amenity.name,
                type=amenity.type,
                per_sqm=amenity.per_sqm,
                quantity=amenity.quantity,
                calculated_quantity=round2(total_area * amenity.per_sqm),
                description=amenity.description
            )
            for amenity in amenities
        ]

    def extra_amenities_total(self, extras: Iterable[ExtraAmenityBooking]) -> Decimal:
        """Total price of the chosen extra amenities"""
        return round2(sum((extra.rate * extra.quantity for extra in extras), ZERO))

    def verify_total_base(self, expected: Decimal, received: Decimal) -> None:
        """Reject client calculations that drift from the recomputed base total"""
        if abs(Decimal(expected) - Decimal(received)) > self.tolerance:
            raise CalculationMismatch(
                f"Calculation mismatch. Expected: {expected}, Received: {received}"
            )
