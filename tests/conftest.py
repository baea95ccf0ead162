"""Pytest configuration and shared fixtures."""

from decimal import Decimal

import pytest

from src.bookings.schemas import BookingFormData
from src.exhibitions.registry import ExhibitionRegistry
from src.exhibitions.schemas import ExhibitionStatus, ExhibitionUpsert
from src.layouts.schemas import Layout
from src.layouts.store import LayoutStore
from src.pricing.schemas import (
    BasicAmenity, DiscountConfig, DiscountType, PricingConfig, TaxConfig
)
from src.pricing.service import PricingEngine
from src.viewer.selection import SelectionManager
from src.viewer.viewport import ViewportController

EXHIBITION_ID = "expo-1"


@pytest.fixture
def layout_payload() -> dict:
    """Layout as the editor publishes it (camelCase JSON).

    Hall A holds three available stalls: two rectangles and one L-shape.
    Hall B holds a booked stall and a blocked stall whose dimensions are
    derived from its pixel size.
    """
    return {
        "exhibitionId": EXHIBITION_ID,
        "version": 1,
        "spaces": [
            {"id": "space-1", "name": "Main floor", "width": 2000, "height": 1500}
        ],
        "halls": [
            {
                "id": "hall-a", "spaceId": "space-1", "name": "Hall A",
                "position": {"x": 100, "y": 100}, "size": {"width": 800, "height": 600}
            },
            {
                "id": "hall-b", "spaceId": "space-1", "name": "Hall B",
                "position": {"x": 1000, "y": 100}, "size": {"width": 600, "height": 600}
            },
        ],
        "stallTypes": [
            {"id": "standard", "name": "Standard", "defaultRate": 100},
            {"id": "premium", "name": "Premium", "defaultRate": 150},
        ],
        "stalls": [
            {
                "id": "s1", "stallNumber": "A-01", "hallId": "hall-a", "stallTypeId": "standard",
                "position": {"x": 0, "y": 0}, "size": {"width": 100, "height": 75},
                "dimensions": {"shapeType": "rectangle", "width": 20, "height": 15},
                "ratePerSqm": 100
            },
            {
                "id": "s2", "stallNumber": "A-02", "hallId": "hall-a", "stallTypeId": "standard",
                "position": {"x": 150, "y": 0}, "size": {"width": 100, "height": 100},
                "dimensions": {"width": 10, "height": 10},
                "ratePerSqm": 100
            },
            {
                "id": "s3", "stallNumber": "A-03", "hallId": "hall-a", "stallTypeId": "premium",
                "position": {"x": 300, "y": 0}, "size": {"width": 100, "height": 80},
                "dimensions": {
                    "shapeType": "l-shape",
                    "lShape": {
                        "rect1Width": 10, "rect1Height": 5,
                        "rect2Width": 4, "rect2Height": 3,
                        "orientation": "top-left"
                    }
                },
                "ratePerSqm": 50
            },
            {
                "id": "s4", "stallNumber": "B-01", "hallId": "hall-b", "stallTypeId": "standard",
                "position": {"x": 0, "y": 0}, "size": {"width": 100, "height": 100},
                "dimensions": {"shapeType": "rectangle", "width": 5, "height": 5},
                "status": "booked"
            },
            {
                "id": "s5", "stallNumber": "B-02", "hallId": "hall-b", "stallTypeId": "premium",
                "position": {"x": 150, "y": 0}, "size": {"width": 300, "height": 200},
                "status": "blocked"
            },
        ],
    }


@pytest.fixture
def layout(layout_payload) -> Layout:
    return Layout.model_validate(layout_payload)


@pytest.fixture
def store(layout) -> LayoutStore:
    return LayoutStore(layout)


@pytest.fixture
def untyped_store(layout_payload) -> LayoutStore:
    """The same layout with no stall types declared"""
    return LayoutStore(Layout.model_validate({**layout_payload, "stallTypes": []}))


@pytest.fixture
def viewport() -> ViewportController:
    return ViewportController(width=800, height=600)


@pytest.fixture
def selection(store, viewport) -> SelectionManager:
    return SelectionManager(store, viewport)


@pytest.fixture
def engine() -> PricingEngine:
    return PricingEngine()


@pytest.fixture
def gst_config() -> PricingConfig:
    return PricingConfig(tax_config=[TaxConfig(name="GST", rate=Decimal("18"))])


@pytest.fixture
def discount_config() -> PricingConfig:
    """GST plus a 10% discount for exhibitors and none for the public"""
    return PricingConfig(
        tax_config=[TaxConfig(name="GST", rate=Decimal("18"))],
        discount_config=[
            DiscountConfig(name="Early bird", type=DiscountType.PERCENTAGE, value=Decimal("10"))
        ],
        basic_amenities=[
            BasicAmenity(name="Chair", type="furniture", per_sqm=Decimal("0.1"), quantity=1)
        ]
    )


@pytest.fixture
def form_data() -> BookingFormData:
    return BookingFormData(
        customer_name="Asha Rao",
        customer_email="asha@example.com",
        customer_phone="+91 98450 00000",
        customer_address="12 MG Road, Bengaluru",
        company_name="Rao Textiles",
        customer_gstin="29ABCDE1234F1Z5"
    )


@pytest.fixture
def registry(layout, discount_config) -> ExhibitionRegistry:
    registry = ExhibitionRegistry()
    registry.register(
        EXHIBITION_ID,
        ExhibitionUpsert(
            name="Textile Expo",
            status=ExhibitionStatus.PUBLISHED,
            invoice_prefix="TEX",
            pricing=discount_config
        )
    )
    registry.load_layout(EXHIBITION_ID, layout)
    return registry
