from pydantic import Field
from typing import Optional
from enum import Enum

from src.pricing.schemas import PricingConfig
from src.schemas import CamelModel

class ExhibitionStatus(str, Enum):
    """Exhibition status enumeration"""
    DRAFT = "draft"
    PUBLISHED = "published"
    COMPLETED = "completed"

class ExhibitionUpsert(CamelModel):
    """Exhibition metadata and pricing configuration"""
    name: str = Field(..., min_length=1)
    status: ExhibitionStatus = ExhibitionStatus.DRAFT
    is_active: bool = True
    invoice_prefix: Optional[str] = None
    pricing: PricingConfig = PricingConfig()

class Exhibition(ExhibitionUpsert):
    """Registered exhibition"""
    id: str
    layout_version: Optional[int] = None

    @property
    def is_bookable(self) -> bool:
        return self.status == ExhibitionStatus.PUBLISHED and self.is_active
