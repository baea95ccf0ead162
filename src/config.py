from pydantic_settings import BaseSettings
from decimal import Decimal
from typing import List

class Settings(BaseSettings):
    # Application
    PROJECT_NAME: str = "Exhibition Stall Booking Engine"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Layout geometry
    PIXELS_PER_METER: Decimal = Decimal("50")

    # Viewer
    MIN_ZOOM: float = 0.1
    MAX_ZOOM: float = 3.0
    ZOOM_STEP: float = 1.2
    FIT_MARGIN: float = 50.0
    DEFAULT_VIEWPORT_WIDTH: float = 800.0
    DEFAULT_VIEWPORT_HEIGHT: float = 600.0

    # Pricing
    CURRENCY: str = "INR"
    DEFAULT_RATE_PER_SQM: Decimal = Decimal("100")
    DEFAULT_TAX_NAME: str = "GST"
    DEFAULT_TAX_RATE: Decimal = Decimal("18")
    CALCULATION_TOLERANCE: Decimal = Decimal("0.01")

    # Bookings
    DEFAULT_INVOICE_PREFIX: str = "INV"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
