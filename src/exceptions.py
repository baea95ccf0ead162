"""
Engine error types.

Every failure raised by the layout, viewer, pricing and booking modules is a
``BookingEngineError``. It subclasses ``ValueError`` so callers that already
translate ``ValueError`` into a 400 response keep working, and it carries an
``ErrorCode`` the routers use to pick a more precise status.
"""

from enum import Enum
from typing import Iterable, List, Optional


class ErrorCode(str, Enum):
    """Engine error codes"""
    INVALID_GEOMETRY = "INVALID_GEOMETRY"
    NOT_FOUND = "NOT_FOUND"
    STALL_UNAVAILABLE = "STALL_UNAVAILABLE"
    EMPTY_SELECTION = "EMPTY_SELECTION"
    LAYOUT_VERSION_CONFLICT = "LAYOUT_VERSION_CONFLICT"
    CALCULATION_MISMATCH = "CALCULATION_MISMATCH"
    INVALID_BOOKING_TRANSITION = "INVALID_BOOKING_TRANSITION"
    EXHIBITION_NOT_BOOKABLE = "EXHIBITION_NOT_BOOKABLE"


class BookingEngineError(ValueError):
    """Base engine error with code and user-safe message"""

    code: ErrorCode = ErrorCode.INVALID_GEOMETRY

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidGeometry(BookingEngineError):
    """Raised when stall dimensions are malformed"""

    code = ErrorCode.INVALID_GEOMETRY


class NotFound(BookingEngineError):
    """Raised when an id is not present in the current snapshot"""

    code = ErrorCode.NOT_FOUND

    def __init__(self, kind: str, ids: Iterable[str]) -> None:
        self.kind = kind
        self.ids: List[str] = list(ids)
        super().__init__(f"{kind} not found: {', '.join(self.ids)}")


class StallUnavailable(BookingEngineError):
    """Raised when one or more stalls are not available for booking"""

    code = ErrorCode.STALL_UNAVAILABLE

    def __init__(self, stall_ids: Iterable[str], labels: Optional[Iterable[str]] = None) -> None:
        self.stall_ids: List[str] = list(stall_ids)
        shown = list(labels) if labels is not None else self.stall_ids
        super().__init__(f"Some stalls are not available: {', '.join(shown)}")


class EmptySelection(BookingEngineError):
    """Raised when an operation needs at least one selected stall"""

    code = ErrorCode.EMPTY_SELECTION

    def __init__(self) -> None:
        super().__init__("No stalls selected")


class LayoutVersionConflict(BookingEngineError):
    """Raised when a layout snapshot does not advance the version"""

    code = ErrorCode.LAYOUT_VERSION_CONFLICT

    def __init__(self, current: int, received: int) -> None:
        self.current = current
        self.received = received
        super().__init__(
            f"Layout version {received} is not newer than loaded version {current}"
        )


class CalculationMismatch(BookingEngineError):
    """Raised when client calculations disagree with the recomputed totals"""

    code = ErrorCode.CALCULATION_MISMATCH


class InvalidBookingTransition(BookingEngineError):
    """Raised when a booking status change is not allowed"""

    code = ErrorCode.INVALID_BOOKING_TRANSITION


class ExhibitionNotBookable(BookingEngineError):
    """Raised when an exhibition does not accept bookings"""

    code = ErrorCode.EXHIBITION_NOT_BOOKABLE
