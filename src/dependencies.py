from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from src.exceptions import (
    BookingEngineError, LayoutVersionConflict, NotFound, StallUnavailable
)

if TYPE_CHECKING:
    from src.bookings.booking_service import BookingService
    from src.exhibitions.registry import ExhibitionRegistry

def get_registry(request: Request) -> "ExhibitionRegistry":
    """Exhibition registry shared by the application"""
    return request.app.state.registry

def get_booking_service(request: Request) -> "BookingService":
    """Booking service shared by the application"""
    return request.app.state.bookings

def get_user_id(x_user_id: str = Header("anonymous")) -> str:
    """Caller identity forwarded by the gateway"""
    return x_user_id

def http_error(error: BookingEngineError) -> HTTPException:
    """Map an engine error onto the HTTP status the API reports"""
    if isinstance(error, NotFound):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, (StallUnavailable, LayoutVersionConflict)):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    return HTTPException(
        status_code=status_code,
        detail={"code": error.code.value, "message": error.message}
    )
