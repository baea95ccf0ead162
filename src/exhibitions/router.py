from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from src.dependencies import get_registry, http_error
from src.exceptions import BookingEngineError
from src.exhibitions.registry import ExhibitionRegistry
from src.exhibitions.schemas import Exhibition, ExhibitionUpsert
from src.layouts.schemas import HallSummary, Layout

router = APIRouter()

@router.put("/{exhibition_id}", response_model=Exhibition)
def upsert_exhibition(
    exhibition_id: str,
    data: ExhibitionUpsert,
    registry: ExhibitionRegistry = Depends(get_registry)
):
    """Create or update an exhibition and its pricing configuration"""
    return registry.register(exhibition_id, data)

@router.get("/{exhibition_id}", response_model=Exhibition)
def get_exhibition(
    exhibition_id: str,
    registry: ExhibitionRegistry = Depends(get_registry)
):
    """Get exhibition details by ID"""

    try:
        return registry.get(exhibition_id)
    except BookingEngineError as e:
        raise http_error(e)

@router.put("/{exhibition_id}/layout", response_model=Layout)
def publish_layout(
    exhibition_id: str,
    layout: Layout,
    registry: ExhibitionRegistry = Depends(get_registry)
):
    """Publish a new layout version for an exhibition"""

    try:
        registry.load_layout(exhibition_id, layout)
        return registry.layout_store(exhibition_id).layout
    except BookingEngineError as e:
        raise http_error(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

@router.get("/{exhibition_id}/layout", response_model=Layout)
def get_layout(
    exhibition_id: str,
    registry: ExhibitionRegistry = Depends(get_registry)
):
    """Get the current layout snapshot"""

    try:
        return registry.layout_store(exhibition_id).layout
    except BookingEngineError as e:
        raise http_error(e)

@router.get("/{exhibition_id}/halls", response_model=List[HallSummary])
def get_hall_summaries(
    exhibition_id: str,
    registry: ExhibitionRegistry = Depends(get_registry)
):
    """Get halls with their stall counts"""

    try:
        store = registry.layout_store(exhibition_id)
        return [store.hall_summary(hall.id) for hall in store.list_halls()]
    except BookingEngineError as e:
        raise http_error(e)
