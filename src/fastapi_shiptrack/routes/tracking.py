"""Public tracking endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from fastapi_shiptrack.config import ShipTrackConfig
from fastapi_shiptrack.dependencies import get_config, get_lifecycle
from fastapi_shiptrack.lifecycle import ShipmentLifecycle
from fastapi_shiptrack.schemas import TrackingEnvelope, TrackingResponse

router = APIRouter()


@router.get("/track/{tracking_number}", response_model=TrackingEnvelope)
async def track_shipment(
    tracking_number: str,
    config: ShipTrackConfig = Depends(get_config),
    lifecycle: ShipmentLifecycle = Depends(get_lifecycle),
) -> TrackingEnvelope:
    """Look up a shipment by its public tracking number."""
    shipment = await lifecycle.get_by_tracking_number(tracking_number)
    return TrackingEnvelope(
        message="Shipment found",
        shipment=TrackingResponse.from_shipment(
            shipment, currency_symbol=config.currency_symbol
        ),
    )
