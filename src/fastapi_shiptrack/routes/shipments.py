"""Staff shipment endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from fastapi_shiptrack.dependencies import get_lifecycle, require_actor
from fastapi_shiptrack.lifecycle import ShipmentLifecycle
from fastapi_shiptrack.schemas import (
    AddRemarkRequest,
    CreateShipmentRequest,
    MessageEnvelope,
    ShipmentEnvelope,
    ShipmentListEnvelope,
    ShipmentResponse,
    StatsEnvelope,
    StatsResponse,
    UpdateFreightRequest,
    UpdateStatusRequest,
)

router = APIRouter()


@router.get("/shipments/health")
async def shipments_health() -> dict[str, str]:
    """Healthcheck endpoint for shipment routes."""
    return {"status": "ok"}


@router.post(
    "/shipments", response_model=ShipmentEnvelope, status_code=201
)
async def create_shipment(
    body: CreateShipmentRequest,
    actor: str = Depends(require_actor),
    lifecycle: ShipmentLifecycle = Depends(get_lifecycle),
) -> ShipmentEnvelope:
    """Create a shipment with its first history entry."""
    shipment = await lifecycle.create(body, created_by=actor)
    return ShipmentEnvelope(
        message="Shipment created",
        shipment=ShipmentResponse.from_shipment(shipment),
    )


@router.get("/shipments", response_model=ShipmentListEnvelope)
async def list_shipments(
    actor: str = Depends(require_actor),
    lifecycle: ShipmentLifecycle = Depends(get_lifecycle),
) -> ShipmentListEnvelope:
    """List all shipments, newest first."""
    shipments = await lifecycle.list(newest_first=True)
    return ShipmentListEnvelope(
        message="Shipments retrieved",
        count=len(shipments),
        shipments=[ShipmentResponse.from_shipment(s) for s in shipments],
    )


@router.get("/shipments/stats", response_model=StatsEnvelope)
async def shipment_stats(
    actor: str = Depends(require_actor),
    lifecycle: ShipmentLifecycle = Depends(get_lifecycle),
) -> StatsEnvelope:
    stats = await lifecycle.stats()
    return StatsEnvelope(
        message="Stats retrieved",
        stats=StatsResponse(
            total=stats["total"],
            active=stats["active"],
            delivered=stats["delivered"],
            pending=stats["pending"],
            recent=[
                ShipmentResponse.from_shipment(s) for s in stats["recent"]
            ],
        ),
    )


@router.get("/shipments/{shipment_id}", response_model=ShipmentEnvelope)
async def get_shipment(
    shipment_id: str,
    actor: str = Depends(require_actor),
    lifecycle: ShipmentLifecycle = Depends(get_lifecycle),
) -> ShipmentEnvelope:
    shipment = await lifecycle.get_by_id(shipment_id)
    return ShipmentEnvelope(
        message="Shipment retrieved",
        shipment=ShipmentResponse.from_shipment(shipment),
    )


@router.patch(
    "/shipments/{shipment_id}/status", response_model=ShipmentEnvelope
)
async def update_status(
    shipment_id: str,
    body: UpdateStatusRequest,
    actor: str = Depends(require_actor),
    lifecycle: ShipmentLifecycle = Depends(get_lifecycle),
) -> ShipmentEnvelope:
    """Change shipment status and append the matching history entry."""
    shipment = await lifecycle.update_status(
        shipment_id,
        body.status,
        location=body.location,
        message=body.message,
        remark=body.remark,
    )
    return ShipmentEnvelope(
        message=f"Status updated to {body.status}",
        shipment=ShipmentResponse.from_shipment(shipment),
    )


@router.post(
    "/shipments/{shipment_id}/remarks", response_model=ShipmentEnvelope
)
async def add_remark(
    shipment_id: str,
    body: AddRemarkRequest,
    actor: str = Depends(require_actor),
    lifecycle: ShipmentLifecycle = Depends(get_lifecycle),
) -> ShipmentEnvelope:
    shipment = await lifecycle.add_remark(
        shipment_id,
        body.remark,
        location=body.location,
        message=body.message,
    )
    return ShipmentEnvelope(
        message="Remark added",
        shipment=ShipmentResponse.from_shipment(shipment),
    )


@router.patch(
    "/shipments/{shipment_id}/freight", response_model=ShipmentEnvelope
)
async def update_freight_cost(
    shipment_id: str,
    body: UpdateFreightRequest,
    actor: str = Depends(require_actor),
    lifecycle: ShipmentLifecycle = Depends(get_lifecycle),
) -> ShipmentEnvelope:
    shipment = await lifecycle.update_freight_cost(
        shipment_id, body.freight_cost, remark=body.remark
    )
    return ShipmentEnvelope(
        message="Freight cost updated",
        shipment=ShipmentResponse.from_shipment(shipment),
    )


@router.delete("/shipments/{shipment_id}", response_model=MessageEnvelope)
async def delete_shipment(
    shipment_id: str,
    actor: str = Depends(require_actor),
    lifecycle: ShipmentLifecycle = Depends(get_lifecycle),
) -> MessageEnvelope:
    """Remove the shipment and its whole history."""
    await lifecycle.delete(shipment_id)
    return MessageEnvelope(message="Shipment deleted")
