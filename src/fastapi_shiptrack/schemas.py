"""Pydantic request/response schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from fastapi_shiptrack.enums import (
    DEFAULT_PROGRESS,
    STATUS_PROGRESS,
    PaymentMode,
    ShipmentStatus,
    ShipmentType,
)

PARTY_FIELDS = ("name", "email", "phone", "address")
PACKAGE_FIELDS = (
    "package_type",
    "package_status",
    "product",
    "quantity",
    "piece_type",
    "description",
    "length",
    "width",
    "height",
    "weight",
)


class PartyIn(BaseModel):
    """Sender or recipient contact data.

    Everything is optional at the schema level; the lifecycle reports
    all missing required fields at once.
    """

    name: str = ""
    email: str | None = None
    phone: str = ""
    address: str = ""


class PackageIn(BaseModel):
    package_type: str = ""
    package_status: str = ""
    product: str = ""
    quantity: int | None = None
    piece_type: str = ""
    description: str = ""
    length: float | None = None
    width: float | None = None
    height: float | None = None
    weight: float | None = None


class CreateShipmentRequest(BaseModel):
    """Shipment creation payload."""

    tracking_number: str | None = None
    sender: PartyIn = Field(default_factory=PartyIn)
    recipient: PartyIn = Field(default_factory=PartyIn)
    origin: str = ""
    destination: str = ""
    carrier: str = ""
    shipment_type: ShipmentType | None = None
    package: PackageIn = Field(default_factory=PackageIn)
    payment_mode: PaymentMode | None = None
    freight_cost: Decimal | str | None = None
    expected_delivery: str | None = None
    departure_date: str | None = None
    pickup_date: str | None = None
    status: ShipmentStatus | None = None
    remark: str = ""
    extra: dict[str, Any] = Field(default_factory=dict)


class UpdateStatusRequest(BaseModel):
    status: ShipmentStatus
    location: str | None = None
    message: str | None = None
    remark: str = ""


class AddRemarkRequest(BaseModel):
    remark: str = ""
    location: str | None = None
    message: str | None = None


class UpdateFreightRequest(BaseModel):
    freight_cost: Decimal | str | None = None
    remark: str = ""


class HistoryEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: str
    location: str
    message: str
    remark: str
    timestamp: datetime


class PartyResponse(BaseModel):
    name: str
    email: str | None = None
    phone: str
    address: str


class PackageResponse(BaseModel):
    package_type: str = ""
    package_status: str = ""
    product: str = ""
    quantity: int | None = None
    piece_type: str = ""
    description: str = ""
    length: float | None = None
    width: float | None = None
    height: float | None = None
    weight: float | None = None


def _party(shipment: Any, prefix: str) -> PartyResponse:
    return PartyResponse(
        **{
            field: getattr(shipment, f"{prefix}_{field}")
            for field in PARTY_FIELDS
        }
    )


class ShipmentResponse(BaseModel):
    """Full shipment record as returned to staff users."""

    id: str
    tracking_number: str
    status: str
    remark: str
    sender: PartyResponse
    recipient: PartyResponse
    origin: str
    destination: str
    carrier: str
    shipment_type: str | None = None
    package: PackageResponse
    payment_mode: str | None = None
    freight_cost: float
    expected_delivery: str | None = None
    departure_date: str | None = None
    pickup_date: str | None = None
    extra: dict[str, Any] = Field(default_factory=dict)
    history: list[HistoryEntryResponse]
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_shipment(cls, shipment: Any) -> ShipmentResponse:
        return cls(
            id=str(shipment.id),
            tracking_number=shipment.tracking_number,
            status=str(shipment.status),
            remark=shipment.remark,
            sender=_party(shipment, "sender"),
            recipient=_party(shipment, "recipient"),
            origin=shipment.origin,
            destination=shipment.destination,
            carrier=shipment.carrier,
            shipment_type=shipment.shipment_type,
            package=PackageResponse(
                **{
                    field: getattr(shipment, field)
                    for field in PACKAGE_FIELDS
                }
            ),
            payment_mode=shipment.payment_mode,
            freight_cost=float(shipment.freight_cost or 0),
            expected_delivery=shipment.expected_delivery,
            departure_date=shipment.departure_date,
            pickup_date=shipment.pickup_date,
            extra=dict(shipment.extra or {}),
            history=[
                HistoryEntryResponse.model_validate(entry)
                for entry in shipment.history
            ],
            created_by=shipment.created_by,
            created_at=shipment.created_at,
            updated_at=shipment.updated_at,
        )


def format_freight_cost(cost: Any, currency_symbol: str = "£") -> str:
    """Render a freight cost with two decimals, treating junk as zero."""
    try:
        amount = Decimal(str(cost)) if cost not in (None, "") else Decimal(0)
    except ArithmeticError:
        amount = Decimal(0)
    if not amount.is_finite():
        amount = Decimal(0)
    return f"{currency_symbol}{amount:.2f}"


class TrackingResponse(ShipmentResponse):
    """Public tracking view with display helpers and newest-first history.

    ``collect_on_delivery`` is set for cash-paid shipments.
    """

    progress: int
    freight_cost_display: str
    collect_on_delivery: bool

    @classmethod
    def from_shipment(
        cls, shipment: Any, currency_symbol: str = "£"
    ) -> TrackingResponse:
        base = ShipmentResponse.from_shipment(shipment)
        history = list(reversed(base.history))
        try:
            progress = STATUS_PROGRESS.get(
                ShipmentStatus(base.status), DEFAULT_PROGRESS
            )
        except ValueError:
            progress = DEFAULT_PROGRESS
        return cls(
            **base.model_dump(exclude={"history"}),
            history=history,
            progress=progress,
            freight_cost_display=format_freight_cost(
                shipment.freight_cost, currency_symbol
            ),
            collect_on_delivery=base.payment_mode == PaymentMode.CASH,
        )


class ShipmentEnvelope(BaseModel):
    success: bool = True
    message: str
    shipment: ShipmentResponse


class TrackingEnvelope(BaseModel):
    success: bool = True
    message: str
    shipment: TrackingResponse


class ShipmentListEnvelope(BaseModel):
    success: bool = True
    message: str
    count: int
    shipments: list[ShipmentResponse]


class StatsResponse(BaseModel):
    total: int
    active: int
    delivered: int
    pending: int
    recent: list[ShipmentResponse]


class StatsEnvelope(BaseModel):
    success: bool = True
    message: str
    stats: StatsResponse


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str
