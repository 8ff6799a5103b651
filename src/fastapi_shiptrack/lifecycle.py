"""Shipment lifecycle: creation, status changes and the history log."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from fastapi_shiptrack.config import ShipTrackConfig
from fastapi_shiptrack.enums import (
    INITIAL_STATUS,
    STATUS_STAGE,
    TERMINAL_STATUS,
    ShipmentStatus,
)
from fastapi_shiptrack.exceptions import (
    DuplicateTrackingNumber,
    InvalidTransition,
    ValidationError,
)
from fastapi_shiptrack.protocols import ShipmentRepository
from fastapi_shiptrack.schemas import (
    PACKAGE_FIELDS,
    PARTY_FIELDS,
    CreateShipmentRequest,
)
from fastapi_shiptrack.tracking import TrackingNumberGenerator
from fastapi_shiptrack.types import HistoryEntryData, ShipmentStats

logger = logging.getLogger(__name__)

CREATED_MESSAGE = "Shipment created"
REMARK_MESSAGE = "Remark added"

# Numeric(12, 2) column bound.
MAX_FREIGHT_COST = Decimal("10000000000")

REQUIRED_FIELDS = (
    ("sender.name", lambda d: d.sender.name),
    ("sender.phone", lambda d: d.sender.phone),
    ("sender.address", lambda d: d.sender.address),
    ("recipient.name", lambda d: d.recipient.name),
    ("recipient.phone", lambda d: d.recipient.phone),
    ("recipient.address", lambda d: d.recipient.address),
    ("origin", lambda d: d.origin),
    ("destination", lambda d: d.destination),
)


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def coerce_freight_cost(value: Any) -> Decimal:
    """Absent or non-numeric costs become zero.

    Negative costs and costs beyond the stored precision are rejected.
    """
    if value is None or value == "":
        return Decimal("0.00")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal("0.00")
    if not amount.is_finite():
        return Decimal("0.00")
    if amount < 0:
        raise ValidationError(
            ["freight_cost"], "Freight cost must not be negative"
        )
    if amount < MAX_FREIGHT_COST:
        amount = amount.quantize(Decimal("0.01"))
    if amount >= MAX_FREIGHT_COST:
        raise ValidationError(
            ["freight_cost"], "Freight cost must be below 10000000000"
        )
    return amount


def check_transition(current: str, target: str) -> None:
    """Forward-only: no earlier stage, nothing leaves delivered."""
    if current == target:
        return
    try:
        current_status = ShipmentStatus(current)
    except ValueError:
        return
    if current_status == TERMINAL_STATUS or (
        STATUS_STAGE[ShipmentStatus(target)] < STATUS_STAGE[current_status]
    ):
        raise InvalidTransition(current, target)


class ShipmentLifecycle:
    """Owns shipment records and the append-only history contract.

    Every mutation goes through ``repository.append_history`` so the
    new entry and the shipment-level fields land together.
    """

    def __init__(
        self,
        repository: ShipmentRepository,
        config: ShipTrackConfig,
        generator: TrackingNumberGenerator | None = None,
    ) -> None:
        self.repository = repository
        self.config = config
        self.generator = generator or TrackingNumberGenerator(
            repository,
            prefix=config.tracking_prefix,
            max_attempts=config.tracking_max_attempts,
        )

    @staticmethod
    def _now(shipment: Any = None) -> datetime:
        now = datetime.now(tz=UTC)
        if shipment is not None and shipment.history:
            last = shipment.history[-1]
            last_ts = (
                last["timestamp"] if isinstance(last, dict) else last.timestamp
            )
            if last_ts.tzinfo is None:
                last_ts = last_ts.replace(tzinfo=UTC)
            now = max(now, last_ts)
        return now

    def _entry(
        self,
        shipment: Any,
        *,
        status: str,
        location: str | None,
        message: str | None,
        remark: str,
    ) -> HistoryEntryData:
        return HistoryEntryData(
            status=str(status),
            location=location if not _blank(location) else shipment.origin,
            message=(
                message
                if not _blank(message)
                else f"Status updated to {status}"
            ),
            remark=remark.strip(),
            timestamp=self._now(shipment),
        )

    async def create(
        self,
        data: CreateShipmentRequest,
        created_by: str | None = None,
    ) -> Any:
        missing = [name for name, get in REQUIRED_FIELDS if _blank(get(data))]
        if self.config.require_remark and _blank(data.remark):
            missing.append("remark")
        if missing:
            raise ValidationError(missing)

        freight_cost = coerce_freight_cost(data.freight_cost)

        tracking_number = (data.tracking_number or "").strip()
        if tracking_number:
            if await self.repository.tracking_number_exists(tracking_number):
                raise DuplicateTrackingNumber(tracking_number)
        else:
            tracking_number = await self.generator.generate()

        status = str(data.status or INITIAL_STATUS)
        now = self._now()
        fields: dict[str, Any] = {
            "tracking_number": tracking_number,
            "status": status,
            "remark": data.remark.strip(),
            "origin": data.origin.strip(),
            "destination": data.destination.strip(),
            "carrier": data.carrier,
            "shipment_type": (
                str(data.shipment_type) if data.shipment_type else None
            ),
            "payment_mode": (
                str(data.payment_mode) if data.payment_mode else None
            ),
            "freight_cost": freight_cost,
            "expected_delivery": data.expected_delivery,
            "departure_date": data.departure_date,
            "pickup_date": data.pickup_date,
            "extra": dict(data.extra),
            "created_by": created_by,
            "created_at": now,
            "updated_at": now,
        }
        for field in PARTY_FIELDS:
            fields[f"sender_{field}"] = getattr(data.sender, field)
            fields[f"recipient_{field}"] = getattr(data.recipient, field)
        for field in PACKAGE_FIELDS:
            fields[field] = getattr(data.package, field)

        history = HistoryEntryData(
            status=status,
            location=fields["origin"],
            message=CREATED_MESSAGE,
            remark=fields["remark"],
            timestamp=now,
        )
        shipment = await self.repository.create(history=history, **fields)
        logger.info(
            "Shipment %s created by %s", tracking_number, created_by or "-"
        )
        return shipment

    async def update_status(
        self,
        shipment_id: str,
        status: ShipmentStatus | str,
        location: str | None = None,
        message: str | None = None,
        remark: str = "",
    ) -> Any:
        try:
            target = str(ShipmentStatus(status))
        except ValueError:
            raise ValidationError(
                ["status"], f"Unknown status: {status}"
            ) from None
        if self.config.require_remark and _blank(remark):
            raise ValidationError(["remark"])
        shipment = await self.repository.get_by_id(shipment_id)
        previous = str(shipment.status)
        if self.config.enforce_forward_transitions:
            check_transition(previous, target)

        entry = self._entry(
            shipment,
            status=target,
            location=location,
            message=message,
            remark=remark or "",
        )
        updated = await self.repository.append_history(
            shipment_id,
            entry,
            status=target,
            remark=entry["remark"],
            updated_at=entry["timestamp"],
        )
        logger.info(
            "Shipment %s status %s -> %s",
            shipment.tracking_number,
            previous,
            target,
        )
        return updated

    async def add_remark(
        self,
        shipment_id: str,
        remark: str,
        location: str | None = None,
        message: str | None = None,
    ) -> Any:
        if _blank(remark):
            raise ValidationError(["remark"])
        shipment = await self.repository.get_by_id(shipment_id)
        entry = self._entry(
            shipment,
            status=str(shipment.status),
            location=location,
            message=message if not _blank(message) else REMARK_MESSAGE,
            remark=remark,
        )
        return await self.repository.append_history(
            shipment_id,
            entry,
            remark=entry["remark"],
            updated_at=entry["timestamp"],
        )

    async def update_freight_cost(
        self,
        shipment_id: str,
        cost: Any,
        remark: str = "",
    ) -> Any:
        amount = coerce_freight_cost(cost)
        shipment = await self.repository.get_by_id(shipment_id)
        entry = self._entry(
            shipment,
            status=str(shipment.status),
            location=None,
            message=f"Freight cost updated to {amount:.2f}",
            remark=remark or "",
        )
        fields: dict[str, Any] = {
            "freight_cost": amount,
            "updated_at": entry["timestamp"],
        }
        if entry["remark"]:
            fields["remark"] = entry["remark"]
        return await self.repository.append_history(
            shipment_id, entry, **fields
        )

    async def get_by_tracking_number(self, tracking_number: str) -> Any:
        return await self.repository.get_by_tracking_number(
            tracking_number.strip()
        )

    async def get_by_id(self, shipment_id: str) -> Any:
        return await self.repository.get_by_id(shipment_id)

    async def list(self, newest_first: bool = True) -> list[Any]:
        return await self.repository.list_all(newest_first=newest_first)

    async def delete(self, shipment_id: str) -> None:
        await self.repository.delete(shipment_id)
        logger.info("Shipment %s deleted", shipment_id)

    async def stats(self) -> ShipmentStats:
        counts = await self.repository.count_by_status()
        return ShipmentStats(
            total=sum(counts.values()),
            active=sum(
                count
                for status, count in counts.items()
                if status not in (INITIAL_STATUS, TERMINAL_STATUS)
            ),
            delivered=counts.get(str(TERMINAL_STATUS), 0),
            pending=counts.get(str(INITIAL_STATUS), 0),
            recent=await self.repository.list_recent(
                limit=self.config.recent_limit
            ),
        )
