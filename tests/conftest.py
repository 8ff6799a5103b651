"""Shared fixtures for fastapi-shiptrack tests."""

from __future__ import annotations

import uuid
from types import SimpleNamespace
from typing import Any

import pytest

from fastapi_shiptrack.config import ShipTrackConfig
from fastapi_shiptrack.exceptions import (
    DuplicateTrackingNumber,
    ShipmentNotFoundError,
)
from fastapi_shiptrack.lifecycle import ShipmentLifecycle
from fastapi_shiptrack.schemas import CreateShipmentRequest


def make_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "sender": {
            "name": "Ada Obi",
            "email": "ada@example.com",
            "phone": "+234 800 000 0001",
            "address": "12 Marina Road, Lagos",
        },
        "recipient": {
            "name": "Kwame Mensah",
            "phone": "+233 20 000 0002",
            "address": "4 Ring Road, Accra",
        },
        "origin": "Lagos",
        "destination": "Accra",
        "carrier": "WestLink",
        "shipment_type": "ROAD",
        "package": {
            "package_type": "box",
            "product": "books",
            "quantity": 2,
            "weight": 3.5,
        },
        "payment_mode": "cash",
        "freight_cost": "25.00",
        "remark": "booked at front desk",
    }
    payload.update(overrides)
    return payload


def make_request(**overrides: Any) -> CreateShipmentRequest:
    return CreateShipmentRequest.model_validate(make_payload(**overrides))


class InMemoryRepo:
    def __init__(self) -> None:
        self.items: dict[str, SimpleNamespace] = {}

    def _find_by_tracking_number(self, tracking_number: str):
        for shipment in self.items.values():
            if shipment.tracking_number == tracking_number:
                return shipment
        return None

    async def get_by_id(self, shipment_id: str) -> SimpleNamespace:
        try:
            return self.items[shipment_id]
        except KeyError as e:
            raise ShipmentNotFoundError(shipment_id) from e

    async def get_by_tracking_number(
        self, tracking_number: str
    ) -> SimpleNamespace:
        shipment = self._find_by_tracking_number(tracking_number)
        if shipment is None:
            raise ShipmentNotFoundError(tracking_number)
        return shipment

    async def tracking_number_exists(self, tracking_number: str) -> bool:
        return self._find_by_tracking_number(tracking_number) is not None

    async def create(self, *, history: dict, **fields) -> SimpleNamespace:
        if self._find_by_tracking_number(fields["tracking_number"]):
            raise DuplicateTrackingNumber(fields["tracking_number"])
        shipment = SimpleNamespace(
            id=str(uuid.uuid4()), history=[dict(history)], **fields
        )
        self.items[shipment.id] = shipment
        return shipment

    async def append_history(
        self, shipment_id: str, entry: dict, **fields
    ) -> SimpleNamespace:
        shipment = await self.get_by_id(shipment_id)
        shipment.history.append(dict(entry))
        for key, value in fields.items():
            setattr(shipment, key, value)
        return shipment

    async def list_all(self, newest_first: bool = True) -> list:
        return sorted(
            self.items.values(),
            key=lambda s: s.created_at,
            reverse=newest_first,
        )

    async def list_recent(self, limit: int = 5) -> list:
        return (await self.list_all())[:limit]

    async def count_by_status(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for shipment in self.items.values():
            counts[shipment.status] = counts.get(shipment.status, 0) + 1
        return counts

    async def delete(self, shipment_id: str) -> None:
        if self.items.pop(shipment_id, None) is None:
            raise ShipmentNotFoundError(shipment_id)


@pytest.fixture()
def repository() -> InMemoryRepo:
    return InMemoryRepo()


@pytest.fixture()
def config() -> ShipTrackConfig:
    return ShipTrackConfig()


@pytest.fixture()
def lifecycle(repository, config) -> ShipmentLifecycle:
    return ShipmentLifecycle(repository=repository, config=config)


@pytest.fixture()
async def async_engine():
    """Create an in-memory aiosqlite async engine."""
    sa = pytest.importorskip("sqlalchemy")  # noqa: F841
    from sqlalchemy.ext.asyncio import create_async_engine

    from fastapi_shiptrack.contrib.sqlalchemy.models import Base

    engine = create_async_engine("sqlite+aiosqlite://", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
async def async_session_factory(async_engine):
    """Create an async session factory bound to the in-memory engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    factory = async_sessionmaker(
        async_engine, class_=AsyncSession, expire_on_commit=False
    )
    yield factory


@pytest.fixture()
def sqlalchemy_repository(async_session_factory):
    """Create an SQLAlchemyShipmentRepository."""
    from fastapi_shiptrack.contrib.sqlalchemy.repository import (
        SQLAlchemyShipmentRepository,
    )

    return SQLAlchemyShipmentRepository(async_session_factory)
