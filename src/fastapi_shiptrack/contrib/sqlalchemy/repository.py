"""SQLAlchemy repository implementation."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fastapi_shiptrack.contrib.sqlalchemy.models import (
    HistoryEntryModel,
    ShipmentModel,
)
from fastapi_shiptrack.exceptions import (
    DuplicateTrackingNumber,
    ShipmentNotFoundError,
)
from fastapi_shiptrack.types import HistoryEntryData

logger = logging.getLogger(__name__)


class SQLAlchemyShipmentRepository:
    """Shipment repository backed by SQLAlchemy async sessions."""

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        self.session_factory = session_factory

    async def get_by_id(self, shipment_id: str) -> ShipmentModel:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ShipmentModel).where(ShipmentModel.id == shipment_id)
            )
            try:
                return result.scalar_one()
            except NoResultFound as e:
                raise ShipmentNotFoundError(shipment_id) from e

    async def get_by_tracking_number(
        self, tracking_number: str
    ) -> ShipmentModel:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ShipmentModel).where(
                    ShipmentModel.tracking_number == tracking_number
                )
            )
            try:
                return result.scalar_one()
            except NoResultFound as e:
                raise ShipmentNotFoundError(tracking_number) from e

    async def tracking_number_exists(self, tracking_number: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ShipmentModel.id).where(
                    ShipmentModel.tracking_number == tracking_number
                )
            )
            return result.first() is not None

    async def create(
        self, *, history: HistoryEntryData, **fields
    ) -> ShipmentModel:
        shipment = ShipmentModel(**fields)
        shipment.history.append(HistoryEntryModel(**history))
        async with self.session_factory() as session:
            session.add(shipment)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                logger.warning(
                    "Unique constraint rejected tracking number %s",
                    fields.get("tracking_number"),
                )
                raise DuplicateTrackingNumber(
                    fields.get("tracking_number", "")
                ) from e
            await session.refresh(shipment)
        return shipment

    async def append_history(
        self, shipment_id: str, entry: HistoryEntryData, **fields
    ) -> ShipmentModel:
        unknown = set(fields) - set(ShipmentModel.__table__.columns.keys())
        if unknown:
            raise AttributeError(
                f"ShipmentModel has no columns {sorted(unknown)!r}"
            )
        async with self.session_factory() as session:
            shipment = await session.get(ShipmentModel, shipment_id)
            if shipment is None:
                raise ShipmentNotFoundError(shipment_id)
            session.add(HistoryEntryModel(shipment_id=shipment_id, **entry))
            for key, value in fields.items():
                setattr(shipment, key, value)
            await session.commit()
            await session.refresh(shipment)
            return shipment

    async def list_all(self, newest_first: bool = True) -> list[ShipmentModel]:
        order = (
            ShipmentModel.created_at.desc()
            if newest_first
            else ShipmentModel.created_at.asc()
        )
        async with self.session_factory() as session:
            result = await session.execute(
                select(ShipmentModel).order_by(order)
            )
            return list(result.scalars().all())

    async def list_recent(self, limit: int = 5) -> list[ShipmentModel]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ShipmentModel)
                .order_by(ShipmentModel.created_at.desc())
                .limit(limit)
            )
            return list(result.scalars().all())

    async def count_by_status(self) -> dict[str, int]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ShipmentModel.status, func.count()).group_by(
                    ShipmentModel.status
                )
            )
            return {status: count for status, count in result.all()}

    async def delete(self, shipment_id: str) -> None:
        async with self.session_factory() as session:
            shipment = await session.get(ShipmentModel, shipment_id)
            if shipment is None:
                raise ShipmentNotFoundError(shipment_id)
            await session.delete(shipment)
            await session.commit()
