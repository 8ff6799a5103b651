"""SQLAlchemy shipment/history models."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import (
    JSON,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""


class ShipmentModel(Base):
    """Shipment record keyed by a unique public tracking number."""

    __tablename__ = "shiptrack_shipments"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    tracking_number: Mapped[str] = mapped_column(
        String(64), unique=True, index=True
    )
    status: Mapped[str] = mapped_column(
        String(32), default="pending", index=True
    )
    remark: Mapped[str] = mapped_column(Text, default="")

    # Sender fields
    sender_name: Mapped[str] = mapped_column(String(128), default="")
    sender_email: Mapped[str | None] = mapped_column(
        String(128), nullable=True
    )
    sender_phone: Mapped[str] = mapped_column(String(32), default="")
    sender_address: Mapped[str] = mapped_column(String(255), default="")

    # Recipient fields
    recipient_name: Mapped[str] = mapped_column(String(128), default="")
    recipient_email: Mapped[str | None] = mapped_column(
        String(128), nullable=True
    )
    recipient_phone: Mapped[str] = mapped_column(String(32), default="")
    recipient_address: Mapped[str] = mapped_column(String(255), default="")

    origin: Mapped[str] = mapped_column(String(255), default="")
    destination: Mapped[str] = mapped_column(String(255), default="")
    carrier: Mapped[str] = mapped_column(String(128), default="")
    shipment_type: Mapped[str | None] = mapped_column(
        String(16), nullable=True
    )

    # Package fields
    package_type: Mapped[str] = mapped_column(String(64), default="")
    package_status: Mapped[str] = mapped_column(String(64), default="")
    product: Mapped[str] = mapped_column(String(255), default="")
    quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    piece_type: Mapped[str] = mapped_column(String(64), default="")
    description: Mapped[str] = mapped_column(Text, default="")
    length: Mapped[float | None] = mapped_column(Float, nullable=True)
    width: Mapped[float | None] = mapped_column(Float, nullable=True)
    height: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)

    payment_mode: Mapped[str | None] = mapped_column(String(32), nullable=True)
    freight_cost: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0.00")
    )

    expected_delivery: Mapped[str | None] = mapped_column(
        String(64), nullable=True
    )
    departure_date: Mapped[str | None] = mapped_column(
        String(64), nullable=True
    )
    pickup_date: Mapped[str | None] = mapped_column(String(64), nullable=True)

    extra: Mapped[dict] = mapped_column(JSON, default=dict)

    created_by: Mapped[str | None] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )

    history: Mapped[list[HistoryEntryModel]] = relationship(
        back_populates="shipment",
        order_by="HistoryEntryModel.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class HistoryEntryModel(Base):
    """One appended status/remark event. Rows are never updated."""

    __tablename__ = "shiptrack_history"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    shipment_id: Mapped[str] = mapped_column(
        ForeignKey("shiptrack_shipments.id", ondelete="CASCADE"), index=True
    )
    status: Mapped[str] = mapped_column(String(32))
    location: Mapped[str] = mapped_column(String(255), default="")
    message: Mapped[str] = mapped_column(Text, default="")
    remark: Mapped[str] = mapped_column(Text, default="")
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )

    shipment: Mapped[ShipmentModel] = relationship(back_populates="history")
