"""Shipment enums and status ordering."""

from enum import StrEnum


class ShipmentStatus(StrEnum):
    PENDING = "pending"
    PICKED_UP = "picked up"
    IN_TRANSIT = "in transit"
    ON_HOLD = "on hold"
    OUT_FOR_DELIVERY = "out for delivery"
    DELIVERED = "delivered"


class ShipmentType(StrEnum):
    AIR = "AIR"
    ROAD = "ROAD"
    WATER = "WATER"
    RAIL = "RAIL"


class PaymentMode(StrEnum):
    CASH = "cash"
    BANK_TRANSFER = "bank transfer"
    CARD = "card"
    MOBILE_MONEY = "mobile money"


INITIAL_STATUS = ShipmentStatus.PENDING
TERMINAL_STATUS = ShipmentStatus.DELIVERED

# Statuses sharing a stage may move freely between each other.
STATUS_STAGE: dict[ShipmentStatus, int] = {
    ShipmentStatus.PENDING: 0,
    ShipmentStatus.PICKED_UP: 1,
    ShipmentStatus.IN_TRANSIT: 1,
    ShipmentStatus.ON_HOLD: 1,
    ShipmentStatus.OUT_FOR_DELIVERY: 2,
    ShipmentStatus.DELIVERED: 3,
}

STATUS_PROGRESS: dict[ShipmentStatus, int] = {
    ShipmentStatus.PENDING: 10,
    ShipmentStatus.ON_HOLD: 20,
    ShipmentStatus.OUT_FOR_DELIVERY: 80,
    ShipmentStatus.DELIVERED: 100,
}
DEFAULT_PROGRESS = 50
