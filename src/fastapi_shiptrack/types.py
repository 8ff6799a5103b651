"""Typed payloads exchanged between the lifecycle and the store."""

from __future__ import annotations

from datetime import datetime
from typing import TypedDict


class HistoryEntryData(TypedDict):
    status: str
    location: str
    message: str
    remark: str
    timestamp: datetime


class ShipmentStats(TypedDict):
    total: int
    active: int
    delivered: int
    pending: int
    recent: list
