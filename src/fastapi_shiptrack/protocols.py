"""Store and caller-identity protocols."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from fastapi import Request

from fastapi_shiptrack.types import HistoryEntryData


@runtime_checkable
class ShipmentRepository(Protocol):
    """Persistence for shipments and their history log.

    Lookups raise ``ShipmentNotFoundError`` for unknown keys and
    ``create`` raises ``DuplicateTrackingNumber`` when the store's
    unique constraint on tracking numbers is violated.
    """

    async def get_by_id(self, shipment_id: str) -> Any: ...

    async def get_by_tracking_number(self, tracking_number: str) -> Any: ...

    async def tracking_number_exists(self, tracking_number: str) -> bool: ...

    async def create(self, *, history: HistoryEntryData, **fields) -> Any: ...

    async def append_history(
        self,
        shipment_id: str,
        entry: HistoryEntryData,
        **fields,
    ) -> Any: ...

    async def list_all(self, newest_first: bool = True) -> list[Any]: ...

    async def list_recent(self, limit: int = 5) -> list[Any]: ...

    async def count_by_status(self) -> dict[str, int]: ...

    async def delete(self, shipment_id: str) -> None: ...


@runtime_checkable
class ActorResolver(Protocol):
    """Resolves the acting staff user from a request."""

    async def resolve(self, request: Request) -> str | None: ...


class HeaderActorResolver:
    """Reads the acting user reference from a request header.

    Identity verification happens upstream; this only forwards the
    reference for ``created_by`` auditing.
    """

    def __init__(self, header_name: str = "X-Actor-Id") -> None:
        self.header_name = header_name

    async def resolve(self, request: Request) -> str | None:
        value = request.headers.get(self.header_name, "").strip()
        return value or None
