"""Shipment tracking backend public API."""

from typing import TYPE_CHECKING

__version__ = "0.1.0"

__all__ = [
    "ActorResolver",
    "ShipTrackConfig",
    "ShipmentLifecycle",
    "ShipmentNotFoundError",
    "ShipmentRepository",
    "TrackingNumberGenerator",
    "__version__",
    "create_tracking_router",
    "register_exception_handlers",
]

if TYPE_CHECKING:
    from fastapi_shiptrack.config import ShipTrackConfig
    from fastapi_shiptrack.exceptions import (
        ShipmentNotFoundError,
        register_exception_handlers,
    )
    from fastapi_shiptrack.lifecycle import ShipmentLifecycle
    from fastapi_shiptrack.protocols import ActorResolver, ShipmentRepository
    from fastapi_shiptrack.router import create_tracking_router
    from fastapi_shiptrack.tracking import TrackingNumberGenerator


def __getattr__(name: str):
    # Lazy imports to avoid loading all submodules on package import.
    if name == "ShipTrackConfig":
        from fastapi_shiptrack.config import ShipTrackConfig

        return ShipTrackConfig
    if name == "create_tracking_router":
        from fastapi_shiptrack.router import create_tracking_router

        return create_tracking_router
    if name == "ShipmentLifecycle":
        from fastapi_shiptrack.lifecycle import ShipmentLifecycle

        return ShipmentLifecycle
    if name == "TrackingNumberGenerator":
        from fastapi_shiptrack.tracking import TrackingNumberGenerator

        return TrackingNumberGenerator
    if name in ("ShipmentNotFoundError", "register_exception_handlers"):
        from fastapi_shiptrack import exceptions

        return getattr(exceptions, name)
    if name in ("ActorResolver", "ShipmentRepository"):
        from fastapi_shiptrack import protocols

        return getattr(protocols, name)
    raise AttributeError(
        f"module 'fastapi_shiptrack' has no attribute {name!r}"
    )
