"""Dependency providers for request handlers."""

from __future__ import annotations

from fastapi import HTTPException, Request

from fastapi_shiptrack.config import ShipTrackConfig
from fastapi_shiptrack.lifecycle import ShipmentLifecycle
from fastapi_shiptrack.protocols import ActorResolver, ShipmentRepository
from fastapi_shiptrack.tracking import TrackingNumberGenerator


def get_config(request: Request) -> ShipTrackConfig:
    """Read config from FastAPI app state."""
    return request.app.state.shiptrack_config


def get_repository(request: Request) -> ShipmentRepository:
    """Read repository from FastAPI app state."""
    return request.app.state.shiptrack_repository


def get_generator(request: Request) -> TrackingNumberGenerator | None:
    """Read tracking number generator from FastAPI app state."""
    return getattr(request.app.state, "shiptrack_generator", None)


def get_actor_resolver(request: Request) -> ActorResolver | None:
    """Read actor resolver from FastAPI app state."""
    return getattr(request.app.state, "shiptrack_actor_resolver", None)


def get_lifecycle(request: Request) -> ShipmentLifecycle:
    """Create ShipmentLifecycle for the current request."""
    return ShipmentLifecycle(
        repository=get_repository(request),
        config=get_config(request),
        generator=get_generator(request),
    )


async def require_actor(request: Request) -> str:
    """Resolve the acting staff user or reject the request with 401."""
    resolver = get_actor_resolver(request)
    if resolver is None:
        raise HTTPException(
            status_code=500,
            detail="Actor resolver not configured",
        )
    actor = await resolver.resolve(request)
    if actor is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return actor
