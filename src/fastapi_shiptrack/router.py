"""Router factory for fastapi-shiptrack."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI

from fastapi_shiptrack.config import ShipTrackConfig
from fastapi_shiptrack.exceptions import register_exception_handlers
from fastapi_shiptrack.protocols import (
    ActorResolver,
    HeaderActorResolver,
    ShipmentRepository,
)
from fastapi_shiptrack.routes.shipments import router as shipments_router
from fastapi_shiptrack.routes.tracking import router as tracking_router
from fastapi_shiptrack.tracking import TrackingNumberGenerator


def create_tracking_router(
    *,
    config: ShipTrackConfig,
    repository: ShipmentRepository,
    actor_resolver: ActorResolver | None = None,
    generator: TrackingNumberGenerator | None = None,
) -> APIRouter:
    """Create a configured API router."""
    actual_resolver = actor_resolver or HeaderActorResolver(
        config.actor_header
    )
    actual_generator = generator or TrackingNumberGenerator(
        repository,
        prefix=config.tracking_prefix,
        max_attempts=config.tracking_max_attempts,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        app.state.shiptrack_config = config
        app.state.shiptrack_repository = repository
        app.state.shiptrack_actor_resolver = actual_resolver
        app.state.shiptrack_generator = actual_generator
        register_exception_handlers(app)
        yield

    router = APIRouter(lifespan=lifespan)
    router.include_router(shipments_router)
    router.include_router(tracking_router)
    return router
