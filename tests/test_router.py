"""Router tests."""

from fastapi import APIRouter, FastAPI

from fastapi_shiptrack.config import ShipTrackConfig
from fastapi_shiptrack.exceptions import ShipmentNotFoundError
from fastapi_shiptrack.protocols import HeaderActorResolver
from fastapi_shiptrack.router import create_tracking_router
from fastapi_shiptrack.tracking import TrackingNumberGenerator


class _Repo:
    async def get_by_id(self, shipment_id: str):
        raise NotImplementedError

    async def tracking_number_exists(self, tracking_number: str) -> bool:
        raise NotImplementedError


def test_create_tracking_router_returns_apirouter() -> None:
    router = create_tracking_router(
        config=ShipTrackConfig(),
        repository=_Repo(),
    )

    assert isinstance(router, APIRouter)
    app = FastAPI()
    app.include_router(router)
    paths = set(app.openapi()["paths"])
    assert "/shipments" in paths
    assert "/track/{tracking_number}" in paths


async def test_lifespan_populates_app_state() -> None:
    app = FastAPI()
    repo = _Repo()
    config = ShipTrackConfig(tracking_prefix="ST", actor_header="X-Staff")
    app.include_router(
        create_tracking_router(config=config, repository=repo)
    )

    async with app.router.lifespan_context(app) as _:
        assert app.state.shiptrack_config is config
        assert app.state.shiptrack_repository is repo
        resolver = app.state.shiptrack_actor_resolver
        assert isinstance(resolver, HeaderActorResolver)
        assert resolver.header_name == "X-Staff"
        generator = app.state.shiptrack_generator
        assert isinstance(generator, TrackingNumberGenerator)
        assert generator.prefix == "ST"
        assert ShipmentNotFoundError in app.exception_handlers
