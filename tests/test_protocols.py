"""Protocol conformance tests."""

from types import SimpleNamespace

from conftest import InMemoryRepo
from fastapi_shiptrack.protocols import (
    ActorResolver,
    HeaderActorResolver,
    ShipmentRepository,
)


class _IncompleteRepo:
    """Missing methods, so it should NOT satisfy the protocol."""

    async def get_by_id(self, shipment_id: str):
        return None


def test_in_memory_repo_satisfies_protocol() -> None:
    assert isinstance(InMemoryRepo(), ShipmentRepository)


def test_incomplete_repo_does_not_satisfy_protocol() -> None:
    assert not isinstance(_IncompleteRepo(), ShipmentRepository)


def test_repository_protocol_methods() -> None:
    expected_methods = {
        "get_by_id",
        "get_by_tracking_number",
        "tracking_number_exists",
        "create",
        "append_history",
        "list_all",
        "list_recent",
        "count_by_status",
        "delete",
    }
    for method_name in expected_methods:
        assert hasattr(ShipmentRepository, method_name), (
            f"ShipmentRepository missing method {method_name}"
        )


def test_header_resolver_satisfies_protocol() -> None:
    assert isinstance(HeaderActorResolver(), ActorResolver)


async def test_header_resolver_reads_and_strips() -> None:
    resolver = HeaderActorResolver("X-Staff")
    request = SimpleNamespace(headers={"X-Staff": "  ops-7 "})

    assert await resolver.resolve(request) == "ops-7"


async def test_header_resolver_blank_is_none() -> None:
    resolver = HeaderActorResolver()

    assert await resolver.resolve(SimpleNamespace(headers={})) is None
    assert (
        await resolver.resolve(SimpleNamespace(headers={"X-Actor-Id": " "}))
        is None
    )
