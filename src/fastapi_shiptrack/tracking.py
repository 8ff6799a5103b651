"""Tracking number generation."""

from __future__ import annotations

import logging
import random
import secrets

from fastapi_shiptrack.exceptions import GenerationExhausted
from fastapi_shiptrack.protocols import ShipmentRepository

logger = logging.getLogger(__name__)

TRACKING_NUMBER_MIN = 100_000_000
TRACKING_NUMBER_MAX = 999_999_999


class TrackingNumberGenerator:
    """Draws random 9-digit tracking numbers unused by the store.

    The existence check is a best-effort pre-check. Two concurrent
    callers can still draw the same value; the store's unique index
    rejects the second insert.
    """

    def __init__(
        self,
        repository: ShipmentRepository,
        *,
        prefix: str = "",
        max_attempts: int = 10,
        rng: random.Random | None = None,
    ) -> None:
        self.repository = repository
        self.prefix = prefix
        self.max_attempts = max_attempts
        self.rng = rng or secrets.SystemRandom()

    def draw(self) -> str:
        number = self.rng.randint(TRACKING_NUMBER_MIN, TRACKING_NUMBER_MAX)
        return f"{self.prefix}{number}"

    async def generate(self) -> str:
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.draw()
            if not await self.repository.tracking_number_exists(candidate):
                return candidate
            logger.warning(
                "Tracking number collision on attempt %d/%d: %s",
                attempt,
                self.max_attempts,
                candidate,
            )
        raise GenerationExhausted(self.max_attempts)
