"""FastAPI shipment tracking demo backed by SQLite."""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from fastapi_shiptrack import (
    ShipTrackConfig,
    create_tracking_router,
    register_exception_handlers,
)
from fastapi_shiptrack.contrib.sqlalchemy.models import Base
from fastapi_shiptrack.contrib.sqlalchemy.repository import (
    SQLAlchemyShipmentRepository,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# --- Database setup ---

DATABASE_URL = os.environ.get(
    "SHIPTRACK_DATABASE_URL", "sqlite+aiosqlite:///./shiptrack.db"
)
engine = create_async_engine(DATABASE_URL, echo=False)
async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

# --- Library integration ---

config = ShipTrackConfig()
repository = SQLAlchemyShipmentRepository(async_session)

tracking_router = create_tracking_router(
    config=config,
    repository=repository,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


app = FastAPI(
    title="fastapi-shiptrack demo",
    lifespan=lifespan,
)
register_exception_handlers(app)
app.include_router(tracking_router, prefix="/api")
