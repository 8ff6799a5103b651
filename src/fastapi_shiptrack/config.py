"""Shipment tracking configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShipTrackConfig(BaseSettings):
    """Runtime config for the tracking backend."""

    model_config = SettingsConfigDict(env_prefix="SHIPTRACK_")

    tracking_prefix: str = ""
    tracking_max_attempts: int = Field(default=10, ge=1)
    require_remark: bool = True
    enforce_forward_transitions: bool = False
    actor_header: str = "X-Actor-Id"
    currency_symbol: str = "£"
    recent_limit: int = Field(default=5, ge=0)
