"""Application configuration derived from environment."""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Server and client settings with defaults."""

    model_config = ConfigDict(env_prefix="SLOTSPIN_")

    # Server
    debug: bool = False

    # Draw: modulo reduction by default, rejection sampling when strict
    strict_uniform_draw: bool = False

    # Client transport
    server_url: str = "http://localhost:3000"
    request_timeout_seconds: float = 10.0

    # Reel strip geometry
    reel_length: int = 100
    visible_rows: int = 3
    symbol_height: int = 100

    # Reel animation (reel i stops after base + i * stagger)
    base_duration_ms: float = 2000.0
    stagger_ms: float = 500.0
    frame_rate: float = 60.0

    # Failed spins return the debited wager to the account
    refund_on_transport_failure: bool = True


settings = Settings()
