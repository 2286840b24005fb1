"""Spin outcome models."""
from pydantic import BaseModel, ConfigDict, Field

# One payline symbol per reel
REELS = 3


class Outcome(BaseModel):
    """
    Authoritative result of one spin.

    draw holds one catalog index per reel; payout is derived from
    (draw, wager, catalog) and never changes once computed.
    """

    model_config = ConfigDict(frozen=True)

    draw: tuple[int, int, int]
    payout: float = Field(..., ge=0)
