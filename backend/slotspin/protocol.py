"""Wire models for the spin API."""
from pydantic import BaseModel, Field

from slotspin.logic.catalog import Symbol
from slotspin.logic.models import REELS


# === Request Models ===


class SpinRequest(BaseModel):
    """POST /api/spin request body."""

    # strict: "10" and true are rejected rather than coerced
    bet: float = Field(..., strict=True, allow_inf_nan=False, description="Must be > 0")


# === Response Models ===


class SpinResponse(BaseModel):
    """POST /api/spin success body."""

    positions: list[int] = Field(..., min_length=REELS, max_length=REELS)
    winAmount: float = Field(..., ge=0, allow_inf_nan=False)


class CatalogResponse(BaseModel):
    """GET /api/catalog body."""

    symbols: list[Symbol]
    catalogHash: str
