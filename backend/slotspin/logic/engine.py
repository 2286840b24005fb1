"""Outcome engine: reel draws and payout."""
import math

from slotspin.config import settings
from slotspin.errors import InvalidWagerError
from slotspin.logic.catalog import SymbolCatalog
from slotspin.logic.models import REELS, Outcome
from slotspin.logic.rng import RandomSource, SecureRandomSource, draw_index
from slotspin.validators import validate_wager


def compute_payout(draw: tuple[int, ...], wager: float, catalog: SymbolCatalog) -> float:
    """
    Exact-triple-match payout.

    All drawn symbols share one id => wager * that symbol's multiplier.
    Any mismatch => 0. No partial matches, no wilds.
    """
    symbols = [catalog[index] for index in draw]
    first = symbols[0]
    if all(symbol.id == first.id for symbol in symbols):
        return wager * first.multiplier
    return 0


class OutcomeEngine:
    """
    Server-side spin resolution.

    Implements:
    - Wager validation before any randomness is consumed
    - One independent draw per reel from a RandomSource
    - Payout calculation

    Holds no session state; one instance can serve every request.
    """

    def __init__(
        self,
        catalog: SymbolCatalog,
        rng: RandomSource | None = None,
        strict_uniform: bool | None = None,
    ):
        self.catalog = catalog
        self.rng = rng or SecureRandomSource()
        if strict_uniform is None:
            strict_uniform = settings.strict_uniform_draw
        self.strict_uniform = strict_uniform
        self._top_multiplier = max(symbol.multiplier for symbol in catalog.symbols)

    def resolve(self, wager: object) -> Outcome:
        """
        Resolve one spin.

        Args:
            wager: Bet amount, must be a positive finite number

        Returns:
            Outcome with the drawn indices and payout

        Raises:
            InvalidWagerError: before any draw is performed
        """
        amount = validate_wager(wager)
        if not math.isfinite(amount * self._top_multiplier):
            # a triple would overflow the payout
            raise InvalidWagerError(wager)
        draw = self._draw()
        return Outcome(draw=draw, payout=compute_payout(draw, amount, self.catalog))

    def _draw(self) -> tuple[int, int, int]:
        size = len(self.catalog)
        return tuple(
            draw_index(self.rng, size, strict=self.strict_uniform) for _ in range(REELS)
        )
