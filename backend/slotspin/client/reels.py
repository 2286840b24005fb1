"""Client-side reel strips."""
import random

from slotspin.logic.catalog import Symbol, SymbolCatalog

# Rows of the visible window; the payline is the middle one
TOP_ROW = 0
PAYLINE_ROW = 1
BOTTOM_ROW = 2


def generate_strip(catalog: SymbolCatalog, length: int, rng: random.Random) -> list[Symbol]:
    """Random strip of symbols for scrolling. Purely cosmetic."""
    return [rng.choice(catalog.symbols) for _ in range(length)]


def place_outcome(
    strip: list[Symbol],
    symbol: Symbol,
    catalog: SymbolCatalog,
    rng: random.Random,
) -> list[Symbol]:
    """
    Return a copy of strip with the drawn symbol on the payline.

    The rows above and below are re-randomized filler and carry no payout
    meaning.
    """
    updated = list(strip)
    updated[PAYLINE_ROW] = symbol
    updated[TOP_ROW] = rng.choice(catalog.symbols)
    updated[BOTTOM_ROW] = rng.choice(catalog.symbols)
    return updated
