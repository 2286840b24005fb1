"""Wager validation shared by the engine and the spin controller."""
import math
from numbers import Real

from slotspin.errors import InvalidWagerError


def validate_wager(wager: object) -> float:
    """
    Validate a wager amount.

    Raises INVALID_BET unless wager is a finite real number > 0.
    Booleans are rejected even though they are ints.
    """
    if isinstance(wager, bool) or not isinstance(wager, Real):
        raise InvalidWagerError(wager)
    if not math.isfinite(wager) or wager <= 0:
        raise InvalidWagerError(wager)
    return wager
