"""Player account collaborator consulted by the spin controller."""
import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Account(Protocol):
    """
    Externally owned balance.

    debit and credit are assumed to succeed; the controller does its own
    balance check before debiting.
    """

    @property
    def balance(self) -> float:
        ...

    def debit(self, amount: float) -> None:
        ...

    def credit(self, amount: float) -> None:
        ...


class InMemoryAccount:
    """Process-local account, used by the demo client and tests."""

    def __init__(self, balance: float = 0.0):
        self._balance = balance

    @property
    def balance(self) -> float:
        return self._balance

    def debit(self, amount: float) -> None:
        self._balance -= amount
        logger.debug("Debited %s, balance=%s", amount, self._balance)

    def credit(self, amount: float) -> None:
        self._balance += amount
        logger.debug("Credited %s, balance=%s", amount, self._balance)
