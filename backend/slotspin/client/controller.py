"""Client-side spin lifecycle.

A spin moves IDLE -> SPINNING -> RESOLVING -> SETTLED -> IDLE. The failure
path goes SPINNING -> IDLE with an error result. The reels only ever stop
on the symbols the server drew; the payout is credited after every reel
has finished moving.
"""
import asyncio
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

from slotspin.catalog_hash import get_catalog_hash
from slotspin.client.account import Account
from slotspin.client.animation import AsyncioFrameClock, FrameClock, ReelView, animate_reel
from slotspin.client.reels import PAYLINE_ROW, generate_strip, place_outcome
from slotspin.client.transport import SpinTransport
from slotspin.config import Settings, settings as default_settings
from slotspin.errors import AnimationFault, CatalogMismatchError, TransportError
from slotspin.logic.catalog import Symbol, SymbolCatalog
from slotspin.logic.models import REELS, Outcome
from slotspin.validators import validate_wager

logger = logging.getLogger(__name__)

MESSAGE_SPINNING = "Spinning..."
MESSAGE_ERROR = "An error occurred. Please try again."


class SpinPhase(str, Enum):
    """Spin lifecycle phase."""

    IDLE = "IDLE"
    SPINNING = "SPINNING"
    RESOLVING = "RESOLVING"
    SETTLED = "SETTLED"


@dataclass
class SpinSession:
    """State of the one spin in progress."""

    wager: float
    phase: SpinPhase = SpinPhase.SPINNING
    outcome: Outcome | None = None
    reels_done: list[bool] = field(default_factory=lambda: [False] * REELS)

    @property
    def all_reels_done(self) -> bool:
        return all(self.reels_done)


@dataclass(frozen=True)
class SpinResult:
    """What the player sees once a spin is over."""

    wager: float
    win_amount: float
    message: str
    positions: tuple[int, ...] = ()
    payline: tuple[Symbol, ...] = ()
    error: bool = False
    refunded: bool = False


class SpinController:
    """
    Owns the visible reels and the spin lifecycle.

    Implements:
    - Local preconditions (valid wager, funds, no spin in progress)
    - Optimistic debit and a single outcome request per spin
    - Payline injection and cosmetic filler rows
    - Staggered per-reel animation joined before settlement
    - Payout credit, or refund and error message on transport failure
    """

    def __init__(
        self,
        catalog: SymbolCatalog,
        account: Account,
        transport: SpinTransport,
        views: Sequence[ReelView | None],
        clock: FrameClock | None = None,
        config: Settings | None = None,
        filler_rng: random.Random | None = None,
    ):
        self.catalog = catalog
        self._account = account
        self._transport = transport
        self._views = list(views)
        self._settings = config or default_settings
        self._clock = clock or AsyncioFrameClock(self._settings.frame_rate)
        # Cosmetic only; never used for the outcome
        self._filler_rng = filler_rng or random.Random()
        self._observers: list[Callable[[SpinPhase], None]] = []

        self.phase = SpinPhase.IDLE
        self.session: SpinSession | None = None
        self.message = ""
        self.last_result: SpinResult | None = None
        self.reels = self._fresh_strips()

    @property
    def spinning(self) -> bool:
        return self.phase != SpinPhase.IDLE

    def subscribe(self, callback: Callable[[SpinPhase], None]) -> None:
        """Call callback with every phase change."""
        self._observers.append(callback)

    def reel_durations(self) -> list[float]:
        """Stop time of each reel in ms; later reels settle later."""
        base = self._settings.base_duration_ms
        stagger = self._settings.stagger_ms
        return [base + index * stagger for index in range(REELS)]

    def start_offset(self) -> float:
        """Scroll offset at the bottom of a strip."""
        rows = self._settings.reel_length - self._settings.visible_rows
        return float(rows * self._settings.symbol_height)

    def payline(self) -> list[Symbol]:
        return [strip[PAYLINE_ROW] for strip in self.reels]

    async def verify_catalog(self) -> str:
        """
        Check the server uses the same catalog.

        Returns the shared catalog hash, raises CatalogMismatchError
        when the server disagrees.
        """
        remote = await self._transport.fetch_catalog()
        local_hash = get_catalog_hash(self.catalog)
        if remote.catalogHash != local_hash:
            raise CatalogMismatchError(
                f"Server catalog {remote.catalogHash} != local catalog {local_hash}"
            )
        return local_hash

    async def spin(self, wager: float) -> SpinResult | None:
        """
        Run one spin to completion.

        Returns None without side effects when a spin is already in progress
        or the balance does not cover the wager.

        Raises:
            InvalidWagerError: wager is not a positive finite number
        """
        amount = validate_wager(wager)

        if self.session is not None or self.phase != SpinPhase.IDLE:
            logger.info("Spin ignored: spin already in progress")
            return None
        if self._account.balance < amount:
            logger.info("Spin ignored: balance %s below wager %s", self._account.balance, amount)
            return None

        session = SpinSession(wager=amount)
        self.session = session
        try:
            self._set_phase(SpinPhase.SPINNING)
            self._account.debit(amount)
            self.message = MESSAGE_SPINNING
            self.reels = self._fresh_strips()

            try:
                outcome = await self._transport.request_spin(amount)
                self._check_outcome(outcome)
            except TransportError as e:
                return self._fail(session, e)

            session.outcome = outcome
            self._set_phase(SpinPhase.RESOLVING)
            self._reveal(outcome)

            try:
                await self._join_reels(session)
            except BaseException:
                # the server has settled this round; the player keeps the payout
                self._account.credit(outcome.payout)
                raise

            self._account.credit(outcome.payout)
            result = SpinResult(
                wager=amount,
                win_amount=outcome.payout,
                message=f"You won {outcome.payout:g}!",
                positions=outcome.draw,
                payline=tuple(self.catalog[index] for index in outcome.draw),
            )
            self.message = result.message
            self.last_result = result
            self._set_phase(SpinPhase.SETTLED)
            return result
        finally:
            self.session = None
            self._set_phase(SpinPhase.IDLE)

    def _fresh_strips(self) -> list[list[Symbol]]:
        return [
            generate_strip(self.catalog, self._settings.reel_length, self._filler_rng)
            for _ in range(REELS)
        ]

    def _check_outcome(self, outcome: Outcome) -> None:
        bad = [index for index in outcome.draw if not self.catalog.contains_index(index)]
        if bad:
            raise TransportError(f"Outcome positions {bad} outside catalog of {len(self.catalog)}")

    def _reveal(self, outcome: Outcome) -> None:
        self.reels = [
            place_outcome(strip, self.catalog[index], self.catalog, self._filler_rng)
            for strip, index in zip(self.reels, outcome.draw)
        ]

    def _view(self, index: int) -> ReelView:
        view = self._views[index] if index < len(self._views) else None
        if view is None:
            raise AnimationFault(index)
        return view

    async def _animate(self, session: SpinSession, index: int, duration_ms: float) -> None:
        try:
            view = self._view(index)
        except AnimationFault as e:
            logger.warning("%s, treating it as stopped", e)
        else:
            await animate_reel(view, duration_ms, self._clock, self.start_offset())
        session.reels_done[index] = True

    async def _join_reels(self, session: SpinSession) -> None:
        """Animate every reel; if one fails, stop the others before raising."""
        tasks = [
            asyncio.create_task(self._animate(session, index, duration))
            for index, duration in enumerate(self.reel_durations())
        ]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    def _fail(self, session: SpinSession, error: TransportError) -> SpinResult:
        logger.warning("Spin request failed: %s", error)
        refunded = self._settings.refund_on_transport_failure
        if refunded:
            self._account.credit(session.wager)
        result = SpinResult(
            wager=session.wager,
            win_amount=0,
            message=MESSAGE_ERROR,
            error=True,
            refunded=refunded,
        )
        self.message = result.message
        self.last_result = result
        return result

    def _set_phase(self, phase: SpinPhase) -> None:
        self.phase = phase
        if self.session is not None:
            self.session.phase = phase
        for callback in self._observers:
            callback(phase)
