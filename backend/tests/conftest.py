"""Pytest fixtures for backend tests."""
import asyncio
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from slotspin.config import Settings
from slotspin.errors import TransportError
from slotspin.logic.catalog import DEFAULT_CATALOG, SymbolCatalog
from slotspin.logic.models import Outcome
from slotspin.logic.rng import RandomSource
from slotspin.main import app
from slotspin.protocol import CatalogResponse


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (large statistical samples)"
    )


class ScriptedRandomSource(RandomSource):
    """Returns preset 32-bit values in order and counts draws."""

    def __init__(self, values: list[int]):
        self._values = list(values)
        self.draws = 0

    def next_uint32(self) -> int:
        self.draws += 1
        return self._values.pop(0)


class CountingRandomSource(RandomSource):
    """Wraps another source and counts draws."""

    def __init__(self, inner: RandomSource):
        self._inner = inner
        self.draws = 0

    def next_uint32(self) -> int:
        self.draws += 1
        return self._inner.next_uint32()


class VirtualFrameClock:
    """
    Frame signal driven by the test.

    Every waiting animation resumes on tick() with the same timestamp,
    like a display refresh.
    """

    def __init__(self, step_ms: float = 16.0):
        self.time = 0.0
        self.step_ms = step_ms
        self.frames = 0
        self._waiters: list[asyncio.Future] = []

    def now(self) -> float:
        return self.time

    async def next_frame(self) -> float:
        future = asyncio.get_running_loop().create_future()
        self._waiters.append(future)
        return await future

    def tick(self) -> None:
        self.time += self.step_ms
        self.frames += 1
        waiters, self._waiters = self._waiters, []
        for future in waiters:
            if not future.done():
                future.set_result(self.time)


async def drive(clock: VirtualFrameClock, task: asyncio.Task, max_frames: int = 10_000):
    """Tick the clock until task finishes, then return its result."""
    for _ in range(max_frames):
        if task.done():
            break
        clock.tick()
        await asyncio.sleep(0)
    return await task


class RecordingReelView:
    """Reel view that logs every offset into a shared event log."""

    def __init__(self, index: int, log: list):
        self.index = index
        self.log = log
        self.offsets: list[float] = []

    def set_offset(self, offset: float) -> None:
        self.offsets.append(offset)
        self.log.append(("offset", self.index, offset))


class RecordingAccount:
    """In-memory account that logs debits and credits into the event log."""

    def __init__(self, balance: float, log: list):
        self._balance = balance
        self.log = log

    @property
    def balance(self) -> float:
        return self._balance

    def debit(self, amount: float) -> None:
        self._balance -= amount
        self.log.append(("debit", amount))

    def credit(self, amount: float) -> None:
        self._balance += amount
        self.log.append(("credit", amount))


class FakeTransport:
    """Spin transport returning preset outcomes or raising preset errors."""

    def __init__(
        self,
        outcomes: list[Outcome | Exception] | None = None,
        catalog_hash: str = "",
        catalog: SymbolCatalog = DEFAULT_CATALOG,
    ):
        self._outcomes = list(outcomes or [])
        self.requests: list[float] = []
        self.catalog_hash = catalog_hash
        self.catalog = catalog

    async def request_spin(self, bet: float) -> Outcome:
        self.requests.append(bet)
        await asyncio.sleep(0)
        item = self._outcomes.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def fetch_catalog(self) -> CatalogResponse:
        await asyncio.sleep(0)
        return CatalogResponse(symbols=list(self.catalog.symbols), catalogHash=self.catalog_hash)


@pytest.fixture
def catalog() -> SymbolCatalog:
    return DEFAULT_CATALOG


@pytest.fixture
def event_log() -> list:
    return []


@pytest.fixture
def frame_clock() -> VirtualFrameClock:
    return VirtualFrameClock()


@pytest.fixture
def fast_settings() -> Settings:
    """Short animations so tests need few frames."""
    return Settings(
        base_duration_ms=200.0,
        stagger_ms=100.0,
        reel_length=20,
    )


@pytest.fixture
def transport_error() -> TransportError:
    return TransportError("connection refused")


@pytest.fixture
def test_client() -> Generator[TestClient, None, None]:
    """Create TestClient for the spin server."""
    with TestClient(app) as client:
        yield client
