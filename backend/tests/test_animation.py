"""Reel animation and easing tests."""
import asyncio

import pytest

from slotspin.client.animation import (
    AsyncioFrameClock,
    animate_reel,
    ease_out_cubic,
    reel_offset,
)
from tests.conftest import RecordingReelView, VirtualFrameClock, drive


class TestEasing:

    def test_endpoints(self):
        assert ease_out_cubic(0.0) == 0.0
        assert ease_out_cubic(1.0) == 1.0

    def test_midpoint(self):
        assert ease_out_cubic(0.5) == pytest.approx(0.875)

    def test_clamped(self):
        assert ease_out_cubic(-1.0) == 0.0
        assert ease_out_cubic(2.0) == 1.0

    def test_decelerates(self):
        steps = [ease_out_cubic(i / 10) for i in range(11)]
        deltas = [b - a for a, b in zip(steps, steps[1:])]
        assert all(later < earlier for earlier, later in zip(deltas, deltas[1:]))

    def test_reel_offset_interpolates_to_end(self):
        assert reel_offset(0.0, 9700.0) == 9700.0
        assert reel_offset(1.0, 9700.0) == 0.0
        assert reel_offset(0.5, 800.0) == pytest.approx(100.0)


class TestAnimateReel:

    @pytest.mark.asyncio
    async def test_scrolls_down_to_zero(self, frame_clock: VirtualFrameClock):
        view = RecordingReelView(0, [])
        task = asyncio.create_task(animate_reel(view, 160.0, frame_clock, 9700.0))
        await drive(frame_clock, task)

        assert view.offsets[-1] == 0.0
        assert all(b <= a for a, b in zip(view.offsets, view.offsets[1:]))
        # 160ms at 16ms per frame
        assert len(view.offsets) == 10

    @pytest.mark.asyncio
    async def test_zero_duration_lands_on_first_frame(self, frame_clock: VirtualFrameClock):
        view = RecordingReelView(0, [])
        task = asyncio.create_task(animate_reel(view, 0.0, frame_clock, 9700.0))
        await drive(frame_clock, task)
        assert view.offsets == [0.0]

    @pytest.mark.asyncio
    async def test_longer_duration_takes_more_frames(self, frame_clock: VirtualFrameClock):
        short, long = RecordingReelView(0, []), RecordingReelView(1, [])
        tasks = asyncio.gather(
            animate_reel(short, 100.0, frame_clock, 500.0),
            animate_reel(long, 300.0, frame_clock, 500.0),
        )
        await drive(frame_clock, asyncio.ensure_future(tasks))
        assert len(long.offsets) > len(short.offsets)

    @pytest.mark.asyncio
    async def test_asyncio_clock_completes(self):
        view = RecordingReelView(0, [])
        clock = AsyncioFrameClock(frame_rate=200.0)
        await asyncio.wait_for(animate_reel(view, 30.0, clock, 100.0), timeout=5.0)
        assert view.offsets[-1] == 0.0
