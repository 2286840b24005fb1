"""Reel scroll animation driven by the display refresh signal."""
import asyncio
from typing import Protocol


class ReelView(Protocol):
    """Presentation of one reel. Receives the scroll offset in pixels."""

    def set_offset(self, offset: float) -> None:
        ...


class FrameClock(Protocol):
    """Display refresh signal."""

    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    async def next_frame(self) -> float:
        """Suspend until the next frame, return its timestamp in milliseconds."""
        ...


class AsyncioFrameClock:
    """Frame signal at a fixed rate on the running event loop."""

    def __init__(self, frame_rate: float = 60.0):
        self.frame_interval = 1.0 / frame_rate

    def now(self) -> float:
        return asyncio.get_running_loop().time() * 1000.0

    async def next_frame(self) -> float:
        await asyncio.sleep(self.frame_interval)
        return self.now()


def ease_out_cubic(t: float) -> float:
    """f(t) = 1 - (1 - t)^3 with t clamped to [0, 1]."""
    t = min(max(t, 0.0), 1.0)
    return 1.0 - (1.0 - t) ** 3


def reel_offset(progress: float, start: float, end: float = 0.0) -> float:
    """Scroll offset for a linear progress value after easing."""
    eased = ease_out_cubic(progress)
    if eased >= 1.0:
        return end
    return start - (start - end) * eased


async def animate_reel(
    view: ReelView,
    duration_ms: float,
    clock: FrameClock,
    start_offset: float,
    end_offset: float = 0.0,
) -> None:
    """
    Scroll one reel from start_offset to end_offset over duration_ms.

    One offset per frame; returns after the frame that lands on end_offset.
    A non-positive duration lands on the first frame.
    """
    start_time = clock.now()
    while True:
        frame_time = await clock.next_frame()
        if duration_ms > 0:
            progress = min((frame_time - start_time) / duration_ms, 1.0)
        else:
            progress = 1.0
        view.set_offset(reel_offset(progress, start_offset, end_offset))
        if progress >= 1.0:
            return
