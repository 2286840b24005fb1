"""Spin telemetry: one event per resolved or rejected spin request."""
import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, ClassVar

logger = logging.getLogger(__name__)

# (event_name, payload) -> None
TelemetrySink = Callable[[str, dict[str, Any]], None]


def log_sink(event_name: str, data: dict[str, Any]) -> None:
    logger.info("TELEMETRY %s: %s", event_name, data)


@dataclass(frozen=True)
class SpinResolved:
    name: ClassVar[str] = "spin_resolved"

    round_id: str
    bet: float
    positions: list[int]
    win_amount: float
    catalog_hash: str
    strict_uniform: bool


@dataclass(frozen=True)
class SpinRejected:
    name: ClassVar[str] = "spin_rejected"

    reason: str
    bet: Any  # as received; may be missing or non-numeric


class TelemetryService:
    """Hands events to a sink; a failing sink never reaches the request."""

    def __init__(self, sink: TelemetrySink = log_sink):
        self.sink = sink
        self.sink_errors = 0

    def emit(self, event: SpinResolved | SpinRejected) -> None:
        try:
            self.sink(event.name, asdict(event))
        except Exception:
            self.sink_errors += 1
            logger.warning(
                "Dropped %s event (sink errors: %d)", event.name, self.sink_errors, exc_info=True
            )


telemetry_service = TelemetryService()
