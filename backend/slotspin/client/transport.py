"""HTTP transport from the spin controller to the spin server."""
import logging
from typing import Protocol

import httpx
from pydantic import ValidationError

from slotspin.config import settings
from slotspin.errors import TransportError
from slotspin.logic.models import Outcome
from slotspin.protocol import CatalogResponse, SpinResponse

logger = logging.getLogger(__name__)


class SpinTransport(Protocol):
    """One outcome request per spin."""

    async def request_spin(self, bet: float) -> Outcome:
        """Return the server outcome or raise TransportError."""
        ...

    async def fetch_catalog(self) -> CatalogResponse:
        """Return the server catalog or raise TransportError."""
        ...


class HttpSpinTransport:
    """
    httpx-based transport for POST /api/spin and GET /api/catalog.

    Every failure mode (connection errors, timeouts, non-200 status,
    undecodable or schema-violating bodies) surfaces as TransportError.
    No automatic retries.
    """

    SPIN_PATH = "/api/spin"
    CATALOG_PATH = "/api/catalog"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.server_url,
            timeout=timeout if timeout is not None else settings.request_timeout_seconds,
        )

    async def request_spin(self, bet: float) -> Outcome:
        data = await self._send("POST", self.SPIN_PATH, json={"bet": bet})
        try:
            reply = SpinResponse.model_validate(data)
        except ValidationError as e:
            raise TransportError(f"Malformed spin response: {e}") from e
        return Outcome(draw=tuple(reply.positions), payout=reply.winAmount)

    async def fetch_catalog(self) -> CatalogResponse:
        data = await self._send("GET", self.CATALOG_PATH)
        try:
            return CatalogResponse.model_validate(data)
        except ValidationError as e:
            raise TransportError(f"Malformed catalog response: {e}") from e

    async def _send(self, method: str, path: str, **kwargs) -> object:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e!r}") from e

        if response.status_code != 200:
            raise TransportError(
                f"{method} {path} returned {response.status_code}: {response.text[:200]}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"{method} {path} returned invalid JSON") from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
