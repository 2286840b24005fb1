"""Error codes and exceptions for the spin protocol."""
from enum import Enum

from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes surfaced by the server."""

    INVALID_BET = "INVALID_BET"
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_BET: 400,
    ErrorCode.INTERNAL_ERROR: 500,
}

# Fixed user-facing messages; internal details are only logged
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_BET: "Invalid bet amount",
    ErrorCode.INTERNAL_ERROR: "Internal server error",
}


class ErrorResponse(BaseModel):
    """Error body shape: {"error": "..."}."""

    error: str


class GameError(Exception):
    """Base game error that maps to an error response."""

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        self.message = message or ERROR_MESSAGES[code]
        self.status_code = ERROR_HTTP_STATUS[code]
        super().__init__(self.message)

    def to_response(self) -> JSONResponse:
        """Convert to JSONResponse."""
        return JSONResponse(
            status_code=self.status_code,
            content=ErrorResponse(error=self.message).model_dump(),
        )


class InvalidWagerError(GameError):
    """Wager is not a positive finite number. Raised before any draw."""

    def __init__(self, wager: object = None):
        self.wager = wager
        super().__init__(ErrorCode.INVALID_BET)


class TransportError(Exception):
    """
    Spin request never produced a usable outcome.

    Covers network errors, non-success statuses and malformed payloads.
    The message is for logs only; players see a fixed text.
    """


class CatalogMismatchError(TransportError):
    """Server catalog differs from the client's catalog."""


class AnimationFault(Exception):
    """A reel view is missing when its animation starts."""

    def __init__(self, reel_index: int):
        self.reel_index = reel_index
        super().__init__(f"Reel {reel_index} has no view to animate")
