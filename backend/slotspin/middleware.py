"""Middleware for error handling."""
import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from slotspin.errors import ErrorCode, GameError

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Convert exceptions to {"error": ...} responses."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except GameError as e:
            return e.to_response()
        except Exception:
            # Details go to the log, the client gets a fixed message
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return GameError(ErrorCode.INTERNAL_ERROR).to_response()
