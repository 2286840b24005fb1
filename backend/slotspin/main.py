"""Slot spin FastAPI application."""
import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from slotspin.catalog_hash import get_catalog_hash
from slotspin.config import settings
from slotspin.errors import ErrorCode, InvalidWagerError
from slotspin.logic.catalog import DEFAULT_CATALOG
from slotspin.logic.engine import OutcomeEngine
from slotspin.middleware import ErrorHandlerMiddleware
from slotspin.protocol import CatalogResponse, SpinRequest, SpinResponse
from slotspin.telemetry import SpinRejected, SpinResolved, telemetry_service

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Slot Spin Server",
    version="0.1.0",
    description="Spin resolution server for a three-reel slot machine",
    debug=settings.debug,
)

app.add_middleware(ErrorHandlerMiddleware)

# Outcome engine instance
engine = OutcomeEngine(DEFAULT_CATALOG)


def _raw_bet(errors: list) -> object:
    """Pull the rejected bet value out of validation errors for telemetry."""
    for error in errors:
        if error.get("loc", ())[-1:] == ("bet",):
            return error.get("input")
    return None


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Missing, non-numeric or non-finite bets are 400 INVALID_BET."""
    telemetry_service.emit(
        SpinRejected(reason=ErrorCode.INVALID_BET.value, bet=_raw_bet(exc.errors()))
    )
    return InvalidWagerError().to_response()


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/catalog")
async def catalog() -> dict:
    """
    GET /api/catalog.

    Returns the ordered symbol catalog and its hash so clients can check
    they map draw indices to the same symbols.
    """
    response = CatalogResponse(
        symbols=list(engine.catalog.symbols),
        catalogHash=get_catalog_hash(engine.catalog),
    )
    return response.model_dump()


@app.post("/api/spin")
async def spin(body: SpinRequest) -> dict:
    """
    POST /api/spin.

    Implements:
    - Wager validation (400 before any draw)
    - Three independent reel draws
    - Payout calculation
    """
    try:
        outcome = engine.resolve(body.bet)
    except InvalidWagerError:
        telemetry_service.emit(
            SpinRejected(reason=ErrorCode.INVALID_BET.value, bet=body.bet)
        )
        raise

    response = SpinResponse(positions=list(outcome.draw), winAmount=outcome.payout)

    telemetry_service.emit(
        SpinResolved(
            round_id=str(uuid.uuid4()),
            bet=body.bet,
            positions=response.positions,
            win_amount=response.winAmount,
            catalog_hash=get_catalog_hash(engine.catalog),
            strict_uniform=engine.strict_uniform,
        )
    )

    return response.model_dump()
