"""Shared route helpers."""
from fastapi import Request
from fastapi.responses import JSONResponse
from balance_tracker.models.wallet import Envelope
from balance_tracker.services.tracker_service import TrackerService

# HTTP status for each failure code; anything else is a 500
ERROR_STATUS = {
    "invalid_address": 400,
    "duplicate_address": 409,
    "not_found": 404,
}


def get_tracker(request: Request) -> TrackerService:
    """Tracker service created by the application lifespan."""
    return request.app.state.tracker


def respond(envelope: Envelope) -> JSONResponse:
    """Render an envelope with a status code matching its outcome."""
    status_code = 200 if envelope.success else ERROR_STATUS.get(envelope.code, 500)
    return JSONResponse(status_code=status_code, content=envelope.model_dump(mode="json"))
