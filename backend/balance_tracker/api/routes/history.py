"""Baseline history endpoints."""
from fastapi import APIRouter, Depends
from balance_tracker.api.deps import get_tracker, respond
from balance_tracker.services.tracker_service import TrackerService

router = APIRouter()


@router.get("")
async def get_history(tracker: TrackerService = Depends(get_tracker)):
    """Baseline resets, newest first."""
    return respond(tracker.get_history())


@router.delete("")
async def clear_history(tracker: TrackerService = Depends(get_tracker)):
    return respond(tracker.clear_history())
