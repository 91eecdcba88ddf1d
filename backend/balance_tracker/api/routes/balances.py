"""Balance and baseline endpoints."""
from fastapi import APIRouter, Depends
from balance_tracker.api.deps import get_tracker, respond
from balance_tracker.services.tracker_service import TrackerService

router = APIRouter()


@router.get("/balances")
async def fetch_balances(tracker: TrackerService = Depends(get_tracker)):
    """
    Fetch the balance of every tracked wallet.
    
    Wallets that cannot be fetched are reported with a balance of 0.
    """
    return respond(await tracker.fetch_balances())


@router.post("/baseline/reset")
async def reset_baseline(tracker: TrackerService = Depends(get_tracker)):
    """
    Fetch balances and make the current total the new baseline.
    
    The previous baseline is archived in the history when the total changed.
    """
    return respond(await tracker.reset_baseline())
