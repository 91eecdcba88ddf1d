"""Wallet management endpoints."""
from fastapi import APIRouter, Depends
from balance_tracker.api.deps import get_tracker, respond
from balance_tracker.models.wallet import WalletRequest
from balance_tracker.services.tracker_service import TrackerService

router = APIRouter()


@router.get("")
async def get_wallets(tracker: TrackerService = Depends(get_tracker)):
    """List tracked wallets, re-reading the wallet file."""
    return respond(tracker.get_wallets())


@router.post("")
async def add_wallet(request: WalletRequest, tracker: TrackerService = Depends(get_tracker)):
    """Track a new Solana wallet address."""
    return respond(tracker.add_wallet(request.address))


@router.delete("")
async def delete_all_wallets(tracker: TrackerService = Depends(get_tracker)):
    """Stop tracking every wallet."""
    return respond(tracker.delete_all_wallets())


@router.delete("/{address}")
async def remove_wallet(address: str, tracker: TrackerService = Depends(get_tracker)):
    """Stop tracking a wallet."""
    return respond(tracker.remove_wallet(address))
