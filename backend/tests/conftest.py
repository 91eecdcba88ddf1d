"""Shared fixtures for balance tracker tests."""
import asyncio
from typing import Dict, List, Optional

import pytest

from balance_tracker.config import Settings
from balance_tracker.services.chain_adapters.base import ChainAdapter
from balance_tracker.services.chain_adapters.solana import SolanaAdapter
from balance_tracker.services.tracker_service import TrackerService
from balance_tracker.utils.errors import RpcError

# Real Solana public keys (base58, 32 bytes)
WALLET_A = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
WALLET_B = "7F1WzVNQ1Qpurqxxdyv3UrFQR3uoNepULVW9A4bAJ5nZ"
WALLET_C = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
WALLET_D = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
WALLET_E = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
WALLET_F = "So11111111111111111111111111111111111111112"
WALLET_G = "Vote111111111111111111111111111111111111111"
WALLET_H = "Stake11111111111111111111111111111111111111"
WALLET_I = "SysvarRent111111111111111111111111111111111"
WALLET_J = "SysvarC1ock11111111111111111111111111111111"
WALLET_K = "11111111111111111111111111111111"

ALL_WALLETS = [
    WALLET_A, WALLET_B, WALLET_C, WALLET_D, WALLET_E, WALLET_F,
    WALLET_G, WALLET_H, WALLET_I, WALLET_J, WALLET_K,
]

LAMPORTS = 1_000_000_000


class FakeAdapter(ChainAdapter):
    """In-memory chain adapter recording calls and concurrency."""

    def __init__(
        self,
        lamports: Optional[Dict[str, int]] = None,
        failures: Optional[Dict[str, int]] = None,
        delays: Optional[Dict[str, float]] = None,
        version_error: bool = False,
    ):
        self.lamports = dict(lamports or {})
        self.failures = dict(failures or {})
        self.delays = dict(delays or {})
        self.version_error = version_error
        self.calls: List[str] = []
        self.cancelled: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def get_balance(self, address: str) -> int:
        self.calls.append(address)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(address, 0)
            if delay:
                await asyncio.sleep(delay)
            if self.failures.get(address, 0) > 0:
                self.failures[address] -= 1
                raise RpcError("connection reset")
            return self.lamports.get(address, 0)
        except asyncio.CancelledError:
            self.cancelled.append(address)
            raise
        finally:
            self.in_flight -= 1

    async def get_version(self):
        if self.version_error:
            raise RpcError("HTTP error calling Solana RPC: unreachable")
        return {"solana-core": "1.18.0"}

    def validate_address(self, address: str) -> bool:
        return SolanaAdapter.validate_address(self, address)

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_adapter():
    return FakeAdapter(
        lamports={
            WALLET_A: int(1.5 * LAMPORTS),
            WALLET_B: int(2.5 * LAMPORTS),
        }
    )


@pytest.fixture
def settings(tmp_path):
    """Settings pointing every state file at a temporary directory, with no waiting."""
    return Settings(
        _env_file=None,
        data_dir=tmp_path,
        rpc_retry_backoff_seconds=0,
        batch_delay_seconds=0,
        rpc_timeout_seconds=1,
    )


@pytest.fixture
def tracker(settings, fake_adapter):
    service = TrackerService.from_settings(settings, adapter=fake_adapter)
    service.load()
    return service
