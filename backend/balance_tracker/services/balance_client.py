"""Single-address balance queries with timeout and retry."""
import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional
from balance_tracker.services.chain_adapters.base import ChainAdapter
from balance_tracker.services.chain_adapters.solana import lamports_to_sol
from balance_tracker.utils.errors import RpcError, RpcTimeoutError
from balance_tracker.utils.logger import short_address

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class FetchErrorKind(str, Enum):
    """Why a balance could not be fetched."""
    NETWORK = "NETWORK"
    TIMEOUT = "TIMEOUT"
    INVALID_ADDRESS = "INVALID_ADDRESS"


@dataclass
class FetchError:
    kind: FetchErrorKind
    message: str


@dataclass
class BalanceQuery:
    """Outcome of querying one address; balance is 0 whenever error is set."""
    address: str
    balance: Decimal = ZERO
    error: Optional[FetchError] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


class BalanceClient:
    """
    Wraps ChainAdapter.get_balance with a per-call timeout and linear backoff.

    A timed-out call is cancelled by asyncio.wait_for, so no request is left
    running in the background after the caller gives up on it.
    """

    def __init__(
        self,
        adapter: ChainAdapter,
        timeout: float = 10.0,
        max_attempts: int = 3,
        backoff: float = 1.0
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.adapter = adapter
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff = backoff

    async def _backoff(self, attempt: int):
        await asyncio.sleep((attempt + 1) * self.backoff)

    async def fetch(self, address: str) -> BalanceQuery:
        """
        Query one address, retrying network failures and timeouts.

        Waits (attempt + 1) * backoff seconds between attempts and never
        after the last one. Malformed addresses fail immediately.
        """
        if not self.adapter.validate_address(address):
            error = FetchError(FetchErrorKind.INVALID_ADDRESS, f"Invalid address: {address!r}")
            logger.error("Failed to fetch balance for %s %s", short_address(address), error.message)
            return BalanceQuery(address=address, error=error)

        last_error: Optional[FetchError] = None
        for attempt in range(self.max_attempts):
            try:
                lamports = await asyncio.wait_for(
                    self.adapter.get_balance(address),
                    timeout=self.timeout
                )
                balance = lamports_to_sol(lamports)
                if balance < 0:
                    raise ValueError(f"negative balance {lamports}")
                return BalanceQuery(address=address, balance=balance, attempts=attempt + 1)
            except (asyncio.TimeoutError, RpcTimeoutError):
                last_error = FetchError(FetchErrorKind.TIMEOUT, "Request timeout")
            except RpcError as e:
                last_error = FetchError(FetchErrorKind.NETWORK, e.message)
            except Exception as e:
                # Any adapter or conversion failure counts as a failed attempt
                logger.debug("Unexpected error fetching %s", short_address(address), exc_info=True)
                last_error = FetchError(FetchErrorKind.NETWORK, f"{type(e).__name__}: {e}")

            logger.warning(
                "Retry %d for %s %s",
                attempt + 1, short_address(address), last_error.message
            )
            if attempt < self.max_attempts - 1:
                await self._backoff(attempt)

        logger.error(
            "Failed to fetch balance for %s %s",
            short_address(address), last_error.message
        )
        return BalanceQuery(address=address, error=last_error, attempts=self.max_attempts)

    async def get_balance(self, address: str) -> Decimal:
        """Balance in SOL, or 0 if it could not be fetched."""
        result = await self.fetch(address)
        return result.balance
