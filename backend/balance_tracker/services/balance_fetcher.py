"""Batched balance fetching across all tracked wallets."""
import asyncio
import logging
from decimal import Decimal
from typing import List, Optional, Sequence
from balance_tracker.models.balance import BalanceSample, FetchResult
from balance_tracker.services.balance_client import BalanceClient
from balance_tracker.services.baseline_store import BaselineStore

logger = logging.getLogger(__name__)


class BalanceFetcher:
    """Fetches wallets in fixed-size concurrent batches, one batch at a time."""

    def __init__(
        self,
        client: BalanceClient,
        store: Optional[BaselineStore] = None,
        batch_size: int = 5,
        batch_delay: float = 0.3
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.client = client
        self.store = store
        self.batch_size = batch_size
        self.batch_delay = batch_delay

    async def _pause(self):
        await asyncio.sleep(self.batch_delay)

    async def fetch_all(self, wallets: Sequence[str]) -> FetchResult:
        """
        Fetch every wallet's balance and sum them.

        Balances come back in the order of wallets. Addresses that fail are
        reported as 0 and never raise.
        """
        wallets = list(wallets)
        total = Decimal("0")
        balances: List[BalanceSample] = []
        success_count = 0
        batch_count = (len(wallets) + self.batch_size - 1) // self.batch_size

        logger.info("Fetching balances for %d wallets...", len(wallets))

        for i in range(0, len(wallets), self.batch_size):
            batch = wallets[i:i + self.batch_size]
            logger.debug("Processing batch %d/%d", i // self.batch_size + 1, batch_count)

            # gather keeps results in input order
            batch_balances = await asyncio.gather(
                *(self.client.get_balance(wallet) for wallet in batch)
            )

            for wallet, balance in zip(batch, batch_balances):
                balances.append(BalanceSample(address=wallet, balance=balance))
                total += balance
                if balance > 0:
                    success_count += 1

            if i + self.batch_size < len(wallets):
                await self._pause()

        logger.info(
            "Fetched balances: %d/%d successful, total: %.4f SOL",
            success_count, len(wallets), total
        )

        result = FetchResult(total=total, balances=balances, wallet_count=len(wallets))
        if self.store is not None:
            result.baseline = self.store.baseline
            result.history = self.store.history
            result.comparison = self.store.compare(total)
        return result
