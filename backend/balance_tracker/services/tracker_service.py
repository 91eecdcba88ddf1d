"""Request/response operations shared by the API and the terminal tracker."""
import logging
from typing import Any, Optional
from balance_tracker.config import Settings
from balance_tracker.models.balance import FetchResult
from balance_tracker.models.wallet import Envelope
from balance_tracker.services.balance_client import BalanceClient
from balance_tracker.services.balance_fetcher import BalanceFetcher
from balance_tracker.services.baseline_store import BaselineStore
from balance_tracker.services.chain_adapters.base import ChainAdapter
from balance_tracker.services.chain_adapters.solana import SolanaAdapter
from balance_tracker.services.wallet_registry import WalletRegistry
from balance_tracker.utils.errors import PersistenceError, RpcError, TrackerError

logger = logging.getLogger(__name__)


def _dump(model) -> Any:
    return model.model_dump(mode="json", by_alias=True)


class TrackerService:
    """
    Owns the wallet registry, the baseline store and the fetch pipeline.

    Every public operation returns an Envelope; tracker errors are reported
    as {"success": false, "error": ..., "code": ...} instead of raised.
    """

    def __init__(
        self,
        adapter: ChainAdapter,
        registry: WalletRegistry,
        store: BaselineStore,
        fetcher: BalanceFetcher
    ):
        self.adapter = adapter
        self.registry = registry
        self.store = store
        self.fetcher = fetcher

    @classmethod
    def from_settings(cls, settings: Settings, adapter: Optional[ChainAdapter] = None) -> "TrackerService":
        adapter = adapter or SolanaAdapter(
            settings.rpc_url,
            commitment=settings.rpc_commitment,
            timeout=settings.rpc_timeout_seconds
        )
        registry = WalletRegistry(
            settings.wallets_path,
            validator=adapter.validate_address,
            placeholder_marker=settings.placeholder_marker
        )
        store = BaselineStore(
            settings.baseline_path,
            settings.history_path,
            history_limit=settings.history_limit
        )
        client = BalanceClient(
            adapter,
            timeout=settings.rpc_timeout_seconds,
            max_attempts=settings.rpc_max_attempts,
            backoff=settings.rpc_retry_backoff_seconds
        )
        fetcher = BalanceFetcher(
            client,
            store=store,
            batch_size=settings.batch_size,
            batch_delay=settings.batch_delay_seconds
        )
        return cls(adapter, registry, store, fetcher)

    def load(self) -> bool:
        """Load wallets, baseline and history. Returns False if the wallet file is unusable."""
        wallets_ok = True
        try:
            self.registry.load()
        except PersistenceError as e:
            logger.error("Error loading wallets: %s", e)
            wallets_ok = False
        self.store.load()
        return wallets_ok

    async def check_connection(self) -> bool:
        try:
            version = await self.adapter.get_version()
        except RpcError as e:
            logger.error("RPC connection test failed: %s", e)
            return False
        logger.info("RPC connection test successful: %s", version.get("solana-core", "unknown"))
        return True

    async def start(self, check_connection: bool = True):
        if check_connection:
            await self.check_connection()
        if not self.load():
            logger.error("Failed to load wallets. Please check %s", self.registry.path.name)

    async def close(self):
        await self.adapter.aclose()

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def wallets(self):
        return self.registry.wallets

    async def fetch(self) -> FetchResult:
        return await self.fetcher.fetch_all(self.registry.wallets)

    async def fetch_balances(self) -> Envelope:
        result = await self.fetch()
        return Envelope.ok(_dump(result))

    async def reset_baseline(self) -> Envelope:
        """Fetch the current total and make it the new baseline."""
        result = await self.fetch()
        try:
            baseline = self.store.reset(result.total, result.wallet_count)
        except TrackerError as e:
            logger.error("Error saving baseline: %s", e)
            return Envelope.fail("Failed to save baseline", e.code)
        result.baseline = baseline
        result.history = self.store.history
        result.comparison = self.store.compare(result.total)
        return Envelope.ok(_dump(result))

    def get_wallets(self) -> Envelope:
        try:
            wallets = self.registry.load()
        except TrackerError as e:
            return Envelope.fail(e.message, e.code)
        return Envelope.ok({"wallets": wallets})

    def add_wallet(self, address: str) -> Envelope:
        try:
            wallets = self.registry.add(address)
        except TrackerError as e:
            return Envelope.fail(e.message, e.code)
        return Envelope.ok({"wallets": wallets})

    def remove_wallet(self, address: str) -> Envelope:
        try:
            wallets = self.registry.remove(address)
        except TrackerError as e:
            return Envelope.fail(e.message, e.code)
        return Envelope.ok({"wallets": wallets})

    def delete_all_wallets(self) -> Envelope:
        try:
            wallets = self.registry.clear()
        except TrackerError as e:
            return Envelope.fail(e.message, e.code)
        return Envelope.ok({"wallets": wallets})

    def get_history(self) -> Envelope:
        self.store.load_history()
        return Envelope.ok({"history": [_dump(entry) for entry in self.store.history]})

    def clear_history(self) -> Envelope:
        try:
            self.store.clear_history()
        except TrackerError as e:
            return Envelope.fail(e.message, e.code)
        return Envelope.ok()
