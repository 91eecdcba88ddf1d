"""Tracked wallet addresses."""
import logging
from typing import Callable, List
from balance_tracker.services.json_store import JsonFile
from balance_tracker.utils.errors import (
    DuplicateAddressError,
    InvalidAddressError,
    PersistenceError,
    WalletNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "PASTE_YOUR_WALLET"


class WalletRegistry:
    """Ordered, duplicate-free set of wallet addresses backed by a JSON list."""

    def __init__(
        self,
        path,
        validator: Callable[[str], bool],
        placeholder_marker: str = DEFAULT_PLACEHOLDER
    ):
        self._file = JsonFile(path)
        self._validate = validator
        self.placeholder_marker = placeholder_marker
        self._wallets: List[str] = []

    @property
    def path(self):
        return self._file.path

    @property
    def wallets(self) -> List[str]:
        return list(self._wallets)

    def __len__(self) -> int:
        return len(self._wallets)

    def load(self) -> List[str]:
        """
        Read the wallet file, skipping blanks and unfilled placeholders.

        Raises:
            PersistenceError: If the file is unreadable or not a JSON list
        """
        data = self._file.read(default=[])
        if not isinstance(data, list):
            raise PersistenceError(f"{self._file.path.name} must contain a list of addresses")

        wallets: List[str] = []
        for entry in data:
            if not isinstance(entry, str) or not entry.strip():
                continue
            if self.placeholder_marker and self.placeholder_marker in entry:
                continue
            if entry in wallets:
                continue
            wallets.append(entry)

        self._wallets = wallets
        logger.info("Loaded %d wallet addresses", len(wallets))
        return self.wallets

    def _save(self, wallets: List[str]):
        self._file.write(wallets)

    def add(self, address: str) -> List[str]:
        if address is None or not address.strip():
            raise InvalidAddressError("Invalid wallet address")
        address = address.strip()
        if not self._validate(address):
            raise InvalidAddressError(f"Invalid Solana address: {address}")
        if address in self._wallets:
            raise DuplicateAddressError("Wallet already exists")

        updated = self._wallets + [address]
        self._save(updated)
        self._wallets = updated
        logger.info("Added wallet %s", address)
        return self.wallets

    def remove(self, address: str) -> List[str]:
        if address not in self._wallets:
            raise WalletNotFoundError("Wallet not found")

        updated = list(self._wallets)
        updated.remove(address)
        self._save(updated)
        self._wallets = updated
        logger.info("Removed wallet %s", address)
        return self.wallets

    def clear(self) -> List[str]:
        self._save([])
        self._wallets = []
        logger.info("Removed all wallets")
        return self.wallets
