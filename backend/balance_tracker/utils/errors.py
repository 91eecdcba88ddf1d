"""Custom error classes."""
from typing import Optional


class TrackerError(Exception):
    """Base exception for balance tracker application."""
    code = "tracker_error"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class WalletError(TrackerError):
    """Error related to wallet registry operations."""
    code = "wallet_error"


class InvalidAddressError(WalletError):
    """Address is blank or not a valid Solana public key."""
    code = "invalid_address"


class DuplicateAddressError(WalletError):
    """Address is already tracked."""
    code = "duplicate_address"


class WalletNotFoundError(WalletError):
    """Address is not tracked."""
    code = "not_found"


class PersistenceError(TrackerError):
    """Error reading or writing a state file."""
    code = "persistence_error"


class RpcError(TrackerError):
    """Error talking to the Solana RPC endpoint."""
    code = "rpc_error"


class RpcTimeoutError(RpcError):
    """The RPC endpoint did not answer in time."""
    code = "rpc_timeout"
