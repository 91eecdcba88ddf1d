"""Solana chain adapter."""
from typing import List, Optional, Dict, Any
from decimal import Decimal
import httpx
import base58
from balance_tracker.services.chain_adapters.base import ChainAdapter
from balance_tracker.utils.errors import RpcError, RpcTimeoutError

LAMPORTS_PER_SOL = 1_000_000_000


def lamports_to_sol(lamports: int) -> Decimal:
    """Convert lamports to SOL without float rounding."""
    return Decimal(lamports) / Decimal(LAMPORTS_PER_SOL)


class SolanaAdapter(ChainAdapter):
    """Adapter for Solana JSON-RPC."""
    
    def __init__(
        self,
        rpc_url: str,
        commitment: str = "confirmed",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.rpc_url = rpc_url
        self.commitment = commitment
        self.client = client or httpx.AsyncClient(timeout=timeout)
    
    async def aclose(self):
        await self.client.aclose()
    
    async def _rpc_call(self, method: str, params: List[Any]) -> Any:
        """Make RPC call to Solana."""
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params
        }
        
        try:
            response = await self.client.post(self.rpc_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise RpcTimeoutError(f"Timeout calling Solana RPC: {str(e)}")
        except httpx.HTTPError as e:
            raise RpcError(f"HTTP error calling Solana RPC: {str(e)}")
        except ValueError as e:
            raise RpcError(f"Malformed response from Solana RPC: {str(e)}")
        
        if not isinstance(data, dict):
            raise RpcError(f"Malformed response from Solana RPC: {data!r}")
        
        if "error" in data:
            error = data["error"]
            message = error.get("message", "Unknown error") if isinstance(error, dict) else str(error)
            raise RpcError(f"RPC error: {message}")
        
        return data.get("result")
    
    async def get_balance(self, address: str) -> int:
        """
        Fetch an account balance in lamports.
        
        getBalance returns {"context": {...}, "value": <lamports>}.
        """
        result = await self._rpc_call(
            "getBalance",
            [address, {"commitment": self.commitment}]
        )
        value = result.get("value") if isinstance(result, dict) else None
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise RpcError(f"Unexpected getBalance result: {result!r}")
        return value
    
    async def get_version(self) -> Dict[str, Any]:
        """Fetch the node's software version."""
        result = await self._rpc_call("getVersion", [])
        return result if isinstance(result, dict) else {}
    
    def validate_address(self, address: str) -> bool:
        """
        Validate Solana address format.
        
        Solana addresses are base58 encoded, typically 32-44 characters.
        """
        if not address or len(address) < 32 or len(address) > 44:
            return False
        
        try:
            # Try to decode as base58
            decoded = base58.b58decode(address)
            # Solana addresses are 32 bytes
            return len(decoded) == 32
        except ValueError:
            return False
