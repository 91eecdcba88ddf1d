"""Abstract base class for chain adapters."""
from abc import ABC, abstractmethod
from typing import Any, Dict


class ChainAdapter(ABC):
    """Abstract base class for blockchain adapters."""
    
    @abstractmethod
    async def get_balance(self, address: str) -> int:
        """
        Fetch the native balance of an account.
        
        Args:
            address: Wallet address
            
        Returns:
            Balance in the chain's smallest unit (lamports for Solana)
            
        Raises:
            RpcError: If the node cannot be reached or rejects the request
        """
        pass
    
    @abstractmethod
    async def get_version(self) -> Dict[str, Any]:
        """Return the node version payload, used as a connectivity probe."""
        pass
    
    @abstractmethod
    def validate_address(self, address: str) -> bool:
        """
        Validate a wallet address format.
        
        Args:
            address: Wallet address to validate
            
        Returns:
            True if address is valid
        """
        pass
    
    @abstractmethod
    async def aclose(self):
        """Release network resources."""
        pass
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
