"""Wallet models."""
from pydantic import BaseModel, Field
from typing import Any, Optional


class WalletRequest(BaseModel):
    """Request model for adding a wallet."""
    address: str = Field(..., description="Solana wallet address")


class Envelope(BaseModel):
    """Uniform response shape shared by the API and the terminal tracker."""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    code: Optional[str] = None
    
    @classmethod
    def ok(cls, data: Any = None) -> "Envelope":
        return cls(success=True, data=data)
    
    @classmethod
    def fail(cls, error: str, code: Optional[str] = None) -> "Envelope":
        return cls(success=False, error=error, code=code)
