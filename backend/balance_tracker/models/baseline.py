"""Baseline and history models."""
from datetime import datetime, timezone
from decimal import Decimal
from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Baseline(BaseModel):
    """Reference total that the current total is compared against."""
    total: Decimal = Field(..., description="Total balance in SOL when the baseline was set")
    timestamp: datetime = Field(default_factory=utcnow, description="When the baseline was set")
    wallet_count: int = Field(0, alias="walletCount", description="Number of wallets summed")
    
    class Config:
        populate_by_name = True
        json_encoders = {
            Decimal: str,
            datetime: lambda v: v.isoformat()
        }


class HistoryEntry(BaseModel):
    """Archived baseline transition."""
    id: int = Field(..., description="Creation time in milliseconds, strictly increasing")
    timestamp: datetime = Field(default_factory=utcnow)
    start_balance: Decimal = Field(..., alias="startBalance", description="Previous baseline total")
    end_balance: Decimal = Field(..., alias="endBalance", description="New baseline total")
    profit: Decimal = Field(..., description="end_balance - start_balance")
    profit_percent: Decimal = Field(..., alias="profitPercent", description="Profit relative to start, 0 when start is 0")
    wallet_count: int = Field(0, alias="walletCount")
    
    class Config:
        populate_by_name = True
        json_encoders = {
            Decimal: str,
            datetime: lambda v: v.isoformat()
        }


class Comparison(BaseModel):
    """Difference between a current total and the active baseline."""
    difference: Decimal
    percent: Decimal
