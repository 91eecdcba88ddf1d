"""Balance fetch models."""
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from balance_tracker.models.baseline import Baseline, Comparison, HistoryEntry


class BalanceSample(BaseModel):
    """Native SOL balance of one wallet."""
    address: str
    balance: Decimal = Field(default=Decimal("0"), ge=0, description="Balance in SOL")


class FetchResult(BaseModel):
    """Result of one polling cycle over all tracked wallets."""
    total: Decimal = Field(default=Decimal("0"), description="Sum of all balances in SOL")
    balances: List[BalanceSample] = Field(default_factory=list, description="Balances in wallet order")
    wallet_count: int = Field(0, alias="walletCount")
    baseline: Optional[Baseline] = None
    history: List[HistoryEntry] = Field(default_factory=list, description="Baseline transitions, newest first")
    comparison: Optional[Comparison] = Field(None, description="Delta against the baseline, if one is set")
    
    class Config:
        populate_by_name = True
        json_encoders = {
            Decimal: str
        }
