"""Configuration management for the application."""
from pathlib import Path
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # API Configuration
    api_title: str = "Solana Balance Tracker API"
    api_version: str = "1.0.0"
    api_prefix: str = "/api/v1"
    
    # CORS Configuration
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    
    # Solana Configuration
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    helius_api_key: Optional[str] = None  # Overrides solana_rpc_url when set
    helius_rpc_url: str = "https://mainnet.helius-rpc.com"
    rpc_commitment: str = "confirmed"
    
    # Balance fetching
    rpc_timeout_seconds: float = 10.0
    rpc_max_attempts: int = 3
    rpc_retry_backoff_seconds: float = 1.0
    batch_size: int = 5
    batch_delay_seconds: float = 0.3  # Pause between batches for upstream rate limits
    
    # State files
    data_dir: Path = Path(".")
    wallets_file: str = "wallets.json"
    baseline_file: str = "baseline.json"
    history_file: str = "history.json"
    history_limit: int = 50
    placeholder_marker: str = "PASTE_YOUR_WALLET"
    
    # Terminal display
    refresh_interval_seconds: float = 10.0
    
    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    
    class Config:
        env_file = ".env"
        case_sensitive = False
    
    @property
    def rpc_url(self) -> str:
        """RPC endpoint actually used, preferring Helius when a key is configured."""
        if self.helius_api_key:
            return f"{self.helius_rpc_url}/?api-key={self.helius_api_key}"
        return self.solana_rpc_url
    
    @property
    def wallets_path(self) -> Path:
        return self.data_dir / self.wallets_file
    
    @property
    def baseline_path(self) -> Path:
        return self.data_dir / self.baseline_file
    
    @property
    def history_path(self) -> Path:
        return self.data_dir / self.history_file


settings = Settings()
