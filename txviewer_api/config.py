"""
Configuration for TxViewer API.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    API configuration settings.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # API Server
    host: str = Field(
        default="127.0.0.1",
        description="API host (127.0.0.1 for local only, 0.0.0.0 for external)",
        alias="HOST",
    )
    port: int = Field(
        default=5173,
        description="API port",
        alias="PORT",
    )
    debug: bool = Field(default=False, description="Enable debug mode", alias="DEBUG")
    allowed_origins: list[str] = Field(
        default=["*"],
        description="CORS allowed origins",
        alias="ALLOWED_ORIGINS",
    )

    # Etherscan
    # A missing key is not a startup error: /api/txs answers 500 until it is set.
    etherscan_api_key: Optional[str] = Field(
        default=None,
        description="Etherscan API key (required for /api/txs)",
        alias="ETHERSCAN_API_KEY",
    )
    etherscan_api_url: str = Field(
        default="https://api.etherscan.io/v2/api",
        description="Etherscan v2 multichain API endpoint",
        alias="ETHERSCAN_API_URL",
    )
    chain_id: int = Field(
        default=11155111,
        description="EVM chain ID queried on Etherscan (Sepolia)",
        alias="CHAIN_ID",
    )
    explorer_tx_url: str = Field(
        default="https://sepolia.etherscan.io/tx/",
        description="Explorer URL prefix for transaction links",
        alias="EXPLORER_TX_URL",
    )
    tx_page_size: int = Field(
        default=10,
        gt=0,
        description="Number of transactions returned per request",
        alias="TX_PAGE_SIZE",
    )
    request_timeout: float = Field(
        default=20.0,
        gt=0,
        description="Upstream request timeout in seconds",
        alias="REQUEST_TIMEOUT",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
