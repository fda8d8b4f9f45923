"""
Pydantic models for API responses.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TxsResponse(BaseModel):
    """Latest transactions of an account."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "address": "0xde0B295669a9FD93d5F28D9Ec85E40f4cb697BAe",
                    "chainId": 11155111,
                    "txs": [
                        {
                            "hash": "0xabc...",
                            "from": "0x...",
                            "to": "0x...",
                            "timeStamp": "1700000000",
                            "value": "1000000000000000000",
                            "dateIso": "2023-11-14T22:13:20.000Z",
                            "status": "success",
                            "valueEth": "1.0",
                            "explorerUrl": "https://sepolia.etherscan.io/tx/0xabc...",
                        }
                    ],
                }
            ]
        },
    )

    address: str = Field(..., description="Checksummed account address")
    chain_id: int = Field(..., alias="chainId", description="EVM chain ID")
    txs: list[dict[str, Any]] = Field(
        ...,
        description="Raw Etherscan records plus dateIso, status, valueEth, explorerUrl",
    )


class ErrorResponse(BaseModel):
    """Error body for /api/txs failures."""

    error: str = Field(..., description="Error message")
    details: Any = Field(None, description="Upstream payload for Etherscan errors")


class HealthResponse(BaseModel):
    """Health check response."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    chain_id: int = Field(..., alias="chainId", description="EVM chain ID")
    etherscan_configured: bool = Field(
        ..., alias="etherscanConfigured", description="Whether ETHERSCAN_API_KEY is set"
    )
