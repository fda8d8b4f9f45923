"""
Etherscan v2 API client.

Used for read-only account transaction history in the viewer UI.
"""

from dataclasses import dataclass
from typing import Any, Optional

import httpx
import structlog

from .errors import MissingCredential, TransportError, UpstreamError

logger = structlog.get_logger()


@dataclass
class EtherscanConfig:
    """Etherscan API configuration."""

    base_url: str
    api_key: Optional[str]
    chain_id: int
    timeout: float = 20.0


class EtherscanClient:
    """Async client for the Etherscan v2 multichain API."""

    def __init__(
        self,
        config: EtherscanConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def has_credential(self) -> bool:
        return bool(self.config.api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _call(self, params: dict[str, Any]) -> Any:
        if not self.has_credential:
            raise MissingCredential()

        query = {
            "chainid": str(self.config.chain_id),
            **params,
            "apikey": self.config.api_key,
        }
        client = await self._get_client()
        try:
            response = await client.get(self.config.base_url, params=query)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            # Message must not include the request URL (it carries the api key)
            logger.error("Etherscan HTTP error", status=e.response.status_code, action=params.get("action"))
            raise TransportError(f"Etherscan HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Etherscan request failed", error=str(e), action=params.get("action"))
            raise TransportError(str(e)) from e
        except ValueError as e:
            logger.error("Etherscan returned invalid JSON", error=str(e), action=params.get("action"))
            raise TransportError(str(e)) from e

    async def get_txlist(
        self,
        address: str,
        page: int = 1,
        offset: int = 10,
        sort: str = "desc",
    ) -> list[dict[str, Any]]:
        """
        Fetch normal transactions of an address.

        Args:
            address: Checksummed account address
            page: Page number (1-based)
            offset: Page size
            sort: "asc" or "desc" by block number

        Returns:
            Raw txlist records as returned by Etherscan

        Raises:
            MissingCredential: if no API key is configured
            UpstreamError: if the payload status is not "1"
            TransportError: on network or decoding failure
        """
        data = await self._call(
            {
                "module": "account",
                "action": "txlist",
                "address": address,
                "page": str(page),
                "offset": str(offset),
                "sort": sort,
            }
        )

        if not isinstance(data, dict) or data.get("status") != "1":
            logger.warning(
                "Etherscan error",
                address=address,
                message=data.get("message") if isinstance(data, dict) else None,
            )
            raise UpstreamError(data)

        result = data.get("result")
        if not isinstance(result, list):
            return []
        return result

    async def check_connectivity(self) -> bool:
        """Check that Etherscan answers with the configured key."""
        try:
            data = await self._call({"module": "proxy", "action": "eth_blockNumber"})
        except (MissingCredential, TransportError):
            return False
        return isinstance(data, dict) and isinstance(data.get("result"), str) and data["result"].startswith("0x")
