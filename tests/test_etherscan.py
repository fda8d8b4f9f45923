"""
Tests for the Etherscan client.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from txviewer_api.errors import MissingCredential, TransportError, UpstreamError
from txviewer_api.etherscan import EtherscanClient, EtherscanConfig

API_URL = "https://api.etherscan.io/v2/api"
ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


def _client(
    handler: Callable[[httpx.Request], httpx.Response],
    api_key: str | None = "test-key",
) -> EtherscanClient:
    return EtherscanClient(
        EtherscanConfig(base_url=API_URL, api_key=api_key, chain_id=11155111),
        transport=httpx.MockTransport(handler),
    )


def _ok(result: Any) -> httpx.Response:
    return httpx.Response(200, json={"status": "1", "message": "OK", "result": result})


class TestGetTxlist:
    """Tests for EtherscanClient.get_txlist."""

    @pytest.mark.asyncio
    async def test_sends_txlist_query(self) -> None:
        """Query carries the chain, account, page and api key."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _ok([{"hash": "0x01"}])

        client = _client(handler)
        try:
            result = await client.get_txlist(ADDRESS, page=1, offset=10, sort="desc")
        finally:
            await client.close()

        assert result == [{"hash": "0x01"}]
        assert len(seen) == 1
        params = seen[0].url.params
        assert str(seen[0].url).startswith(API_URL)
        assert params["chainid"] == "11155111"
        assert params["module"] == "account"
        assert params["action"] == "txlist"
        assert params["address"] == ADDRESS
        assert params["page"] == "1"
        assert params["offset"] == "10"
        assert params["sort"] == "desc"
        assert params["apikey"] == "test-key"

    @pytest.mark.asyncio
    async def test_missing_key_never_calls_out(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return _ok([])

        client = _client(handler, api_key=None)
        with pytest.raises(MissingCredential):
            await client.get_txlist(ADDRESS)
        assert calls == []

    @pytest.mark.asyncio
    async def test_non_success_status_raises_upstream_error(self) -> None:
        payload = {"status": "0", "message": "NOTOK", "result": "Invalid API Key"}
        client = _client(lambda request: httpx.Response(200, json=payload))

        with pytest.raises(UpstreamError) as exc_info:
            await client.get_txlist(ADDRESS)

        assert exc_info.value.status_code == 502
        assert exc_info.value.details == payload
        assert exc_info.value.to_dict() == {"error": "Etherscan error", "details": payload}

    @pytest.mark.asyncio
    async def test_non_list_result_is_empty(self) -> None:
        client = _client(lambda request: _ok(None))
        assert await client.get_txlist(ADDRESS) == []

    @pytest.mark.asyncio
    async def test_network_failure_raises_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(handler)
        with pytest.raises(TransportError) as exc_info:
            await client.get_txlist(ADDRESS)
        assert exc_info.value.message == "connection refused"

    @pytest.mark.asyncio
    async def test_http_error_hides_api_key(self) -> None:
        client = _client(lambda request: httpx.Response(503, text="unavailable"))

        with pytest.raises(TransportError) as exc_info:
            await client.get_txlist(ADDRESS)
        assert exc_info.value.message == "Etherscan HTTP 503"
        assert "test-key" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_json_raises_transport_error(self) -> None:
        client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(TransportError):
            await client.get_txlist(ADDRESS)


class TestConnectivity:
    """Tests for EtherscanClient.check_connectivity."""

    @pytest.mark.asyncio
    async def test_block_number_ok(self) -> None:
        client = _client(
            lambda request: httpx.Response(200, json={"jsonrpc": "2.0", "id": 83, "result": "0x4b7"})
        )
        assert await client.check_connectivity() is True

    @pytest.mark.asyncio
    async def test_unreachable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        assert await _client(handler).check_connectivity() is False

    @pytest.mark.asyncio
    async def test_no_key(self) -> None:
        assert await _client(lambda request: _ok([]), api_key=None).check_connectivity() is False
