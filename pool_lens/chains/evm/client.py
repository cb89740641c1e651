"""EVM JSON-RPC client with fallback support."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ...config import ChainConfig

logger = logging.getLogger(__name__)


class ContractCallError(RuntimeError):
    """The node answered with a JSON-RPC error (e.g. an execution revert)."""


class EvmClient:
    """EVM RPC client with automatic endpoint fallback.

    A client created with ``block`` evaluates every ``eth_call`` against that
    block, so a series of reads observes a single chain state.
    """

    def __init__(self, config: ChainConfig, block: int | None = None) -> None:
        self.config = config
        self.endpoints = list(config.rpc_endpoints)
        self.timeout = config.rpc_timeout
        self.block = block
        self.current_rpc_index = 0
        self._origin: EvmClient | None = None

    @property
    def block_tag(self) -> str:
        return hex(self.block) if self.block is not None else "latest"

    def pinned(self, block: int) -> EvmClient:
        """Return a client bound to ``block``, starting from the current endpoint.

        An endpoint switch made by the pinned client is reported back to this
        client, so later queries start from the endpoint that worked.
        """
        client = EvmClient(self.config, block=block)
        client.current_rpc_index = self.current_rpc_index
        client._origin = self._origin or self
        return client

    async def rpc_call(self, method: str, params: list[Any]) -> Any:
        """Make RPC call with fallback to alternative endpoints.

        Transport failures, HTTP error statuses and replies carrying neither
        ``result`` nor ``error`` move on to the next endpoint. An error object
        in the response is final and raised as ``ContractCallError``.
        """
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        ssl_context = ssl.create_default_context(cafile=certifi.where())

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            rpc_index = (self.current_rpc_index + attempt) % len(self.endpoints)
            rpc_url = self.endpoints[rpc_index]

            try:
                connector = aiohttp.TCPConnector(ssl=ssl_context)
                async with aiohttp.ClientSession(connector=connector) as session:
                    async with session.post(
                        rpc_url,
                        json=payload,
                        timeout=aiohttp.ClientTimeout(total=self.timeout),
                    ) as response:
                        response.raise_for_status()
                        result = await response.json()
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = e
                logger.warning("RPC endpoint %s failed: %s", rpc_url, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue

            if "result" not in result and "error" not in result:
                last_error = RuntimeError(f"Malformed response from {rpc_url}: {result}")
                logger.warning("RPC endpoint %s returned no result", rpc_url)
                continue

            if rpc_index != self.current_rpc_index:
                logger.info("Switched to RPC endpoint: %s", rpc_url)
                self.current_rpc_index = rpc_index
                if self._origin is not None:
                    self._origin.current_rpc_index = rpc_index

            if "error" in result:
                raise ContractCallError(f"RPC Error in {method}: {result['error']}")
            return result["result"]

        raise RuntimeError(f"All RPC endpoints failed. Last error: {last_error}")

    async def block_number(self) -> int:
        """Current head block number."""
        return int(await self.rpc_call("eth_blockNumber", []), 16)

    async def call(self, to: str, data: bytes) -> bytes:
        """Execute a read-only ``eth_call`` and return the raw return data."""
        result = await self.rpc_call(
            "eth_call",
            [{"to": to, "data": "0x" + data.hex()}, self.block_tag],
        )
        if not result:
            return b""
        return bytes.fromhex(result[2:] if result.startswith("0x") else result)
