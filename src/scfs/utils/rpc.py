"""
Solana JSON-RPC client for batched account lookups.

Only ``getMultipleAccounts`` is needed by the matrix engine. The client is
bound to a single cluster URL and is meant to live for one cluster pass:

    async with ClusterRpcClient(url, cluster="devnet") as client:
        accounts = await client.get_multiple_accounts(feature_ids)

Failures of any kind (connection, HTTP status, JSON-RPC error, malformed
result) surface as ``TransportError``; there is no retry.
"""

import itertools
from typing import Any, List, Optional, Sequence

import httpx
from loguru import logger
from pydantic import BaseModel, Field

from ..base.status import AccountInfo
from ..config import MAX_MULTIPLE_ACCOUNTS
from ..errors import TransportError


class RpcRequest(BaseModel):
    """JSON-RPC 2.0 request envelope."""

    jsonrpc: str = "2.0"
    id: int
    method: str
    params: List[Any] = Field(default_factory=list)


class ClusterRpcClient:
    """Async client for one cluster's JSON-RPC endpoint."""

    def __init__(
        self,
        url: str,
        cluster: Optional[str] = None,
        commitment: str = "finalized",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the client.

        Args:
            url: JSON-RPC endpoint URL
            cluster: Cluster name, used in logs and errors
            commitment: Commitment level sent with every request
            timeout: Request timeout in seconds, None disables it
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.url = url
        self.cluster = cluster or url
        self.commitment = commitment
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._ids = itertools.count(1)
        logger.debug(f"ClusterRpcClient bound to {self.cluster} at {self.url}")

    async def __aenter__(self) -> "ClusterRpcClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _fail(self, message: str) -> TransportError:
        logger.error(f"getMultipleAccounts on {self.cluster} failed: {message}")
        return TransportError(message, cluster=self.cluster, url=self.url)

    async def get_multiple_accounts(
        self,
        pubkeys: Sequence[str]
    ) -> List[Optional[AccountInfo]]:
        """
        Fetch up to 100 accounts in one call.

        Args:
            pubkeys: Base58 account ids, at most MAX_MULTIPLE_ACCOUNTS

        Returns:
            One entry per requested id, in request order; None where the
            account does not exist

        Raises:
            ValueError: If more ids are passed than one call accepts
            TransportError: If the call fails or the result is malformed
        """
        if len(pubkeys) > MAX_MULTIPLE_ACCOUNTS:
            raise ValueError(
                f"getMultipleAccounts accepts at most {MAX_MULTIPLE_ACCOUNTS} keys, "
                f"got {len(pubkeys)}"
            )

        request = RpcRequest(
            id=next(self._ids),
            method="getMultipleAccounts",
            params=[
                list(pubkeys),
                {"encoding": "base64", "commitment": self.commitment}
            ]
        )

        try:
            response = await self.client.post(self.url, json=request.model_dump())
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise self._fail(f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise self._fail(f"Invalid JSON response: {e}") from e

        if isinstance(body, dict) and body.get("error"):
            error = body["error"]
            if isinstance(error, dict):
                raise self._fail(f"RPC error {error.get('code')}: {error.get('message')}")
            raise self._fail(f"RPC error: {error}")

        try:
            values = body["result"]["value"]
            accounts = [
                None if value is None else AccountInfo.from_rpc(value)
                for value in values
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise self._fail(f"Malformed result: {e}") from e

        if len(accounts) != len(pubkeys):
            raise self._fail(
                f"Expected {len(pubkeys)} accounts, received {len(accounts)}"
            )

        logger.debug(f"Fetched {len(accounts)} accounts from {self.cluster}")
        return accounts

    async def close(self) -> None:
        """Close the HTTP client session."""
        await self.client.aclose()
