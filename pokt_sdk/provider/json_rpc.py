"""
HTTP provider for the Pocket V1 RPC (async).

- POSTs JSON bodies to `<rpc_url><route>` with httpx.AsyncClient.
- Credentials embedded in the URL are moved into an Authorization header.
- `retry_attempts` extra attempts on transport failures and non-2xx answers;
  no backoff, the caller owns any pacing policy.

Example:
    from pokt_sdk.provider import JsonRpcProvider
    async with JsonRpcProvider("https://node.example:8081") as rpc:
        height = await rpc.get_block_number()
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Dict, Literal, Optional, Sequence, Tuple

import httpx

from ..errors import ConfigurationError, RelayTimeoutError, RpcError, TransactionRejectedError
from ..tx.models import RawTxRequest, TransactionResponse
from ..version import __version__ as SDK_VERSION
from .base import V1RpcRoutes, extract_basic_auth

DEFAULT_TIMEOUT = 10.0

AccountType = Literal["node", "app", "account"]


class JsonRpcProvider:
    """Pocket V1 RPC client; satisfies `AbstractProvider`."""

    def __init__(
        self,
        rpc_url: str = "",
        dispatchers: Sequence[str] = (),
        *,
        timeout: float = DEFAULT_TIMEOUT,
        retry_attempts: int = 0,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if not rpc_url and not dispatchers:
            raise ConfigurationError("JsonRpcProvider needs an rpc_url or at least one dispatcher")
        if retry_attempts < 0:
            raise ConfigurationError("retry_attempts must be >= 0")
        self.rpc_url = rpc_url
        self.dispatchers = tuple(dispatchers)
        self.timeout = float(timeout)
        self.retry_attempts = int(retry_attempts)
        self._client = client
        self._owns_client = client is None
        self.log = logger or logging.getLogger("pokt_sdk.provider")

    # --- lifecycle -------------------------------------------------------

    async def __aenter__(self) -> "JsonRpcProvider":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    # --- transport -------------------------------------------------------

    def _base_url(self) -> str:
        return self.rpc_url or random.choice(self.dispatchers)

    def _request_target(self, route: V1RpcRoutes) -> Tuple[str, Dict[str, str]]:
        url, basic_auth = extract_basic_auth(self._base_url())
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"pokt-sdk-python/{SDK_VERSION}",
        }
        if basic_auth:
            headers["Authorization"] = basic_auth
        return url.rstrip("/") + route.value, headers

    async def _perform(self, route: V1RpcRoutes, body: Dict[str, Any]) -> Tuple[int, Any]:
        """POST `body` to `route`; return (http status, decoded JSON) of the last attempt."""
        attempts = self.retry_attempts + 1
        last_exc: Optional[httpx.HTTPError] = None
        for attempt in range(1, attempts + 1):
            # dispatchers are re-picked on every attempt
            target, headers = self._request_target(route)
            started = time.perf_counter()
            try:
                resp = await self._http().post(target, json=body, headers=headers, timeout=self.timeout)
            except httpx.HTTPError as e:
                last_exc = e
                self.log.debug("%s attempt %d failed: %s", route.value, attempt, type(e).__name__)
                continue
            self.log.debug(
                "%s attempt %d http=%d in %.1fms",
                route.value,
                attempt,
                resp.status_code,
                (time.perf_counter() - started) * 1000,
            )
            if resp.is_success or attempt == attempts:
                return resp.status_code, self._decode(route, resp)

        if isinstance(last_exc, httpx.TimeoutException):
            raise RelayTimeoutError(f"{route.value} timed out after {attempts} attempt(s)") from last_exc
        raise RpcError(route.value, f"transport failed after {attempts} attempt(s): {last_exc}") from last_exc

    @staticmethod
    def _decode(route: V1RpcRoutes, resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise RpcError(
                route.value, "non-JSON response", http_status=resp.status_code, data=resp.text[:256]
            ) from e

    async def _query(self, route: V1RpcRoutes, body: Dict[str, Any], required: str) -> Dict[str, Any]:
        status, payload = await self._perform(route, body)
        if not 200 <= status < 300:
            raise RpcError(route.value, "request failed", http_status=status, data=payload)
        if not isinstance(payload, dict) or required not in payload:
            raise RpcError(route.value, f"response lacks {required!r}", http_status=status, data=payload)
        return payload

    # --- AbstractProvider ------------------------------------------------

    async def send_transaction(self, transaction: RawTxRequest) -> TransactionResponse:
        """Broadcast a signed transaction; raise TransactionRejectedError unless a txhash comes back."""
        _, payload = await self._perform(V1RpcRoutes.CLIENT_RAW_TX, transaction.to_json())
        if isinstance(payload, dict) and payload.get("txhash"):
            return TransactionResponse.from_json(payload)
        if isinstance(payload, dict):
            message = payload.get("message") or payload.get("raw_log") or "transaction rejected"
            code = payload.get("code")
            raise TransactionRejectedError(
                str(message), code=int(code) if isinstance(code, int) else None, response=payload
            )
        raise TransactionRejectedError("unexpected response shape", response={"body": payload})

    # --- queries ---------------------------------------------------------

    async def get_balance(self, address: str) -> int:
        payload = await self._query(V1RpcRoutes.QUERY_BALANCE, {"address": address}, "balance")
        return int(payload["balance"])

    async def get_transaction_count(self, address: str) -> int:
        payload = await self._query(V1RpcRoutes.QUERY_ACCOUNT_TXS, {"address": address}, "total_txs")
        return int(payload["total_txs"])

    async def get_type(self, address: str) -> AccountType:
        _, app = await self._perform(V1RpcRoutes.QUERY_APP, {"address": address})
        _, node = await self._perform(V1RpcRoutes.QUERY_NODE, {"address": address})
        is_app = isinstance(app, dict) and "max_relays" in app
        is_node = isinstance(node, dict) and "service_url" in node
        if is_app and not is_node:
            return "app"
        if is_node and not is_app:
            return "node"
        return "account"

    async def get_block(self, height: int) -> Dict[str, Any]:
        return await self._query(V1RpcRoutes.QUERY_BLOCK, {"height": int(height)}, "block")

    async def get_transaction(self, tx_hash: str) -> Dict[str, Any]:
        return await self._query(V1RpcRoutes.QUERY_TX, {"hash": tx_hash}, "hash")

    async def get_block_number(self) -> int:
        payload = await self._query(V1RpcRoutes.QUERY_HEIGHT, {}, "height")
        height = payload["height"]
        if not height:
            raise RpcError(V1RpcRoutes.QUERY_HEIGHT.value, "node reported height 0", data=payload)
        return int(height)

    def __repr__(self) -> str:
        url, _ = extract_basic_auth(self.rpc_url) if self.rpc_url else ("", None)
        return f"JsonRpcProvider(rpc_url={url!r}, dispatchers={len(self.dispatchers)})"


__all__ = ["DEFAULT_TIMEOUT", "AccountType", "JsonRpcProvider"]
