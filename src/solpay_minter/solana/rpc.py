"""
solpay_minter.solana.rpc

Async Solana JSON-RPC client.

Responsibilities:
- Call the handful of RPC methods the mint pipeline needs over a shared `httpx.AsyncClient`.
- Translate transport and RPC-level errors into `UpstreamNetworkFailure`.
"""

from __future__ import annotations

import base64
import itertools
from typing import Any

import httpx
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from solpay_minter.errors import UpstreamNetworkFailure
from solpay_minter.observability.logging import get_logger

log = get_logger(__name__)


class SolanaRpcClient:
    """
    Thin JSON-RPC 2.0 boundary. No retries: a failed call fails the request.
    """

    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        url: str,
        commitment: str = "confirmed",
    ) -> None:
        self._http = http
        self._url = url
        self._commitment = commitment
        self._ids = itertools.count(1)

    async def _call(self, method: str, params: list[Any] | None = None) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }
        try:
            r = await self._http.post(self._url, json=payload)
            r.raise_for_status()
            data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamNetworkFailure(f"{method} failed: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamNetworkFailure(f"{method} returned a malformed response")
        if "error" in data:
            err = data["error"] or {}
            raise UpstreamNetworkFailure(f"{method} error: {err.get('message', 'unknown RPC error')}")
        return data.get("result")

    async def get_balance(self, address: Pubkey) -> int:
        result = await self._call("getBalance", [str(address), {"commitment": self._commitment}])
        try:
            return int(result["value"])
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamNetworkFailure(f"getBalance returned {result!r}") from e

    async def get_minimum_balance_for_rent_exemption(self, data_size: int) -> int:
        result = await self._call(
            "getMinimumBalanceForRentExemption", [data_size, {"commitment": self._commitment}]
        )
        try:
            return int(result)
        except (TypeError, ValueError) as e:
            raise UpstreamNetworkFailure(f"getMinimumBalanceForRentExemption returned {result!r}") from e

    async def get_latest_blockhash(self) -> Hash:
        result = await self._call("getLatestBlockhash", [{"commitment": self._commitment}])
        try:
            return Hash.from_string(result["value"]["blockhash"])
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamNetworkFailure(f"getLatestBlockhash returned {result!r}") from e

    async def send_transaction(self, transaction: VersionedTransaction) -> str:
        """
        Returns the signature once the node accepts the transaction; does not wait for
        confirmation.
        """

        encoded = base64.b64encode(bytes(transaction)).decode("ascii")
        signature = await self._call(
            "sendTransaction",
            [
                encoded,
                {
                    "encoding": "base64",
                    "skipPreflight": False,
                    "preflightCommitment": self._commitment,
                },
            ],
        )
        if not isinstance(signature, str):
            raise UpstreamNetworkFailure(f"sendTransaction returned {signature!r}")
        log.info("transaction_submitted", signature=signature)
        return signature

    async def get_health(self) -> str:
        return str(await self._call("getHealth"))


# --- Module Notes -----------------------------------------------------------
# The httpx client (and so the timeout bound) is owned by the app factory and closed on
# shutdown; this class never creates or closes it.
