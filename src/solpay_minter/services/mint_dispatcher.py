"""
solpay_minter.services.mint_dispatcher

Solana Pay transaction-request dispatcher.

Responsibilities:
- Normalize an incoming request into initial pipeline state.
- Run the mint state machine.
- Be the one place where any failure becomes the generic error reply.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

from solpay_minter.catalog.store import Catalog
from solpay_minter.minting.config import MintConfig
from solpay_minter.minting.ports import IssuanceInstructionBuilder, SolanaNetwork
from solpay_minter.minting.responses import ProtocolReply, error_reply
from solpay_minter.observability.logging import get_logger
from solpay_minter.pipeline.graph import build_mint_graph
from solpay_minter.pipeline.nodes import PipelineContext
from solpay_minter.pipeline.state import MintState
from solpay_minter.solana.bubblegum import build_mint_to_collection_instruction

log = get_logger(__name__)

FULL_FLAG = "full"


@dataclass(frozen=True, slots=True)
class MintRequest:
    method: str
    item_key: str | None
    flags: frozenset[str] = frozenset()
    body: bytes = b""


@dataclass(frozen=True, slots=True)
class MintCollaborators:
    catalog: Catalog
    network: SolanaNetwork
    build_instruction: IssuanceInstructionBuilder = build_mint_to_collection_instruction


def normalize_method(method: str | None) -> Literal["get", "post", "other"]:
    m = (method or "").strip().lower()
    if m == "get":
        return "get"
    if m == "post":
        return "post"
    return "other"


def query_flags(keys: Iterable[str]) -> frozenset[str]:
    return frozenset(k.lower() for k in keys)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class MintDispatcher:
    """
    Compiles the mint graph once; each `dispatch` call is an independent run over
    read-only config and collaborators.
    """

    def __init__(
        self,
        *,
        config: MintConfig,
        collaborators: MintCollaborators,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._clock = clock
        self._graph = build_mint_graph(
            ctx=PipelineContext(
                config=config,
                catalog=collaborators.catalog,
                network=collaborators.network,
                build_instruction=collaborators.build_instruction,
            )
        )

    async def dispatch(self, request: MintRequest) -> ProtocolReply:
        full = FULL_FLAG in request.flags
        state: MintState = {
            "method": normalize_method(request.method),
            "item_key": request.item_key,
            "body": request.body,
            "full": full,
            "verbose": full and self._config.debug,
            "now": self._clock(),
            "failure": None,
            "trail": [],
        }
        try:
            final = await self._graph.ainvoke(state)
            return final["reply"]
        except Exception:
            # Anything a stage did not classify. Never let a partial body reach the wallet.
            log.exception("mint_failed", kind="UNEXPECTED", item_key=request.item_key)
            return error_reply(expose_code=self._config.expose_error_codes)


# --- Module Notes -----------------------------------------------------------
# No retries and no timeouts beyond the RPC client's own: a slow RPC node stalls the request,
# and any transient failure is reported like a permanent one.
