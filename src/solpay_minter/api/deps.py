"""
solpay_minter.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Encapsulate app.state access patterns (dispatcher, RPC network).
"""

from __future__ import annotations

from fastapi import Request

from solpay_minter.minting.ports import SolanaNetwork
from solpay_minter.services.mint_dispatcher import MintDispatcher


def dispatcher_dep(request: Request) -> MintDispatcher:
    # Built once in `solpay_minter.api.app.create_app`.
    return request.app.state.dispatcher  # type: ignore[attr-defined]


def network_dep(request: Request) -> SolanaNetwork:
    return request.app.state.network  # type: ignore[attr-defined]
