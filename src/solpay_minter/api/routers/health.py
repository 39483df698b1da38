"""
solpay_minter.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) with Solana RPC reachability validation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from solpay_minter.api.deps import network_dep
from solpay_minter.errors import UpstreamNetworkFailure
from solpay_minter.minting.ports import SolanaNetwork
from solpay_minter.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz", response_model=None)
async def readyz(network: SolanaNetwork = Depends(network_dep)) -> dict[str, str] | JSONResponse:
    # Readiness: every POST needs the RPC node, so an unreachable node means not ready.
    try:
        rpc_status = await network.get_health()
    except UpstreamNetworkFailure as e:
        log.warning("rpc_unhealthy", reason=str(e))
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE, content={"status": "unavailable"}
        )
    return {"status": "ready", "rpc": rpc_status}
