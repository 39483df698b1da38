"""
solpay_minter.api.routers.mint

Solana Pay transaction-request endpoint.

Responsibilities:
- Accept GET/POST (and HEAD, OPTIONS, PUT, PATCH, DELETE) on `/mint/{item_key}`.
- Hand the raw request to the dispatcher and render its reply as JSON.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from solpay_minter.api.deps import dispatcher_dep
from solpay_minter.services.mint_dispatcher import MintDispatcher, MintRequest, query_flags

router = APIRouter(tags=["mint"])

# Every non-POST method gets the discovery reply.
# Browser wallets send OPTIONS as a CORS preflight.
_METHODS = ["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"]


@router.api_route("/mint/{item_key}", methods=_METHODS)
async def mint_item(
    request: Request,
    item_key: str,
    dispatcher: MintDispatcher = Depends(dispatcher_dep),
) -> JSONResponse:
    return await _dispatch(request, item_key, dispatcher)


@router.api_route("/mint", methods=_METHODS, include_in_schema=False)
async def mint_without_item(
    request: Request,
    dispatcher: MintDispatcher = Depends(dispatcher_dep),
) -> JSONResponse:
    return await _dispatch(request, None, dispatcher)


async def _dispatch(
    request: Request, item_key: str | None, dispatcher: MintDispatcher
) -> JSONResponse:
    # The body is read raw: a malformed body must produce the protocol error reply,
    # not FastAPI's 422.
    body = await request.body() if request.method == "POST" else b""
    reply = await dispatcher.dispatch(
        MintRequest(
            method=request.method,
            item_key=item_key,
            flags=query_flags(request.query_params.keys()),
            body=body,
        )
    )
    return JSONResponse(status_code=reply.status_code, content=reply.body)


# --- Module Notes -----------------------------------------------------------
# Content type is always application/json, including for errors.
