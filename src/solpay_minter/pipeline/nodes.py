from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from solpay_minter.catalog.store import Catalog
from solpay_minter.errors import MintError, UnknownItem
from solpay_minter.minting.builder import build_issuance_transaction
from solpay_minter.minting.config import MintConfig
from solpay_minter.minting.metadata import assemble_metadata
from solpay_minter.minting.ports import IssuanceInstructionBuilder, SolanaNetwork
from solpay_minter.minting.provisioner import AccountProvisioner, parse_request_body
from solpay_minter.minting.responses import (
    debug_reply,
    discovery_reply,
    error_reply,
    issuance_reply,
)
from solpay_minter.observability.logging import get_logger
from solpay_minter.pipeline.state import MintState

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PipelineContext:
    config: MintConfig
    catalog: Catalog
    network: SolanaNetwork
    build_instruction: IssuanceInstructionBuilder


def _failed(stage: str, failure: MintError) -> dict[str, Any]:
    return {"failure": failure, "trail": [stage]}


async def resolve_item_node(state: MintState, *, ctx: PipelineContext) -> dict[str, Any]:
    key = state.get("item_key")
    try:
        if not key:
            raise UnknownItem("no item key in request path")
        item = ctx.catalog.lookup(key)
        if item is None:
            raise UnknownItem(f"unknown item {key!r}")
        if not item.is_available(state["now"]):
            raise UnknownItem(f"item {key!r} is outside its mint window")
    except MintError as e:
        return _failed("resolve_item", e)
    return {"item": item, "trail": ["resolve_item"]}


async def discovery_node(state: MintState, *, ctx: PipelineContext) -> dict[str, Any]:
    reply = discovery_reply(
        service_name=ctx.config.service_name,
        item=state["item"],
        include_item=bool(state.get("full")),
    )
    return {"reply": reply, "trail": ["discovery"]}


async def debug_node(state: MintState, *, ctx: PipelineContext) -> dict[str, Any]:
    """
    `?full` with the debug toggle on: show what would be minted without touching the network.
    """

    try:
        metadata = assemble_metadata(
            descriptor=state["item"],
            defaults=ctx.config.defaults,
            collection_address=ctx.config.collection_address,
        )
    except MintError as e:
        return _failed("debug", e)
    reply = debug_reply(service_name=ctx.config.service_name, item=state["item"], metadata=metadata)
    return {"metadata": metadata, "reply": reply, "trail": ["debug"]}


async def validate_account_node(state: MintState, *, ctx: PipelineContext) -> dict[str, Any]:
    try:
        owner = parse_request_body(state.get("body", b""))
    except MintError as e:
        return _failed("validate_account", e)
    return {"owner": owner, "trail": ["validate_account"]}


async def provision_funding_node(state: MintState, *, ctx: PipelineContext) -> dict[str, Any]:
    provisioner = AccountProvisioner(
        funding=ctx.network,
        blockhashes=ctx.network,
        submitter=ctx.network,
        identity=ctx.config.identity,
        account_size=ctx.config.funding_account_size,
    )
    try:
        recipient = await provisioner.ensure_funded(state["owner"])
    except MintError as e:
        return _failed("provision_funding", e)
    return {"recipient": recipient, "trail": ["provision_funding"]}


async def assemble_metadata_node(state: MintState, *, ctx: PipelineContext) -> dict[str, Any]:
    try:
        metadata = assemble_metadata(
            descriptor=state["item"],
            defaults=ctx.config.defaults,
            collection_address=ctx.config.collection_address,
        )
    except MintError as e:
        return _failed("assemble_metadata", e)
    return {"metadata": metadata, "trail": ["assemble_metadata"]}


async def build_transaction_node(state: MintState, *, ctx: PipelineContext) -> dict[str, Any]:
    try:
        assembled = await build_issuance_transaction(
            metadata=state["metadata"],
            recipient=state["owner"],
            tree_address=ctx.config.tree_address,
            collection_address=ctx.config.collection_address,
            identity=ctx.config.identity,
            blockhashes=ctx.network,
            fee_payer_override=ctx.config.fee_payer_override,
            build_instruction=ctx.build_instruction,
        )
    except MintError as e:
        return _failed("build_transaction", e)
    return {"assembled": assembled, "trail": ["build_transaction"]}


async def issuance_node(state: MintState, *, ctx: PipelineContext) -> dict[str, Any]:
    assembled = state["assembled"]
    log.info(
        "mint_transaction_built",
        item_key=state["item"].key,
        recipient=str(state["owner"]),
        fee_payer=str(assembled.fee_payer),
        funded=state["recipient"].funding_signature is not None,
    )
    return {"reply": issuance_reply(item=state["item"], assembled=assembled), "trail": ["issuance"]}


async def fail_node(state: MintState, *, ctx: PipelineContext) -> dict[str, Any]:
    failure = state.get("failure")
    # Kind-tagged for log search; the caller only ever sees the generic error body.
    log.warning(
        "mint_failed",
        kind=failure.code if failure is not None else "UNEXPECTED",
        reason=str(failure),
        item_key=state.get("item_key"),
        method=state.get("method"),
        trail=state.get("trail", []),
    )
    return {
        "reply": error_reply(failure, expose_code=ctx.config.expose_error_codes),
        "trail": ["fail"],
    }


def route_after_resolve(state: MintState) -> str:
    if state.get("failure") is not None:
        return "fail"
    if state.get("verbose"):
        return "debug"
    if state.get("method") == "post":
        return "validate_account"
    return "discovery"


def ok_or_fail(next_node: str):
    def route(state: MintState) -> str:
        return "fail" if state.get("failure") is not None else next_node

    return route
