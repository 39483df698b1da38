from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from langgraph.graph import END, StateGraph

from solpay_minter.pipeline.nodes import (
    PipelineContext,
    assemble_metadata_node,
    build_transaction_node,
    debug_node,
    discovery_node,
    fail_node,
    issuance_node,
    ok_or_fail,
    provision_funding_node,
    resolve_item_node,
    route_after_resolve,
    validate_account_node,
)
from solpay_minter.pipeline.state import MintState


def build_mint_graph(*, ctx: PipelineContext):
    """
    Returns a compiled LangGraph runnable.

    Every path ends in exactly one of the terminal nodes `discovery`, `debug`, `issuance`
    or `fail`, each of which sets `reply`.
    """

    graph = StateGraph(MintState)

    graph.add_node("resolve_item", _bind(resolve_item_node, ctx))
    graph.add_node("discovery", _bind(discovery_node, ctx))
    graph.add_node("debug", _bind(debug_node, ctx))
    graph.add_node("validate_account", _bind(validate_account_node, ctx))
    graph.add_node("provision_funding", _bind(provision_funding_node, ctx))
    graph.add_node("assemble_metadata", _bind(assemble_metadata_node, ctx))
    graph.add_node("build_transaction", _bind(build_transaction_node, ctx))
    graph.add_node("issuance", _bind(issuance_node, ctx))
    graph.add_node("fail", _bind(fail_node, ctx))

    graph.set_entry_point("resolve_item")

    graph.add_conditional_edges(
        "resolve_item",
        route_after_resolve,
        {
            "fail": "fail",
            "debug": "debug",
            "discovery": "discovery",
            "validate_account": "validate_account",
        },
    )
    graph.add_conditional_edges(
        "debug", ok_or_fail("end"), {"fail": "fail", "end": END}
    )
    graph.add_conditional_edges(
        "validate_account",
        ok_or_fail("provision_funding"),
        {"fail": "fail", "provision_funding": "provision_funding"},
    )
    graph.add_conditional_edges(
        "provision_funding",
        ok_or_fail("assemble_metadata"),
        {"fail": "fail", "assemble_metadata": "assemble_metadata"},
    )
    graph.add_conditional_edges(
        "assemble_metadata",
        ok_or_fail("build_transaction"),
        {"fail": "fail", "build_transaction": "build_transaction"},
    )
    graph.add_conditional_edges(
        "build_transaction",
        ok_or_fail("issuance"),
        {"fail": "fail", "issuance": "issuance"},
    )

    graph.add_edge("discovery", END)
    graph.add_edge("issuance", END)
    graph.add_edge("fail", END)

    return graph.compile()


def _bind(
    fn: Callable[..., Awaitable[dict[str, Any]]],
    ctx: PipelineContext,
) -> Callable[[MintState], Awaitable[dict[str, Any]]]:
    async def _wrapped(state: MintState) -> dict[str, Any]:
        return await fn(state, ctx=ctx)

    return _wrapped
