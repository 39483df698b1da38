"""
solpay_minter.pipeline.reducers

Reducers define how LangGraph merges node updates into the mint state.
"""

from __future__ import annotations


def append_trail(left: list[str] | None, right: list[str] | None) -> list[str]:
    """
    Append-only reducer for the list of stages a request passed through.

    Nodes return `{"trail": ["stage_name"]}`; the final state carries the full path, which
    is logged with the outcome.
    """

    if not left:
        return list(right or [])
    if not right:
        return list(left)
    return [*left, *right]
