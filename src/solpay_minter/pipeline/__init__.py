"""
solpay_minter.pipeline

Per-request mint state machine (LangGraph).

Responsibilities:
- Typed state schema, nodes, routing, and graph compilation.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Call sites should go through `solpay_minter.services.mint_dispatcher`, which owns the
# error boundary around the graph.
