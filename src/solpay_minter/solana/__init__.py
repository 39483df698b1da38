"""
solpay_minter.solana

Solana primitives used by the mint pipeline.

Responsibilities:
- Canonical address parsing.
- Async JSON-RPC client.
- Bubblegum instruction encoding and transaction compile/sign/serialize helpers.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package knows about catalogs or HTTP; it only speaks solders types.
