"""
solpay_minter.minting

Mint pipeline stages.

Responsibilities:
- Domain types shared by the stages.
- Account provisioning, metadata assembly, transaction building and response formatting.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Stages are plain async functions/classes; sequencing lives in `solpay_minter.pipeline`.
