"""
solpay_minter.api

API package for the minting service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: read the request, delegate to the dispatcher.
