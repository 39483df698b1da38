"""
solpay_minter.services

Service layer.

Responsibilities:
- The protocol dispatcher: request normalization and the single error boundary.
"""

# Package marker.
