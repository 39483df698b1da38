"""
solpay_minter.solana.addresses

Address parsing helpers.

Responsibilities:
- Parse base58 account addresses into `Pubkey`.
- Reject input that decodes but does not re-encode to the same string.
"""

from __future__ import annotations

from solders.pubkey import Pubkey


class AddressError(ValueError):
    pass


def parse_address(value: object) -> Pubkey:
    if not isinstance(value, str) or not value:
        raise AddressError("address must be a non-empty string")
    try:
        pubkey = Pubkey.from_string(value)
    except ValueError as e:
        raise AddressError(f"unable to parse address {value!r}") from e
    if str(pubkey) != value:
        raise AddressError(f"address {value!r} is not canonically encoded")
    return pubkey


def coerce_address(value: str | Pubkey) -> Pubkey:
    if isinstance(value, Pubkey):
        return value
    return parse_address(value)
