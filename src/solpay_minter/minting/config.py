"""
solpay_minter.minting.config

Immutable runtime configuration for the mint pipeline.

Responsibilities:
- Load the service identity keypair.
- Turn env-driven `Settings` into a frozen `MintConfig` built once at startup.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import base58
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from solpay_minter.errors import ConfigurationError
from solpay_minter.minting.models import CreatorShare, IssuanceDefaults
from solpay_minter.settings import Settings


@dataclass(frozen=True, slots=True)
class MintConfig:
    """
    Everything a request may read that is not part of the request itself.
    Passed explicitly into the dispatcher; never looked up globally.
    """

    service_name: str
    identity: Keypair = field(repr=False)
    collection_address: str
    tree_address: str
    defaults: IssuanceDefaults
    debug: bool = False
    fee_payer_override: str | None = None
    funding_account_size: int = 16
    expose_error_codes: bool = False

    @property
    def service_address(self) -> Pubkey:
        return self.identity.pubkey()


def load_keypair(*, secret: str | None, path: str | None) -> Keypair:
    """
    Accepts a base58 secret key, a JSON byte array (solana-keygen format), or a path
    to a solana-keygen JSON file.
    """

    if secret:
        raw = secret.strip()
    elif path:
        try:
            raw = Path(path).read_text(encoding="utf-8").strip()
        except OSError as e:
            raise ConfigurationError(f"unable to read service keypair file: {e}") from e
    else:
        raise ConfigurationError("MINTER_SERVICE_KEYPAIR or MINTER_SERVICE_KEYPAIR_PATH is required")

    try:
        secret_bytes = bytes(json.loads(raw)) if raw.startswith("[") else base58.b58decode(raw)
        if len(secret_bytes) != 64:
            raise ValueError("expected 64 secret key bytes")
        return Keypair.from_bytes(secret_bytes)
    except (TypeError, ValueError):
        # Do not chain: the cause may echo key material.
        raise ConfigurationError("service keypair is not a valid ed25519 keypair") from None


def build_defaults(settings: Settings) -> IssuanceDefaults:
    creators: tuple[CreatorShare, ...] = ()
    if settings.treasury_address:
        creators = (CreatorShare(address=settings.treasury_address, share=100),)
    return IssuanceDefaults(
        symbol=settings.default_symbol,
        is_mutable=settings.default_is_mutable,
        seller_fee_basis_points=settings.default_seller_fee_basis_points,
        creators=creators,
        collection_name=settings.collection_name,
        collection_family=settings.collection_family,
        description=settings.description,
        external_url=settings.external_url,
    )


def build_mint_config(settings: Settings, *, identity: Keypair | None = None) -> MintConfig:
    identity = identity or load_keypair(
        secret=settings.service_keypair, path=settings.service_keypair_path
    )
    return MintConfig(
        service_name=settings.site_name,
        identity=identity,
        collection_address=settings.collection_address,
        tree_address=settings.tree_address,
        defaults=build_defaults(settings),
        debug=settings.debug,
        fee_payer_override=str(identity.pubkey()) if settings.service_pays_fees else None,
        funding_account_size=settings.funding_account_size,
        expose_error_codes=settings.expose_error_codes,
    )


# --- Module Notes -----------------------------------------------------------
# The collection and tree must be owned by the service identity; the chain enforces that
# when the wallet submits, so a mismatch shows up as a failed transaction, not here.
