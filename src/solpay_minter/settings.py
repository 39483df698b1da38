"""
solpay_minter.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (the service keypair).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Read once at process start and turned into an immutable `MintConfig`
    (see `solpay_minter.minting.config`); request handlers never read env vars.
    """

    model_config = SettingsConfigDict(env_prefix="MINTER_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "solpay-minter"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Label shown by wallets during the discovery phase.
    site_name: str = "Genin Minter"
    # Enables the verbose `?full` response.
    debug: bool = False
    expose_error_codes: bool = False

    # Solana RPC
    solana_rpc_url: str = "https://api.devnet.solana.com"
    solana_commitment: Literal["processed", "confirmed", "finalized"] = "confirmed"
    rpc_timeout_seconds: float = 30.0

    # Service identity: base58 secret key or a path to a solana-keygen JSON file.
    service_keypair: str | None = Field(default=None, repr=False)
    service_keypair_path: str | None = None

    # Mint targets. Both must be controlled by the service identity.
    collection_address: str = ""
    tree_address: str = ""

    catalog_path: str | None = None

    # Issuance defaults
    treasury_address: str | None = None
    default_symbol: str = "GENIN"
    default_is_mutable: bool = True
    default_seller_fee_basis_points: int = Field(default=0, ge=0, le=10_000)
    collection_name: str = "Genin Minter"
    collection_family: str = "geninminter"
    description: str = "Demo application to mint compressed NFTs using Solana Pay QR codes."
    external_url: str | None = None

    # When true the service identity pays transaction fees instead of the recipient.
    service_pays_fees: bool = False
    # Data size used to size the rent-exempt funding transfer for new recipients.
    funding_account_size: int = Field(default=16, ge=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Addresses are kept as strings here; they are parsed where they are used so a bad
# value surfaces as a typed pipeline failure rather than a settings validation error.
