"""
solpay_minter.minting.models

Domain types passed between mint pipeline stages.

Responsibilities:
- Process-wide issuance defaults.
- Per-request recipient, metadata and assembled-transaction records.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from solders.hash import Hash
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction


class TokenStandard(str, Enum):
    # Declaration order matches the on-chain enum discriminants.
    NON_FUNGIBLE = "NonFungible"
    FUNGIBLE_ASSET = "FungibleAsset"
    FUNGIBLE = "Fungible"
    NON_FUNGIBLE_EDITION = "NonFungibleEdition"


class TokenProgramVersion(str, Enum):
    ORIGINAL = "Original"
    TOKEN_2022 = "Token2022"


@dataclass(frozen=True, slots=True)
class CreatorShare:
    address: str
    share: int


@dataclass(frozen=True, slots=True)
class IssuanceDefaults:
    symbol: str
    is_mutable: bool
    seller_fee_basis_points: int
    creators: tuple[CreatorShare, ...]
    collection_name: str
    collection_family: str
    description: str | None = None
    external_url: str | None = None


@dataclass(frozen=True, slots=True)
class RecipientAccount:
    address: str
    exists_on_chain: bool
    funded_lamports: int
    # Set when this request submitted a funding transfer (unconfirmed).
    funding_signature: str | None = None


@dataclass(frozen=True, slots=True)
class MetadataCreator:
    address: str
    share: int
    verified: bool = False


@dataclass(frozen=True, slots=True)
class CollectionReference:
    address: str
    verified: bool = False


@dataclass(frozen=True, slots=True)
class IssuanceMetadata:
    name: str
    uri: str
    symbol: str
    is_mutable: bool
    seller_fee_basis_points: int
    creators: tuple[MetadataCreator, ...]
    collection: CollectionReference
    token_standard: TokenStandard = TokenStandard.NON_FUNGIBLE
    token_program_version: TokenProgramVersion = TokenProgramVersion.ORIGINAL
    primary_sale_happened: bool = True
    edition_nonce: int | None = None

    def to_wire(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "uri": self.uri,
            "symbol": self.symbol,
            "isMutable": self.is_mutable,
            "sellerFeeBasisPoints": self.seller_fee_basis_points,
            "primarySaleHappened": self.primary_sale_happened,
            "editionNonce": self.edition_nonce,
            "tokenStandard": self.token_standard.value,
            "tokenProgramVersion": self.token_program_version.value,
            "collection": {"key": self.collection.address, "verified": self.collection.verified},
            "uses": None,
            "creators": [
                {"address": c.address, "share": c.share, "verified": c.verified}
                for c in self.creators
            ],
        }


@dataclass(frozen=True, slots=True)
class AssembledTransaction:
    instructions: tuple[Instruction, ...]
    fee_payer: Pubkey
    required_signers: frozenset[Pubkey]
    recent_blockhash: Hash
    # Co-signed by the service identity; recipient slot(s) hold default signatures.
    transaction: VersionedTransaction


# --- Module Notes -----------------------------------------------------------
# Addresses inside metadata stay as strings; they are parsed by the transaction builder so
# a bad configured address surfaces as InstructionBuildFailure.
