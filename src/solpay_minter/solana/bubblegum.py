"""
solpay_minter.solana.bubblegum

Metaplex Bubblegum `mint_to_collection_v1` instruction encoder.

Responsibilities:
- Borsh layouts for Bubblegum `MetadataArgs`.
- Derive the PDAs the instruction references.
- Build the instruction from already-parsed accounts and resolved metadata.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from borsh_construct import U8, U16, U64, Bool, CStruct, Enum, Option, String, Vec
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from solpay_minter.minting.models import IssuanceMetadata, TokenProgramVersion, TokenStandard
from solpay_minter.solana.addresses import coerce_address

BUBBLEGUM_PROGRAM_ID = Pubkey.from_string("BGUMAp9Gq7iTEuizy4pqaxsTyUCBK68MDfK752saRPUY")
TOKEN_METADATA_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")
SPL_ACCOUNT_COMPRESSION_PROGRAM_ID = Pubkey.from_string(
    "cmtDvXumGCrqC1Age74AVPhSRVXJMd8PJS91L8KbNCK"
)
SPL_NOOP_PROGRAM_ID = Pubkey.from_string("noopb9bkMVfRPU8AsbpTUg8AQkHtKwMYZiFUjNRtMmV")
SYSTEM_PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")

CreatorLayout = CStruct("address" / U8[32], "verified" / Bool, "share" / U8)
CollectionLayout = CStruct("verified" / Bool, "key" / U8[32])
UseMethodLayout = Enum("Burn", "Multiple", "Single", enum_name="UseMethod")
UsesLayout = CStruct("use_method" / UseMethodLayout, "remaining" / U64, "total" / U64)
TokenStandardLayout = Enum(
    "NonFungible", "FungibleAsset", "Fungible", "NonFungibleEdition", enum_name="TokenStandard"
)
TokenProgramVersionLayout = Enum("Original", "Token2022", enum_name="TokenProgramVersion")

MetadataArgsLayout = CStruct(
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "seller_fee_basis_points" / U16,
    "primary_sale_happened" / Bool,
    "is_mutable" / Bool,
    "edition_nonce" / Option(U8),
    "token_standard" / Option(TokenStandardLayout),
    "collection" / Option(CollectionLayout),
    "uses" / Option(UsesLayout),
    "token_program_version" / TokenProgramVersionLayout,
    "creators" / Vec(CreatorLayout),
)

_TOKEN_STANDARDS = {
    TokenStandard.NON_FUNGIBLE: TokenStandardLayout.enum.NonFungible,
    TokenStandard.FUNGIBLE_ASSET: TokenStandardLayout.enum.FungibleAsset,
    TokenStandard.FUNGIBLE: TokenStandardLayout.enum.Fungible,
    TokenStandard.NON_FUNGIBLE_EDITION: TokenStandardLayout.enum.NonFungibleEdition,
}
_TOKEN_PROGRAM_VERSIONS = {
    TokenProgramVersion.ORIGINAL: TokenProgramVersionLayout.enum.Original,
    TokenProgramVersion.TOKEN_2022: TokenProgramVersionLayout.enum.Token2022,
}


def sighash(name: str) -> bytes:
    # Anchor instruction discriminator.
    return hashlib.sha256(f"global:{name}".encode()).digest()[:8]


MINT_TO_COLLECTION_V1_DISCRIMINATOR = sighash("mint_to_collection_v1")


@dataclass(frozen=True, slots=True)
class IssuanceAccounts:
    leaf_owner: Pubkey
    merkle_tree: Pubkey
    collection_mint: Pubkey
    # Tree delegate and collection authority.
    authority: Pubkey
    payer: Pubkey


def tree_config_pda(merkle_tree: Pubkey) -> Pubkey:
    return Pubkey.find_program_address([bytes(merkle_tree)], BUBBLEGUM_PROGRAM_ID)[0]


def bubblegum_signer_pda() -> Pubkey:
    return Pubkey.find_program_address([b"collection_cpi"], BUBBLEGUM_PROGRAM_ID)[0]


def metadata_pda(mint: Pubkey) -> Pubkey:
    return Pubkey.find_program_address(
        [b"metadata", bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint)], TOKEN_METADATA_PROGRAM_ID
    )[0]


def master_edition_pda(mint: Pubkey) -> Pubkey:
    return Pubkey.find_program_address(
        [b"metadata", bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint), b"edition"],
        TOKEN_METADATA_PROGRAM_ID,
    )[0]


def encode_metadata_args(metadata: IssuanceMetadata) -> bytes:
    """
    Raises `AddressError` (a `ValueError`) when a creator or collection address is invalid.
    """

    collection_key = coerce_address(metadata.collection.address)
    return MetadataArgsLayout.build(
        {
            "name": metadata.name,
            "symbol": metadata.symbol,
            "uri": metadata.uri,
            "seller_fee_basis_points": metadata.seller_fee_basis_points,
            "primary_sale_happened": metadata.primary_sale_happened,
            "is_mutable": metadata.is_mutable,
            "edition_nonce": metadata.edition_nonce,
            "token_standard": _TOKEN_STANDARDS[metadata.token_standard](),
            "collection": {
                "verified": metadata.collection.verified,
                "key": list(bytes(collection_key)),
            },
            "uses": None,
            "token_program_version": _TOKEN_PROGRAM_VERSIONS[metadata.token_program_version](),
            "creators": [
                {
                    "address": list(bytes(coerce_address(c.address))),
                    "verified": c.verified,
                    "share": c.share,
                }
                for c in metadata.creators
            ],
        }
    )


def build_mint_to_collection_instruction(
    *, metadata: IssuanceMetadata, accounts: IssuanceAccounts
) -> Instruction:
    """
    The collection authority record slot carries the Bubblegum program id, which the
    program reads as "no delegate record": the authority signs directly.
    """

    data = MINT_TO_COLLECTION_V1_DISCRIMINATOR + encode_metadata_args(metadata)
    metas = [
        AccountMeta(tree_config_pda(accounts.merkle_tree), is_signer=False, is_writable=True),
        AccountMeta(accounts.leaf_owner, is_signer=False, is_writable=False),
        # leaf delegate
        AccountMeta(accounts.leaf_owner, is_signer=False, is_writable=False),
        AccountMeta(accounts.merkle_tree, is_signer=False, is_writable=True),
        AccountMeta(accounts.payer, is_signer=True, is_writable=True),
        # tree delegate
        AccountMeta(accounts.authority, is_signer=True, is_writable=False),
        # collection authority
        AccountMeta(accounts.authority, is_signer=True, is_writable=False),
        AccountMeta(BUBBLEGUM_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(accounts.collection_mint, is_signer=False, is_writable=False),
        AccountMeta(metadata_pda(accounts.collection_mint), is_signer=False, is_writable=True),
        AccountMeta(
            master_edition_pda(accounts.collection_mint), is_signer=False, is_writable=False
        ),
        AccountMeta(bubblegum_signer_pda(), is_signer=False, is_writable=False),
        AccountMeta(SPL_NOOP_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(SPL_ACCOUNT_COMPRESSION_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(TOKEN_METADATA_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
    ]
    return Instruction(BUBBLEGUM_PROGRAM_ID, data, metas)


# --- Module Notes -----------------------------------------------------------
# Account order follows the program's `MintToCollectionV1` accounts struct; reordering
# breaks the instruction even though it still compiles.
