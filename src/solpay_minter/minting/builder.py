"""
solpay_minter.minting.builder

Mint transaction assembly.

Responsibilities:
- Resolve every address the mint instruction references.
- Build the `mint_to_collection_v1` instruction and compile it against a fresh blockhash.
- Co-sign as tree delegate / collection authority, leaving the recipient's slot open.
"""

from __future__ import annotations

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from solpay_minter.errors import InstructionBuildFailure, UpstreamNetworkFailure
from solpay_minter.minting.models import AssembledTransaction, IssuanceMetadata
from solpay_minter.minting.ports import BlockhashSource, IssuanceInstructionBuilder
from solpay_minter.solana.addresses import AddressError, coerce_address
from solpay_minter.solana.bubblegum import IssuanceAccounts, build_mint_to_collection_instruction
from solpay_minter.solana.transactions import SignerNotRequired, compile_and_sign, signer_keys


def _resolve(label: str, value: str | Pubkey | None) -> Pubkey:
    if value is None:
        raise InstructionBuildFailure(f"{label} address is not configured")
    try:
        return coerce_address(value)
    except AddressError as e:
        raise InstructionBuildFailure(f"invalid {label} address: {e}") from e


async def build_issuance_transaction(
    *,
    metadata: IssuanceMetadata,
    recipient: str | Pubkey,
    tree_address: str | Pubkey,
    collection_address: str | Pubkey,
    identity: Keypair,
    blockhashes: BlockhashSource,
    fee_payer_override: str | Pubkey | None = None,
    build_instruction: IssuanceInstructionBuilder = build_mint_to_collection_instruction,
) -> AssembledTransaction:
    owner = _resolve("recipient", recipient)
    tree = _resolve("tree", tree_address)
    collection = _resolve("collection", collection_address)
    fee_payer = owner if fee_payer_override is None else _resolve("fee payer", fee_payer_override)
    authority = identity.pubkey()

    try:
        instruction = build_instruction(
            metadata=metadata,
            accounts=IssuanceAccounts(
                leaf_owner=owner,
                merkle_tree=tree,
                collection_mint=collection,
                authority=authority,
                payer=fee_payer,
            ),
        )
    except ValueError as e:
        # Bad creator/collection address inside the metadata, or a layout build error.
        raise InstructionBuildFailure(f"unable to encode mint instruction: {e}") from e

    try:
        blockhash = await blockhashes.get_latest_blockhash()
    except UpstreamNetworkFailure as e:
        raise InstructionBuildFailure(f"unable to fetch a recent blockhash: {e}") from e

    try:
        transaction = compile_and_sign(
            payer=fee_payer,
            instructions=[instruction],
            recent_blockhash=blockhash,
            signers=[identity],
        )
    except SignerNotRequired as e:
        raise InstructionBuildFailure(str(e)) from e

    required = frozenset(signer_keys(transaction.message))
    if authority not in required:
        raise InstructionBuildFailure("service identity is not a required signer")

    return AssembledTransaction(
        instructions=(instruction,),
        fee_payer=fee_payer,
        required_signers=required,
        recent_blockhash=blockhash,
        transaction=transaction,
    )


# --- Module Notes -----------------------------------------------------------
# The wallet signs and submits; this service never sees the recipient's signature.
