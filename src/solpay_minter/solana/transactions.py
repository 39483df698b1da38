"""
solpay_minter.solana.transactions

Transaction assembly utility.

Responsibilities:
- Compile instructions into a v0 message.
- Sign with whichever identities are available, leaving other signer slots open.
- Serialize transactions for transport.
"""

from __future__ import annotations

import base64
from collections.abc import Sequence

from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import MessageV0, to_bytes_versioned
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction


class SignerNotRequired(ValueError):
    pass


def signer_keys(message: MessageV0) -> list[Pubkey]:
    # Signer slots align with the first `num_required_signatures` account keys.
    return list(message.account_keys)[: message.header.num_required_signatures]


def compile_and_sign(
    *,
    payer: Pubkey,
    instructions: Sequence[Instruction],
    recent_blockhash: Hash,
    signers: Sequence[Keypair],
) -> VersionedTransaction:
    """
    Compile and sign. Slots for signers that are not supplied keep `Signature.default()`
    so another party can sign the same message later.
    """

    message = MessageV0.try_compile(payer, list(instructions), [], recent_blockhash)
    keys = signer_keys(message)
    message_bytes = to_bytes_versioned(message)

    signatures = [Signature.default() for _ in keys]
    for keypair in signers:
        try:
            index = keys.index(keypair.pubkey())
        except ValueError:
            raise SignerNotRequired(f"{keypair.pubkey()} is not a signer of this message") from None
        signatures[index] = keypair.sign_message(message_bytes)

    return VersionedTransaction.populate(message, signatures)


def encode_transaction(transaction: VersionedTransaction) -> str:
    return base64.b64encode(bytes(transaction)).decode("ascii")


def decode_transaction(encoded: str) -> VersionedTransaction:
    return VersionedTransaction.from_bytes(base64.b64decode(encoded))


# --- Module Notes -----------------------------------------------------------
# Wallets accept the serialized form with placeholder signatures and fill in their own slot;
# that is what makes the Solana Pay transaction-request flow work.
