"""
solpay_minter.minting.ports

Narrow collaborator interfaces consumed by the pipeline stages.

Responsibilities:
- Describe what the stages need from the network and the instruction encoder,
  so tests can substitute deterministic fakes.
"""

from __future__ import annotations

from typing import Protocol

from solders.hash import Hash
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from solpay_minter.minting.models import IssuanceMetadata
from solpay_minter.solana.bubblegum import IssuanceAccounts


class AccountFundingSource(Protocol):
    async def get_balance(self, address: Pubkey) -> int: ...

    async def get_minimum_balance_for_rent_exemption(self, data_size: int) -> int: ...


class BlockhashSource(Protocol):
    async def get_latest_blockhash(self) -> Hash: ...


class TransactionSubmitter(Protocol):
    async def send_transaction(self, transaction: VersionedTransaction) -> str: ...


class SolanaNetwork(AccountFundingSource, BlockhashSource, TransactionSubmitter, Protocol):
    async def get_health(self) -> str: ...


class IssuanceInstructionBuilder(Protocol):
    def __call__(
        self, *, metadata: IssuanceMetadata, accounts: IssuanceAccounts
    ) -> Instruction: ...


# --- Module Notes -----------------------------------------------------------
# `SolanaRpcClient` satisfies `SolanaNetwork`; `build_mint_to_collection_instruction`
# satisfies `IssuanceInstructionBuilder`.
