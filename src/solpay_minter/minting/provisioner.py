"""
solpay_minter.minting.provisioner

Recipient account validation and funding.

Responsibilities:
- Parse the wallet-supplied `account` strictly (canonical base58 only).
- Fund recipients with no balance so they can pay for the mint transaction.

Known race:
- The funding transfer is submitted but not confirmed. The mint transaction is built right
  after, assuming the transfer lands first. If it does not, the wallet's submission fails
  and the user retries.
"""

from __future__ import annotations

from pydantic import BaseModel, StrictStr, ValidationError
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer

from solpay_minter.errors import InvalidAccountInput
from solpay_minter.minting.models import RecipientAccount
from solpay_minter.minting.ports import AccountFundingSource, BlockhashSource, TransactionSubmitter
from solpay_minter.observability.logging import get_logger
from solpay_minter.solana.addresses import AddressError, parse_address
from solpay_minter.solana.transactions import compile_and_sign

log = get_logger(__name__)


class MintRequestBody(BaseModel):
    account: StrictStr | None = None


def parse_request_body(body: bytes) -> Pubkey:
    """
    Solana Pay POST body: `{"account": "<base58>"}`. Anything else is an invalid account.
    """

    if not body:
        raise InvalidAccountInput("request body is empty")
    try:
        parsed = MintRequestBody.model_validate_json(body)
    except ValidationError as e:
        raise InvalidAccountInput(f"malformed request body: {e.error_count()} error(s)") from e
    return parse_recipient(parsed.account)


def parse_recipient(account: object) -> Pubkey:
    if account is None or account == "":
        raise InvalidAccountInput("'account' is required")
    try:
        return parse_address(account)
    except AddressError as e:
        raise InvalidAccountInput(f"unable to parse 'account': {e}") from e


class AccountProvisioner:
    def __init__(
        self,
        *,
        funding: AccountFundingSource,
        blockhashes: BlockhashSource,
        submitter: TransactionSubmitter,
        identity: Keypair,
        account_size: int,
    ) -> None:
        self._funding = funding
        self._blockhashes = blockhashes
        self._submitter = submitter
        self._identity = identity
        self._account_size = account_size

    async def ensure_funded(self, recipient: Pubkey) -> RecipientAccount:
        lamports = await self._funding.get_balance(recipient)
        if lamports > 0:
            return RecipientAccount(
                address=str(recipient), exists_on_chain=True, funded_lamports=lamports
            )

        rent = await self._funding.get_minimum_balance_for_rent_exemption(self._account_size)
        blockhash = await self._blockhashes.get_latest_blockhash()
        service = self._identity.pubkey()
        tx = compile_and_sign(
            payer=service,
            instructions=[
                transfer(TransferParams(from_pubkey=service, to_pubkey=recipient, lamports=rent))
            ],
            recent_blockhash=blockhash,
            signers=[self._identity],
        )
        signature = await self._submitter.send_transaction(tx)
        log.info("recipient_funded", recipient=str(recipient), lamports=rent, signature=signature)
        return RecipientAccount(
            address=str(recipient),
            exists_on_chain=False,
            funded_lamports=rent,
            funding_signature=signature,
        )


# --- Module Notes -----------------------------------------------------------
# Concurrent first-time requests for the same recipient are not coordinated and may each
# submit a funding transfer.
