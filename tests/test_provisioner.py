from __future__ import annotations

import pytest
from solders.message import to_bytes_versioned
from solders.system_program import ID as SYSTEM_PROGRAM_ID

from solpay_minter.errors import InvalidAccountInput, UpstreamNetworkFailure
from solpay_minter.minting.provisioner import (
    AccountProvisioner,
    parse_recipient,
    parse_request_body,
)
from solpay_minter.solana.transactions import signer_keys
from tests.fakes import RECIPIENT, RENT_LAMPORTS, SERVICE, FakeNetwork


def _provisioner(network: FakeNetwork) -> AccountProvisioner:
    return AccountProvisioner(
        funding=network,
        blockhashes=network,
        submitter=network,
        identity=SERVICE,
        account_size=16,
    )


@pytest.mark.asyncio
async def test_funded_recipient_is_not_topped_up(network: FakeNetwork) -> None:
    account = await _provisioner(network).ensure_funded(RECIPIENT)

    assert account.exists_on_chain is True
    assert account.funded_lamports == 5_000_000
    assert account.funding_signature is None
    assert network.sent == []
    assert network.calls == ["get_balance"]


@pytest.mark.asyncio
async def test_new_recipient_gets_one_rent_exempt_transfer() -> None:
    network = FakeNetwork()

    account = await _provisioner(network).ensure_funded(RECIPIENT)

    assert account.exists_on_chain is False
    assert account.funded_lamports == RENT_LAMPORTS
    assert account.funding_signature == "sig-1"
    assert len(network.sent) == 1

    tx = network.sent[0]
    assert signer_keys(tx.message) == [SERVICE.pubkey()]
    assert tx.signatures[0].verify(SERVICE.pubkey(), to_bytes_versioned(tx.message))

    keys = list(tx.message.account_keys)
    (ix,) = tx.message.instructions
    assert keys[ix.program_id_index] == SYSTEM_PROGRAM_ID
    assert [keys[i] for i in ix.accounts] == [SERVICE.pubkey(), RECIPIENT]
    # System transfer: u32 instruction index 2, then u64 lamports.
    assert bytes(ix.data)[:4] == (2).to_bytes(4, "little")
    assert int.from_bytes(bytes(ix.data)[4:12], "little") == RENT_LAMPORTS


@pytest.mark.asyncio
async def test_balance_lookup_failure_propagates() -> None:
    network = FakeNetwork()
    network.fail_on.add("get_balance")

    with pytest.raises(UpstreamNetworkFailure):
        await _provisioner(network).ensure_funded(RECIPIENT)
    assert network.sent == []


def test_parse_request_body_accepts_account() -> None:
    assert parse_request_body(f'{{"account": "{RECIPIENT}"}}'.encode()) == RECIPIENT


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"{}",
        b'{"account": ""}',
        b'{"account": null}',
        b'{"account": 42}',
        b'{"account": "not-an-address"}',
        b"[]",
        b"not json",
    ],
)
def test_parse_request_body_rejects(body: bytes) -> None:
    with pytest.raises(InvalidAccountInput):
        parse_request_body(body)


def test_parse_recipient_requires_value() -> None:
    with pytest.raises(InvalidAccountInput):
        parse_recipient(None)
