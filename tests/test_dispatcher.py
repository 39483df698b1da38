"""
tests.test_dispatcher

State-machine level tests for the mint dispatcher, with fake collaborators.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest
from solders.keypair import Keypair

from solpay_minter.catalog.store import StaticCatalog
from solpay_minter.minting.config import MintConfig
from solpay_minter.minting.responses import ERROR_LABEL, ERROR_MESSAGE
from solpay_minter.services.mint_dispatcher import (
    MintCollaborators,
    MintDispatcher,
    MintRequest,
    normalize_method,
)
from solpay_minter.solana.transactions import decode_transaction, signer_keys
from tests.fakes import (
    RECIPIENT,
    SERVICE,
    SERVICE_NAME,
    FakeInstructionBuilder,
    FakeNetwork,
    UnreachableCatalog,
    make_config,
    make_item,
)

ERROR_BODY = {"success": False, "label": ERROR_LABEL, "message": ERROR_MESSAGE}


def _dispatcher(config: MintConfig, catalog, network: FakeNetwork, **kwargs) -> MintDispatcher:
    return MintDispatcher(
        config=config,
        collaborators=MintCollaborators(catalog=catalog, network=network, **kwargs),
    )


def _post(key: str | None, account: object, *, flags: frozenset[str] = frozenset()) -> MintRequest:
    return MintRequest(
        method="POST", item_key=key, flags=flags, body=json.dumps({"account": account}).encode()
    )


def test_normalize_method() -> None:
    assert normalize_method("GET") == "get"
    assert normalize_method(" Post ") == "post"
    assert normalize_method("DELETE") == "other"
    assert normalize_method(None) == "other"


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
async def test_non_post_methods_get_discovery(config, catalog, network, method: str) -> None:
    reply = await _dispatcher(config, catalog, network).dispatch(
        MintRequest(method=method, item_key="alpha")
    )

    assert reply.status_code == 200
    assert reply.body == {"label": SERVICE_NAME, "icon": "https://x/img.png", "message": "Alpha Badge"}
    assert network.calls == []


@pytest.mark.asyncio
async def test_discovery_is_idempotent(config, catalog, network) -> None:
    dispatcher = _dispatcher(config, catalog, network)
    first = await dispatcher.dispatch(MintRequest(method="GET", item_key="alpha"))
    second = await dispatcher.dispatch(MintRequest(method="GET", item_key="alpha"))

    assert json.dumps(first.body) == json.dumps(second.body)


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "POST"])
async def test_unknown_item(config, catalog, network, method: str) -> None:
    reply = await _dispatcher(config, catalog, network).dispatch(
        MintRequest(method=method, item_key="ghost", body=b'{"account": "x"}')
    )

    assert reply.status_code == 400
    assert reply.body == ERROR_BODY
    assert network.calls == []


@pytest.mark.asyncio
async def test_missing_item_key(config, catalog, network) -> None:
    reply = await _dispatcher(config, catalog, network).dispatch(
        MintRequest(method="GET", item_key=None)
    )
    assert reply.status_code == 400


@pytest.mark.asyncio
async def test_unreachable_catalog(config, network) -> None:
    reply = await _dispatcher(config, UnreachableCatalog(), network).dispatch(
        MintRequest(method="GET", item_key="alpha")
    )
    assert reply.status_code == 400
    assert reply.body == ERROR_BODY


@pytest.mark.asyncio
async def test_item_outside_mint_window(config, network) -> None:
    catalog = StaticCatalog([make_item(end_date=datetime(2020, 1, 1, tzinfo=UTC))])
    reply = await _dispatcher(config, catalog, network).dispatch(
        MintRequest(method="GET", item_key="alpha")
    )
    assert reply.status_code == 400


@pytest.mark.asyncio
async def test_post_funded_recipient_skips_funding(config, catalog, network) -> None:
    reply = await _dispatcher(config, catalog, network).dispatch(_post("alpha", str(RECIPIENT)))

    assert reply.status_code == 200
    assert reply.body["message"] == "Alpha Badge"
    assert reply.body["transaction"]
    assert network.sent == []
    assert network.calls == ["get_balance", "get_latest_blockhash"]

    tx = decode_transaction(reply.body["transaction"])
    keys = signer_keys(tx.message)
    assert keys[0] == RECIPIENT
    assert SERVICE.pubkey() in keys


@pytest.mark.asyncio
async def test_post_new_recipient_is_funded_before_build(config, catalog) -> None:
    network = FakeNetwork()
    builder = FakeInstructionBuilder()

    reply = await _dispatcher(config, catalog, network, build_instruction=builder).dispatch(
        _post("alpha", str(RECIPIENT))
    )

    assert reply.status_code == 200
    assert len(network.sent) == 1
    assert network.calls == [
        "get_balance",
        "get_minimum_balance_for_rent_exemption",
        "get_latest_blockhash",
        "send_transaction",
        "get_latest_blockhash",
    ]
    assert len(builder.calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [b"", b"{}", b'{"account": 7}', b"garbage", f'{{"account": " {RECIPIENT}"}}'.encode()],
)
async def test_post_invalid_account(config, catalog, network, body: bytes) -> None:
    reply = await _dispatcher(config, catalog, network).dispatch(
        MintRequest(method="POST", item_key="alpha", body=body)
    )

    assert reply.status_code == 400
    assert reply.body == ERROR_BODY
    assert network.calls == []


@pytest.mark.asyncio
async def test_upstream_failure_during_funding(config, catalog) -> None:
    network = FakeNetwork()
    network.fail_on.add("send_transaction")

    reply = await _dispatcher(config, catalog, network).dispatch(_post("alpha", str(RECIPIENT)))

    assert reply.status_code == 400
    assert "get_latest_blockhash" in network.calls
    # Nothing is built once funding failed.
    assert network.calls[-1] == "send_transaction"


@pytest.mark.asyncio
async def test_invalid_descriptor(config, network) -> None:
    catalog = StaticCatalog([make_item(metadata_uri=" ")])
    reply = await _dispatcher(config, catalog, network).dispatch(_post("alpha", str(RECIPIENT)))
    assert reply.status_code == 400


@pytest.mark.asyncio
async def test_bad_tree_address(catalog, network) -> None:
    config = make_config(tree_address="nope")
    reply = await _dispatcher(config, catalog, network).dispatch(_post("alpha", str(RECIPIENT)))
    assert reply.status_code == 400


@pytest.mark.asyncio
async def test_unexpected_exception_is_contained(config, catalog, network) -> None:
    def exploding_builder(**_: object):
        raise RuntimeError("boom")

    reply = await _dispatcher(
        config, catalog, network, build_instruction=exploding_builder
    ).dispatch(_post("alpha", str(RECIPIENT)))

    assert reply.status_code == 400
    assert reply.body == ERROR_BODY


@pytest.mark.asyncio
async def test_error_code_exposure(catalog, network) -> None:
    config = make_config(expose_error_codes=True)
    reply = await _dispatcher(config, catalog, network).dispatch(
        MintRequest(method="POST", item_key="alpha", body=b"{}")
    )
    assert reply.body["code"] == "INVALID_ACCOUNT_INPUT"


@pytest.mark.asyncio
async def test_full_flag_without_debug_merges_item(config, catalog, network) -> None:
    reply = await _dispatcher(config, catalog, network).dispatch(
        MintRequest(method="GET", item_key="alpha", flags=frozenset({"full"}))
    )

    assert reply.status_code == 200
    assert reply.body["label"] == SERVICE_NAME
    assert reply.body["metadataUri"] == "https://x/alpha.json"
    assert "metadata" not in reply.body


@pytest.mark.asyncio
async def test_debug_full_short_circuits_post(catalog, network) -> None:
    config = make_config(debug=True)
    reply = await _dispatcher(config, catalog, network).dispatch(
        _post("alpha", str(RECIPIENT), flags=frozenset({"full"}))
    )

    assert reply.status_code == 200
    assert "transaction" not in reply.body
    assert reply.body["item"]["key"] == "alpha"
    assert reply.body["metadata"]["name"] == "Alpha Badge"
    assert reply.body["metadata"]["collection"]["verified"] is False
    assert network.calls == []


@pytest.mark.asyncio
async def test_each_post_builds_a_fresh_transaction(config, catalog, network) -> None:
    other = Keypair.from_seed(bytes([9] * 32)).pubkey()
    network.balances[other] = 1
    dispatcher = _dispatcher(config, catalog, network)

    a = await dispatcher.dispatch(_post("alpha", str(RECIPIENT)))
    b = await dispatcher.dispatch(_post("alpha", str(other)))

    assert a.body["transaction"] != b.body["transaction"]
