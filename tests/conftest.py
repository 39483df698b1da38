"""
tests.conftest

Shared fixtures.
"""

from __future__ import annotations

import pytest

from solpay_minter.catalog.store import StaticCatalog
from solpay_minter.minting.config import MintConfig
from tests.fakes import RECIPIENT, FakeNetwork, make_config, make_item


@pytest.fixture
def network() -> FakeNetwork:
    # RECIPIENT already holds lamports; tests for first-time recipients use a fresh key.
    return FakeNetwork(balances={RECIPIENT: 5_000_000})


@pytest.fixture
def catalog() -> StaticCatalog:
    return StaticCatalog([make_item()])


@pytest.fixture
def config() -> MintConfig:
    return make_config()
