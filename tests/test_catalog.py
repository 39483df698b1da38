from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from solpay_minter.catalog.store import StaticCatalog, load_catalog
from solpay_minter.errors import ConfigurationError
from tests.fakes import make_item


def test_static_catalog_lookup() -> None:
    catalog = StaticCatalog([make_item(), make_item(key="beta", display_name="Beta")])
    assert catalog.lookup("beta").display_name == "Beta"
    assert catalog.lookup("ghost") is None
    assert len(catalog) == 2


def test_static_catalog_rejects_duplicate_keys() -> None:
    with pytest.raises(ConfigurationError):
        StaticCatalog([make_item(), make_item()])


def test_load_catalog_reads_camel_case_json(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            {
                "items": [
                    {
                        "key": "recife",
                        "displayName": "Supermeet - Recife",
                        "imageUri": "https://x/recife.png",
                        "metadataUri": "https://x/recife.json",
                        "symbol": "SMR",
                        "sellerFeeBasisPoints": 250,
                        "isMutable": False,
                        "attributes": [{"traitType": "city", "value": "Recife"}],
                    }
                ]
            }
        ),
        encoding="utf-8",
    )

    item = load_catalog(path).lookup("recife")

    assert item is not None
    assert item.symbol == "SMR"
    assert item.seller_fee_basis_points == 250
    assert item.is_mutable is False
    assert item.attributes[0].trait_type == "city"
    assert item.to_wire()["displayName"] == "Supermeet - Recife"


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"items": {"key": "x"}}),
        json.dumps({"items": [{"key": "x"}]}),
    ],
)
def test_load_catalog_rejects_bad_files(tmp_path: Path, content: str) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_catalog(path)


@pytest.mark.parametrize("field", ["startDate", "endDate"])
def test_load_catalog_rejects_naive_mint_window(tmp_path: Path, field: str) -> None:
    path = tmp_path / "catalog.json"
    entry = {
        "key": "alpha",
        "displayName": "Alpha Badge",
        "imageUri": "https://x/alpha.png",
        "metadataUri": "https://x/alpha.json",
        field: "2024-01-01T00:00:00",
    }
    path.write_text(json.dumps({"items": [entry]}), encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_catalog(path)


def test_load_catalog_accepts_offset_mint_window(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    entry = {
        "key": "alpha",
        "displayName": "Alpha Badge",
        "imageUri": "https://x/alpha.png",
        "metadataUri": "https://x/alpha.json",
        "startDate": "2024-01-01T00:00:00Z",
    }
    path.write_text(json.dumps({"items": [entry]}), encoding="utf-8")

    item = load_catalog(path).lookup("alpha")

    assert item is not None
    assert item.is_available(datetime(2024, 6, 1, tzinfo=UTC))
    assert not item.is_available(datetime(2023, 6, 1, tzinfo=UTC))


def test_load_catalog_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_catalog(tmp_path / "missing.json")


def test_mint_window() -> None:
    item = make_item(
        start_date=datetime(2026, 1, 1, tzinfo=UTC),
        end_date=datetime(2026, 2, 1, tzinfo=UTC),
    )
    assert not item.is_available(datetime(2025, 12, 31, tzinfo=UTC))
    assert item.is_available(datetime(2026, 1, 15, tzinfo=UTC))
    assert not item.is_available(datetime(2026, 2, 2, tzinfo=UTC))
    assert make_item().is_available(datetime(2000, 1, 1, tzinfo=UTC))
