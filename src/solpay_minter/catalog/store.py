"""
solpay_minter.catalog.store

Catalog lookup implementations.

Responsibilities:
- Define the read-only `Catalog` interface consumed by the mint pipeline.
- Provide an in-memory catalog and a loader for JSON catalog files.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

from pydantic import ValidationError

from solpay_minter.catalog.models import ItemDescriptor
from solpay_minter.errors import ConfigurationError


class Catalog(Protocol):
    """
    Implementations may raise `CatalogUnavailable` when the backing store cannot be read;
    the pipeline treats that the same as an unknown key.
    """

    def lookup(self, key: str) -> ItemDescriptor | None: ...


class StaticCatalog:
    def __init__(self, items: Iterable[ItemDescriptor]) -> None:
        by_key: dict[str, ItemDescriptor] = {}
        for item in items:
            if item.key in by_key:
                raise ConfigurationError(f"duplicate catalog key: {item.key!r}")
            by_key[item.key] = item
        self._items: Mapping[str, ItemDescriptor] = MappingProxyType(by_key)

    def lookup(self, key: str) -> ItemDescriptor | None:
        return self._items.get(key)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ItemDescriptor]:
        return iter(self._items.values())


def load_catalog(path: str | Path) -> StaticCatalog:
    """
    Load a catalog file of the form `{"items": [{"key": ..., "displayName": ...}, ...]}`.
    A bare list of items is accepted as well.
    """

    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"unable to read catalog {path}: {e}") from e

    entries = raw.get("items", []) if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        raise ConfigurationError(f"catalog {path} must contain a list of items")

    try:
        return StaticCatalog(ItemDescriptor.model_validate(entry) for entry in entries)
    except ValidationError as e:
        raise ConfigurationError(f"invalid catalog entry in {path}: {e}") from e


# --- Module Notes -----------------------------------------------------------
# The catalog is loaded once at startup; a broken file stops the process instead of
# turning every request into an error response.
