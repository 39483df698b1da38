"""
solpay_minter.catalog

Static catalog of mintable items.

Responsibilities:
- Item descriptor model.
- Read-only lookup interface plus in-memory and JSON-file backed implementations.
"""

from solpay_minter.catalog.models import ItemAttribute, ItemDescriptor
from solpay_minter.catalog.store import Catalog, StaticCatalog, load_catalog

__all__ = ["Catalog", "ItemAttribute", "ItemDescriptor", "StaticCatalog", "load_catalog"]
