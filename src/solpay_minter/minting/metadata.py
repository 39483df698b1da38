"""
solpay_minter.minting.metadata

Issuance metadata assembly.

Responsibilities:
- Merge a catalog descriptor with process-wide defaults into Bubblegum metadata.
"""

from __future__ import annotations

from solpay_minter.catalog.models import ItemDescriptor
from solpay_minter.errors import InvalidDescriptor
from solpay_minter.minting.models import (
    CollectionReference,
    IssuanceDefaults,
    IssuanceMetadata,
    MetadataCreator,
)


def _first(value, default):
    return default if value is None else value


def assemble_metadata(
    *,
    descriptor: ItemDescriptor,
    defaults: IssuanceDefaults,
    collection_address: str,
) -> IssuanceMetadata:
    """
    Descriptor values win over defaults when present (an explicit `False` or `0` counts).
    Creators and the collection are process-wide and always unverified here; the collection
    becomes verified on-chain when the collection authority co-signs the mint.
    """

    name = (descriptor.display_name or "").strip()
    uri = (descriptor.metadata_uri or "").strip()
    if not name:
        raise InvalidDescriptor(f"item {descriptor.key!r} has no name")
    if not uri:
        raise InvalidDescriptor(f"item {descriptor.key!r} has no metadata uri")

    return IssuanceMetadata(
        name=name,
        uri=uri,
        symbol=_first(descriptor.symbol, defaults.symbol),
        is_mutable=_first(descriptor.is_mutable, defaults.is_mutable),
        seller_fee_basis_points=_first(
            descriptor.seller_fee_basis_points, defaults.seller_fee_basis_points
        ),
        creators=tuple(
            MetadataCreator(address=c.address, share=c.share, verified=False)
            for c in defaults.creators
        ),
        collection=CollectionReference(address=collection_address, verified=False),
    )
