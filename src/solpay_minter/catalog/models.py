"""
solpay_minter.catalog.models

Catalog item model.

Responsibilities:
- Validate catalog entries when the catalog is loaded.
- Expose the descriptor's camelCase wire form for debug responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CatalogModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class ItemAttribute(_CatalogModel):
    trait_type: str
    value: str


class ItemDescriptor(_CatalogModel):
    key: str = Field(min_length=1)
    display_name: str
    image_uri: str
    metadata_uri: str

    # Optional overrides of the process-wide issuance defaults.
    symbol: str | None = None
    seller_fee_basis_points: int | None = Field(default=None, ge=0, le=10_000)
    is_mutable: bool | None = None

    description: str | None = None
    external_url: str | None = None
    attributes: tuple[ItemAttribute, ...] = ()

    # Optional mint window; open-ended when unset.
    start_date: AwareDatetime | None = None
    end_date: AwareDatetime | None = None

    def is_available(self, at: datetime) -> bool:
        if self.start_date is not None and at < self.start_date:
            return False
        if self.end_date is not None and at > self.end_date:
            return False
        return True

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Module Notes -----------------------------------------------------------
# Mint windows must carry a UTC offset; a naive timestamp fails catalog validation at load time
# because the pipeline compares against an aware "now".
