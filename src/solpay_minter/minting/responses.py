"""
solpay_minter.minting.responses

Solana Pay transaction-request response formatting.

Responsibilities:
- Discovery (GET) and issuance (POST) response bodies.
- The single error body every failure is rendered as.
- A debug-only verbose variant.

Wire notes:
- Wallets parse these bodies with their own code; field names and shapes are fixed by the
  Solana Pay protocol. The error body keeps `label`/`message` so a wallet that only understands
  the GET shape still shows something.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from solpay_minter.catalog.models import ItemDescriptor
from solpay_minter.errors import MintError
from solpay_minter.minting.models import AssembledTransaction, IssuanceMetadata
from solpay_minter.solana.transactions import encode_transaction

ERROR_LABEL = "Unknown mint. Expect a failure."
ERROR_MESSAGE = "An error occurred while locating the NFT to mint."


class DiscoveryResponse(BaseModel):
    label: str
    icon: str
    message: str


class IssuanceResponse(BaseModel):
    transaction: str
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    label: str = ERROR_LABEL
    message: str = ERROR_MESSAGE
    code: str | None = None


@dataclass(frozen=True, slots=True)
class ProtocolReply:
    status_code: int
    body: dict[str, Any]


def discovery_reply(
    *, service_name: str, item: ItemDescriptor, include_item: bool = False
) -> ProtocolReply:
    body = DiscoveryResponse(
        label=service_name, icon=item.image_uri, message=item.display_name
    ).model_dump()
    if include_item:
        # Phase fields are written last so item data can never shadow them.
        body = {**item.to_wire(), **body}
    return ProtocolReply(status_code=200, body=body)


def issuance_reply(*, item: ItemDescriptor, assembled: AssembledTransaction) -> ProtocolReply:
    body = IssuanceResponse(
        transaction=encode_transaction(assembled.transaction), message=item.display_name
    )
    return ProtocolReply(status_code=200, body=body.model_dump())


def debug_reply(
    *, service_name: str, item: ItemDescriptor, metadata: IssuanceMetadata
) -> ProtocolReply:
    body = discovery_reply(service_name=service_name, item=item).body
    body.update({"item": item.to_wire(), "metadata": metadata.to_wire()})
    return ProtocolReply(status_code=200, body=body)


def error_reply(failure: MintError | None = None, *, expose_code: bool = False) -> ProtocolReply:
    code = None
    if expose_code:
        code = failure.code if failure is not None else "UNEXPECTED"
    return ProtocolReply(
        status_code=400, body=ErrorResponse(code=code).model_dump(exclude_none=True)
    )


# --- Module Notes -----------------------------------------------------------
# Responses are plain dicts by the time they leave this module; the API layer only
# wraps them in a JSONResponse.
