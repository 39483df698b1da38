"""
solpay_minter.pipeline.state

Typed state schema used by the mint state machine.

Responsibilities:
- Define the contract between nodes (inputs/outputs).
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, TypedDict

from solders.pubkey import Pubkey

from solpay_minter.catalog.models import ItemDescriptor
from solpay_minter.errors import MintError
from solpay_minter.minting.models import AssembledTransaction, IssuanceMetadata, RecipientAccount
from solpay_minter.minting.responses import ProtocolReply
from solpay_minter.pipeline.reducers import append_trail


class MintState(TypedDict, total=False):
    # Request
    method: Literal["get", "post", "other"]
    item_key: str | None
    body: bytes
    # `?full` present
    full: bool
    # `?full` present and the debug toggle enabled
    verbose: bool
    now: datetime

    # Stage outputs
    item: ItemDescriptor
    owner: Pubkey
    recipient: RecipientAccount
    metadata: IssuanceMetadata
    assembled: AssembledTransaction

    # Terminal
    failure: MintError | None
    reply: ProtocolReply

    trail: Annotated[list[str], append_trail]


# --- Module Notes -----------------------------------------------------------
# total=False: each node only adds the keys it owns; `reply` is set by exactly one
# terminal node.
