from typing import Any

from pydantic import BaseModel, Field


class MintEvent(BaseModel):
    """Decoded ``DrawingMinted(address indexed to, uint256 indexed tokenId, string tokenURI)``."""

    to: str
    token_id: int
    token_uri: str
    block_number: int
    log_index: int = 0

    model_config = {"frozen": True}


class MintTransaction(BaseModel):
    """A submitted mint as observed on-chain.

    ``block_number`` and ``token_id`` stay ``None`` until confirmation; a
    present ``hash`` is the source of truth even if ``token_id`` could not be
    derived from the receipt.
    """

    hash: str
    block_number: int | None = None
    token_id: int | None = None

    model_config = {"frozen": True}


class ConfirmedTransaction(BaseModel):
    """Receipt data the mint flow needs after inclusion in a block."""

    block_number: int
    status: int = 1
    logs: list[dict[str, Any]] = Field(default_factory=list)
