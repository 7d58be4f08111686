from __future__ import annotations

from typing import TYPE_CHECKING, Any

from web3 import Web3

if TYPE_CHECKING:
    from collections.abc import Sequence

MINT_EVENT_SIGNATURE = "DrawingMinted(address,uint256,string)"
MINT_EVENT_TOPIC = Web3.to_hex(Web3.keccak(text=MINT_EVENT_SIGNATURE))

# topics[0] is the event signature, topics[1] the indexed recipient,
# topics[2] the indexed token id.
_TOKEN_ID_TOPIC_INDEX = 2


def normalize_topic(topic: bytes | str) -> str:
    """Render a log topic as lowercase 0x-prefixed hex, whatever the client returned."""
    if isinstance(topic, bytes | bytearray):
        return "0x" + bytes(topic).hex()
    text = str(topic).lower()
    return text if text.startswith("0x") else f"0x{text}"


def topic_to_int(topic: bytes | str) -> int:
    return int(normalize_topic(topic), 16)


def extract_token_id(
    logs: Sequence[dict[str, Any]],
    topic: str = MINT_EVENT_TOPIC,
    *,
    contract_address: str | None = None,
) -> int | None:
    """Return the token id of the first mint log, or None when there is none.

    Logs with other topics (Transfer, Approval, logs of other contracts) are
    skipped; a missing match is not an error because the mint may still
    have succeeded.
    """
    wanted = normalize_topic(topic)
    for log in logs:
        topics = log.get("topics") or []
        if len(topics) <= _TOKEN_ID_TOPIC_INDEX:
            continue
        if normalize_topic(topics[0]) != wanted:
            continue
        if contract_address and str(log.get("address", "")).lower() != contract_address.lower():
            continue
        return topic_to_int(topics[_TOKEN_ID_TOPIC_INDEX])
    return None
