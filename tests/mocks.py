"""Mock implementations for testing."""

from __future__ import annotations

import asyncio
import base64
import hashlib
import json
from datetime import UTC, datetime
from typing import Any

from domain.exceptions import ChainError, ContentFetchError, MissingCredentialError
from domain.value_objects.content_reference import IPFS_SCHEME, ContentReference, rewrite_to_gateway
from domain.value_objects.mint_event import ConfirmedTransaction, MintEvent
from infrastructure.chain.log_decoding import MINT_EVENT_TOPIC, extract_token_id

GATEWAY_URL = "https://gateway.test/ipfs"
SIGNER_ADDRESS = "0x1111111111111111111111111111111111111111"
CONTRACT_ADDRESS = "0x2222222222222222222222222222222222222222"
RECIPIENT_ADDRESS = "0x3333333333333333333333333333333333333333"

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
FIXED_NOW = datetime(2025, 1, 15, 12, 30, 0, tzinfo=UTC)


def make_png_bytes(size: int = 2048) -> bytes:
    """Return bytes that pass the PNG signature check, padded to ``size``."""
    return PNG_SIGNATURE + b"\x00" * max(size - len(PNG_SIGNATURE), 0)


def make_png_data_uri(size: int = 2048) -> str:
    encoded = base64.b64encode(make_png_bytes(size)).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def _fake_cid(data: bytes) -> str:
    return "bafy" + hashlib.sha256(data).hexdigest()[:40]


def _pad_topic(value: int) -> str:
    return "0x" + format(value, "064x")


# ---------------------------------------------------------------------------
# Content store mock
# ---------------------------------------------------------------------------


class InMemoryContentStore:
    """ContentStore that keeps pinned objects in a dict keyed by content URI."""

    def __init__(self, gateway_url: str = GATEWAY_URL) -> None:
        self.gateway_url = gateway_url
        self.objects: dict[str, bytes] = {}
        self.uploads: list[tuple[str, str]] = []  # (filename, mime_type)
        self.fail_upload_with: Exception | None = None
        self.fail_upload_json_with: Exception | None = None
        self.unfetchable: set[str] = set()
        self.fetch_calls: list[str] = []

    async def upload(
        self,
        data: bytes,
        filename: str,
        *,
        mime_type: str = "image/png",
    ) -> ContentReference:
        if self.fail_upload_with is not None:
            raise self.fail_upload_with
        return self._pin(data, filename, mime_type)

    async def upload_json(
        self,
        document: dict[str, Any],
        *,
        filename: str | None = None,
    ) -> ContentReference:
        if self.fail_upload_json_with is not None:
            raise self.fail_upload_json_with
        payload = json.dumps(document).encode("utf-8")
        return self._pin(payload, filename or "metadata.json", "application/json")

    def resolve_to_http(self, uri: str) -> str:
        return rewrite_to_gateway(uri, self.gateway_url)

    async def fetch_json(self, uri: str) -> dict[str, Any]:
        self.fetch_calls.append(uri)
        if uri in self.unfetchable or uri not in self.objects:
            msg = f"Failed to fetch {uri}"
            raise ContentFetchError(msg)
        return json.loads(self.objects[uri])

    def put_json(self, uri: str, document: Any) -> None:  # noqa: ANN401
        self.objects[uri] = json.dumps(document).encode("utf-8")

    def _pin(self, data: bytes, filename: str, mime_type: str) -> ContentReference:
        uri = f"{IPFS_SCHEME}{_fake_cid(data)}"
        self.objects[uri] = data
        self.uploads.append((filename, mime_type))
        return ContentReference(uri=uri, gateway_url=self.resolve_to_http(uri))


# ---------------------------------------------------------------------------
# Chain gateway mock
# ---------------------------------------------------------------------------


class InMemoryChainGateway:
    """ChainGateway that records calls and mints into an in-memory event list."""

    def __init__(
        self,
        *,
        signer: str | None = SIGNER_ADDRESS,
        custody: dict[int, str] | None = None,
        credential_problem: str | None = None,
    ) -> None:
        self._signer = signer
        self._credential_problem = credential_problem
        self.custody = custody or {}
        self.events: list[MintEvent] = []
        self.calls: list[str] = []
        self.block_number = 100
        self.next_token_id = 1
        self.send_error: Exception | None = None
        self.events_error: Exception | None = None
        self.confirmation_delay: float | None = None
        self.emit_mint_log = True
        self._pending: dict[str, tuple[str, str, int]] = {}

    @property
    def signer_address(self) -> str | None:
        return self._signer

    @property
    def credential_problem(self) -> str | None:
        return None if self._signer else self._credential_problem

    async def custody_address_of(self, identity_id: int) -> str:
        self.calls.append("custody_address_of")
        if identity_id not in self.custody:
            msg = f"custodyOf({identity_id}) failed"
            raise ChainError(msg)
        return self.custody[identity_id]

    async def get_mint_events(
        self,
        contract_address: str,
        from_block: int = 0,
    ) -> list[MintEvent]:
        self.calls.append("get_mint_events")
        if self.events_error is not None:
            raise self.events_error
        return [event for event in self.events if event.block_number >= from_block]

    async def simulate_then_send(
        self,
        contract_address: str,
        recipient: str,
        token_uri: str,
    ) -> str:
        self.calls.append("simulate_then_send")
        if self._signer is None:
            msg = "MINTER_PRIVATE_KEY is not set"
            raise MissingCredentialError(msg)
        if self.send_error is not None:
            raise self.send_error
        token_id = self.next_token_id
        self.next_token_id += 1
        tx_hash = "0x" + format(token_id, "064x")
        self._pending[tx_hash] = (recipient, token_uri, token_id)
        return tx_hash

    async def await_confirmation(
        self,
        tx_hash: str,
        confirmations: int = 1,
    ) -> ConfirmedTransaction:
        self.calls.append("await_confirmation")
        if self.confirmation_delay is not None:
            await asyncio.sleep(self.confirmation_delay)
        recipient, token_uri, token_id = self._pending.pop(tx_hash)
        self.block_number += 1
        self.events.append(
            MintEvent(
                to=recipient,
                token_id=token_id,
                token_uri=token_uri,
                block_number=self.block_number,
            ),
        )
        logs = []
        if self.emit_mint_log:
            logs.append(
                {
                    "address": CONTRACT_ADDRESS,
                    "topics": [
                        MINT_EVENT_TOPIC,
                        "0x" + "0" * 24 + recipient.removeprefix("0x").lower(),
                        _pad_topic(token_id),
                    ],
                    "data": "0x",
                },
            )
        return ConfirmedTransaction(block_number=self.block_number, logs=logs)

    def extract_token_id(
        self,
        logs: list[dict[str, Any]],
        topic: str | None = None,
    ) -> int | None:
        return extract_token_id(logs, topic or MINT_EVENT_TOPIC)


# ---------------------------------------------------------------------------
# Signature verifier mock
# ---------------------------------------------------------------------------


class FakeSignatureVerifier:
    """Returns a fixed signer, or raises the configured error."""

    def __init__(self, signer: str = SIGNER_ADDRESS, error: Exception | None = None) -> None:
        self.signer = signer
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def recover_signer(self, message: str, signature: str) -> str:
        self.calls.append((message, signature))
        if self.error is not None:
            raise self.error
        return self.signer
