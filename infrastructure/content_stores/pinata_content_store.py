from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import aiohttp
import structlog

from domain.exceptions import AuthNotConfiguredError
from infrastructure.content_stores.http_content_store import HttpContentStore

if TYPE_CHECKING:
    from domain.value_objects.content_reference import ContentReference

log = structlog.get_logger(__name__)


class PinataContentStore(HttpContentStore):
    """ContentStore adapter for Pinata's pinning API (JWT auth)."""

    provider_name = "pinata"

    def __init__(
        self,
        jwt: str | None,
        *,
        api_url: str = "https://api.pinata.cloud",
        gateway_url: str = "https://gateway.pinata.cloud/ipfs",
        timeout_seconds: float = 60.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        super().__init__(gateway_url=gateway_url, timeout_seconds=timeout_seconds, session=session)
        self._jwt = jwt
        self.api_url = api_url.rstrip("/")

    def _auth_headers(self) -> dict[str, str]:
        if not self._jwt:
            msg = "PINATA_JWT not configured. Set it in the environment or .env file."
            raise AuthNotConfiguredError(msg)
        return {"Authorization": f"Bearer {self._jwt}"}

    async def upload(
        self,
        data: bytes,
        filename: str,
        *,
        mime_type: str = "image/png",
    ) -> ContentReference:
        form = aiohttp.FormData()
        form.add_field("file", data, filename=filename, content_type=mime_type)
        form.add_field("pinataMetadata", json.dumps({"name": filename}))

        log.debug("pinata.upload", filename=filename, size_bytes=len(data))
        body = await self._post(f"{self.api_url}/pinning/pinFileToIPFS", data=form)
        return self.reference_for(self._cid_from(body, "IpfsHash"))

    async def upload_json(
        self,
        document: dict[str, Any],
        *,
        filename: str | None = None,
    ) -> ContentReference:
        payload = {
            "pinataContent": document,
            "pinataMetadata": {"name": filename or "metadata.json"},
        }
        log.debug("pinata.upload_json", filename=filename)
        body = await self._post(f"{self.api_url}/pinning/pinJSONToIPFS", json_body=payload)
        return self.reference_for(self._cid_from(body, "IpfsHash"))
