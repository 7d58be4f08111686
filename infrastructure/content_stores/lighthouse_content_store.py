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


class LighthouseContentStore(HttpContentStore):
    """ContentStore adapter for Lighthouse Storage (``/api/v0/add``)."""

    provider_name = "lighthouse"

    def __init__(
        self,
        api_key: str | None,
        *,
        upload_url: str = "https://upload.lighthouse.storage/api/v0/add",
        gateway_url: str = "https://gateway.lighthouse.storage/ipfs",
        timeout_seconds: float = 60.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        super().__init__(gateway_url=gateway_url, timeout_seconds=timeout_seconds, session=session)
        self._api_key = api_key
        self.upload_url = upload_url

    def _auth_headers(self) -> dict[str, str]:
        if not self._api_key:
            msg = (
                "LIGHTHOUSE_API_KEY not configured. "
                "Set it in the environment or .env file."
            )
            raise AuthNotConfiguredError(msg)
        return {"Authorization": f"Bearer {self._api_key}"}

    async def upload(
        self,
        data: bytes,
        filename: str,
        *,
        mime_type: str = "image/png",
    ) -> ContentReference:
        form = aiohttp.FormData()
        form.add_field("file", data, filename=filename, content_type=mime_type)

        log.debug("lighthouse.upload", filename=filename, size_bytes=len(data))
        body = await self._post(self.upload_url, data=form)
        return self.reference_for(self._cid_from(body, "Hash"))

    async def upload_json(
        self,
        document: dict[str, Any],
        *,
        filename: str | None = None,
    ) -> ContentReference:
        payload = json.dumps(document, indent=2).encode("utf-8")
        return await self.upload(
            payload,
            filename or "metadata.json",
            mime_type="application/json",
        )
