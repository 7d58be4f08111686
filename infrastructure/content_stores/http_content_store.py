from __future__ import annotations

import json
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import aiohttp
import structlog

from application.ports.content_store import ContentStore
from domain.exceptions import ContentFetchError, NoReferenceReturnedError, UploadRejectedError
from domain.value_objects.content_reference import IPFS_SCHEME, ContentReference, rewrite_to_gateway

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

log = structlog.get_logger(__name__)


class HttpContentStore(ContentStore, ABC):
    """Shared HTTP plumbing for pinning providers.

    A session may be injected (tests, or a caller managing its own pool);
    otherwise every call opens and closes its own ``aiohttp.ClientSession``.
    """

    provider_name = "http"

    def __init__(
        self,
        *,
        gateway_url: str,
        timeout_seconds: float = 60.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.gateway_url = gateway_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session_override = session

    @abstractmethod
    def _auth_headers(self) -> dict[str, str]:
        """Return authorization headers; raise AuthNotConfiguredError if impossible."""

    @abstractmethod
    async def upload(
        self,
        data: bytes,
        filename: str,
        *,
        mime_type: str = "image/png",
    ) -> ContentReference: ...

    @abstractmethod
    async def upload_json(
        self,
        document: dict[str, Any],
        *,
        filename: str | None = None,
    ) -> ContentReference: ...

    def resolve_to_http(self, uri: str) -> str:
        return rewrite_to_gateway(uri, self.gateway_url)

    async def fetch_json(self, uri: str) -> dict[str, Any]:
        url = self.resolve_to_http(uri)
        try:
            async with (
                self._session() as session,
                session.get(url, timeout=self._timeout) as response,
            ):
                text = await response.text()
                if response.status >= 400:  # noqa: PLR2004
                    msg = f"Gateway returned {response.status} for {url}"
                    raise ContentFetchError(msg)
        except aiohttp.ClientError as e:
            msg = f"Failed to fetch {url}: {e!s}"
            raise ContentFetchError(msg) from e
        except TimeoutError as e:
            msg = f"Timed out fetching {url}"
            raise ContentFetchError(msg) from e

        try:
            document = json.loads(text)
        except ValueError as e:
            msg = f"Content at {url} is not JSON"
            raise ContentFetchError(msg) from e
        if not isinstance(document, dict):
            msg = f"Content at {url} is not a JSON object"
            raise ContentFetchError(msg)
        return document

    def reference_for(self, cid: str) -> ContentReference:
        uri = f"{IPFS_SCHEME}{cid}"
        return ContentReference(uri=uri, gateway_url=self.resolve_to_http(uri))

    async def _post(
        self,
        url: str,
        *,
        data: aiohttp.FormData | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """POST to the provider and return the decoded JSON body.

        Raises:
            AuthNotConfiguredError: Before any network call, if no credential.
            UploadRejectedError: Non-2xx status, or the request never completed (status 0).

        """
        headers = self._auth_headers()
        try:
            async with (
                self._session() as session,
                session.post(
                    url,
                    headers=headers,
                    data=data,
                    json=json_body,
                    timeout=self._timeout,
                ) as response,
            ):
                text = await response.text()
                status = response.status
        except aiohttp.ClientError as e:
            log.warning("content_store.request_failed", provider=self.provider_name, error=str(e))
            raise UploadRejectedError(0, str(e)) from e
        except TimeoutError as e:
            log.warning("content_store.request_timed_out", provider=self.provider_name, url=url)
            raise UploadRejectedError(0, "request timed out") from e

        if not 200 <= status < 300:  # noqa: PLR2004
            log.warning(
                "content_store.upload_rejected",
                provider=self.provider_name,
                status=status,
                body=text[:500],
            )
            raise UploadRejectedError(status, text)

        try:
            body = json.loads(text) if text else {}
        except ValueError as e:
            msg = f"{self.provider_name} returned a non-JSON response"
            raise NoReferenceReturnedError(msg) from e
        return body if isinstance(body, dict) else {}

    def _cid_from(self, body: dict[str, Any], key: str) -> str:
        cid = body.get(key)
        if not isinstance(cid, str) or not cid:
            msg = f"No {key} in {self.provider_name} response"
            raise NoReferenceReturnedError(msg)
        return cid

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self._session_override is not None:
            yield self._session_override
            return
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            yield session
