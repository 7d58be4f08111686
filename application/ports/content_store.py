from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from domain.value_objects.content_reference import ContentReference


class ContentStore(Protocol):
    """Port for a content-addressed storage provider (IPFS pinning services).

    Callers depend on these operations only; request shapes of a given
    provider stay inside its adapter in infrastructure/content_stores/.
    Uploads are never retried here: retry policy belongs to the caller.
    """

    async def upload(
        self,
        data: bytes,
        filename: str,
        *,
        mime_type: str = "image/png",
    ) -> ContentReference:
        """Pin a binary artifact.

        Raises:
            AuthNotConfiguredError: The provider credential is missing.
            UploadRejectedError: The provider answered with a non-success status.
            NoReferenceReturnedError: The response carried no content identifier.

        """
        ...

    async def upload_json(
        self,
        document: dict[str, Any],
        *,
        filename: str | None = None,
    ) -> ContentReference:
        """Pin a JSON document. Same failure modes as ``upload``."""
        ...

    def resolve_to_http(self, uri: str) -> str:
        """Rewrite a content URI to this provider's HTTP gateway. No I/O."""
        ...

    async def fetch_json(self, uri: str) -> dict[str, Any]:
        """Read a JSON document back through the gateway.

        Raises:
            ContentFetchError: The gateway request failed or returned non-JSON.

        """
        ...
