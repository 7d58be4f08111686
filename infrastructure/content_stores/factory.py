from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from application.ports.content_store import ContentStore
    from infrastructure.config import Settings

log = structlog.get_logger(__name__)


def create_content_store(settings: Settings) -> ContentStore:
    """Instantiate the pinning adapter selected by CONTENT_STORE_PROVIDER in config.

    A missing credential does not fail here: the adapter raises
    AuthNotConfiguredError on the first upload so read-only endpoints
    (gallery) keep working.
    """
    provider = settings.content_store_provider

    if provider == "lighthouse":
        from infrastructure.content_stores.lighthouse_content_store import (  # noqa: PLC0415
            LighthouseContentStore,
        )

        if not settings.lighthouse_api_key:
            log.warning("content_store.factory.credential_missing", provider="lighthouse")
        log.info("content_store.factory", provider="lighthouse")
        return LighthouseContentStore(
            api_key=settings.lighthouse_api_key,
            upload_url=settings.lighthouse_upload_url,
            gateway_url=settings.lighthouse_gateway_url,
            timeout_seconds=settings.content_store_timeout_seconds,
        )

    if provider == "pinata":
        from infrastructure.content_stores.pinata_content_store import (  # noqa: PLC0415
            PinataContentStore,
        )

        if not settings.pinata_jwt:
            log.warning("content_store.factory.credential_missing", provider="pinata")
        log.info("content_store.factory", provider="pinata")
        return PinataContentStore(
            jwt=settings.pinata_jwt,
            api_url=settings.pinata_api_url,
            gateway_url=settings.pinata_gateway_url,
            timeout_seconds=settings.content_store_timeout_seconds,
        )

    msg = f"Unsupported CONTENT_STORE_PROVIDER: {provider!r}. Valid options: lighthouse, pinata"
    raise ValueError(msg)
