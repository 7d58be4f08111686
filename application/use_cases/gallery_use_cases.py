"""Gallery use cases: rebuild the list of recent mints from chain events."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog
from returns.result import Failure, Result, Success

from application.dtos.errors import AppError
from application.dtos.gallery_dtos import GalleryEntry
from domain.exceptions import DomainError

if TYPE_CHECKING:
    from application.ports.chain_gateway import ChainGateway
    from application.ports.content_store import ContentStore
    from domain.value_objects.mint_event import MintEvent

logger = structlog.get_logger()


class ListRecentMintsUseCase:
    """List the most recent drawings, newest first.

    Every call replays the full mint-event range and re-fetches metadata;
    there is no cache. Entries whose metadata cannot be resolved are dropped
    so one bad pin does not blank the whole gallery.
    """

    def __init__(
        self,
        chain_gateway: ChainGateway,
        content_store: ContentStore,
        *,
        from_block: int = 0,
        fetch_timeout: float | None = None,
    ) -> None:
        self.chain_gateway = chain_gateway
        self.content_store = content_store
        self.from_block = from_block
        self.fetch_timeout = fetch_timeout

    async def execute(
        self,
        contract_address: str | None,
        limit: int = 10,
    ) -> Result[list[GalleryEntry], AppError]:
        if not contract_address:
            return Failure(
                AppError(
                    "configuration",
                    "DRAWING_NFT_CONTRACT_ADDRESS is not set",
                    code="missing_contract_address",
                ),
            )
        if limit <= 0:
            return Success([])

        try:
            events = await self.chain_gateway.get_mint_events(
                contract_address,
                from_block=self.from_block,
            )
        except DomainError as e:
            logger.warning("gallery_event_fetch_failed", error=str(e))
            return Failure(AppError("upstream", f"Failed to load mint events: {e!s}", code=e.code))
        except Exception as e:
            logger.exception("gallery_event_fetch_crashed")
            return Failure(AppError("upstream", f"Failed to load mint events: {e!s}"))

        recent = sorted(
            events,
            key=lambda event: (event.block_number, event.log_index),
            reverse=True,
        )[:limit]

        resolved = await asyncio.gather(*(self._resolve(event) for event in recent))
        entries = [entry for entry in resolved if entry is not None]

        logger.info(
            "gallery_listed",
            events_total=len(events),
            selected=len(recent),
            returned=len(entries),
        )
        return Success(entries)

    async def _resolve(self, event: MintEvent) -> GalleryEntry | None:
        """Fetch one entry's metadata; never raises."""
        if not event.token_uri:
            logger.warning(
                "gallery_entry_dropped",
                token_id=event.token_id,
                reason="empty_token_uri",
            )
            return None

        try:
            if self.fetch_timeout is None:
                metadata = await self.content_store.fetch_json(event.token_uri)
            else:
                async with asyncio.timeout(self.fetch_timeout):
                    metadata = await self.content_store.fetch_json(event.token_uri)
        except Exception as e:  # noqa: BLE001
            logger.warning(
                "gallery_entry_dropped",
                token_id=event.token_id,
                token_uri=event.token_uri,
                reason="metadata_unavailable",
                error=str(e) or type(e).__name__,
            )
            return None

        image = metadata.get("image") if isinstance(metadata, dict) else None
        if not isinstance(image, str) or not image:
            logger.warning(
                "gallery_entry_dropped",
                token_id=event.token_id,
                token_uri=event.token_uri,
                reason="metadata_without_image",
            )
            return None

        name = metadata.get("name")
        return GalleryEntry(
            token_id=event.token_id,
            owner_address=event.to,
            image_url=self.content_store.resolve_to_http(image),
            display_name=name if isinstance(name, str) and name else f"Drawing #{event.token_id}",
            origin_block=event.block_number,
        )
