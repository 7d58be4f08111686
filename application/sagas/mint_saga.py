from __future__ import annotations

import asyncio
import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog
from returns.result import Failure, Result, Success

from application.dtos.errors import AppError
from application.dtos.mint_dtos import PreparedMint, SubmittedMint
from domain.aggregates.mint_attempt import MintAttempt
from domain.exceptions import (
    ConfigurationError,
    ConfirmationTimeoutError,
    DomainError,
    MissingContractAddressError,
    MissingCredentialError,
    ValidationError,
)
from domain.services.artifact_validator import validate_artifact
from domain.services.metadata_builder import (
    DEFAULT_PLATFORM_NAME,
    build_metadata,
    timestamp_millis,
)
from domain.value_objects.chain_address import require_chain_address
from domain.value_objects.mint_event import MintTransaction
from domain.value_objects.mint_state import MintMode, MintState

if TYPE_CHECKING:
    from collections.abc import Callable

    from application.dtos.mint_dtos import MintOutcome, MintRequest
    from application.ports.chain_gateway import ChainGateway
    from application.ports.content_store import ContentStore
    from domain.value_objects.content_reference import ContentReference
    from domain.value_objects.mint_event import ConfirmedTransaction

logger = structlog.get_logger()


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class MintSaga:
    """Orchestrates validate → upload artifact → upload metadata → (submit → confirm).

    The two stores involved (IPFS and the chain) share no transaction. Uploads
    that succeed before a later step fails are left pinned: content-addressed
    storage has nothing meaningful to undo, and re-running produces new
    objects anyway because the name is timestamp-derived.
    """

    def __init__(  # noqa: PLR0913
        self,
        content_store: ContentStore,
        chain_gateway: ChainGateway,
        contract_address: str | None = None,
        *,
        confirmations: int = 1,
        confirmation_timeout: float | None = None,
        platform_name: str = DEFAULT_PLATFORM_NAME,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize saga with its collaborators.

        Args:
            content_store: Adapter of the configured pinning provider
            chain_gateway: Chain access used in server-custodied mode
            contract_address: Drawing NFT contract, required for server-custodied mode
            confirmations: Blocks required before a mint counts as confirmed
            confirmation_timeout: Deadline in seconds for confirmation; None waits forever
            platform_name: Platform label written into the metadata
            clock: Source of the creation timestamp

        """
        self.content_store = content_store
        self.chain_gateway = chain_gateway
        self.contract_address = contract_address
        self.confirmations = confirmations
        self.confirmation_timeout = confirmation_timeout
        self.platform_name = platform_name
        self.clock = clock

    async def execute(
        self,
        request: MintRequest,
        mode: MintMode = MintMode.CLIENT_SIGNED,
    ) -> Result[MintOutcome, AppError]:
        attempt = MintAttempt(mode)
        log = logger.bind(attempt_id=str(attempt.attempt_id), mode=mode.value)
        log.info("mint_attempt_started", state=attempt.state.value)

        try:
            # Step 1: Validate. Server mode checks its configuration first so
            # a misconfigured process never leaves pins behind.
            recipient: str | None = None
            if mode == MintMode.SERVER_CUSTODIED:
                recipient = self._resolve_recipient(request)
            artifact_bytes = validate_artifact(request.image_data)
            log.info("mint_artifact_validated", size_bytes=len(artifact_bytes))

            # Step 2: Upload artifact
            self._advance(attempt, MintState.UPLOADING_ARTIFACT, log)
            created_at = self.clock()
            millis = timestamp_millis(created_at)
            image_ref = await self.content_store.upload(
                artifact_bytes,
                f"drawing-{millis}.png",
                mime_type="image/png",
            )
            log.info("mint_artifact_uploaded", image_uri=image_ref.uri)

            # Step 3: Build and upload metadata; it embeds the artifact reference
            self._advance(attempt, MintState.UPLOADING_METADATA, log)
            metadata = build_metadata(image_ref.uri, created_at, platform=self.platform_name)
            metadata_ref = await self.content_store.upload_json(
                metadata.to_document(),
                filename=f"{_slug(metadata.name)}-metadata.json",
            )
            log.info("mint_metadata_uploaded", metadata_uri=metadata_ref.uri)

            if mode == MintMode.CLIENT_SIGNED:
                self._advance(attempt, MintState.AWAITING_EXTERNAL_SIGNATURE, log)
                return Success(
                    PreparedMint(
                        metadata_uri=metadata_ref.uri,
                        metadata_gateway_url=metadata_ref.gateway_url,
                        image_uri=image_ref.uri,
                        image_gateway_url=image_ref.gateway_url,
                        suggested_name=metadata.name,
                        timestamp=millis,
                        state=attempt.state,
                        history=list(attempt.history),
                    ),
                )

            # Step 4: Submit (server-custodied only)
            return Success(
                await self._submit_and_confirm(
                    attempt,
                    recipient=recipient,  # type: ignore[arg-type]
                    image_ref=image_ref,
                    metadata_ref=metadata_ref,
                    log=log,
                ),
            )

        except DomainError as e:
            attempt.fail(str(e))
            log.warning(
                "mint_attempt_failed",
                failed_after=attempt.history[-2].value,
                error=str(e),
                error_code=e.code,
            )
            return Failure(_to_app_error(e))
        except Exception as e:
            attempt.fail(str(e))
            log.exception("mint_attempt_crashed", failed_after=attempt.history[-2].value)
            return Failure(AppError("internal_error", f"Mint failed: {e!s}"))

    async def _submit_and_confirm(
        self,
        attempt: MintAttempt,
        *,
        recipient: str,
        image_ref: ContentReference,
        metadata_ref: ContentReference,
        log: structlog.stdlib.BoundLogger,
    ) -> SubmittedMint:
        self._advance(attempt, MintState.SUBMITTING, log)
        pending = MintTransaction(
            hash=await self.chain_gateway.simulate_then_send(
                self.contract_address,  # type: ignore[arg-type]
                recipient,
                metadata_ref.uri,
            ),
        )
        log.info("mint_transaction_sent", tx_hash=pending.hash, recipient=recipient)

        self._advance(attempt, MintState.CONFIRMING, log)
        receipt = await self._await_confirmation(pending.hash)

        confirmed = pending.model_copy(
            update={
                "block_number": receipt.block_number,
                "token_id": self.chain_gateway.extract_token_id(receipt.logs),
            },
        )
        if confirmed.token_id is None:
            # The hash is authoritative; the mint may still have happened.
            log.warning("mint_token_id_not_found", tx_hash=confirmed.hash)

        self._advance(attempt, MintState.COMPLETED, log)
        return SubmittedMint(
            tx_hash=confirmed.hash,
            token_uri=metadata_ref.uri,
            token_uri_http=metadata_ref.gateway_url,
            image_uri=image_ref.uri,
            image_uri_http=image_ref.gateway_url,
            token_id=confirmed.token_id,
            minted_to=recipient,
            block_number=receipt.block_number,
            state=attempt.state,
            history=list(attempt.history),
        )

    async def _await_confirmation(self, tx_hash: str) -> ConfirmedTransaction:
        if self.confirmation_timeout is None:
            return await self.chain_gateway.await_confirmation(tx_hash, self.confirmations)
        try:
            async with asyncio.timeout(self.confirmation_timeout):
                return await self.chain_gateway.await_confirmation(
                    tx_hash,
                    self.confirmations,
                )
        except TimeoutError as e:
            msg = (
                f"Transaction {tx_hash} was not confirmed within "
                f"{self.confirmation_timeout:g}s"
            )
            raise ConfirmationTimeoutError(msg) from e

    def _resolve_recipient(self, request: MintRequest) -> str:
        if not self.contract_address:
            msg = "DRAWING_NFT_CONTRACT_ADDRESS is not set"
            raise MissingContractAddressError(msg)

        signer = self.chain_gateway.signer_address
        if signer is None:
            msg = (
                self.chain_gateway.credential_problem
                or "MINTER_PRIVATE_KEY is not set; server-side minting is unavailable"
            )
            raise MissingCredentialError(msg)

        if request.recipient_address:
            return require_chain_address(request.recipient_address)
        return signer

    @staticmethod
    def _advance(
        attempt: MintAttempt,
        state: MintState,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        previous = attempt.state
        attempt.advance(state)
        log.info("mint_state_changed", previous=previous.value, state=state.value)


def _slug(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "-", name)


def _to_app_error(error: DomainError) -> AppError:
    if isinstance(error, ValidationError):
        return AppError("validation", str(error), code=error.code)
    if isinstance(error, ConfigurationError):
        return AppError("configuration", str(error), code=error.code)
    return AppError("upstream", str(error), code=error.code)
