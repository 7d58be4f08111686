import re

import structlog
from returns.result import Failure, Result, Success

from application.dtos.errors import AppError
from application.dtos.identity_dtos import VerifyIdentityRequest, VerifyIdentityResponse
from application.ports.chain_gateway import ChainGateway
from application.ports.signature_verifier import SignatureVerifier
from domain.exceptions import DomainError, ValidationError

logger = structlog.get_logger()

_FID_PATTERN = re.compile(r"fid:(\d+)")


class VerifyIdentityUseCase:
    """Resolve the wallet address behind a Sign In With Farcaster message.

    Unless ``require_signature`` is set, the signature is NOT checked against
    the message: the address returned is simply the custody address of the
    FID claimed in the message. Every unverified call is logged so the gap
    stays visible until product signs off on enforcing it.
    """

    def __init__(
        self,
        chain_gateway: ChainGateway,
        signature_verifier: SignatureVerifier | None = None,
        *,
        require_signature: bool = False,
    ) -> None:
        self.chain_gateway = chain_gateway
        self.signature_verifier = signature_verifier
        self.require_signature = require_signature

    async def execute(
        self,
        request: VerifyIdentityRequest,
    ) -> Result[VerifyIdentityResponse, AppError]:
        if not request.message or not request.signature:
            return Failure(AppError("validation", "Message and signature are required"))

        match = _FID_PATTERN.search(request.message)
        if match is None:
            return Failure(AppError("validation", "Invalid message format: FID not found"))
        fid = int(match.group(1))

        try:
            custody_address = await self.chain_gateway.custody_address_of(fid)
        except Exception as e:
            logger.exception("identity_custody_lookup_failed", fid=fid)
            return Failure(
                AppError(
                    "upstream",
                    "Failed to verify Farcaster authentication",
                    code=getattr(e, "code", None),
                ),
            )

        verified = False
        if self.require_signature:
            verification = self._verify_signature(request, custody_address)
            if isinstance(verification, Failure):
                return verification
            verified = True
        else:
            logger.warning(
                "identity_signature_not_verified",
                fid=fid,
                custody_address=custody_address,
                nonce=request.nonce,
            )

        logger.info("identity_resolved", fid=fid, custody_address=custody_address)
        return Success(
            VerifyIdentityResponse(
                fid=str(fid),
                address=custody_address,
                signature_verified=verified,
            ),
        )

    def _verify_signature(
        self,
        request: VerifyIdentityRequest,
        custody_address: str,
    ) -> Result[None, AppError]:
        if self.signature_verifier is None:
            return Failure(
                AppError(
                    "configuration",
                    "Signature verification is required but no verifier is configured",
                ),
            )
        try:
            signer = self.signature_verifier.recover_signer(request.message, request.signature)
        except ValidationError as e:
            return Failure(AppError("validation", str(e), code=e.code))
        except DomainError as e:
            return Failure(AppError("upstream", str(e), code=e.code))

        if request.nonce and request.nonce not in request.message:
            return Failure(AppError("validation", "Nonce does not match the signed message"))

        if signer.lower() != custody_address.lower():
            logger.warning(
                "identity_signature_mismatch",
                signer=signer,
                custody_address=custody_address,
            )
            return Failure(
                AppError("validation", "Signature was not produced by the FID custody address"),
            )
        return Success(None)
