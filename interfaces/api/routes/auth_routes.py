from collections.abc import Container
from typing import Annotated

from fastapi import APIRouter, Depends, status

from application.dtos.identity_dtos import VerifyIdentityRequest, VerifyIdentityResponse
from application.use_cases.identity_use_cases import VerifyIdentityUseCase
from interfaces.api.middleware import handle_use_case_errors
from interfaces.dependencies import get_container

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/farcaster", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def verify_farcaster(
    request: VerifyIdentityRequest,
    container: Annotated[Container, Depends(get_container)],
) -> VerifyIdentityResponse:
    """Resolve the custody address behind a Sign In With Farcaster message."""
    use_case = container[VerifyIdentityUseCase]
    return await use_case.execute(request)
