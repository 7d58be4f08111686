from collections.abc import Container
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from application.dtos.gallery_dtos import GalleryResponse
from application.use_cases.gallery_use_cases import ListRecentMintsUseCase
from infrastructure.config import Settings
from interfaces.api.middleware import handle_use_case_errors
from interfaces.dependencies import get_container

router = APIRouter(prefix="/api/gallery", tags=["gallery"])


@router.get("", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def list_recent_mints(
    container: Annotated[Container, Depends(get_container)],
    limit: Annotated[int | None, Query(ge=0, le=100)] = None,
) -> GalleryResponse:
    """List the most recently minted drawings, newest first."""
    config = container[Settings]
    use_case = container[ListRecentMintsUseCase]
    result = await use_case.execute(
        config.drawing_nft_contract_address,
        limit=config.gallery_default_limit if limit is None else limit,
    )
    return result.map(lambda entries: GalleryResponse(entries=entries))
