from collections.abc import Container
from typing import Annotated

from fastapi import APIRouter, Depends, status

from application.dtos.mint_dtos import MintRequest, PrepareMintResponse, ServerMintResponse
from application.sagas.mint_saga import MintSaga
from domain.value_objects.mint_state import MintMode
from interfaces.api.middleware import handle_use_case_errors
from interfaces.dependencies import get_container

router = APIRouter(prefix="/api/mint", tags=["mint"])


@router.post("", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def prepare_mint(
    request: MintRequest,
    container: Annotated[Container, Depends(get_container)],
) -> PrepareMintResponse:
    """Pin a drawing and its metadata for the user's wallet to mint.

    Returns:
        200 OK: Content URIs to pass to the contract's mint function
        400 Bad Request: Missing, malformed or empty drawing
        500 Internal Server Error: Pinning provider failure or misconfiguration

    """
    saga = container[MintSaga]
    result = await saga.execute(request, mode=MintMode.CLIENT_SIGNED)
    return result.map(PrepareMintResponse.from_outcome)


@router.post("/server", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def mint_on_server(
    request: MintRequest,
    container: Annotated[Container, Depends(get_container)],
) -> ServerMintResponse:
    """Pin a drawing and mint it with the server's signing key.

    Returns:
        200 OK: Confirmed transaction with the minted token id when decodable
        400 Bad Request: Invalid drawing or recipient address
        500 Internal Server Error: Missing key/contract, insufficient funds,
            signer not the contract owner, revert or confirmation timeout

    """
    saga = container[MintSaga]
    result = await saga.execute(
        request,
        mode=MintMode.SERVER_CUSTODIED,
    )
    return result.map(ServerMintResponse.from_outcome)
