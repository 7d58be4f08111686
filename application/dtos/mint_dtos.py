from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from domain.value_objects.mint_state import MintState


class MintRequest(BaseModel):
    """Request DTO for both mint endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    image_data: str | None = Field(
        None,
        validation_alias=AliasChoices("imageData", "image", "image_data"),
        description="PNG data URI or raw base64 PNG captured from the canvas",
    )
    recipient_address: str | None = Field(
        None,
        validation_alias=AliasChoices("recipientAddress", "recipient_address"),
        description="Address receiving the token; defaults to the server signer",
    )


class PreparedMint(BaseModel):
    """Outcome of a client-signed attempt: everything the wallet needs to mint."""

    kind: Literal["prepared"] = "prepared"
    metadata_uri: str
    metadata_gateway_url: str
    image_uri: str
    image_gateway_url: str
    suggested_name: str
    timestamp: int
    state: MintState = MintState.AWAITING_EXTERNAL_SIGNATURE
    history: list[MintState] = Field(default_factory=list)


class SubmittedMint(BaseModel):
    """Outcome of a server-custodied attempt that was mined."""

    kind: Literal["submitted"] = "submitted"
    tx_hash: str
    token_uri: str
    token_uri_http: str
    image_uri: str
    image_uri_http: str
    token_id: int | None = None
    minted_to: str
    block_number: int
    state: MintState = MintState.COMPLETED
    history: list[MintState] = Field(default_factory=list)


MintOutcome = Annotated[PreparedMint | SubmittedMint, Field(discriminator="kind")]


class PrepareMintResponse(BaseModel):
    """Response DTO of the mint preparation endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    metadata_content_uri: str = Field(..., alias="metadataContentURI")
    metadata_gateway_url: str = Field(..., alias="metadataGatewayURL")
    image_content_uri: str = Field(..., alias="imageContentURI")
    image_gateway_url: str = Field(..., alias="imageGatewayURL")
    suggested_name: str = Field(..., alias="suggestedName")
    timestamp: int = Field(..., description="Unix milliseconds used to name the drawing")

    @classmethod
    def from_outcome(cls, outcome: PreparedMint) -> "PrepareMintResponse":
        return cls(
            metadata_content_uri=outcome.metadata_uri,
            metadata_gateway_url=outcome.metadata_gateway_url,
            image_content_uri=outcome.image_uri,
            image_gateway_url=outcome.image_gateway_url,
            suggested_name=outcome.suggested_name,
            timestamp=outcome.timestamp,
        )


class ServerMintResponse(BaseModel):
    """Response DTO of the server-custodied mint endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    tx_hash: str = Field(..., alias="txHash")
    token_uri: str = Field(..., alias="tokenURI")
    token_uri_http: str = Field(..., alias="tokenURIHttp")
    image_uri: str = Field(..., alias="imageURI")
    image_uri_http: str = Field(..., alias="imageURIHttp")
    token_id: str | None = Field(None, alias="tokenId")
    minted_to: str = Field(..., alias="mintedTo")
    block_number: int = Field(..., alias="blockNumber")

    @classmethod
    def from_outcome(cls, outcome: SubmittedMint) -> "ServerMintResponse":
        return cls(
            tx_hash=outcome.tx_hash,
            token_uri=outcome.token_uri,
            token_uri_http=outcome.token_uri_http,
            image_uri=outcome.image_uri,
            image_uri_http=outcome.image_uri_http,
            token_id=str(outcome.token_id) if outcome.token_id is not None else None,
            minted_to=outcome.minted_to,
            block_number=outcome.block_number,
        )
