from pydantic import BaseModel, ConfigDict, Field


class VerifyIdentityRequest(BaseModel):
    """Sign-in-with-Farcaster payload posted by the client."""

    message: str | None = Field(None, description="SIWF message containing 'fid:<n>'")
    signature: str | None = Field(None, description="Hex signature over the message")
    nonce: str | None = Field(None, description="Nonce the client embedded in the message")


class VerifyIdentityResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    fid: str
    address: str
    signature_verified: bool = Field(
        False,
        alias="signatureVerified",
        description="Whether the signature was checked against the custody address",
    )
