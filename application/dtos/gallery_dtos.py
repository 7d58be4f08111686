from pydantic import BaseModel, ConfigDict, Field


class GalleryEntry(BaseModel):
    """A display-ready minted drawing, rebuilt from chain events on every call."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    token_id: int = Field(..., alias="tokenId")
    owner_address: str = Field(..., alias="ownerAddress")
    image_url: str = Field(..., alias="imageUrl")
    display_name: str = Field(..., alias="displayName")
    origin_block: int = Field(..., alias="originBlock")


class GalleryResponse(BaseModel):
    entries: list[GalleryEntry] = Field(default_factory=list)
