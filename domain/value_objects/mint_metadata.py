from typing import Any

from pydantic import BaseModel, Field


class MetadataAttribute(BaseModel):
    """A single ``(trait_type, value)`` pair of NFT metadata."""

    trait_type: str
    value: str | int

    model_config = {"frozen": True}


class MintMetadata(BaseModel):
    """ERC-721 metadata document for one minted drawing.

    Immutable once built: the uploaded form is content-addressed, so any
    change would produce a different token URI.
    """

    name: str
    description: str
    image_reference: str
    attributes: tuple[MetadataAttribute, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    def to_document(self) -> dict[str, Any]:
        """Render the JSON shape marketplaces and wallets expect."""
        return {
            "name": self.name,
            "description": self.description,
            "image": self.image_reference,
            "attributes": [
                {"trait_type": attribute.trait_type, "value": attribute.value}
                for attribute in self.attributes
            ],
        }
