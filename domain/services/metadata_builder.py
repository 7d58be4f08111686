from datetime import UTC, datetime

from domain.value_objects.mint_metadata import MetadataAttribute, MintMetadata

DEFAULT_PLATFORM_NAME = "Onchain Slate"


def timestamp_millis(timestamp: datetime) -> int:
    return int(timestamp.timestamp() * 1000)


def iso_timestamp(timestamp: datetime) -> str:
    """UTC with millisecond precision and a ``Z`` suffix, e.g. ``2025-01-15T12:30:00.000Z``."""
    text = timestamp.astimezone(UTC).isoformat(timespec="milliseconds")
    return text.removesuffix("+00:00") + "Z"


def build_metadata(
    image_reference: str,
    timestamp: datetime,
    *,
    platform: str = DEFAULT_PLATFORM_NAME,
) -> MintMetadata:
    """Compose the metadata document for a freshly uploaded drawing.

    The name is derived from the creation time; no user-supplied text is
    placed in the document.
    """
    return MintMetadata(
        name=f"Drawing #{timestamp_millis(timestamp)}",
        description=f"A unique hand-drawn NFT created on {platform}",
        image_reference=image_reference,
        attributes=(
            MetadataAttribute(trait_type="Created", value=iso_timestamp(timestamp)),
            MetadataAttribute(trait_type="Platform", value=platform),
        ),
    )
