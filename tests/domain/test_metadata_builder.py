"""Tests for metadata composition."""

from datetime import UTC, datetime, timedelta, timezone

from domain.services.metadata_builder import (
    DEFAULT_PLATFORM_NAME,
    build_metadata,
    iso_timestamp,
    timestamp_millis,
)

CREATED = datetime(2025, 1, 15, 12, 30, 0, tzinfo=UTC)


def test_timestamp_millis() -> None:
    assert timestamp_millis(CREATED) == 1736944200000


def test_name_and_description() -> None:
    metadata = build_metadata("ipfs://bafyimg", CREATED)

    assert metadata.name == "Drawing #1736944200000"
    assert metadata.description == "A unique hand-drawn NFT created on Onchain Slate"
    assert metadata.image_reference == "ipfs://bafyimg"


def test_attributes() -> None:
    document = build_metadata("ipfs://bafyimg", CREATED).to_document()

    assert document["attributes"] == [
        {"trait_type": "Created", "value": "2025-01-15T12:30:00.000Z"},
        {"trait_type": "Platform", "value": DEFAULT_PLATFORM_NAME},
    ]


def test_custom_platform() -> None:
    metadata = build_metadata("ipfs://bafyimg", CREATED, platform="Slate Dev")

    assert metadata.description.endswith("Slate Dev")
    assert metadata.attributes[1].value == "Slate Dev"


def test_image_reference_is_the_content_uri_not_a_gateway_url() -> None:
    document = build_metadata("ipfs://bafyimg", CREATED).to_document()
    assert document["image"].startswith("ipfs://")


def test_created_uses_utc_millisecond_format() -> None:
    assert iso_timestamp(CREATED) == "2025-01-15T12:30:00.000Z"
    assert iso_timestamp(CREATED.replace(microsecond=123456)) == "2025-01-15T12:30:00.123Z"


def test_created_is_normalized_to_utc() -> None:
    local = CREATED.astimezone(timezone(timedelta(hours=5, minutes=30)))

    assert iso_timestamp(local) == "2025-01-15T12:30:00.000Z"
