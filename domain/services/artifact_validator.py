"""Validation of canvas captures submitted for minting.

Pure functions only: nothing here touches the network, so a bad drawing is
rejected before any upload or chain call is made.
"""

import base64
import binascii
import re

from domain.exceptions import EmptyCanvasError, InvalidFormatError, MissingArtifactError

PNG_DATA_URI_PREFIX = "data:image/png;base64,"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# A blank 500x500 canvas still compresses to ~2KB with its white fill, but
# a transparent or near-empty export comes in well under this.
MIN_CONTENT_BYTES = 1000

_BASE64_PATTERN = re.compile(r"^[A-Za-z0-9+/]+=*$")


def is_well_formed(payload: object) -> bool:
    """Accept a PNG data URI or a bare base64 string."""
    if not isinstance(payload, str):
        return False
    if payload.startswith(PNG_DATA_URI_PREFIX):
        return True
    return _BASE64_PATTERN.fullmatch(payload) is not None


def extract_encoded_bytes(payload: str) -> bytes:
    """Strip an optional data-URI prefix and decode the base64 body."""
    encoded = payload.removeprefix(PNG_DATA_URI_PREFIX).rstrip("=")
    # Browsers and some encoders drop the trailing padding.
    encoded += "=" * (-len(encoded) % 4)
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        msg = f"Invalid image format. Must be base64 PNG. ({e!s})"
        raise InvalidFormatError(msg) from e


def is_substantive(data: bytes) -> bool:
    return len(data) >= MIN_CONTENT_BYTES


def validate_artifact(payload: object) -> bytes:
    """Run every check and return the decoded PNG bytes.

    Raises:
        MissingArtifactError: No payload was supplied.
        InvalidFormatError: The payload is not base64 PNG data.
        EmptyCanvasError: The image is too small to contain a drawing.

    """
    if payload is None or payload == "":
        msg = "Image data is required"
        raise MissingArtifactError(msg)

    if not is_well_formed(payload):
        msg = "Invalid image format. Must be base64 PNG."
        raise InvalidFormatError(msg)

    data = extract_encoded_bytes(payload)  # type: ignore[arg-type]

    if not data.startswith(PNG_SIGNATURE):
        msg = "Invalid image format. Decoded data is not a PNG image."
        raise InvalidFormatError(msg)

    if not is_substantive(data):
        msg = "Canvas appears to be empty. Please draw something first."
        raise EmptyCanvasError(msg)

    return data
