from pydantic import BaseModel

IPFS_SCHEME = "ipfs://"


def rewrite_to_gateway(uri: str, gateway_base_url: str) -> str:
    """Rewrite an ``ipfs://<cid>`` URI to ``<gateway>/<cid>``.

    Anything not using the IPFS scheme (including an already rewritten
    gateway URL) is returned unchanged, so applying the rewrite twice is the
    same as applying it once.
    """
    if uri.startswith(IPFS_SCHEME):
        cid = uri.removeprefix(IPFS_SCHEME)
        return f"{gateway_base_url.rstrip('/')}/{cid}"
    return uri


class ContentReference(BaseModel):
    """Value object for an object pinned on a content-addressed store."""

    uri: str
    """Content URI issued by the provider, e.g. ``ipfs://bafy...``."""

    gateway_url: str
    """HTTP URL of the same content on the issuing provider's gateway."""

    model_config = {"frozen": True}
