"""Process-wide lagom container handed to the API routes."""

from functools import lru_cache

import structlog
from lagom import Container

from infrastructure.config import settings
from infrastructure.di.container import create_container

logger = structlog.get_logger()


@lru_cache
def get_container() -> Container:
    """Build the container once from the environment settings.

    The chain gateway holds the signer key and both RPC clients, so every
    request shares it. Tests swap this dependency out through
    ``app.dependency_overrides``.
    """
    logger.info(
        "container_created",
        content_store_provider=settings.content_store_provider,
        chain_network=settings.chain_network,
    )
    return create_container(settings)
