"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from application.sagas.mint_saga import MintSaga
from tests.mocks import (
    CONTRACT_ADDRESS,
    FIXED_NOW,
    InMemoryChainGateway,
    InMemoryContentStore,
    make_png_data_uri,
)


@pytest.fixture
def content_store() -> InMemoryContentStore:
    return InMemoryContentStore()


@pytest.fixture
def chain_gateway() -> InMemoryChainGateway:
    return InMemoryChainGateway()


@pytest.fixture
def drawing_data_uri() -> str:
    """A PNG data URI comfortably above the empty-canvas threshold."""
    return make_png_data_uri(4096)


@pytest.fixture
def mint_saga(
    content_store: InMemoryContentStore,
    chain_gateway: InMemoryChainGateway,
) -> MintSaga:
    return MintSaga(
        content_store=content_store,
        chain_gateway=chain_gateway,
        contract_address=CONTRACT_ADDRESS,
        confirmation_timeout=5.0,
        clock=lambda: FIXED_NOW,
    )
