"""Tests for the DI container wiring."""

from application.ports.chain_gateway import ChainGateway
from application.ports.content_store import ContentStore
from application.sagas.mint_saga import MintSaga
from application.use_cases.gallery_use_cases import ListRecentMintsUseCase
from application.use_cases.identity_use_cases import VerifyIdentityUseCase
from infrastructure.config import Settings, settings
from infrastructure.content_stores.pinata_content_store import PinataContentStore
from infrastructure.di.container import create_container
from interfaces.dependencies import get_container


def test_resolves_use_cases_from_settings() -> None:
    config = Settings(
        _env_file=None,
        CONTENT_STORE_PROVIDER="pinata",
        PINATA_JWT="jwt",
        CHAIN_NETWORK="base-sepolia",
        DRAWING_NFT_CONTRACT_ADDRESS="0x" + "2" * 40,
        CONFIRMATION_COUNT=2,
        IDENTITY_REQUIRE_SIGNATURE=True,
        GALLERY_FROM_BLOCK=500,
    )

    container = create_container(config)

    assert isinstance(container[ContentStore], PinataContentStore)
    saga = container[MintSaga]
    assert saga.contract_address == "0x" + "2" * 40
    assert saga.confirmations == 2
    assert saga.content_store is container[ContentStore]
    assert saga.chain_gateway is container[ChainGateway]
    assert container[ListRecentMintsUseCase].from_block == 500
    assert container[VerifyIdentityUseCase].require_signature is True


def test_chain_network_defaults() -> None:
    config = Settings(_env_file=None, CHAIN_NETWORK="base-sepolia")

    assert config.chain_id == 84532
    assert config.resolved_chain_rpc_url == "https://sepolia.base.org"

    override = Settings(_env_file=None, CHAIN_RPC_URL="https://rpc.example")
    assert override.resolved_chain_rpc_url == "https://rpc.example"
    assert override.chain_id == 8453


def test_server_minting_disabled_without_key() -> None:
    container = create_container(Settings(_env_file=None))

    assert container[ChainGateway].signer_address is None


def test_api_container_is_built_once_from_settings() -> None:
    get_container.cache_clear()
    try:
        container = get_container()

        assert get_container() is container
        assert container[Settings] is settings
    finally:
        get_container.cache_clear()
