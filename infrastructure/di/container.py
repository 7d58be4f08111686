from __future__ import annotations

from lagom import Container

from application.ports.chain_gateway import ChainGateway
from application.ports.content_store import ContentStore
from application.ports.signature_verifier import SignatureVerifier
from application.sagas.mint_saga import MintSaga
from application.use_cases.gallery_use_cases import ListRecentMintsUseCase
from application.use_cases.identity_use_cases import VerifyIdentityUseCase
from infrastructure.chain.signature_verifier import EthAccountSignatureVerifier
from infrastructure.chain.web3_chain_gateway import ChainConfig, Web3ChainGateway
from infrastructure.config import Settings, settings
from infrastructure.content_stores.factory import create_content_store


def create_container(config: Settings = settings) -> Container:
    container = Container()

    container[Settings] = config

    # Register Adapters
    # aiohttp sessions are opened per call inside the adapters, so nothing
    # here needs a running event loop.
    container[ContentStore] = create_content_store(config)
    container[ChainGateway] = Web3ChainGateway(
        ChainConfig(
            rpc_url=config.resolved_chain_rpc_url,
            chain_id=config.chain_id,
            private_key=config.minter_private_key,
            identity_rpc_url=config.identity_registry_rpc_url,
            identity_registry_address=config.identity_registry_address,
            poll_interval=config.confirmation_poll_interval_seconds,
        ),
    )
    container[SignatureVerifier] = EthAccountSignatureVerifier()

    # Register Sagas
    container[MintSaga] = lambda c: MintSaga(
        content_store=c[ContentStore],
        chain_gateway=c[ChainGateway],
        contract_address=config.drawing_nft_contract_address,
        confirmations=config.confirmation_count,
        confirmation_timeout=config.confirmation_timeout_seconds,
        platform_name=config.metadata_platform_name,
    )

    # Register Use Cases
    container[ListRecentMintsUseCase] = lambda c: ListRecentMintsUseCase(
        chain_gateway=c[ChainGateway],
        content_store=c[ContentStore],
        from_block=config.gallery_from_block,
        fetch_timeout=config.gallery_fetch_timeout_seconds,
    )
    container[VerifyIdentityUseCase] = lambda c: VerifyIdentityUseCase(
        chain_gateway=c[ChainGateway],
        signature_verifier=c[SignatureVerifier],
        require_signature=config.identity_require_signature,
    )

    return container
