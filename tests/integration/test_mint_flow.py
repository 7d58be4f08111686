"""End-to-end flows through the HTTP API with in-memory adapters."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from application.sagas.mint_saga import MintSaga
from application.use_cases.gallery_use_cases import ListRecentMintsUseCase
from application.use_cases.identity_use_cases import VerifyIdentityUseCase
from infrastructure.config import Settings
from interfaces.api.main import app
from interfaces.dependencies import get_container
from tests.mocks import (
    CONTRACT_ADDRESS,
    FIXED_NOW,
    RECIPIENT_ADDRESS,
    SIGNER_ADDRESS,
    InMemoryChainGateway,
    InMemoryContentStore,
    make_png_data_uri,
)


class WiredContainer:
    """Real sagas and use cases over in-memory adapters."""

    def __init__(
        self,
        content_store: InMemoryContentStore,
        chain_gateway: InMemoryChainGateway,
    ) -> None:
        self.content_store = content_store
        self.chain_gateway = chain_gateway
        self._mapping: dict[type, object] = {
            Settings: Settings(_env_file=None, DRAWING_NFT_CONTRACT_ADDRESS=CONTRACT_ADDRESS),
            MintSaga: MintSaga(
                content_store,
                chain_gateway,
                CONTRACT_ADDRESS,
                confirmation_timeout=5.0,
                clock=lambda: FIXED_NOW,
            ),
            ListRecentMintsUseCase: ListRecentMintsUseCase(chain_gateway, content_store),
            VerifyIdentityUseCase: VerifyIdentityUseCase(chain_gateway),
        }

    def __getitem__(self, key: type) -> object:
        return self._mapping[key]


@pytest.fixture
def wired() -> WiredContainer:
    container = WiredContainer(
        InMemoryContentStore(),
        InMemoryChainGateway(custody={1234: RECIPIENT_ADDRESS}),
    )
    app.dependency_overrides[get_container] = lambda: container
    yield container
    app.dependency_overrides.clear()


@pytest.fixture
def client(wired: WiredContainer) -> TestClient:
    return TestClient(app)


class TestMintFlow:
    def test_server_mint_then_gallery(self, client: TestClient, wired: WiredContainer) -> None:
        minted = client.post(
            "/api/mint/server",
            json={"imageData": make_png_data_uri(2048), "recipientAddress": RECIPIENT_ADDRESS},
        )

        assert minted.status_code == 200
        mint = minted.json()
        assert mint["tokenId"] == "1"
        assert mint["mintedTo"] == RECIPIENT_ADDRESS

        gallery = client.get("/api/gallery")

        assert gallery.status_code == 200
        entries = gallery.json()["entries"]
        assert len(entries) == 1
        assert entries[0]["tokenId"] == 1
        assert entries[0]["ownerAddress"] == RECIPIENT_ADDRESS
        assert entries[0]["imageUrl"] == mint["imageURIHttp"]
        assert entries[0]["displayName"] == "Drawing #1736944200000"

    def test_several_mints_listed_newest_first(self, client: TestClient) -> None:
        for _ in range(3):
            response = client.post("/api/mint/server", json={"imageData": make_png_data_uri()})
            assert response.status_code == 200

        entries = client.get("/api/gallery?limit=2").json()["entries"]

        assert [entry["tokenId"] for entry in entries] == [3, 2]
        assert all(entry["ownerAddress"] == SIGNER_ADDRESS for entry in entries)

    def test_client_signed_mint_leaves_chain_untouched(
        self,
        client: TestClient,
        wired: WiredContainer,
    ) -> None:
        response = client.post("/api/mint", json={"imageData": make_png_data_uri()})

        assert response.status_code == 200
        body = response.json()
        assert body["metadataContentURI"] in wired.content_store.objects
        assert body["imageContentURI"] in wired.content_store.objects
        assert wired.chain_gateway.calls == []
        assert client.get("/api/gallery").json() == {"entries": []}

    def test_empty_canvas_rejected(self, client: TestClient, wired: WiredContainer) -> None:
        response = client.post("/api/mint/server", json={"imageData": make_png_data_uri(500)})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Canvas appears to be empty. Please draw something first.",
        }
        assert wired.content_store.uploads == []

    def test_missing_signer_is_misconfiguration(
        self,
        client: TestClient,
        wired: WiredContainer,
    ) -> None:
        wired.chain_gateway._signer = None

        response = client.post("/api/mint/server", json={"imageData": make_png_data_uri()})

        assert response.status_code == 500
        assert response.json()["error"].startswith("Service misconfigured:")
        assert wired.content_store.uploads == []

    def test_farcaster_sign_in(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/farcaster",
            json={"message": "Sign in\nfid:1234", "signature": "0xsig"},
        )

        assert response.status_code == 200
        assert response.json()["address"] == RECIPIENT_ADDRESS
        assert response.json()["fid"] == "1234"
