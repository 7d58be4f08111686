from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CHAIN_RPC_DEFAULTS: dict[str, str] = {
    "base": "https://mainnet.base.org",
    "base-sepolia": "https://sepolia.base.org",
}
CHAIN_IDS: dict[str, int] = {
    "base": 8453,
    "base-sepolia": 84532,
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # make it absolute so reload/CWD doesn't break it
        env_file=Path(__file__).resolve().parents[1] / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Onchain Slate", validation_alias="APP_NAME")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        validation_alias="APP_ENV",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_dir: Path = Field(
        default=Path(__file__).resolve().parents[1] / "logs",
        validation_alias="LOG_DIR",
    )

    # API
    api_host: str = Field(default="127.0.0.1", validation_alias="API_HOST")
    api_port: int = Field(default=8000, validation_alias="API_PORT")

    # Content store (IPFS pinning provider)
    content_store_provider: Literal["lighthouse", "pinata"] = Field(
        default="lighthouse",
        validation_alias="CONTENT_STORE_PROVIDER",
    )
    lighthouse_api_key: str | None = Field(default=None, validation_alias="LIGHTHOUSE_API_KEY")
    lighthouse_upload_url: str = Field(
        default="https://upload.lighthouse.storage/api/v0/add",
        validation_alias="LIGHTHOUSE_UPLOAD_URL",
    )
    lighthouse_gateway_url: str = Field(
        default="https://gateway.lighthouse.storage/ipfs",
        validation_alias="LIGHTHOUSE_GATEWAY_URL",
    )
    pinata_jwt: str | None = Field(default=None, validation_alias="PINATA_JWT")
    pinata_api_url: str = Field(
        default="https://api.pinata.cloud",
        validation_alias="PINATA_API_URL",
    )
    pinata_gateway_url: str = Field(
        default="https://gateway.pinata.cloud/ipfs",
        validation_alias="PINATA_GATEWAY_URL",
    )
    content_store_timeout_seconds: float = Field(
        default=60.0,
        validation_alias="CONTENT_STORE_TIMEOUT_SECONDS",
    )

    # Chain
    chain_network: Literal["base", "base-sepolia"] = Field(
        default="base",
        validation_alias="CHAIN_NETWORK",
    )
    chain_rpc_url: str | None = Field(
        default=None,
        validation_alias="CHAIN_RPC_URL",
        description="Overrides the public RPC endpoint of CHAIN_NETWORK.",
    )
    drawing_nft_contract_address: str | None = Field(
        default=None,
        validation_alias="DRAWING_NFT_CONTRACT_ADDRESS",
    )
    minter_private_key: str | None = Field(
        default=None,
        validation_alias="MINTER_PRIVATE_KEY",
        description="Contract owner key. Only needed for server-custodied minting.",
    )
    confirmation_count: int = Field(default=1, ge=1, validation_alias="CONFIRMATION_COUNT")
    confirmation_timeout_seconds: float | None = Field(
        default=180.0,
        validation_alias="CONFIRMATION_TIMEOUT_SECONDS",
    )
    confirmation_poll_interval_seconds: float = Field(
        default=2.0,
        validation_alias="CONFIRMATION_POLL_INTERVAL_SECONDS",
    )

    # Identity (Farcaster ID registry on Optimism)
    identity_registry_rpc_url: str = Field(
        default="https://mainnet.optimism.io",
        validation_alias="IDENTITY_REGISTRY_RPC_URL",
    )
    identity_registry_address: str = Field(
        default="0x00000000Fc6c5F01Fc30151999387Bb99A9f489b",
        validation_alias="IDENTITY_REGISTRY_ADDRESS",
    )
    identity_require_signature: bool = Field(
        default=False,
        validation_alias="IDENTITY_REQUIRE_SIGNATURE",
        description="Reject sign-ins whose signature does not recover to the custody address.",
    )

    # Gallery
    gallery_from_block: int = Field(default=0, ge=0, validation_alias="GALLERY_FROM_BLOCK")
    gallery_default_limit: int = Field(default=10, ge=1, validation_alias="GALLERY_DEFAULT_LIMIT")
    gallery_fetch_timeout_seconds: float | None = Field(
        default=10.0,
        validation_alias="GALLERY_FETCH_TIMEOUT_SECONDS",
    )

    # Metadata
    metadata_platform_name: str = Field(
        default="Onchain Slate",
        validation_alias="METADATA_PLATFORM_NAME",
    )

    @property
    def resolved_chain_rpc_url(self) -> str:
        return self.chain_rpc_url or CHAIN_RPC_DEFAULTS[self.chain_network]

    @property
    def chain_id(self) -> int:
        return CHAIN_IDS[self.chain_network]


# Global settings instance
settings = Settings()
