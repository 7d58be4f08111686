from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog
from eth_account import Account
from web3 import AsyncWeb3
from web3.exceptions import TransactionNotFound
from web3.providers import AsyncHTTPProvider

from application.ports.chain_gateway import ChainGateway
from domain.exceptions import (
    ChainError,
    MissingContractAddressError,
    MissingCredentialError,
    SubmissionFailedError,
)
from domain.value_objects.mint_event import ConfirmedTransaction, MintEvent
from infrastructure.chain.abi import DRAWING_NFT_ABI, ID_REGISTRY_ABI
from infrastructure.chain.error_mapping import classify_chain_error
from infrastructure.chain.log_decoding import MINT_EVENT_TOPIC, extract_token_id

if TYPE_CHECKING:
    from collections.abc import Sequence

    from eth_account.signers.local import LocalAccount
    from web3.contract import AsyncContract

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ChainConfig:
    """Everything the gateway needs, injected rather than read from the environment."""

    rpc_url: str
    chain_id: int | None = None
    private_key: str | None = None
    identity_rpc_url: str = "https://mainnet.optimism.io"
    identity_registry_address: str = "0x00000000Fc6c5F01Fc30151999387Bb99A9f489b"
    poll_interval: float = 2.0

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks.
        return (
            f"ChainConfig(rpc_url={self.rpc_url!r}, chain_id={self.chain_id!r}, "
            f"signer={'set' if self.private_key else 'unset'})"
        )


class Web3ChainGateway(ChainGateway):
    """ChainGateway adapter on web3.py's asyncio client."""

    def __init__(
        self,
        config: ChainConfig,
        *,
        w3: AsyncWeb3 | None = None,
        identity_w3: AsyncWeb3 | None = None,
    ) -> None:
        self.config = config
        self._w3 = w3 or AsyncWeb3(AsyncHTTPProvider(config.rpc_url))
        self._identity_w3 = identity_w3 or AsyncWeb3(AsyncHTTPProvider(config.identity_rpc_url))
        self._account: LocalAccount | None = None
        self._credential_problem = (
            "MINTER_PRIVATE_KEY is not set; server-side minting is unavailable"
        )
        if config.private_key:
            try:
                self._account = Account.from_key(config.private_key)
            except (ValueError, TypeError) as e:
                # Reads keep working; the write surface reports the bad key.
                self._credential_problem = "MINTER_PRIVATE_KEY is not a valid private key"
                log.error("chain.signer_key_invalid", error_type=type(e).__name__)

    @property
    def signer_address(self) -> str | None:
        return self._account.address if self._account else None

    @property
    def credential_problem(self) -> str | None:
        return None if self._account else self._credential_problem

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    async def custody_address_of(self, identity_id: int) -> str:
        registry = self._identity_w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(self.config.identity_registry_address),
            abi=ID_REGISTRY_ABI,
        )
        try:
            custody = await registry.functions.custodyOf(identity_id).call()
        except Exception as e:
            msg = f"custodyOf({identity_id}) failed: {e!s}"
            raise ChainError(msg) from e
        log.debug("chain.custody_address_of", fid=identity_id, custody=custody)
        return str(custody)

    async def get_mint_events(
        self,
        contract_address: str,
        from_block: int = 0,
    ) -> list[MintEvent]:
        address = self._require_contract(contract_address)
        try:
            raw_logs = await self._w3.eth.get_logs(
                {
                    "address": address,
                    "topics": [MINT_EVENT_TOPIC],
                    "fromBlock": from_block,
                    "toBlock": "latest",
                },
            )
        except Exception as e:
            msg = f"Failed to fetch mint events: {e!s}"
            raise ChainError(msg) from e

        event = self._contract(address).events.DrawingMinted()
        events: list[MintEvent] = []
        for raw in raw_logs:
            try:
                decoded = event.process_log(raw)
            except Exception as e:  # noqa: BLE001
                log.warning(
                    "chain.mint_event_undecodable",
                    tx_hash=AsyncWeb3.to_hex(raw.get("transactionHash", b"")),
                    error=str(e),
                )
                continue
            args = decoded["args"]
            events.append(
                MintEvent(
                    to=args["to"],
                    token_id=int(args["tokenId"]),
                    token_uri=args["tokenURI"],
                    block_number=decoded["blockNumber"],
                    log_index=decoded["logIndex"],
                ),
            )

        log.info("chain.mint_events_fetched", count=len(events), from_block=from_block)
        return events

    # ------------------------------------------------------------------
    # Write surface
    # ------------------------------------------------------------------

    async def simulate_then_send(
        self,
        contract_address: str,
        recipient: str,
        token_uri: str,
    ) -> str:
        if self._account is None:
            raise MissingCredentialError(self._credential_problem)

        address = self._require_contract(contract_address)
        sender = self._account.address
        mint_call = self._contract(address).functions.mint(
            AsyncWeb3.to_checksum_address(recipient),
            token_uri,
        )

        try:
            await mint_call.call({"from": sender})
        except Exception as e:
            error = classify_chain_error(e, simulated=True)
            log.warning("chain.mint_simulation_failed", error=str(error), error_code=error.code)
            raise error from e

        try:
            chain_id = self.config.chain_id or await self._w3.eth.chain_id
            nonce = await self._w3.eth.get_transaction_count(sender, "pending")
            tx = await mint_call.build_transaction(
                {"from": sender, "nonce": nonce, "chainId": chain_id},
            )
            signed = self._account.sign_transaction(tx)
            tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
        except Exception as e:
            error = classify_chain_error(e, simulated=False)
            log.warning("chain.mint_submission_failed", error=str(error), error_code=error.code)
            raise error from e

        return AsyncWeb3.to_hex(tx_hash)

    async def await_confirmation(
        self,
        tx_hash: str,
        confirmations: int = 1,
    ) -> ConfirmedTransaction:
        receipt = await self._poll_receipt(tx_hash)
        block_number = int(receipt["blockNumber"])
        status = int(receipt.get("status", 1))

        if status == 0:
            msg = f"Transaction {tx_hash} reverted in block {block_number}"
            raise SubmissionFailedError(msg)

        while confirmations > 1:
            head = await self._w3.eth.block_number
            if head - block_number + 1 >= confirmations:
                break
            await asyncio.sleep(self.config.poll_interval)

        return ConfirmedTransaction(
            block_number=block_number,
            status=status,
            logs=[dict(entry) for entry in receipt.get("logs", [])],
        )

    def extract_token_id(
        self,
        logs: Sequence[dict[str, Any]],
        topic: str | None = None,
    ) -> int | None:
        return extract_token_id(logs, topic or MINT_EVENT_TOPIC)

    # ------------------------------------------------------------------

    async def _poll_receipt(self, tx_hash: str) -> Any:  # noqa: ANN401
        while True:
            try:
                return await self._w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                await asyncio.sleep(self.config.poll_interval)

    def _contract(self, address: str) -> AsyncContract:
        return self._w3.eth.contract(address=address, abi=DRAWING_NFT_ABI)

    @staticmethod
    def _require_contract(contract_address: str | None) -> str:
        if not contract_address:
            msg = "DRAWING_NFT_CONTRACT_ADDRESS is not set"
            raise MissingContractAddressError(msg)
        return AsyncWeb3.to_checksum_address(contract_address)
