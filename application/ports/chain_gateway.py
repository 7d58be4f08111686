"""Port for read/write access to the EVM chain hosting the drawing contract."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from domain.value_objects.mint_event import ConfirmedTransaction, MintEvent


class ChainGateway(Protocol):
    """Abstract port over the chain client.

    The read surface is always available. The write surface only works when
    the process holds a signing key; otherwise users sign in their own wallet
    against the same contract ABI.
    """

    @property
    def signer_address(self) -> str | None:
        """Address of the configured server signer, or None when not configured."""
        ...

    @property
    def credential_problem(self) -> str | None:
        """Why the write surface is unavailable, or None when a signer is configured."""
        ...

    async def custody_address_of(self, identity_id: int) -> str:
        """Return the custody address registered for a Farcaster ID."""
        ...

    async def get_mint_events(
        self,
        contract_address: str,
        from_block: int = 0,
    ) -> list[MintEvent]:
        """Replay every mint event from ``from_block`` to the chain head, oldest first.

        The range is unbounded, so cost grows with the contract's history.
        """
        ...

    async def simulate_then_send(
        self,
        contract_address: str,
        recipient: str,
        token_uri: str,
    ) -> str:
        """Dry-run ``mint(recipient, token_uri)``, then sign and broadcast it.

        Returns:
            The transaction hash as a 0x-prefixed hex string.

        Raises:
            MissingCredentialError, MissingContractAddressError,
            InsufficientFundsError, NotContractOwnerError,
            SimulationRevertedError, SubmissionFailedError

        """
        ...

    async def await_confirmation(
        self,
        tx_hash: str,
        confirmations: int = 1,
    ) -> ConfirmedTransaction:
        """Wait until the transaction is mined and followed by enough blocks.

        There is no internal deadline; callers wrap this in their own timeout.
        """
        ...

    def extract_token_id(
        self,
        logs: Sequence[dict[str, Any]],
        topic: str | None = None,
    ) -> int | None:
        """Decode the token id of the mint event in ``logs``, or None if absent."""
        ...
