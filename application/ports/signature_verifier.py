from __future__ import annotations

from typing import Protocol


class SignatureVerifier(Protocol):
    """Port for recovering the signer of an EIP-191 personal message."""

    def recover_signer(self, message: str, signature: str) -> str:
        """Return the address that produced ``signature`` over ``message``.

        Raises:
            ValidationError: The signature is malformed.

        """
        ...
