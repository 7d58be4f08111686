from eth_account import Account
from eth_account.messages import encode_defunct

from application.ports.signature_verifier import SignatureVerifier
from domain.exceptions import ValidationError


class EthAccountSignatureVerifier(SignatureVerifier):
    """Recover EIP-191 (``personal_sign``) signers with eth-account."""

    def recover_signer(self, message: str, signature: str) -> str:
        try:
            return Account.recover_message(encode_defunct(text=message), signature=signature)
        except Exception as e:  # noqa: BLE001
            # eth-keys raises its own BadSignature hierarchy alongside ValueError.
            msg = f"Malformed signature: {e!s}"
            raise ValidationError(msg) from e
