"""Domain exceptions for business rule violations."""


class DomainError(Exception):
    """Base exception for domain layer."""

    code = "domain_error"


class ValidationError(DomainError):
    """Raised when input validation fails."""

    code = "validation_error"


class MissingArtifactError(ValidationError):
    """Raised when a mint request carries no image payload."""

    code = "missing_artifact"


class InvalidFormatError(ValidationError):
    """Raised when the image payload is not a base64 PNG."""

    code = "invalid_format"


class EmptyCanvasError(ValidationError):
    """Raised when the decoded image is too small to contain a drawing."""

    code = "empty_canvas"


class InvalidAddressError(ValidationError):
    """Raised when a recipient is not a 20-byte hex chain address."""

    code = "invalid_address"


class InvalidStateTransitionError(DomainError):
    """Raised when a mint attempt is moved to a state it cannot reach."""

    code = "invalid_state_transition"


class ConfigurationError(DomainError):
    """Raised when the process is missing configuration an operator must supply."""

    code = "configuration_error"


class AuthNotConfiguredError(ConfigurationError):
    """Raised when the content store credential is not set."""

    code = "auth_not_configured"


class MissingCredentialError(ConfigurationError):
    """Raised when a server-side mint is requested without a signing key."""

    code = "missing_credential"


class MissingContractAddressError(ConfigurationError):
    """Raised when the NFT contract address is not configured."""

    code = "missing_contract_address"


class InfrastructureError(DomainError):
    """Raised when infrastructure operations fail (DB, network, etc.)."""

    code = "infrastructure_error"


class ContentStoreError(InfrastructureError):
    """Base class for content-addressed storage failures."""

    code = "content_store_error"


class UploadRejectedError(ContentStoreError):
    """Raised when the storage provider answers with a non-success status."""

    code = "upload_rejected"

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Upload failed: {status_code} - {body}")


class NoReferenceReturnedError(ContentStoreError):
    """Raised when a successful upload response lacks a content identifier."""

    code = "no_reference_returned"


class ContentFetchError(ContentStoreError):
    """Raised when content cannot be read back through the gateway."""

    code = "content_fetch_failed"


class ChainError(InfrastructureError):
    """Base class for chain RPC and transaction failures."""

    code = "chain_error"


class InsufficientFundsError(ChainError):
    """Raised when the signer cannot pay for gas."""

    code = "insufficient_funds"


class NotContractOwnerError(ChainError):
    """Raised when the signer is not allowed to call mint on the contract."""

    code = "not_contract_owner"


class SimulationRevertedError(ChainError):
    """Raised when the dry-run of a contract call reverts."""

    code = "simulation_reverted"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Transaction simulation reverted: {reason}")


class SubmissionFailedError(ChainError):
    """Raised when a transaction cannot be broadcast or reverts on-chain."""

    code = "submission_failed"


class ConfirmationTimeoutError(ChainError):
    """Raised when a caller-imposed confirmation deadline is exceeded."""

    code = "confirmation_timeout"
