from enum import Enum


class MintState(str, Enum):
    """Enumerate the states of a single mint attempt."""

    VALIDATING = "VALIDATING"
    UPLOADING_ARTIFACT = "UPLOADING_ARTIFACT"
    UPLOADING_METADATA = "UPLOADING_METADATA"
    SUBMITTING = "SUBMITTING"
    AWAITING_EXTERNAL_SIGNATURE = "AWAITING_EXTERNAL_SIGNATURE"
    CONFIRMING = "CONFIRMING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class MintMode(str, Enum):
    """Who signs the mint transaction."""

    CLIENT_SIGNED = "client_signed"
    SERVER_CUSTODIED = "server_custodied"
