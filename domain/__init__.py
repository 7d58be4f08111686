"""Domain layer exports."""

from domain.aggregates.mint_attempt import MintAttempt
from domain.exceptions import DomainError, ValidationError
from domain.value_objects import (
    ConfirmedTransaction,
    ContentReference,
    MetadataAttribute,
    MintEvent,
    MintMetadata,
    MintMode,
    MintState,
    MintTransaction,
)

__all__ = [
    "ConfirmedTransaction",
    "ContentReference",
    "DomainError",
    "MetadataAttribute",
    "MintAttempt",
    "MintEvent",
    "MintMetadata",
    "MintMode",
    "MintState",
    "MintTransaction",
    "ValidationError",
]
