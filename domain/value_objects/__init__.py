from .chain_address import is_chain_address, require_chain_address
from .content_reference import ContentReference, rewrite_to_gateway
from .mint_event import ConfirmedTransaction, MintEvent, MintTransaction
from .mint_metadata import MetadataAttribute, MintMetadata
from .mint_state import MintMode, MintState

__all__ = [
    "ConfirmedTransaction",
    "ContentReference",
    "MetadataAttribute",
    "MintEvent",
    "MintMetadata",
    "MintMode",
    "MintState",
    "MintTransaction",
    "is_chain_address",
    "require_chain_address",
    "rewrite_to_gateway",
]
