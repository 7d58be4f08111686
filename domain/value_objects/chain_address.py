import re

from domain.exceptions import InvalidAddressError

_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_chain_address(value: object) -> bool:
    """Check the 20-byte hex address format, ignoring EIP-55 checksum case."""
    return isinstance(value, str) and _ADDRESS_PATTERN.fullmatch(value) is not None


def require_chain_address(value: object) -> str:
    if not is_chain_address(value):
        msg = f"Invalid recipient address: {value!r}"
        raise InvalidAddressError(msg)
    return str(value)
