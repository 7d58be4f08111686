"""Translate raw web3/RPC exceptions into the domain's chain error taxonomy."""

import re

from web3.exceptions import ContractLogicError

from domain.exceptions import (
    ChainError,
    InsufficientFundsError,
    NotContractOwnerError,
    SimulationRevertedError,
    SubmissionFailedError,
)

_INSUFFICIENT_FUNDS = re.compile(r"insufficient funds", re.IGNORECASE)
# 0x118cdaa7 is the selector of OpenZeppelin v5's OwnableUnauthorizedAccount(address).
_NOT_OWNER = re.compile(
    r"OwnableUnauthorizedAccount|caller is not the owner|not the owner|0x118cdaa7",
    re.IGNORECASE,
)
_REVERT = re.compile(r"revert", re.IGNORECASE)


def error_text(error: BaseException) -> str:
    parts = [str(error)]
    for attr in ("message", "data"):
        value = getattr(error, attr, None)
        if value and str(value) not in parts:
            parts.append(str(value))
    return " ".join(parts)


def classify_chain_error(error: BaseException, *, simulated: bool) -> ChainError:
    """Map an exception from simulation (``simulated=True``) or submission."""
    if isinstance(error, ChainError):
        return error

    text = error_text(error)

    if _INSUFFICIENT_FUNDS.search(text):
        return InsufficientFundsError(
            "Insufficient funds for gas. Please add ETH to the minter wallet.",
        )
    if _NOT_OWNER.search(text):
        return NotContractOwnerError(
            "Minter wallet is not the contract owner. Only the owner can mint.",
        )
    if isinstance(error, ContractLogicError) or (simulated and _REVERT.search(text)):
        reason = getattr(error, "message", None) or str(error) or "execution reverted"
        return SimulationRevertedError(str(reason))
    detail = str(error) or type(error).__name__
    return SubmissionFailedError(f"Transaction submission failed: {detail}")
