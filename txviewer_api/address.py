"""
EVM address normalization.

Accepts 40 hex digits with or without the 0x prefix and returns the
EIP-55 checksum-cased form.
"""

import re
from typing import Any

from web3 import Web3

from .errors import InvalidAddress

_HEX_ADDRESS_RE = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")


def normalize_address(value: Any) -> str:
    """
    Normalize an account identifier to its checksum form.

    Letter case of the input is not checked against the checksum;
    any casing of a well-formed address is accepted and re-cased.

    Raises:
        InvalidAddress: if value is not a 20-byte hex address
    """
    if not isinstance(value, str):
        raise InvalidAddress()

    candidate = value.strip()
    if not _HEX_ADDRESS_RE.match(candidate):
        raise InvalidAddress()

    if not candidate.startswith("0x"):
        candidate = "0x" + candidate

    try:
        return Web3.to_checksum_address(candidate)
    except ValueError as e:
        raise InvalidAddress() from e


def is_valid_address(value: Any) -> bool:
    """Check whether value normalizes to an address."""
    try:
        normalize_address(value)
    except InvalidAddress:
        return False
    return True
