"""Helpers for normalizing and validating wallet addresses."""

from __future__ import annotations

import re

from ..errors import InvalidInputError

_EVM_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")
_ENS_NAME_RE = re.compile(r"^(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+eth$", re.IGNORECASE)


def normalize_address(address: str | None) -> str:
    """Trim the address; raise InvalidInputError when nothing is left."""

    trimmed = (address or "").strip()
    if not trimmed:
        raise InvalidInputError("address must not be empty")
    return trimmed


def is_valid_evm_address(address: str) -> bool:
    return bool(_EVM_ADDRESS_RE.match(address))


def is_valid_wallet_address(address: str) -> bool:
    """Accept a hex EVM address or an ENS name, both of which the balance API resolves."""

    if not address:
        return False
    return is_valid_evm_address(address) or bool(_ENS_NAME_RE.match(address))
