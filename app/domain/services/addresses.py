from __future__ import annotations

from eth_utils import is_hex_address, to_checksum_address

from app.domain.exceptions import InvalidWalletAddressError


def is_address(value: str | None) -> bool:
    if not isinstance(value, str):
        return False
    candidate = value.strip()
    if not candidate.lower().startswith("0x"):
        return False
    return is_hex_address(candidate)


def parse_address(value: str | None, *, field_name: str = "address") -> str:
    if not is_address(value):
        raise InvalidWalletAddressError(f"{field_name} is not a valid address: {value}")
    return to_checksum_address(value.strip())


def same_address(left: str, right: str) -> bool:
    return left.strip().lower() == right.strip().lower()
