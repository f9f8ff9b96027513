from __future__ import annotations

import logging

from app.domain.entities.swap import ProtocolVersion
from app.domain.exceptions import InvalidAmountError, TokenNotFoundError
from app.domain.services.addresses import is_address, parse_address
from app.domain.services.token_registry import TokenRegistry


logger = logging.getLogger(__name__)


def resolve_symbol(symbol: str, *, registry: TokenRegistry) -> str:
    address = registry.lookup(symbol)
    if address is None:
        logger.warning("token_resolution: symbol_not_found symbol=%s", symbol)
        supported = ", ".join(registry.list_supported())
        raise TokenNotFoundError(f"{symbol} (Supported tokens: {supported})")
    return parse_address(address)


def resolve_token(value: str, *, registry: TokenRegistry, field_name: str = "token") -> str:
    candidate = (value or "").strip()
    if is_address(candidate):
        return parse_address(candidate, field_name=field_name)
    return resolve_symbol(candidate, registry=registry)


def parse_protocol_version(value: str | None) -> ProtocolVersion:
    if value is None or not value.strip():
        return ProtocolVersion.V2
    try:
        return ProtocolVersion(value.strip().lower())
    except ValueError as exc:
        raise InvalidAmountError(
            f"Invalid Uniswap version: {value}. Must be 'v2' or 'v3'"
        ) from exc
