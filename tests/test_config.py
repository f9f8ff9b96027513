from __future__ import annotations

from dataclasses import replace

from fastapi import HTTPException
import pytest

from app.api import deps
from app.shared.config import get_settings


def test_settings_default_to_mainnet_contracts(monkeypatch):
    for name in ("RPC_URL", "WALLET_PRIVATE_KEY", "RPC_TIMEOUT_SECONDS", "USD_STABLECOIN_DECIMALS"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.rpc_url == "https://eth.llamarpc.com"
    assert settings.wallet_private_key is None
    assert settings.rpc_timeout_seconds == 10.0
    assert settings.usd_stablecoin_decimals == 6
    assert settings.wrapped_native_address == "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("RPC_URL", "http://localhost:8545")
    monkeypatch.setenv("RPC_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("WALLET_PRIVATE_KEY", "")

    settings = get_settings()

    assert settings.rpc_url == "http://localhost:8545"
    assert settings.rpc_timeout_seconds == 2.5
    assert settings.wallet_private_key is None


def test_chain_repository_is_read_only_without_private_key(monkeypatch):
    monkeypatch.delenv("WALLET_PRIVATE_KEY", raising=False)
    monkeypatch.setenv("RPC_URL", "http://localhost:8545")
    deps._get_chain_repository.cache_clear()

    repository = deps._get_chain_repository()

    assert repository.wallet_address is None
    deps._get_chain_repository.cache_clear()


def test_invalid_private_key_fails_dependency(monkeypatch):
    settings = replace(get_settings(), wallet_private_key="0x1234")
    monkeypatch.setattr(deps, "get_settings", lambda: settings)
    deps._get_chain_repository.cache_clear()

    with pytest.raises(HTTPException) as exc_info:
        deps._get_chain_repository()
    assert exc_info.value.status_code == 500

    deps._get_chain_repository.cache_clear()
