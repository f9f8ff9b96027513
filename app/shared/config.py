from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    wallet_private_key: str | None
    rpc_timeout_seconds: float
    uniswap_v2_factory: str
    uniswap_v2_router: str
    uniswap_v3_quoter: str
    uniswap_v3_swap_router: str
    usd_stablecoin_address: str
    usd_stablecoin_decimals: int
    wrapped_native_address: str


def get_settings() -> Settings:
    return Settings(
        rpc_url=_env("RPC_URL", "https://eth.llamarpc.com"),
        wallet_private_key=_env("WALLET_PRIVATE_KEY") or None,
        rpc_timeout_seconds=float(_env("RPC_TIMEOUT_SECONDS", "10")),
        uniswap_v2_factory=_env("UNISWAP_V2_FACTORY", "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"),
        uniswap_v2_router=_env("UNISWAP_V2_ROUTER", "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D"),
        uniswap_v3_quoter=_env("UNISWAP_V3_QUOTER", "0x61fFE014bA17989E743c5F6cB21bF9697530B21e"),
        uniswap_v3_swap_router=_env(
            "UNISWAP_V3_SWAP_ROUTER",
            "0xE592427A0AEce92De3Edee1F18E0157C05861564",
        ),
        usd_stablecoin_address=_env(
            "USD_STABLECOIN_ADDRESS",
            "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        ),
        usd_stablecoin_decimals=int(_env("USD_STABLECOIN_DECIMALS", "6")),
        wrapped_native_address=_env(
            "WRAPPED_NATIVE_ADDRESS",
            "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        ),
    )
