"""Built-in Starknet mainnet pool and token tables.

Pools are the main Ekubo pools for each pair. The default sqrt ratio
limit is MIN_SQRT_RATIO for every pool; callers selling token1 pass
``sqrt_ratio_limit`` explicitly (usually MAX_SQRT_RATIO).
"""

from autoswappr.constants import (
    EKUBO_FEE_0_01,
    EKUBO_FEE_0_05,
    EKUBO_FEE_0_3,
    EKUBO_TICK_SPACING,
    ETH,
    MIN_SQRT_RATIO,
    NO_EXTENSION,
    STRK,
    USDC,
    USDT,
    WBTC,
)
from autoswappr.pools.types import PoolConfig, TokenInfo

DEFAULT_TOKENS: tuple[TokenInfo, ...] = (
    TokenInfo(symbol="ETH", name="Ether", address=ETH, decimals=18),
    TokenInfo(symbol="STRK", name="Starknet Token", address=STRK, decimals=18),
    TokenInfo(symbol="USDC", name="USD Coin", address=USDC, decimals=6),
    TokenInfo(symbol="USDT", name="Tether USD", address=USDT, decimals=6),
    TokenInfo(symbol="WBTC", name="Wrapped BTC", address=WBTC, decimals=8),
)


def _pool(token_a: str, token_b: str, fee: int) -> PoolConfig:
    return PoolConfig.canonical(
        token_a,
        token_b,
        fee=fee,
        tick_spacing=EKUBO_TICK_SPACING[fee],
        extension=NO_EXTENSION,
        sqrt_ratio_limit=MIN_SQRT_RATIO,
    )


DEFAULT_POOLS: tuple[PoolConfig, ...] = (
    _pool(ETH, USDC, EKUBO_FEE_0_05),
    _pool(ETH, USDT, EKUBO_FEE_0_05),
    _pool(STRK, ETH, EKUBO_FEE_0_05),
    _pool(STRK, USDC, EKUBO_FEE_0_05),
    _pool(STRK, USDT, EKUBO_FEE_0_3),
    _pool(WBTC, ETH, EKUBO_FEE_0_05),
    _pool(WBTC, USDC, EKUBO_FEE_0_3),
    _pool(USDC, USDT, EKUBO_FEE_0_01),
)


__all__ = ["DEFAULT_TOKENS", "DEFAULT_POOLS"]
