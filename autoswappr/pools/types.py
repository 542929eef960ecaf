"""Pool and token configuration records."""

from __future__ import annotations

from dataclasses import dataclass

from autoswappr.models.swap import PoolKey
from autoswappr.models.types import address_to_int, normalize_address


@dataclass(frozen=True)
class TokenInfo:
    """Static token metadata."""

    symbol: str
    name: str
    address: str
    decimals: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", normalize_address(self.address, validate=True))


@dataclass(frozen=True)
class PoolConfig:
    """Ekubo pool configuration for one token pair.

    Tokens are always stored in canonical order (token0 < token1 by felt
    value). Use ``canonical()`` to build one from an unordered pair.
    """

    token0: str
    token1: str
    fee: int  # 0.128 fixed point fraction
    tick_spacing: int
    extension: str
    sqrt_ratio_limit: int | None = None

    def __post_init__(self) -> None:
        token0 = normalize_address(self.token0, validate=True)
        token1 = normalize_address(self.token1, validate=True)
        if token0 == token1:
            raise ValueError(f"Pool tokens must be distinct: {token0}")
        if address_to_int(token0) > address_to_int(token1):
            raise ValueError(f"Pool tokens out of canonical order: {token0} > {token1}")
        object.__setattr__(self, "token0", token0)
        object.__setattr__(self, "token1", token1)
        object.__setattr__(self, "extension", normalize_address(self.extension, validate=True))

    @classmethod
    def canonical(
        cls,
        token_a: str,
        token_b: str,
        fee: int,
        tick_spacing: int,
        extension: str,
        sqrt_ratio_limit: int | None = None,
    ) -> PoolConfig:
        """Create a PoolConfig, swapping the tokens into canonical order if needed."""
        if address_to_int(token_a) > address_to_int(token_b):
            token_a, token_b = token_b, token_a
        return cls(
            token0=token_a,
            token1=token_b,
            fee=fee,
            tick_spacing=tick_spacing,
            extension=extension,
            sqrt_ratio_limit=sqrt_ratio_limit,
        )

    @property
    def pair(self) -> tuple[str, str]:
        return (self.token0, self.token1)

    @property
    def pool_key(self) -> PoolKey:
        return PoolKey(
            token0=self.token0,
            token1=self.token1,
            fee=self.fee,
            tick_spacing=self.tick_spacing,
            extension=self.extension,
        )

    def is_token1(self, token: str) -> bool:
        """Check if token is token1 (determines swap direction)."""
        return normalize_address(token) == self.token1


__all__ = ["TokenInfo", "PoolConfig"]
