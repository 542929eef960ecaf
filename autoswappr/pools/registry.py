"""Pool registry for resolving token pairs to Ekubo pool configurations.

The registry is read-only after construction. Lookups are order
independent: (A, B) and (B, A) resolve to the same canonical PoolConfig.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog

from autoswappr.errors import PoolNotFound
from autoswappr.models.types import address_to_int, normalize_address, short_address
from autoswappr.pools.types import PoolConfig, TokenInfo

logger = structlog.get_logger()


def _canonical_pair(token_a: str, token_b: str) -> tuple[str, str]:
    token_a_norm = normalize_address(token_a)
    token_b_norm = normalize_address(token_b)
    if address_to_int(token_a_norm) > address_to_int(token_b_norm):
        return token_b_norm, token_a_norm
    return token_a_norm, token_b_norm


def _parse_int(value: Any) -> int:
    """Parse an int from JSON (int, decimal string or 0x-hex string)."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        return int(value, 0)
    raise ValueError(f"Expected integer, got {type(value).__name__}: {value!r}")


class PoolRegistry:
    """Registry of pool and token configuration.

    One pool per unordered token pair; a later pool for the same pair
    replaces an earlier one. There are no mutators: build a new registry
    (or load one with from_json) to change the pool table.
    """

    def __init__(
        self,
        pools: list[PoolConfig] | None = None,
        tokens: list[TokenInfo] | None = None,
    ) -> None:
        self._pools: dict[tuple[str, str], PoolConfig] = {}
        self._tokens: dict[str, TokenInfo] = {}
        self._symbols: dict[str, str] = {}

        for token in tokens or []:
            self._add_token(token)
        for pool in pools or []:
            self._add_pool(pool)

    def _add_token(self, token: TokenInfo) -> None:
        self._tokens[token.address] = token
        self._symbols[token.symbol.upper()] = token.address

    def _add_pool(self, pool: PoolConfig) -> None:
        if pool.pair in self._pools:
            logger.debug(
                "pool_replaced",
                token0=short_address(pool.token0),
                token1=short_address(pool.token1),
            )
        self._pools[pool.pair] = pool

    def get_pool(self, token_a: str, token_b: str) -> PoolConfig | None:
        """Get the pool for a token pair (order independent).

        Args:
            token_a: First token address (any case, any zero padding)
            token_b: Second token address

        Returns:
            PoolConfig if found, None otherwise
        """
        return self._pools.get(_canonical_pair(token_a, token_b))

    def lookup(self, token_a: str, token_b: str) -> PoolConfig:
        """Get the pool for a token pair, raising if none is configured.

        Raises:
            PoolNotFound: If no pool exists for the pair
        """
        pool = self.get_pool(token_a, token_b)
        if pool is None:
            raise PoolNotFound(token_a, token_b)
        return pool

    def get_token(self, address: str) -> TokenInfo | None:
        """Get token metadata by address."""
        return self._tokens.get(normalize_address(address))

    def get_token_by_symbol(self, symbol: str) -> TokenInfo | None:
        """Get token metadata by symbol (case insensitive)."""
        address = self._symbols.get(symbol.upper())
        return self._tokens.get(address) if address else None

    def address_of(self, symbol: str) -> str:
        """Resolve a token symbol to its address.

        Raises:
            KeyError: If the symbol is unknown
        """
        token = self.get_token_by_symbol(symbol)
        if token is None:
            raise KeyError(f"Unknown token symbol: {symbol}")
        return token.address

    @property
    def pools(self) -> list[PoolConfig]:
        return list(self._pools.values())

    @property
    def tokens(self) -> list[TokenInfo]:
        return list(self._tokens.values())

    @property
    def pool_count(self) -> int:
        return len(self._pools)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PoolRegistry:
        """Build a registry from the JSON configuration format.

        Expected shape::

            {
              "tokens": [{"symbol", "name", "address", "decimals"}, ...],
              "pools": [{"token0", "token1", "fee", "tickSpacing",
                         "extension", "sqrtRatioLimit"}, ...]
            }

        Integer fields accept ints, decimal strings or 0x-prefixed hex.
        Pool tokens may be given in any order.
        """
        tokens = [
            TokenInfo(
                symbol=entry["symbol"],
                name=entry.get("name", entry["symbol"]),
                address=entry["address"],
                decimals=int(entry["decimals"]),
            )
            for entry in data.get("tokens", [])
        ]
        pools = []
        for entry in data.get("pools", []):
            limit = entry.get("sqrtRatioLimit")
            pools.append(
                PoolConfig.canonical(
                    entry["token0"],
                    entry["token1"],
                    fee=_parse_int(entry["fee"]),
                    tick_spacing=_parse_int(entry["tickSpacing"]),
                    extension=entry.get("extension", "0x0"),
                    sqrt_ratio_limit=_parse_int(limit) if limit is not None else None,
                )
            )
        return cls(pools=pools, tokens=tokens)

    @classmethod
    def from_json(cls, path: str | Path) -> PoolRegistry:
        """Load a registry from a JSON file (see from_dict for the format)."""
        with open(path) as f:
            data = json.load(f)
        registry = cls.from_dict(data)
        logger.info(
            "pool_registry_loaded",
            path=str(path),
            pools=registry.pool_count,
            tokens=len(registry.tokens),
        )
        return registry


@lru_cache
def get_default_registry() -> PoolRegistry:
    """Get the built-in Starknet mainnet registry (built once per process)."""
    from autoswappr.pools.data import DEFAULT_POOLS, DEFAULT_TOKENS

    return PoolRegistry(pools=list(DEFAULT_POOLS), tokens=list(DEFAULT_TOKENS))


__all__ = ["PoolRegistry", "get_default_registry"]
