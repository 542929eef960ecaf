"""Pool management package.

Provides PoolRegistry for resolving token pairs to Ekubo pool keys.
"""

from .registry import PoolRegistry, get_default_registry
from .types import PoolConfig, TokenInfo

__all__ = [
    "PoolRegistry",
    "get_default_registry",
    "PoolConfig",
    "TokenInfo",
]
