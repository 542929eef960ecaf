"""Test helpers module for shared test utilities.

- constants: Token, account and contract addresses
- factories: Config, client and event factory functions
"""

from tests.helpers.constants import (
    ACCOUNT,
    CONTRACT,
    ETH,
    PRIVATE_KEY,
    STRK,
    UNKNOWN_TOKEN,
    USDC,
    USDT,
    WBTC,
)
from tests.helpers.factories import make_client, make_config, make_swap_event

__all__ = [
    # Constants
    "ETH",
    "STRK",
    "USDC",
    "USDT",
    "WBTC",
    "UNKNOWN_TOKEN",
    "ACCOUNT",
    "CONTRACT",
    "PRIVATE_KEY",
    # Factories
    "make_config",
    "make_client",
    "make_swap_event",
]
