"""Typed payloads for AutoSwappr contract events."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawEvent:
    """Event as returned by the RPC node, before decoding."""

    from_address: str
    keys: tuple[int, ...]
    data: tuple[int, ...]
    block_number: int | None = None
    transaction_hash: str | None = None


@dataclass(frozen=True)
class SwapSuccessfulEvent:
    """Decoded SwapSuccessful event.

    Data layout emitted by the contract:
        token_from_address, token_from_amount (u256 low, high),
        token_to_address, token_to_amount (u256 low, high), beneficiary
    """

    token_from_address: str
    token_from_amount: int
    token_to_address: str
    token_to_amount: int
    beneficiary: str
    block_number: int | None = field(default=None, compare=False)
    transaction_hash: str | None = field(default=None, compare=False)


SwapEventHandler = Callable[[SwapSuccessfulEvent], None]


__all__ = ["RawEvent", "SwapSuccessfulEvent", "SwapEventHandler"]
