"""Data models for the AutoSwappr client."""

from autoswappr.models.events import RawEvent, SwapEventHandler, SwapSuccessfulEvent
from autoswappr.models.swap import (
    I129,
    CallDescriptor,
    ContractInfo,
    PoolKey,
    SwapOptions,
    SwapParameters,
    SwapRequest,
    TokenSupport,
    TransactionHandle,
)
from autoswappr.models.types import Address, Uint128, Uint256, normalize_address

__all__ = [
    # Types
    "Address",
    "Uint128",
    "Uint256",
    "normalize_address",
    # Swap models
    "SwapOptions",
    "I129",
    "SwapParameters",
    "PoolKey",
    "SwapRequest",
    "CallDescriptor",
    "TransactionHandle",
    "ContractInfo",
    "TokenSupport",
    # Events
    "RawEvent",
    "SwapSuccessfulEvent",
    "SwapEventHandler",
]
