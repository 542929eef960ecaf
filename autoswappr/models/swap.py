"""Swap request models.

SwapOptions is the caller-facing pydantic model (accepts camelCase aliases).
Everything downstream of the builder is a frozen dataclass so a built
request cannot change between encoding and submission.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from autoswappr.models.types import Uint128, Uint256


class SwapOptions(BaseModel):
    """Options for a single ekubo_manual_swap call."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    amount: Uint256 | None = Field(
        default=None,
        description="Amount of the input token to sell, in base units.",
    )
    is_token1: bool | None = Field(
        default=None,
        alias="isToken1",
        description="Sell token1 of the pool. Derived from the input token if omitted.",
    )
    sqrt_ratio_limit: Uint256 | None = Field(
        default=None,
        alias="sqrtRatioLimit",
        description="Price limit override. Falls back to the pool default.",
    )
    skip_ahead: Uint128 | None = Field(
        default=None,
        alias="skipAhead",
        description="Initialized ticks to skip per traversal step (default 0).",
    )

    @property
    def amount_value(self) -> int:
        """Amount as an integer (0 when missing)."""
        return int(self.amount) if self.amount is not None else 0


@dataclass(frozen=True)
class I129:
    """Signed-magnitude integer as used by Ekubo (mag, sign)."""

    mag: int
    sign: bool = False


@dataclass(frozen=True)
class SwapParameters:
    amount: I129
    sqrt_ratio_limit: int
    is_token1: bool
    skip_ahead: int


@dataclass(frozen=True)
class PoolKey:
    """Canonical Ekubo pool key."""

    token0: str
    token1: str
    fee: int
    tick_spacing: int
    extension: str


@dataclass(frozen=True)
class SwapRequest:
    """Fully resolved argument of ekubo_manual_swap."""

    params: SwapParameters
    pool_key: PoolKey
    caller: str

    def to_dict(self) -> dict[str, object]:
        """Convert to a JSON-friendly dict (integers as decimal strings)."""
        return {
            "params": {
                "amount": {
                    "mag": str(self.params.amount.mag),
                    "sign": self.params.amount.sign,
                },
                "sqrt_ratio_limit": str(self.params.sqrt_ratio_limit),
                "is_token1": self.params.is_token1,
                "skip_ahead": str(self.params.skip_ahead),
            },
            "pool_key": {
                "token0": self.pool_key.token0,
                "token1": self.pool_key.token1,
                "fee": str(self.pool_key.fee),
                "tick_spacing": str(self.pool_key.tick_spacing),
                "extension": self.pool_key.extension,
            },
            "caller": self.caller,
        }


@dataclass(frozen=True)
class CallDescriptor:
    """One contract invocation inside a multi-call."""

    contract_address: str
    entrypoint: str
    calldata: tuple[int, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "contractAddress": self.contract_address,
            "entrypoint": self.entrypoint,
            "calldata": [hex(felt) for felt in self.calldata],
        }


@dataclass(frozen=True)
class TransactionHandle:
    """Accepted (not necessarily finalized) transaction."""

    transaction_hash: str


@dataclass(frozen=True)
class ContractInfo:
    """Return value of contract_parameters()."""

    fees_collector: str
    fibrous_exchange_address: str
    avnu_exchange_address: str
    oracle_address: str
    owner: str
    fee_type: int
    percentage_fee: int


@dataclass(frozen=True)
class TokenSupport:
    """Return value of get_token_from_status_and_value()."""

    supported: bool
    price_feed_id: str


__all__ = [
    "SwapOptions",
    "I129",
    "SwapParameters",
    "PoolKey",
    "SwapRequest",
    "CallDescriptor",
    "TransactionHandle",
    "ContractInfo",
    "TokenSupport",
]
