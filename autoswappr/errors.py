"""AutoSwappr error classes.

Every error carries a ``kind`` tag so callers can branch on the failure
category without string matching.
"""

from enum import Enum


class ErrorKind(Enum):
    """Categories of swap client failures."""

    POOL_NOT_FOUND = "pool_not_found"
    ZERO_AMOUNT = "zero_amount"
    NETWORK_FAILURE = "network_failure"
    ESTIMATION_FAILURE = "estimation_failure"
    UNSUPPORTED_TOKEN = "unsupported_token"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    INSUFFICIENT_ALLOWANCE = "insufficient_allowance"


class AutoSwapprError(Exception):
    """Base error for AutoSwappr operations."""

    kind: ErrorKind

    @property
    def retryable(self) -> bool:
        """True if the caller may retry the same request later."""
        return self.kind is ErrorKind.NETWORK_FAILURE


class PoolNotFound(AutoSwapprError):
    """No pool is configured for the requested token pair."""

    kind = ErrorKind.POOL_NOT_FOUND

    def __init__(self, token_a: str, token_b: str) -> None:
        super().__init__(f"No pool configured for pair {token_a} / {token_b}")
        self.token_a = token_a
        self.token_b = token_b


class InvalidPoolConfig(PoolNotFound):
    """Swap request could not be built because the pair has no pool."""

    pass


class ZeroAmount(AutoSwapprError):
    """Swap amount is missing or zero."""

    kind = ErrorKind.ZERO_AMOUNT


class NetworkFailure(AutoSwapprError):
    """RPC call or transaction submission was rejected."""

    kind = ErrorKind.NETWORK_FAILURE


class EstimationFailure(AutoSwapprError):
    """Fee simulation failed."""

    kind = ErrorKind.ESTIMATION_FAILURE


class UnsupportedToken(AutoSwapprError):
    """Input token is not supported by the AutoSwappr contract."""

    kind = ErrorKind.UNSUPPORTED_TOKEN


class InsufficientBalance(AutoSwapprError):
    """Account balance is lower than the swap amount."""

    kind = ErrorKind.INSUFFICIENT_BALANCE


class InsufficientAllowance(AutoSwapprError):
    """Allowance granted to the AutoSwappr contract is lower than the swap amount."""

    kind = ErrorKind.INSUFFICIENT_ALLOWANCE


__all__ = [
    "ErrorKind",
    "AutoSwapprError",
    "PoolNotFound",
    "InvalidPoolConfig",
    "ZeroAmount",
    "NetworkFailure",
    "EstimationFailure",
    "UnsupportedToken",
    "InsufficientBalance",
    "InsufficientAllowance",
]
