"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from autoswappr.constants import DEFAULT_FALLBACK_GAS_ESTIMATE, DEFAULT_MAX_FEE
from autoswappr.models.types import normalize_address

_TRUE_VALUES = ("true", "1", "yes")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.lower() in _TRUE_VALUES


@dataclass(frozen=True)
class AutoSwapprConfig:
    """Configuration for one AutoSwappr client instance.

    Attributes:
        rpc_url: Starknet JSON-RPC endpoint
        account_address: Address of the account that signs and pays
        private_key: Signing key for the account (hex string)
        contract_address: AutoSwappr contract address
        chain: "mainnet" or "sepolia"
        max_fee: Fee ceiling (wei) attached to every invoke transaction
        fallback_gas_estimate: Returned by gas estimation when simulation fails
        check_token_support: Reject swaps whose input token the contract
            reports as unsupported
        check_balance: Reject swaps larger than the account balance
        check_allowance: Reject swaps larger than the current allowance.
            The approve call bundled with every swap makes this redundant
            for ekubo_manual_swap, so it stays off unless asked for.
        pools_file: Optional JSON pool table replacing the built-in registry
    """

    rpc_url: str
    account_address: str
    private_key: str
    contract_address: str
    chain: str = "mainnet"
    max_fee: int = DEFAULT_MAX_FEE
    fallback_gas_estimate: str = DEFAULT_FALLBACK_GAS_ESTIMATE
    check_token_support: bool = False
    check_balance: bool = False
    check_allowance: bool = False
    pools_file: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "account_address", normalize_address(self.account_address, validate=True)
        )
        object.__setattr__(
            self, "contract_address", normalize_address(self.contract_address, validate=True)
        )
        if self.max_fee <= 0:
            raise ValueError(f"max_fee must be positive: {self.max_fee}")
        if self.chain not in ("mainnet", "sepolia"):
            raise ValueError(f"Unsupported chain: {self.chain}")

    def with_overrides(self, **changes: object) -> AutoSwapprConfig:
        """Return a copy with some fields replaced."""
        return replace(self, **changes)  # type: ignore[arg-type]

    @classmethod
    def from_env(cls) -> AutoSwapprConfig:
        """Build configuration from AUTOSWAPPR_* environment variables.

        Required: AUTOSWAPPR_RPC_URL, AUTOSWAPPR_ACCOUNT_ADDRESS,
        AUTOSWAPPR_PRIVATE_KEY, AUTOSWAPPR_CONTRACT_ADDRESS.

        Raises:
            KeyError: If a required variable is missing
        """
        max_fee = os.environ.get("AUTOSWAPPR_MAX_FEE")
        return cls(
            rpc_url=os.environ["AUTOSWAPPR_RPC_URL"],
            account_address=os.environ["AUTOSWAPPR_ACCOUNT_ADDRESS"],
            private_key=os.environ["AUTOSWAPPR_PRIVATE_KEY"],
            contract_address=os.environ["AUTOSWAPPR_CONTRACT_ADDRESS"],
            chain=os.environ.get("AUTOSWAPPR_CHAIN", "mainnet"),
            max_fee=int(max_fee, 0) if max_fee else DEFAULT_MAX_FEE,
            fallback_gas_estimate=os.environ.get(
                "AUTOSWAPPR_FALLBACK_GAS_ESTIMATE", DEFAULT_FALLBACK_GAS_ESTIMATE
            ),
            check_token_support=_env_flag("AUTOSWAPPR_CHECK_TOKEN_SUPPORT"),
            check_balance=_env_flag("AUTOSWAPPR_CHECK_BALANCE"),
            check_allowance=_env_flag("AUTOSWAPPR_CHECK_ALLOWANCE"),
            pools_file=os.environ.get("AUTOSWAPPR_POOLS_FILE") or None,
        )

    def __repr__(self) -> str:
        return (
            f"AutoSwapprConfig(rpc_url={self.rpc_url!r}, "
            f"account_address={self.account_address!r}, private_key='***', "
            f"contract_address={self.contract_address!r}, chain={self.chain!r}, "
            f"max_fee={self.max_fee})"
        )


__all__ = ["AutoSwapprConfig"]
