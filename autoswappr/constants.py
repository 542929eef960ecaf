"""Protocol constants for the AutoSwappr client.

Centralizes entry point names, Ekubo pool parameters and well-known
Starknet token addresses.
"""

from autoswappr.models.types import normalize_address

# Contract entry points
APPROVE_ENTRYPOINT = "approve"
EKUBO_MANUAL_SWAP_ENTRYPOINT = "ekubo_manual_swap"
BALANCE_OF_ENTRYPOINT = "balance_of"
ALLOWANCE_ENTRYPOINT = "allowance"
CONTRACT_PARAMETERS_ENTRYPOINT = "contract_parameters"
TOKEN_STATUS_ENTRYPOINT = "get_token_from_status_and_value"

# Events
SWAP_SUCCESSFUL_EVENT = "SwapSuccessful"

# Ekubo sqrt ratio bounds (u256, 64.128 fixed point)
MIN_SQRT_RATIO = 18447191164202170524
MAX_SQRT_RATIO = 6277100250585753475930931601400621808602321654880405518632

# Ekubo fee tiers are 0.128 fixed point fractions of 2**128
EKUBO_FEE_0_01 = 34028236692093847977029636859101184  # 0.01%
EKUBO_FEE_0_05 = 170141183460469235273462165868118016  # 0.05%
EKUBO_FEE_0_3 = 1020847100762815390390123822295304634  # 0.30%

# Tick spacing per fee tier
EKUBO_TICK_SPACING = {
    EKUBO_FEE_0_01: 200,
    EKUBO_FEE_0_05: 1000,
    EKUBO_FEE_0_3: 5982,
}

# No extension contract
NO_EXTENSION = normalize_address("0x0")

# Transaction defaults (in wei)
DEFAULT_MAX_FEE = 100_000_000_000_000  # 0.0001 ETH
DEFAULT_FALLBACK_GAS_ESTIMATE = "0x100000000000000"


# Well-known token addresses on Starknet mainnet (normalized at import time)
ETH = normalize_address("0x049d36570d4e46f48e99674bd3fcc84644ddd6b96f7c741b1562b82f9e004dc7")
STRK = normalize_address("0x04718f5a0fc34cc1af16a1cdee98ffb20c31f5cd61d6ab07201858f4287c938d")
USDC = normalize_address("0x053c91253bc9682c04929ca02ed00b3e423f6710d2ee7e0d5ebb06f3ecf368a8")
USDT = normalize_address("0x068f5c6a61780768455de69077e07e89787839bf8166decfbf92b645209c0fb8")
WBTC = normalize_address("0x03fe2b97c1fd336e750087d68b9b867997fd64a2661ff3ca5a7c771641e8e7ac")


__all__ = [
    "APPROVE_ENTRYPOINT",
    "EKUBO_MANUAL_SWAP_ENTRYPOINT",
    "BALANCE_OF_ENTRYPOINT",
    "ALLOWANCE_ENTRYPOINT",
    "CONTRACT_PARAMETERS_ENTRYPOINT",
    "TOKEN_STATUS_ENTRYPOINT",
    "SWAP_SUCCESSFUL_EVENT",
    "MIN_SQRT_RATIO",
    "MAX_SQRT_RATIO",
    "EKUBO_FEE_0_01",
    "EKUBO_FEE_0_05",
    "EKUBO_FEE_0_3",
    "EKUBO_TICK_SPACING",
    "NO_EXTENSION",
    "DEFAULT_MAX_FEE",
    "DEFAULT_FALLBACK_GAS_ESTIMATE",
    "ETH",
    "STRK",
    "USDC",
    "USDT",
    "WBTC",
]
