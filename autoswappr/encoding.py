"""Cairo calldata encoding for AutoSwappr contract calls.

Starknet calldata is a flat list of felts. Structs are serialized member by
member in declaration order, u256 as (low, high) u128 limbs, bool as 0/1.
"""

from __future__ import annotations

from eth_utils import keccak

from autoswappr.models.events import RawEvent, SwapSuccessfulEvent
from autoswappr.models.swap import I129, ContractInfo, SwapRequest, TokenSupport
from autoswappr.models.types import FELT_PRIME, UINT128_MAX, UINT256_MAX, normalize_address

# sn_keccak keeps the low 250 bits of keccak256
_SELECTOR_MASK = 2**250 - 1


def get_selector_from_name(name: str) -> int:
    """Compute the Starknet selector (sn_keccak) of an entry point or event name."""
    return int.from_bytes(keccak(text=name), "big") & _SELECTOR_MASK


def split_u256(value: int) -> tuple[int, int]:
    """Split a u256 into (low, high) u128 limbs.

    Raises:
        ValueError: If value is negative or exceeds 2^256-1
    """
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"Value out of u256 range: {value}")
    return value & UINT128_MAX, value >> 128


def join_u256(low: int, high: int) -> int:
    """Inverse of split_u256."""
    if not (0 <= low <= UINT128_MAX and 0 <= high <= UINT128_MAX):
        raise ValueError(f"Invalid u256 limbs: low={low}, high={high}")
    return (high << 128) | low


def encode_felt(value: int) -> int:
    if not 0 <= value < FELT_PRIME:
        raise ValueError(f"Value out of felt range: {value}")
    return value


def encode_address(address: str) -> int:
    return int(normalize_address(address, validate=True), 16)


def encode_bool(value: bool) -> int:
    return 1 if value else 0


def encode_i129(value: I129) -> list[int]:
    """Encode a signed-magnitude amount as (mag.low, mag.high, sign).

    The magnitude is serialized as a u256, which is how the AutoSwappr
    contract's SwapData declares it.
    """
    return [*split_u256(value.mag), encode_bool(value.sign)]


def encode_swap_request(request: SwapRequest) -> tuple[int, ...]:
    """Serialize a SwapRequest as the single argument of ekubo_manual_swap.

    Layout:
        params: amount (mag.low, mag.high, sign), sqrt_ratio_limit (low, high),
                is_token1, skip_ahead
        pool_key: token0, token1, fee, tick_spacing, extension
        caller
    """
    params = request.params
    key = request.pool_key
    return (
        *encode_i129(params.amount),
        *split_u256(params.sqrt_ratio_limit),
        encode_bool(params.is_token1),
        encode_felt(params.skip_ahead),
        encode_address(key.token0),
        encode_address(key.token1),
        encode_felt(key.fee),
        encode_felt(key.tick_spacing),
        encode_address(key.extension),
        encode_address(request.caller),
    )


def encode_approve(spender: str, amount: int) -> tuple[int, ...]:
    """Serialize approve(spender, amount: u256)."""
    return (encode_address(spender), *split_u256(amount))


def decode_address(felt: int) -> str:
    return f"0x{felt:064x}"


def decode_u256(felts: list[int], offset: int = 0) -> int:
    """Read a u256 starting at ``offset``."""
    if len(felts) < offset + 2:
        raise ValueError(f"Expected u256 at offset {offset}, got {len(felts)} felts")
    return join_u256(felts[offset], felts[offset + 1])


def decode_contract_info(felts: list[int]) -> ContractInfo:
    """Decode the ContractInfo struct returned by contract_parameters()."""
    if len(felts) < 7:
        raise ValueError(f"contract_parameters returned {len(felts)} felts, expected 7")
    return ContractInfo(
        fees_collector=decode_address(felts[0]),
        fibrous_exchange_address=decode_address(felts[1]),
        avnu_exchange_address=decode_address(felts[2]),
        oracle_address=decode_address(felts[3]),
        owner=decode_address(felts[4]),
        fee_type=felts[5],
        percentage_fee=felts[6],
    )


def decode_token_support(felts: list[int]) -> TokenSupport:
    """Decode the (supported, price_feed_id) pair."""
    if len(felts) < 2:
        raise ValueError(f"get_token_from_status_and_value returned {len(felts)} felts")
    return TokenSupport(supported=felts[0] != 0, price_feed_id=hex(felts[1]))


def decode_swap_successful(event: RawEvent) -> SwapSuccessfulEvent:
    """Decode a SwapSuccessful event's data felts."""
    data = list(event.data)
    if len(data) < 7:
        raise ValueError(f"SwapSuccessful event has {len(data)} data felts, expected 7")
    return SwapSuccessfulEvent(
        token_from_address=decode_address(data[0]),
        token_from_amount=decode_u256(data, 1),
        token_to_address=decode_address(data[3]),
        token_to_amount=decode_u256(data, 4),
        beneficiary=decode_address(data[6]),
        block_number=event.block_number,
        transaction_hash=event.transaction_hash,
    )


__all__ = [
    "get_selector_from_name",
    "split_u256",
    "join_u256",
    "encode_felt",
    "encode_address",
    "encode_bool",
    "encode_i129",
    "encode_swap_request",
    "encode_approve",
    "decode_address",
    "decode_u256",
    "decode_contract_info",
    "decode_token_support",
    "decode_swap_successful",
]
