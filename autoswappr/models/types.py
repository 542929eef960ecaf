"""Shared type definitions for Starknet values.

These types are used across the swap, pool and gateway models.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

# Field element prime (2^251 + 17 * 2^192 + 1)
FELT_PRIME = 2**251 + 17 * 2**192 + 1

UINT128_MAX = 2**128 - 1
UINT256_MAX = 2**256 - 1


def _validate_unsigned(value: Any, bits: int) -> str:
    limit = 2**bits - 1

    if isinstance(value, bool):
        raise ValueError(f"Uint{bits} must be string or int, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint{bits} must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint{bits} must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint{bits} cannot be negative: {value}")
    if int_value > limit:
        raise ValueError(f"Uint{bits} overflow: {value} > 2^{bits}-1")

    return str(int_value)


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    return _validate_unsigned(value, 256)


def validate_uint128(value: Any) -> str:
    """Validate that a value is a valid uint128 decimal string."""
    return _validate_unsigned(value, 128)


# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]

# 128-bit unsigned integer as decimal string (validated)
Uint128 = Annotated[
    str,
    BeforeValidator(validate_uint128),
    Field(description="128-bit unsigned integer as decimal string"),
]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize a Starknet address to lowercase, zero-padded hex.

    Starknet addresses are field elements, so the same contract can be
    written with or without leading zeros ("0x49d3..." and "0x049d3...").
    Both normalize to "0x" followed by 64 hex digits.

    Args:
        address: A Starknet address (with or without 0x prefix)
        validate: If True, raises ValueError for values outside the field.

    Returns:
        Lowercase address with 0x prefix, padded to 64 hex digits

    Raises:
        ValueError: If the address is not hexadecimal, or if validate=True
            and the value is not a valid felt
    """
    addr = address.strip().lower()
    if addr.startswith("0x"):
        addr = addr[2:]

    try:
        value = int(addr, 16)
    except ValueError as err:
        raise ValueError(f"Invalid address: {address}") from err

    if validate and not 0 <= value < FELT_PRIME:
        raise ValueError(f"Invalid address: {address}")

    return f"0x{value:064x}"


def address_to_int(address: str) -> int:
    """Return the felt value of an address (used for canonical ordering)."""
    return int(normalize_address(address), 16)


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Starknet address.

    Args:
        address: String to validate

    Returns:
        True if the string is 0x-prefixed hex and fits in a felt
    """
    if not isinstance(address, str):
        return False
    if not address.startswith("0x") or len(address) > 66 or len(address) < 3:
        return False
    try:
        return 0 <= int(address, 16) < FELT_PRIME
    except ValueError:
        return False


def short_address(address: str) -> str:
    """Last 8 hex digits of an address, for log context.

    Malformed input is truncated as given rather than rejected.
    """
    try:
        return normalize_address(address)[-8:]
    except ValueError:
        return address[-8:]


# Starknet address (up to 64 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{1,64}$")]
