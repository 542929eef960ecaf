"""Swap request builder.

Turns (token_in, token_out, options) into the fully resolved SwapRequest
that ekubo_manual_swap expects. Pure: no I/O, no mutation.
"""

from __future__ import annotations

from autoswappr.errors import InvalidPoolConfig
from autoswappr.models.swap import I129, SwapOptions, SwapParameters, SwapRequest
from autoswappr.models.types import normalize_address
from autoswappr.pools.registry import PoolRegistry


def build_swap_request(
    registry: PoolRegistry,
    token_in: str,
    token_out: str,
    options: SwapOptions,
    caller: str,
) -> SwapRequest:
    """Build the swap request for selling token_in into token_out.

    Args:
        registry: Pool registry used to resolve the pair
        token_in: Token being sold
        token_out: Token being bought
        options: Amount and optional overrides
        caller: Account address recorded as the swap caller

    Returns:
        SwapRequest with the pool key in canonical order

    Raises:
        InvalidPoolConfig: If the registry has no pool for the pair

    Note:
        The amount is encoded as given. Rejecting a zero or missing amount is
        the submitter's job (see TransactionAssembler.submit).
    """
    pool = registry.get_pool(token_in, token_out)
    if pool is None:
        raise InvalidPoolConfig(token_in, token_out)

    if options.is_token1 is not None:
        is_token1 = options.is_token1
    else:
        is_token1 = pool.is_token1(token_in)

    if options.sqrt_ratio_limit is not None:
        sqrt_ratio_limit = int(options.sqrt_ratio_limit)
    else:
        # 0 when the pool has no default either; the contract rejects it
        sqrt_ratio_limit = pool.sqrt_ratio_limit or 0

    skip_ahead = int(options.skip_ahead) if options.skip_ahead is not None else 0

    return SwapRequest(
        params=SwapParameters(
            amount=I129(mag=options.amount_value, sign=False),
            sqrt_ratio_limit=sqrt_ratio_limit,
            is_token1=is_token1,
            skip_ahead=skip_ahead,
        ),
        pool_key=pool.pool_key,
        caller=normalize_address(caller),
    )


__all__ = ["build_swap_request"]
