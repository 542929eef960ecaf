"""Best-effort fee estimation for swap transactions."""

from __future__ import annotations

import structlog

from autoswappr.assembler import TransactionAssembler
from autoswappr.errors import EstimationFailure
from autoswappr.models.swap import SwapOptions
from autoswappr.models.types import short_address

logger = structlog.get_logger()


class GasEstimator:
    """Estimates the fee of the approve + swap multi-call.

    ``estimate`` never raises: any failure (unknown pair, encoding,
    simulation or RPC error) is logged and the configured fallback is
    returned instead. Advisory only; submission does not depend on it.
    """

    def __init__(self, assembler: TransactionAssembler, fallback: str) -> None:
        self.assembler = assembler
        self.fallback = fallback

    async def simulate(self, token_in: str, token_out: str, options: SwapOptions) -> int:
        """Simulate the exact calls submit() would send.

        Raises:
            EstimationFailure: Wrapping whatever went wrong
        """
        try:
            _, calls = self.assembler.compile_calls(token_in, token_out, options)
            return await self.assembler.gateway.estimate_fee(calls)
        except Exception as e:
            raise EstimationFailure(f"{type(e).__name__}: {e}") from e

    async def estimate(self, token_in: str, token_out: str, options: SwapOptions) -> str:
        """Return the estimated overall fee in wei, or the fallback string."""
        try:
            fee = await self.simulate(token_in, token_out, options)
        except EstimationFailure as e:
            logger.warning(
                "gas_estimation_failed",
                token_in=short_address(token_in),
                token_out=short_address(token_out),
                error=str(e),
                fallback=self.fallback,
            )
            return self.fallback
        return str(fee)


__all__ = ["GasEstimator"]
