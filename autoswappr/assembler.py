"""Transaction assembler for approve + ekubo_manual_swap multi-calls.

The approval and the swap are always submitted together, approval first,
as one invoke transaction. Either both calls commit or neither does.
"""

from __future__ import annotations

import structlog

from autoswappr.builder import build_swap_request
from autoswappr.constants import APPROVE_ENTRYPOINT, EKUBO_MANUAL_SWAP_ENTRYPOINT
from autoswappr.encoding import encode_approve, encode_swap_request
from autoswappr.errors import NetworkFailure, ZeroAmount
from autoswappr.gateway.base import Gateway
from autoswappr.models.swap import CallDescriptor, SwapOptions, SwapRequest, TransactionHandle
from autoswappr.models.types import normalize_address, short_address
from autoswappr.pools.registry import PoolRegistry

logger = structlog.get_logger()


def require_positive_amount(options: SwapOptions) -> int:
    """Return the swap amount, raising ZeroAmount if it is missing or zero."""
    amount = options.amount_value
    if amount == 0:
        raise ZeroAmount("Swap amount must be a positive integer")
    return amount


class TransactionAssembler:
    """Compiles and submits the two-call swap transaction.

    Args:
        registry: Pool registry for resolving pairs
        gateway: Network gateway used for submission
        contract_address: AutoSwappr contract (approval spender and swap target)
        account_address: Caller recorded in the swap request
        max_fee: Fee ceiling attached to the invoke transaction
    """

    def __init__(
        self,
        registry: PoolRegistry,
        gateway: Gateway,
        contract_address: str,
        account_address: str,
        max_fee: int,
    ) -> None:
        self.registry = registry
        self.gateway = gateway
        self.contract_address = normalize_address(contract_address)
        self.account_address = normalize_address(account_address)
        self.max_fee = max_fee

    def build(self, token_in: str, token_out: str, options: SwapOptions) -> SwapRequest:
        """Build the swap request for this account (no amount validation)."""
        return build_swap_request(
            self.registry, token_in, token_out, options, caller=self.account_address
        )

    def compile_calls(
        self,
        token_in: str,
        token_out: str,
        options: SwapOptions,
    ) -> tuple[SwapRequest, list[CallDescriptor]]:
        """Build the swap request and the [approve, swap] call list.

        Raises:
            InvalidPoolConfig: If the pair has no pool
        """
        request = self.build(token_in, token_out, options)

        approve_call = CallDescriptor(
            contract_address=normalize_address(token_in),
            entrypoint=APPROVE_ENTRYPOINT,
            calldata=encode_approve(self.contract_address, request.params.amount.mag),
        )
        swap_call = CallDescriptor(
            contract_address=self.contract_address,
            entrypoint=EKUBO_MANUAL_SWAP_ENTRYPOINT,
            calldata=encode_swap_request(request),
        )
        return request, [approve_call, swap_call]

    async def submit(
        self,
        token_in: str,
        token_out: str,
        options: SwapOptions,
    ) -> TransactionHandle:
        """Submit approve + ekubo_manual_swap as one atomic transaction.

        Returns as soon as the node accepts the transaction; does not wait
        for it to be included in a block.

        Raises:
            ZeroAmount: If the amount is missing or zero (before any I/O)
            InvalidPoolConfig: If the pair has no pool (before any I/O)
            NetworkFailure: If the node rejects the transaction
        """
        amount = require_positive_amount(options)
        request, calls = self.compile_calls(token_in, token_out, options)

        logger.info(
            "submitting_swap",
            token_in=short_address(token_in),
            token_out=short_address(token_out),
            amount=str(amount),
            is_token1=request.params.is_token1,
            max_fee=self.max_fee,
        )

        try:
            handle = await self.gateway.execute(calls, self.max_fee)
        except Exception as e:
            logger.error(
                "swap_submission_failed",
                token_in=short_address(token_in),
                token_out=short_address(token_out),
                error=str(e),
            )
            raise NetworkFailure(f"Swap submission failed: {type(e).__name__}: {e}") from e

        logger.info("swap_submitted", tx_hash=handle.transaction_hash)
        return handle


__all__ = ["TransactionAssembler", "require_positive_amount"]
