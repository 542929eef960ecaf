"""AutoSwappr client.

The AutoSwappr class is the entry point for callers. One instance owns one
gateway (RPC connection plus signing account) and one configuration; it
composes the registry, assembler and gas estimator around them.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

import structlog

from autoswappr.assembler import TransactionAssembler, require_positive_amount
from autoswappr.config import AutoSwapprConfig
from autoswappr.constants import (
    ALLOWANCE_ENTRYPOINT,
    APPROVE_ENTRYPOINT,
    BALANCE_OF_ENTRYPOINT,
    CONTRACT_PARAMETERS_ENTRYPOINT,
    SWAP_SUCCESSFUL_EVENT,
    TOKEN_STATUS_ENTRYPOINT,
)
from autoswappr.encoding import (
    decode_contract_info,
    decode_swap_successful,
    decode_token_support,
    decode_u256,
    encode_address,
    encode_approve,
    get_selector_from_name,
)
from autoswappr.errors import (
    InsufficientAllowance,
    InsufficientBalance,
    NetworkFailure,
    UnsupportedToken,
)
from autoswappr.gas import GasEstimator
from autoswappr.gateway.base import Gateway
from autoswappr.models.events import SwapEventHandler, SwapSuccessfulEvent
from autoswappr.models.swap import (
    CallDescriptor,
    ContractInfo,
    SwapOptions,
    SwapRequest,
    TokenSupport,
    TransactionHandle,
)
from autoswappr.models.types import normalize_address, short_address
from autoswappr.pools.registry import PoolRegistry, get_default_registry
from autoswappr.pools.types import PoolConfig, TokenInfo

logger = structlog.get_logger()


class AutoSwappr:
    """Client for the AutoSwappr contract's ekubo_manual_swap entry point.

    Args:
        config: Client configuration
        gateway: Network gateway. If None, a StarknetGateway is created
                 from the config (requires the ``starknet`` extra).
        registry: Pool registry. If None, uses ``config.pools_file`` when
                  set, otherwise the built-in mainnet registry.
    """

    def __init__(
        self,
        config: AutoSwapprConfig,
        gateway: Gateway | None = None,
        registry: PoolRegistry | None = None,
    ) -> None:
        self.config = config

        if gateway is None:
            from autoswappr.gateway.starknet import StarknetGateway

            gateway = StarknetGateway(
                rpc_url=config.rpc_url,
                account_address=config.account_address,
                private_key=config.private_key,
                chain=config.chain,
            )
        self.gateway = gateway

        if registry is None:
            registry = (
                PoolRegistry.from_json(config.pools_file)
                if config.pools_file
                else get_default_registry()
            )
        self.registry = registry

        self.assembler = TransactionAssembler(
            registry=registry,
            gateway=gateway,
            contract_address=config.contract_address,
            account_address=config.account_address,
            max_fee=config.max_fee,
        )
        self.gas_estimator = GasEstimator(self.assembler, config.fallback_gas_estimate)

        self._handlers: dict[str, list[SwapEventHandler]] = {}
        self._next_event_block: int | None = None

    @property
    def account_address(self) -> str:
        return self.config.account_address

    @property
    def contract_address(self) -> str:
        return self.config.contract_address

    # ------------------------------------------------------------------
    # Static lookups
    # ------------------------------------------------------------------

    def get_token_info(self, token_address: str) -> TokenInfo | None:
        return self.registry.get_token(token_address)

    def get_pool_config(self, token_a: str, token_b: str) -> PoolConfig | None:
        return self.registry.get_pool(token_a, token_b)

    # ------------------------------------------------------------------
    # Contract reads
    # ------------------------------------------------------------------

    async def _read(
        self,
        what: str,
        contract_address: str,
        entrypoint: str,
        calldata: Sequence[int] = (),
    ) -> list[int]:
        try:
            return await self.gateway.call(contract_address, entrypoint, calldata)
        except Exception as e:
            raise NetworkFailure(f"Failed to get {what}: {type(e).__name__}: {e}") from e

    async def get_contract_info(self) -> ContractInfo:
        """Read fee and routing parameters from the AutoSwappr contract."""
        felts = await self._read(
            "contract info", self.contract_address, CONTRACT_PARAMETERS_ENTRYPOINT
        )
        return decode_contract_info(felts)

    async def is_token_supported(self, token_address: str) -> TokenSupport:
        """Ask the contract whether it accepts the token (and its price feed)."""
        felts = await self._read(
            "token support",
            self.contract_address,
            TOKEN_STATUS_ENTRYPOINT,
            [encode_address(token_address)],
        )
        return decode_token_support(felts)

    async def get_token_balance(self, token_address: str) -> int:
        """Balance of the client account, in token base units."""
        felts = await self._read(
            "token balance",
            token_address,
            BALANCE_OF_ENTRYPOINT,
            [encode_address(self.account_address)],
        )
        return decode_u256(felts)

    async def get_token_allowance(self, token_address: str) -> int:
        """Allowance the client account has granted the AutoSwappr contract."""
        felts = await self._read(
            "token allowance",
            token_address,
            ALLOWANCE_ENTRYPOINT,
            [encode_address(self.account_address), encode_address(self.contract_address)],
        )
        return decode_u256(felts)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def approve_tokens(self, token_address: str, amount: int) -> TransactionHandle:
        """Send a standalone approval of ``amount`` to the AutoSwappr contract.

        Not needed before execute_swap, which bundles its own approval.
        """
        call = CallDescriptor(
            contract_address=normalize_address(token_address),
            entrypoint=APPROVE_ENTRYPOINT,
            calldata=encode_approve(self.contract_address, amount),
        )
        try:
            handle = await self.gateway.execute([call], self.config.max_fee)
        except Exception as e:
            raise NetworkFailure(f"Failed to approve tokens: {type(e).__name__}: {e}") from e
        logger.info(
            "approval_submitted",
            token=short_address(token_address),
            amount=str(amount),
            tx_hash=handle.transaction_hash,
        )
        return handle

    def create_swap_data(
        self,
        token_in: str,
        token_out: str,
        options: SwapOptions,
    ) -> SwapRequest:
        """Build the ekubo_manual_swap request without submitting it.

        Raises:
            InvalidPoolConfig: If the pair has no pool
        """
        return self.assembler.build(token_in, token_out, options)

    async def _preflight(self, token_in: str, amount: int) -> None:
        """Optional on-chain checks, each enabled by a config flag."""
        if self.config.check_token_support:
            support = await self.is_token_supported(token_in)
            if not support.supported:
                raise UnsupportedToken(f"Token {token_in} is not supported by the contract")

        if self.config.check_balance:
            balance = await self.get_token_balance(token_in)
            if balance < amount:
                raise InsufficientBalance(f"Balance {balance} is lower than swap amount {amount}")

        if self.config.check_allowance:
            allowance = await self.get_token_allowance(token_in)
            if allowance < amount:
                raise InsufficientAllowance(
                    f"Allowance {allowance} is lower than swap amount {amount}"
                )

    async def execute_swap(
        self,
        token_in: str,
        token_out: str,
        options: SwapOptions,
    ) -> TransactionHandle:
        """Approve and swap in one atomic transaction.

        Raises:
            ZeroAmount: If the amount is missing or zero
            InvalidPoolConfig: If the pair has no pool
            UnsupportedToken, InsufficientBalance, InsufficientAllowance:
                When the matching pre-flight check is enabled and fails
            NetworkFailure: If a read or the submission is rejected
        """
        amount = require_positive_amount(options)
        # Resolve the pool before touching the network
        self.assembler.build(token_in, token_out, options)
        await self._preflight(token_in, amount)
        return await self.assembler.submit(token_in, token_out, options)

    async def estimate_swap_gas(
        self,
        token_in: str,
        token_out: str,
        options: SwapOptions,
    ) -> str:
        """Estimated fee in wei, or the configured fallback. Never raises."""
        return await self.gas_estimator.estimate(token_in, token_out, options)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def subscribe(self, event_name: str, handler: SwapEventHandler) -> None:
        """Register a handler for a contract event.

        Raises:
            ValueError: If the event has no decoder
        """
        if event_name != SWAP_SUCCESSFUL_EVENT:
            raise ValueError(f"Unsupported event: {event_name}")
        self._handlers.setdefault(event_name, []).append(handler)

    def unsubscribe(self, event_name: str) -> None:
        """Remove every handler registered for the event."""
        self._handlers.pop(event_name, None)

    def on_swap_successful(self, handler: SwapEventHandler) -> None:
        self.subscribe(SWAP_SUCCESSFUL_EVENT, handler)

    def off_swap_successful(self) -> None:
        self.unsubscribe(SWAP_SUCCESSFUL_EVENT)

    async def poll_events(
        self,
        from_block: int | None = None,
        to_block: int | None = None,
    ) -> list[SwapSuccessfulEvent]:
        """Fetch new SwapSuccessful events and dispatch them to handlers.

        Without ``from_block`` polling resumes one block after the last
        event seen by the previous call.
        """
        handlers = self._handlers.get(SWAP_SUCCESSFUL_EVENT)
        if not handlers:
            return []

        start = from_block if from_block is not None else self._next_event_block
        selector = get_selector_from_name(SWAP_SUCCESSFUL_EVENT)
        try:
            raw_events = await self.gateway.get_events(
                self.contract_address, [[selector]], start, to_block
            )
        except Exception as e:
            raise NetworkFailure(f"Failed to fetch events: {type(e).__name__}: {e}") from e

        events = [decode_swap_successful(raw) for raw in raw_events]
        for event in events:
            for handler in list(handlers):
                handler(event)

        blocks = [e.block_number for e in events if e.block_number is not None]
        if blocks:
            self._next_event_block = max(blocks) + 1

        logger.debug("swap_events_polled", count=len(events), from_block=start)
        return events


@lru_cache
def get_default_client() -> AutoSwappr:
    """Get a client configured from AUTOSWAPPR_* environment variables (cached)."""
    return AutoSwappr(AutoSwapprConfig.from_env())


__all__ = ["AutoSwappr", "get_default_client"]
