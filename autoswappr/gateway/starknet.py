"""Gateway backed by starknet-py.

Makes real JSON-RPC requests to a Starknet full node and signs invoke
transactions with the configured account key.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from autoswappr.encoding import get_selector_from_name
from autoswappr.models.events import RawEvent
from autoswappr.models.swap import CallDescriptor, TransactionHandle
from autoswappr.models.types import normalize_address, short_address

logger = structlog.get_logger()

# Events are fetched in pages of this size
EVENTS_CHUNK_SIZE = 100


class StarknetGateway:
    """Gateway that talks to a Starknet node through starknet-py."""

    def __init__(
        self,
        rpc_url: str,
        account_address: str,
        private_key: str,
        chain: str = "mainnet",
    ):
        """Initialize the RPC client and the signing account.

        Args:
            rpc_url: Full node JSON-RPC URL
            account_address: Account contract address
            private_key: Account private key (hex string)
            chain: "mainnet" or "sepolia"
        """
        try:
            from starknet_py.net.account.account import Account
            from starknet_py.net.full_node_client import FullNodeClient
            from starknet_py.net.models import StarknetChainId
            from starknet_py.net.signer.stark_curve_signer import KeyPair
        except ImportError as e:
            raise ImportError(
                "starknet-py package required for StarknetGateway. "
                "Install with: pip install 'autoswappr[starknet]'"
            ) from e

        chain_id = StarknetChainId.MAINNET if chain == "mainnet" else StarknetChainId.SEPOLIA
        self.client = FullNodeClient(node_url=rpc_url)
        self.account = Account(
            address=int(normalize_address(account_address), 16),
            client=self.client,
            key_pair=KeyPair.from_private_key(int(private_key, 16)),
            chain=chain_id,
        )

    @staticmethod
    def _to_call(descriptor: CallDescriptor) -> Any:
        from starknet_py.net.client_models import Call

        return Call(
            to_addr=int(descriptor.contract_address, 16),
            selector=get_selector_from_name(descriptor.entrypoint),
            calldata=list(descriptor.calldata),
        )

    async def execute(
        self,
        calls: Sequence[CallDescriptor],
        max_fee: int,
    ) -> TransactionHandle:
        """Sign and send one invoke transaction containing all calls."""
        response = await self.account.execute_v1(
            calls=[self._to_call(c) for c in calls],
            max_fee=max_fee,
        )
        tx_hash = hex(response.transaction_hash)
        logger.info(
            "invoke_sent",
            tx_hash=tx_hash,
            calls=[c.entrypoint for c in calls],
            max_fee=max_fee,
        )
        return TransactionHandle(transaction_hash=tx_hash)

    async def estimate_fee(self, calls: Sequence[CallDescriptor]) -> int:
        """Simulate the invoke transaction and return its overall fee."""
        tx = await self.account.sign_invoke_v1(
            calls=[self._to_call(c) for c in calls],
            max_fee=0,
        )
        estimate = await self.account.estimate_fee(tx=tx)
        return int(estimate.overall_fee)

    async def call(
        self,
        contract_address: str,
        entrypoint: str,
        calldata: Sequence[int] = (),
    ) -> list[int]:
        """Run a read-only call against the latest block."""
        result = await self.client.call_contract(
            call=self._to_call(CallDescriptor(contract_address, entrypoint, tuple(calldata))),
            block_number="latest",
        )
        return [int(felt) for felt in result]

    async def get_events(
        self,
        contract_address: str,
        keys: Sequence[Sequence[int]],
        from_block: int | None = None,
        to_block: int | None = None,
    ) -> list[RawEvent]:
        """Fetch all matching events, following continuation tokens."""
        chunk = await self.client.get_events(
            address=int(normalize_address(contract_address), 16),
            keys=[list(k) for k in keys],
            from_block_number=from_block,
            to_block_number=to_block if to_block is not None else "latest",
            follow_continuation_token=True,
            chunk_size=EVENTS_CHUNK_SIZE,
        )
        events = [
            RawEvent(
                from_address=hex(event.from_address),
                keys=tuple(event.keys),
                data=tuple(event.data),
                block_number=event.block_number,
                transaction_hash=hex(event.transaction_hash),
            )
            for event in chunk.events
        ]
        logger.debug(
            "events_fetched",
            contract=short_address(contract_address),
            count=len(events),
            from_block=from_block,
        )
        return events


__all__ = ["StarknetGateway", "EVENTS_CHUNK_SIZE"]
