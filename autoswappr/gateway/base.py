"""Gateway protocol for Starknet RPC access."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from autoswappr.models.events import RawEvent
from autoswappr.models.swap import CallDescriptor, TransactionHandle


class Gateway(Protocol):
    """Network collaborator used by the client.

    This allows swapping between the starknet-py backed gateway and a mock
    gateway for testing. Implementations raise on rejection; callers wrap
    the error.
    """

    async def execute(
        self,
        calls: Sequence[CallDescriptor],
        max_fee: int,
    ) -> TransactionHandle:
        """Sign and submit the calls as one multi-call invoke transaction.

        Args:
            calls: Calls in execution order
            max_fee: Fee ceiling in wei

        Returns:
            Handle of the accepted transaction
        """
        ...

    async def estimate_fee(self, calls: Sequence[CallDescriptor]) -> int:
        """Simulate the multi-call and return its overall fee in wei."""
        ...

    async def call(
        self,
        contract_address: str,
        entrypoint: str,
        calldata: Sequence[int] = (),
    ) -> list[int]:
        """Run a read-only contract call and return the raw result felts."""
        ...

    async def get_events(
        self,
        contract_address: str,
        keys: Sequence[Sequence[int]],
        from_block: int | None = None,
        to_block: int | None = None,
    ) -> list[RawEvent]:
        """Fetch events emitted by a contract, filtered by keys."""
        ...


__all__ = ["Gateway"]
