"""In-memory gateway for testing without RPC calls."""

from __future__ import annotations

from collections.abc import Sequence

from autoswappr.models.events import RawEvent
from autoswappr.models.swap import CallDescriptor, TransactionHandle
from autoswappr.models.types import normalize_address


class MockGateway:
    """Mock gateway that records every request.

    Configure read results and failures up front, then assert on the
    recorded ``executed``, ``estimated`` and ``calls`` lists.
    """

    def __init__(
        self,
        call_results: dict[tuple[str, str], list[int]] | None = None,
        fee: int = 1_000_000_000_000,
        events: list[RawEvent] | None = None,
        execute_error: Exception | None = None,
        estimate_error: Exception | None = None,
        call_error: Exception | None = None,
    ):
        """Initialize mock gateway.

        Args:
            call_results: (contract_address, entrypoint) -> result felts
            fee: Overall fee returned by estimate_fee
            events: Events returned by get_events (filtered by block range)
            execute_error: Raised by execute if set
            estimate_error: Raised by estimate_fee if set
            call_error: Raised by call if set
        """
        self.call_results = {
            (normalize_address(address), entrypoint): result
            for (address, entrypoint), result in (call_results or {}).items()
        }
        self.fee = fee
        self.events = events or []
        self.execute_error = execute_error
        self.estimate_error = estimate_error
        self.call_error = call_error

        self.executed: list[tuple[list[CallDescriptor], int]] = []
        self.estimated: list[list[CallDescriptor]] = []
        self.calls: list[tuple[str, str, tuple[int, ...]]] = []
        self.event_queries: list[tuple[str, list[list[int]], int | None, int | None]] = []

    async def execute(
        self,
        calls: Sequence[CallDescriptor],
        max_fee: int,
    ) -> TransactionHandle:
        if self.execute_error is not None:
            raise self.execute_error
        self.executed.append((list(calls), max_fee))
        return TransactionHandle(transaction_hash=hex(0xABC000 + len(self.executed)))

    async def estimate_fee(self, calls: Sequence[CallDescriptor]) -> int:
        self.estimated.append(list(calls))
        if self.estimate_error is not None:
            raise self.estimate_error
        return self.fee

    async def call(
        self,
        contract_address: str,
        entrypoint: str,
        calldata: Sequence[int] = (),
    ) -> list[int]:
        address = normalize_address(contract_address)
        self.calls.append((address, entrypoint, tuple(calldata)))
        if self.call_error is not None:
            raise self.call_error
        try:
            return list(self.call_results[(address, entrypoint)])
        except KeyError:
            raise LookupError(f"No mock result for {entrypoint} on {address}") from None

    async def get_events(
        self,
        contract_address: str,
        keys: Sequence[Sequence[int]],
        from_block: int | None = None,
        to_block: int | None = None,
    ) -> list[RawEvent]:
        address = normalize_address(contract_address)
        self.event_queries.append((address, [list(k) for k in keys], from_block, to_block))

        matched = []
        for event in self.events:
            if normalize_address(event.from_address) != address:
                continue
            if keys and keys[0] and (not event.keys or event.keys[0] not in keys[0]):
                continue
            block = event.block_number or 0
            if from_block is not None and block < from_block:
                continue
            if to_block is not None and block > to_block:
                continue
            matched.append(event)
        return matched


__all__ = ["MockGateway"]
