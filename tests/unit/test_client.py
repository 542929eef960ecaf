"""Tests for the AutoSwappr client."""

import pytest

from autoswappr.client import AutoSwappr
from autoswappr.constants import (
    ALLOWANCE_ENTRYPOINT,
    APPROVE_ENTRYPOINT,
    BALANCE_OF_ENTRYPOINT,
    CONTRACT_PARAMETERS_ENTRYPOINT,
    SWAP_SUCCESSFUL_EVENT,
    TOKEN_STATUS_ENTRYPOINT,
)
from autoswappr.encoding import get_selector_from_name
from autoswappr.errors import (
    InsufficientAllowance,
    InsufficientBalance,
    InvalidPoolConfig,
    NetworkFailure,
    UnsupportedToken,
    ZeroAmount,
)
from autoswappr.gateway.mock import MockGateway
from autoswappr.models.events import SwapSuccessfulEvent
from autoswappr.models.swap import SwapOptions
from autoswappr.pools import PoolConfig, PoolRegistry
from tests.helpers import (
    ACCOUNT,
    CONTRACT,
    ETH,
    STRK,
    UNKNOWN_TOKEN,
    USDC,
    make_client,
    make_swap_event,
)

SWAP_SELECTOR = get_selector_from_name(SWAP_SUCCESSFUL_EVENT)


class TestConstruction:
    def test_defaults_to_builtin_registry(self, client: AutoSwappr) -> None:
        assert client.get_pool_config(ETH, USDC) is not None
        assert client.account_address == ACCOUNT
        assert client.contract_address == CONTRACT

    def test_custom_registry(self) -> None:
        registry = PoolRegistry(
            pools=[PoolConfig.canonical(ETH, STRK, fee=1, tick_spacing=1, extension="0x0")]
        )
        client, _ = make_client(registry=registry)
        assert client.get_pool_config(ETH, USDC) is None
        assert client.get_pool_config(STRK, ETH) is not None

    def test_pools_file(self, tmp_path) -> None:
        path = tmp_path / "pools.json"
        path.write_text(
            '{"pools": [{"token0": "%s", "token1": "%s", "fee": 5, "tickSpacing": 10}]}'
            % (USDC, ETH)
        )
        client, _ = make_client(pools_file=str(path))
        pool = client.get_pool_config(ETH, USDC)
        assert pool is not None
        assert pool.fee == 5

    def test_default_registry_shared_read_only(self) -> None:
        first, _ = make_client()
        second, _ = make_client()
        assert first.registry is second.registry
        assert not hasattr(first.registry, "add_pool")

        first.registry.pools.append(
            PoolConfig.canonical(ETH, UNKNOWN_TOKEN, fee=1, tick_spacing=1, extension="0x0")
        )

        assert second.get_pool_config(ETH, UNKNOWN_TOKEN) is None

    def test_token_info(self, client: AutoSwappr) -> None:
        info = client.get_token_info(ETH)
        assert info is not None
        assert info.symbol == "ETH"
        assert client.get_token_info(UNKNOWN_TOKEN) is None


class TestReads:
    @pytest.mark.asyncio
    async def test_contract_info(self) -> None:
        client, gateway = make_client(
            gateway=MockGateway(
                call_results={(CONTRACT, CONTRACT_PARAMETERS_ENTRYPOINT): [1, 2, 3, 4, 5, 0, 30]}
            )
        )

        info = await client.get_contract_info()

        assert info.percentage_fee == 30
        assert gateway.calls == [(CONTRACT, CONTRACT_PARAMETERS_ENTRYPOINT, ())]

    @pytest.mark.asyncio
    async def test_token_supported(self) -> None:
        client, gateway = make_client(
            gateway=MockGateway(call_results={(CONTRACT, TOKEN_STATUS_ENTRYPOINT): [1, 0x5]})
        )

        support = await client.is_token_supported(USDC)

        assert support.supported is True
        assert gateway.calls[0][2] == (int(USDC, 16),)

    @pytest.mark.asyncio
    async def test_balance(self) -> None:
        client, gateway = make_client(
            gateway=MockGateway(call_results={(USDC, BALANCE_OF_ENTRYPOINT): [500, 0]})
        )

        assert await client.get_token_balance(USDC) == 500
        assert gateway.calls[0] == (USDC, BALANCE_OF_ENTRYPOINT, (int(ACCOUNT, 16),))

    @pytest.mark.asyncio
    async def test_allowance(self) -> None:
        client, gateway = make_client(
            gateway=MockGateway(call_results={(USDC, ALLOWANCE_ENTRYPOINT): [0, 1]})
        )

        assert await client.get_token_allowance(USDC) == 1 << 128
        assert gateway.calls[0][2] == (int(ACCOUNT, 16), int(CONTRACT, 16))

    @pytest.mark.asyncio
    async def test_read_failure_wrapped(self) -> None:
        cause = ConnectionError("rpc down")
        client, _ = make_client(gateway=MockGateway(call_error=cause))

        with pytest.raises(NetworkFailure, match="Failed to get token balance") as exc_info:
            await client.get_token_balance(USDC)
        assert exc_info.value.__cause__ is cause


class TestApprove:
    @pytest.mark.asyncio
    async def test_single_call(self, client: AutoSwappr, gateway: MockGateway) -> None:
        handle = await client.approve_tokens(USDC, 2**128 + 1)

        assert handle.transaction_hash == "0xabc001"
        calls, _ = gateway.executed[0]
        assert len(calls) == 1
        assert calls[0].contract_address == USDC
        assert calls[0].entrypoint == APPROVE_ENTRYPOINT
        assert calls[0].calldata == (int(CONTRACT, 16), 1, 1)

    @pytest.mark.asyncio
    async def test_failure_wrapped(self) -> None:
        client, _ = make_client(gateway=MockGateway(execute_error=RuntimeError("nonce")))
        with pytest.raises(NetworkFailure, match="Failed to approve tokens"):
            await client.approve_tokens(USDC, 1)


class TestExecuteSwap:
    @pytest.mark.asyncio
    async def test_submits(self, client: AutoSwappr, gateway: MockGateway) -> None:
        handle = await client.execute_swap(USDC, ETH, SwapOptions(amount="1000000"))

        assert handle.transaction_hash == "0xabc001"
        calls, _ = gateway.executed[0]
        assert calls[0].contract_address == USDC
        assert calls[1].contract_address == CONTRACT
        # No pre-flight reads by default
        assert gateway.calls == []

    @pytest.mark.asyncio
    async def test_zero_amount(self, client: AutoSwappr, gateway: MockGateway) -> None:
        with pytest.raises(ZeroAmount):
            await client.execute_swap(USDC, ETH, SwapOptions(amount="0"))
        assert gateway.executed == []

    @pytest.mark.asyncio
    async def test_unknown_pair_before_preflight(self) -> None:
        client, gateway = make_client(check_balance=True)
        with pytest.raises(InvalidPoolConfig):
            await client.execute_swap(ETH, UNKNOWN_TOKEN, SwapOptions(amount="1"))
        assert gateway.calls == []

    def test_create_swap_data(self, client: AutoSwappr) -> None:
        request = client.create_swap_data(USDC, ETH, SwapOptions(amount="1000000"))
        assert request.params.is_token1 is True
        assert request.caller == ACCOUNT


class TestPreflight:
    @pytest.mark.asyncio
    async def test_unsupported_token(self) -> None:
        client, gateway = make_client(
            gateway=MockGateway(call_results={(CONTRACT, TOKEN_STATUS_ENTRYPOINT): [0, 0]}),
            check_token_support=True,
        )
        with pytest.raises(UnsupportedToken):
            await client.execute_swap(USDC, ETH, SwapOptions(amount="1"))
        assert gateway.executed == []

    @pytest.mark.asyncio
    async def test_insufficient_balance(self) -> None:
        client, gateway = make_client(
            gateway=MockGateway(call_results={(USDC, BALANCE_OF_ENTRYPOINT): [99, 0]}),
            check_balance=True,
        )
        with pytest.raises(InsufficientBalance):
            await client.execute_swap(USDC, ETH, SwapOptions(amount="100"))
        assert gateway.executed == []

    @pytest.mark.asyncio
    async def test_insufficient_allowance(self) -> None:
        client, gateway = make_client(
            gateway=MockGateway(call_results={(USDC, ALLOWANCE_ENTRYPOINT): [0, 0]}),
            check_allowance=True,
        )
        with pytest.raises(InsufficientAllowance):
            await client.execute_swap(USDC, ETH, SwapOptions(amount="1"))

    @pytest.mark.asyncio
    async def test_all_checks_pass(self) -> None:
        client, gateway = make_client(
            gateway=MockGateway(
                call_results={
                    (CONTRACT, TOKEN_STATUS_ENTRYPOINT): [1, 7],
                    (USDC, BALANCE_OF_ENTRYPOINT): [100, 0],
                    (USDC, ALLOWANCE_ENTRYPOINT): [100, 0],
                }
            ),
            check_token_support=True,
            check_balance=True,
            check_allowance=True,
        )

        await client.execute_swap(USDC, ETH, SwapOptions(amount="100"))

        assert [c[1] for c in gateway.calls] == [
            TOKEN_STATUS_ENTRYPOINT,
            BALANCE_OF_ENTRYPOINT,
            ALLOWANCE_ENTRYPOINT,
        ]
        assert len(gateway.executed) == 1


class TestEstimateSwapGas:
    @pytest.mark.asyncio
    async def test_fee(self, client: AutoSwappr) -> None:
        assert await client.estimate_swap_gas(USDC, ETH, SwapOptions(amount="1")) == str(
            1_000_000_000_000
        )

    @pytest.mark.asyncio
    async def test_configured_fallback(self) -> None:
        client, _ = make_client(
            gateway=MockGateway(estimate_error=RuntimeError("reverted")),
            fallback_gas_estimate="0x42",
        )
        assert await client.estimate_swap_gas(USDC, ETH, SwapOptions(amount="1")) == "0x42"


class TestEvents:
    def _events(self) -> list:
        return [
            make_swap_event(int(USDC, 16), 1_000_000, int(ETH, 16), 400, int(ACCOUNT, 16),
                            SWAP_SELECTOR, block_number=100),
            make_swap_event(int(ETH, 16), 5, int(USDC, 16), 9, int(ACCOUNT, 16),
                            SWAP_SELECTOR, block_number=105),
            # Different contract, never returned
            make_swap_event(int(ETH, 16), 1, int(USDC, 16), 1, int(ACCOUNT, 16),
                            SWAP_SELECTOR, block_number=101, contract=UNKNOWN_TOKEN),
        ]

    @pytest.mark.asyncio
    async def test_no_handlers_no_query(self) -> None:
        client, gateway = make_client(gateway=MockGateway(events=self._events()))
        assert await client.poll_events() == []
        assert gateway.event_queries == []

    @pytest.mark.asyncio
    async def test_dispatch_and_resume(self) -> None:
        client, gateway = make_client(gateway=MockGateway(events=self._events()))
        received: list[SwapSuccessfulEvent] = []
        client.on_swap_successful(received.append)

        events = await client.poll_events(from_block=0)

        assert len(events) == 2
        assert received == events
        assert received[0].token_from_address == USDC
        assert received[0].token_to_amount == 400
        assert gateway.event_queries[0] == (CONTRACT, [[SWAP_SELECTOR]], 0, None)

        # Next poll resumes after the last seen block
        assert await client.poll_events() == []
        assert gateway.event_queries[1][2] == 106

    @pytest.mark.asyncio
    async def test_unsubscribe(self) -> None:
        client, gateway = make_client(gateway=MockGateway(events=self._events()))
        received: list[SwapSuccessfulEvent] = []
        client.subscribe(SWAP_SUCCESSFUL_EVENT, received.append)
        client.off_swap_successful()

        assert await client.poll_events(from_block=0) == []
        assert received == []

    def test_unknown_event(self, client: AutoSwappr) -> None:
        with pytest.raises(ValueError, match="Unsupported event"):
            client.subscribe("Transfer", lambda event: None)

    @pytest.mark.asyncio
    async def test_fetch_failure_wrapped(self) -> None:
        class FailingGateway(MockGateway):
            async def get_events(self, *args, **kwargs):
                raise ConnectionError("timeout")

        client, _ = make_client(gateway=FailingGateway())
        client.on_swap_successful(lambda event: None)

        with pytest.raises(NetworkFailure, match="Failed to fetch events"):
            await client.poll_events()
