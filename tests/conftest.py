"""Pytest configuration and fixtures."""

import pytest

from autoswappr.client import AutoSwappr
from autoswappr.gateway.mock import MockGateway
from autoswappr.pools import PoolRegistry, get_default_registry
from tests.helpers import make_client


@pytest.fixture
def registry() -> PoolRegistry:
    """Return the built-in mainnet registry."""
    return get_default_registry()


@pytest.fixture
def gateway() -> MockGateway:
    """Return a fresh mock gateway."""
    return MockGateway()


@pytest.fixture
def client(gateway: MockGateway) -> AutoSwappr:
    """Return a client bound to the mock gateway."""
    swap_client, _ = make_client(gateway=gateway)
    return swap_client
