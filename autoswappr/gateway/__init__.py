"""Network gateways.

- Gateway: protocol the client depends on
- MockGateway: in-memory implementation for tests
- StarknetGateway: starknet-py backed implementation
"""

from .base import Gateway
from .mock import MockGateway
from .starknet import StarknetGateway

__all__ = ["Gateway", "MockGateway", "StarknetGateway"]
