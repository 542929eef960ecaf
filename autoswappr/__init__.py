"""AutoSwappr client - Ekubo manual swaps on Starknet."""

from autoswappr.client import AutoSwappr
from autoswappr.config import AutoSwapprConfig
from autoswappr.models.swap import SwapOptions

__version__ = "0.1.0"
__all__ = ["AutoSwappr", "AutoSwapprConfig", "SwapOptions", "__version__"]
