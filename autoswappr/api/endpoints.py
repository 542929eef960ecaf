"""API endpoints for the AutoSwappr client."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from autoswappr.client import AutoSwappr, get_default_client
from autoswappr.models.swap import SwapOptions
from autoswappr.models.types import Address, short_address
from autoswappr.pools.types import PoolConfig

logger = structlog.get_logger()

router = APIRouter()


class SwapBody(BaseModel):
    """Request body shared by the swap endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    options: SwapOptions


def get_client() -> AutoSwappr:
    """Dependency provider for the client instance.

    Override this in tests to inject a client with a mock gateway:
        app.dependency_overrides[get_client] = lambda: client

    Returns:
        The client instance to serve requests with.
    """
    return get_default_client()


def _pool_to_dict(pool: PoolConfig) -> dict[str, Any]:
    return {
        "token0": pool.token0,
        "token1": pool.token1,
        "fee": str(pool.fee),
        "tickSpacing": pool.tick_spacing,
        "extension": pool.extension,
        "sqrtRatioLimit": str(pool.sqrt_ratio_limit) if pool.sqrt_ratio_limit is not None else None,
    }


@router.get("/tokens/{address}")
async def get_token(address: str, client: AutoSwappr = Depends(get_client)) -> dict[str, Any]:
    """Static metadata for a token address."""
    token = client.get_token_info(address)
    if token is None:
        raise HTTPException(status_code=404, detail=f"Unknown token: {address}")
    return {
        "symbol": token.symbol,
        "name": token.name,
        "address": token.address,
        "decimals": token.decimals,
    }


@router.get("/pools/{token_a}/{token_b}")
async def get_pool(
    token_a: str,
    token_b: str,
    client: AutoSwappr = Depends(get_client),
) -> dict[str, Any]:
    """Pool configuration for a pair (either order)."""
    return _pool_to_dict(client.registry.lookup(token_a, token_b))


@router.post("/swap/build")
async def build_swap(body: SwapBody, client: AutoSwappr = Depends(get_client)) -> dict[str, Any]:
    """Build the swap request and the two calls without submitting."""
    request, calls = client.assembler.compile_calls(body.token_in, body.token_out, body.options)
    return {
        "swapData": request.to_dict(),
        "calls": [call.to_dict() for call in calls],
    }


@router.post("/swap/estimate")
async def estimate_swap(
    body: SwapBody,
    client: AutoSwappr = Depends(get_client),
) -> dict[str, str]:
    """Estimated fee for the swap (fallback value if simulation fails)."""
    estimate = await client.estimate_swap_gas(body.token_in, body.token_out, body.options)
    return {"estimate": estimate}


@router.post("/swap/submit")
async def submit_swap(body: SwapBody, client: AutoSwappr = Depends(get_client)) -> dict[str, str]:
    """Submit approve + swap as one transaction."""
    logger.info(
        "swap_request_received",
        token_in=short_address(body.token_in),
        token_out=short_address(body.token_out),
        amount=body.options.amount,
    )
    handle = await client.execute_swap(body.token_in, body.token_out, body.options)
    return {"transactionHash": handle.transaction_hash}
