"""FastAPI application for the AutoSwappr client."""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from autoswappr import __version__
from autoswappr.api.endpoints import router
from autoswappr.errors import AutoSwapprError, ErrorKind

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("AUTOSWAPPR_HOST", "0.0.0.0")
PORT = int(os.environ.get("AUTOSWAPPR_PORT", "8000"))
DEBUG = os.environ.get("AUTOSWAPPR_DEBUG", "false").lower() in ("true", "1", "yes")

# HTTP status per error kind
ERROR_STATUS = {
    ErrorKind.POOL_NOT_FOUND: 404,
    ErrorKind.ZERO_AMOUNT: 400,
    ErrorKind.UNSUPPORTED_TOKEN: 400,
    ErrorKind.INSUFFICIENT_BALANCE: 400,
    ErrorKind.INSUFFICIENT_ALLOWANCE: 400,
    ErrorKind.NETWORK_FAILURE: 502,
    ErrorKind.ESTIMATION_FAILURE: 502,
}

app = FastAPI(
    title="AutoSwappr",
    description="Ekubo manual swaps through the AutoSwappr contract on Starknet",
    version=__version__,
)


@app.exception_handler(AutoSwapprError)
async def autoswappr_error_handler(request: Request, exc: AutoSwapprError) -> JSONResponse:
    """Map typed client errors to HTTP responses."""
    status = ERROR_STATUS.get(exc.kind, 500)
    logger.warning(
        "request_failed",
        path=request.url.path,
        kind=exc.kind.value,
        error=str(exc),
    )
    return JSONResponse(
        status_code=status,
        content={"detail": str(exc), "kind": exc.kind.value, "retryable": exc.retryable},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Malformed addresses or amounts in path parameters."""
    return JSONResponse(status_code=422, content={"detail": str(exc)})


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - AUTOSWAPPR_HOST: Host to bind to (default: 0.0.0.0)
    - AUTOSWAPPR_PORT: Port to bind to (default: 8000)
    - AUTOSWAPPR_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "autoswappr.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
