"""HTTP API for the AutoSwappr client."""
