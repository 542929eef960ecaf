"""Unit tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from autoswappr import __version__
from autoswappr.api.endpoints import get_client
from autoswappr.api.main import app
from autoswappr.constants import MIN_SQRT_RATIO
from autoswappr.gateway.mock import MockGateway
from tests.helpers import ACCOUNT, CONTRACT, ETH, UNKNOWN_TOKEN, USDC, make_client


def swap_body(amount: str | None = "1000000", token_in: str = USDC, token_out: str = ETH) -> dict:
    options = {} if amount is None else {"amount": amount}
    return {"tokenIn": token_in, "tokenOut": token_out, "options": options}


@pytest.fixture
def mock_gateway() -> MockGateway:
    return MockGateway(fee=3_000_000_000_000)


@pytest.fixture
def api(mock_gateway: MockGateway):
    """TestClient with the client dependency bound to a mock gateway."""
    swap_client, _ = make_client(gateway=mock_gateway)
    app.dependency_overrides[get_client] = lambda: swap_client
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, api: TestClient) -> None:
        response = api.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}


class TestLookups:
    def test_token(self, api: TestClient) -> None:
        response = api.get(f"/tokens/{USDC}")
        assert response.status_code == 200
        assert response.json()["symbol"] == "USDC"
        assert response.json()["decimals"] == 6

    def test_unknown_token(self, api: TestClient) -> None:
        assert api.get(f"/tokens/{UNKNOWN_TOKEN}").status_code == 404

    def test_pool_either_order(self, api: TestClient) -> None:
        forward = api.get(f"/pools/{ETH}/{USDC}")
        backward = api.get(f"/pools/{USDC}/{ETH}")
        assert forward.status_code == 200
        assert forward.json() == backward.json()
        assert forward.json()["token0"] == ETH
        assert forward.json()["sqrtRatioLimit"] == str(MIN_SQRT_RATIO)

    def test_pool_not_found(self, api: TestClient) -> None:
        response = api.get(f"/pools/{ETH}/{UNKNOWN_TOKEN}")
        assert response.status_code == 404
        assert response.json()["kind"] == "pool_not_found"
        assert response.json()["retryable"] is False

    def test_malformed_address(self, api: TestClient) -> None:
        assert api.get(f"/pools/{ETH}/not-hex").status_code == 422


class TestBuild:
    def test_build(self, api: TestClient, mock_gateway: MockGateway) -> None:
        response = api.post("/swap/build", json=swap_body())

        assert response.status_code == 200
        data = response.json()
        assert data["swapData"]["params"]["is_token1"] is True
        assert data["swapData"]["caller"] == ACCOUNT
        assert [c["entrypoint"] for c in data["calls"]] == ["approve", "ekubo_manual_swap"]
        assert data["calls"][0]["contractAddress"] == USDC
        assert data["calls"][1]["contractAddress"] == CONTRACT
        assert mock_gateway.executed == []

    def test_build_unknown_pair(self, api: TestClient) -> None:
        response = api.post("/swap/build", json=swap_body(token_out=UNKNOWN_TOKEN))
        assert response.status_code == 404

    def test_invalid_body(self, api: TestClient) -> None:
        response = api.post("/swap/build", json=swap_body(amount="-1"))
        assert response.status_code == 422


class TestEstimate:
    def test_estimate(self, api: TestClient) -> None:
        response = api.post("/swap/estimate", json=swap_body())
        assert response.status_code == 200
        assert response.json() == {"estimate": "3000000000000"}

    def test_estimate_fallback(self, api: TestClient, mock_gateway: MockGateway) -> None:
        mock_gateway.estimate_error = RuntimeError("reverted")
        response = api.post("/swap/estimate", json=swap_body())
        assert response.status_code == 200
        assert response.json() == {"estimate": "0x100000000000000"}


class TestSubmit:
    def test_submit(self, api: TestClient, mock_gateway: MockGateway) -> None:
        response = api.post("/swap/submit", json=swap_body())
        assert response.status_code == 200
        assert response.json() == {"transactionHash": "0xabc001"}
        assert len(mock_gateway.executed) == 1

    def test_request_log_uses_short_addresses(self, api: TestClient, capsys) -> None:
        api.post("/swap/submit", json=swap_body())

        output = capsys.readouterr().out
        assert "swap_request_received" in output
        assert USDC[-8:] in output
        assert USDC not in output

    @pytest.mark.parametrize("amount", ["0", None])
    def test_zero_amount(self, api: TestClient, mock_gateway: MockGateway, amount: str | None) -> None:
        response = api.post("/swap/submit", json=swap_body(amount=amount))
        assert response.status_code == 400
        assert response.json()["kind"] == "zero_amount"
        assert mock_gateway.executed == []

    def test_network_failure(self, api: TestClient, mock_gateway: MockGateway) -> None:
        mock_gateway.execute_error = ConnectionError("node unreachable")
        response = api.post("/swap/submit", json=swap_body())
        assert response.status_code == 502
        body = response.json()
        assert body["kind"] == "network_failure"
        assert body["retryable"] is True
        assert "node unreachable" in body["detail"]
