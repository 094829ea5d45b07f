"""Pytest fixtures for testing"""

import copy
import httpx
import pytest
from typing import Any, Callable, Dict
from fastapi.testclient import TestClient
from msme_dashboard.api.main import create_app
from msme_dashboard.api.dependencies import get_portfolio_client
from msme_dashboard.domain.models import MsmeRecord, PortfolioMetrics, PortfolioPayload
from msme_dashboard.infrastructure.clients.portfolio import PortfolioClient

TEST_API_BASE = "http://portfolio.test"

SAMPLE_METRICS: Dict[str, Any] = {
    "traditional_approved_count": 3,
    "cashflow_approved_count": 8,
    "traditional_approval_rate_pct": 30,
    "cashflow_approval_rate_pct": 80,
    "traditional_credit_lakh": 45,
    "cashflow_credit_lakh": 120,
    "extra_credit_unlocked_lakh": 75,
}


def make_record(name: str, **overrides: Any) -> Dict[str, Any]:
    record = {
        "business_name": name,
        "business_age_years": 4,
        "monthly_revenue_lakhs": 6.5,
        "gst_compliance_score": 0.87,
        "cashflow_risk_score": 3.456,
        "traditional_approved": False,
        "cashflow_approved": True,
    }
    record.update(overrides)
    return record


@pytest.fixture
def sample_payload_json() -> Dict[str, Any]:
    """Raw upstream body: 3/10 traditional vs 8/10 cash-flow approvals"""
    records = [make_record(f"MSME {i}") for i in range(10)]
    records[0] = make_record("Sharma Textiles", traditional_approved=True, gst_compliance_score=1.0)
    records[1] = make_record("Mehta Spices", cashflow_approved=False, cashflow_risk_score=6.48)
    return {"portfolio_metrics": copy.deepcopy(SAMPLE_METRICS), "data": records}


@pytest.fixture
def sample_payload(sample_payload_json: Dict[str, Any]) -> PortfolioPayload:
    """Domain payload matching sample_payload_json"""
    return PortfolioPayload(
        portfolio_metrics=PortfolioMetrics(**sample_payload_json["portfolio_metrics"]),
        data=[MsmeRecord(**record) for record in sample_payload_json["data"]],
    )


@pytest.fixture
def make_portfolio_client() -> Callable[..., PortfolioClient]:
    """Build a PortfolioClient whose upstream is an in-process handler"""

    def _make(handler: Callable[[httpx.Request], Any], **kwargs: Any) -> PortfolioClient:
        return PortfolioClient(
            base_url=TEST_API_BASE,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return _make


@pytest.fixture
def json_portfolio_client(make_portfolio_client, sample_payload_json) -> PortfolioClient:
    """Client whose upstream returns the sample payload"""
    return make_portfolio_client(lambda request: httpx.Response(200, json=sample_payload_json))


@pytest.fixture
def unreachable_portfolio_client(make_portfolio_client) -> PortfolioClient:
    """Client whose upstream resets every connection"""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection reset by peer", request=request)

    return make_portfolio_client(handler)


def _client_for(portfolio_client: PortfolioClient) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_portfolio_client] = lambda: portfolio_client
    return TestClient(app)


@pytest.fixture
def make_test_client() -> Callable[[PortfolioClient], TestClient]:
    """Build a FastAPI test client around a given upstream client"""
    return _client_for


@pytest.fixture
def client(json_portfolio_client: PortfolioClient) -> TestClient:
    """FastAPI test client with a healthy upstream"""
    return _client_for(json_portfolio_client)


@pytest.fixture
def failing_client(unreachable_portfolio_client: PortfolioClient) -> TestClient:
    """FastAPI test client with an unreachable upstream"""
    return _client_for(unreachable_portfolio_client)
