"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from msme_dashboard.infrastructure.clients.portfolio import PortfolioClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_portfolio_client() -> PortfolioClient:
    """Provide Portfolio API client instance"""
    return PortfolioClient()
