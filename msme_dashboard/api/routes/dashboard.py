"""GET / - MSME portfolio dashboard page"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from msme_dashboard.api.dependencies import get_portfolio_client, get_request_id
from msme_dashboard.domain.models import Loaded
from msme_dashboard.infrastructure.clients.portfolio import PortfolioClient
from msme_dashboard.infrastructure.observability.logging import log_portfolio_load
from msme_dashboard.infrastructure.observability.metrics import record_portfolio_load
from msme_dashboard.view.portfolio import load_and_render

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def portfolio_dashboard(
    request: Request,
    portfolio_client: PortfolioClient = Depends(get_portfolio_client),
):
    """
    Render the portfolio dashboard.

    Flow:
    1. Mount a fresh view (one upstream request)
    2. Wait for the request to settle into Loaded or LoadFailed
    3. Render that single state; the view is torn down before responding
    """
    request_id = get_request_id(request)

    state, html, duration_ms = await load_and_render(portfolio_client)

    record_portfolio_load(state)
    if isinstance(state, Loaded):
        log_portfolio_load(request_id, "loaded", len(state.payload.data), duration_ms)
        return HTMLResponse(content=html, status_code=200)

    log_portfolio_load(request_id, "failed", 0, duration_ms, error=state.message)
    return HTMLResponse(content=html, status_code=502)
