"""
Mock MSME credit backend serving stub portfolios.

Scenario files live in portfolio_stub/ as <scenario>_portfolio.json.
Environment:
    MOCK_PORTFOLIO_SCENARIO   stub to serve (default "sample")
    MOCK_PORTFOLIO_DELAY      seconds to stall before answering, e.g. to
                              mimic a cold-starting backend (default 0)
"""

import asyncio
import os
from pathlib import Path
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

# Docker mounts the stubs at /portfolio_stub
DEFAULT_STUB_DIR = (
    Path("/portfolio_stub") if os.path.exists("/portfolio_stub")
    else Path(__file__).resolve().parents[2] / "portfolio_stub"
)


def create_app(
    stub_dir: Path = DEFAULT_STUB_DIR,
    scenario: str | None = None,
    delay_seconds: float | None = None,
) -> FastAPI:
    """Create the mock backend for one stub scenario"""
    scenario = scenario or os.getenv("MOCK_PORTFOLIO_SCENARIO", "sample")
    if delay_seconds is None:
        delay_seconds = float(os.getenv("MOCK_PORTFOLIO_DELAY", "0"))
    stub_file = stub_dir / f"{scenario}_portfolio.json"

    app = FastAPI(title="Mock Portfolio Server", version="1.0.0")

    @app.get("/health")
    def health():
        return {"status": "ok", "scenario": scenario}

    @app.get("/sample-portfolio")
    async def sample_portfolio():
        if delay_seconds > 0:
            await asyncio.sleep(delay_seconds)
        if not stub_file.exists():
            # A missing stub stands in for an unavailable backend
            raise HTTPException(status_code=503, detail=f"no stub for scenario '{scenario}'")
        # Served byte-for-byte so malformed stubs reach the client unchanged
        return Response(content=stub_file.read_bytes(), media_type="application/json")

    return app


app = create_app()
