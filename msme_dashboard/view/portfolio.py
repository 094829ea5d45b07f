"""Portfolio view - one fetch per mount, rendered from a single state cell"""

import asyncio
import logging
import time
from pathlib import Path
from jinja2 import Environment, FileSystemLoader, select_autoescape

from msme_dashboard.domain.exceptions import InvalidStateTransition, PortfolioAPIError
from msme_dashboard.domain.formatting import APPROVED_COLOR, REJECTED_COLOR
from msme_dashboard.domain.models import FetchState, Loaded, LoadFailed, Loading
from msme_dashboard.domain.presentation import build_dashboard
from msme_dashboard.infrastructure.clients.portfolio import PortfolioClient
from msme_dashboard.infrastructure.observability.metrics import portfolio_fetch_latency_histogram

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

templates = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


def render_state(state: FetchState, cohort_size: int | None = None) -> str:
    """
    Render exactly one of the three full-page states.

    Pure function of the state: Loading and LoadFailed produce a single
    line of text, Loaded produces header, cards, chart and table.
    """
    if isinstance(state, Loading):
        return templates.get_template("loading.html").render()
    if isinstance(state, LoadFailed):
        return templates.get_template("error.html").render(message=state.message)
    if isinstance(state, Loaded):
        dashboard = build_dashboard(state.payload, cohort_size)
        chart_data = [
            {"name": row.name, "Approved": row.approved, "Rejected": row.rejected, "Credit": row.credit}
            for row in dashboard.chart_rows
        ]
        return templates.get_template("dashboard.html").render(
            dashboard=dashboard,
            chart_data=chart_data,
            approved_color=APPROVED_COLOR,
            rejected_color=REJECTED_COLOR,
        )
    raise TypeError(f"Unknown fetch state: {state!r}")


class PortfolioView:
    """
    Owns the FetchState for one page display.

    The state starts as Loading and changes exactly once, to Loaded or
    LoadFailed. The in-flight request is bound to the view: unmount()
    cancels it, and a completion after unmount never touches the state.

    Usage:
        async with PortfolioView(client) as view:
            await view.wait()
            html = view.render()
    """

    def __init__(self, client: PortfolioClient | None = None):
        self.client = client or PortfolioClient()
        self.state: FetchState = Loading()
        self._task: asyncio.Task | None = None
        self._mounted = False

    @property
    def mounted(self) -> bool:
        return self._mounted

    async def load_portfolio(self) -> FetchState:
        """
        Issue the single portfolio request and settle the state.

        Raises:
            InvalidStateTransition: If the state already left Loading
        """
        if not isinstance(self.state, Loading):
            raise InvalidStateTransition(f"Cannot reload from {type(self.state).__name__}")

        start_time = time.perf_counter()
        try:
            payload = await self.client.get_sample_portfolio()
        except PortfolioAPIError as e:
            # Cancelled requests never reach here and are not timed
            portfolio_fetch_latency_histogram.observe(time.perf_counter() - start_time)
            return self._transition(LoadFailed(message=str(e) or type(e).__name__))

        portfolio_fetch_latency_histogram.observe(time.perf_counter() - start_time)
        return self._transition(Loaded(payload=payload))

    def _transition(self, new_state: FetchState) -> FetchState:
        if self._task is not None and not self._mounted:
            # Late completion after teardown
            logger.debug("Discarding portfolio result after unmount")
            return self.state
        self.state = new_state
        return self.state

    def mount(self) -> asyncio.Task:
        """Start the load in the background; a view mounts once"""
        if self._task is not None:
            raise InvalidStateTransition("View already mounted; create a new view to reload")
        self._mounted = True
        self._task = asyncio.create_task(self.load_portfolio())
        return self._task

    async def unmount(self) -> None:
        """Tear down the view, cancelling any in-flight request"""
        self._mounted = False
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

    async def wait(self) -> FetchState:
        """Await the in-flight load and return the settled state"""
        if self._task is None:
            raise InvalidStateTransition("View is not mounted")
        await asyncio.shield(self._task)
        return self.state

    def render(self) -> str:
        return render_state(self.state, self.client.cohort_size)

    async def __aenter__(self) -> "PortfolioView":
        self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.unmount()


async def load_and_render(client: PortfolioClient | None = None) -> tuple[FetchState, str, float]:
    """Mount a fresh view, wait for its single load, and render it"""
    start_time = time.time()
    async with PortfolioView(client) as view:
        state = await view.wait()
        html = view.render()
    duration_ms = (time.time() - start_time) * 1000
    return state, html, duration_ms
