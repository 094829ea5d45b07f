"""Portfolio API HTTP client for fetching the pre-computed MSME portfolio"""

import logging
import httpx
from msme_dashboard.domain.models import MsmeRecord, PortfolioMetrics, PortfolioPayload
from msme_dashboard.domain.exceptions import PortfolioAPIError, InvalidPortfolioDataError
from msme_dashboard.infrastructure.clients.schemas import PortfolioPayloadSchema
from msme_dashboard.config import settings

logger = logging.getLogger(__name__)


class PortfolioClient:
    """Client for the upstream MSME credit-scoring backend"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        cohort_size: int | None = None,
    ):
        self.base_url = (base_url or settings.portfolio_api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.transport = transport
        self.cohort_size = cohort_size if cohort_size is not None else settings.cohort_size

    async def get_sample_portfolio(self) -> PortfolioPayload:
        """
        Fetch the scored sample portfolio with a single GET, no retries.

        Raises:
            PortfolioAPIError: On timeout, transport failure, malformed base URL, or HTTP error status
            InvalidPortfolioDataError: On a non-JSON body or unexpected payload shape
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}/sample-portfolio")
                response.raise_for_status()
                data = response.json()

            except httpx.TimeoutException as e:
                raise PortfolioAPIError(f"Portfolio API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise PortfolioAPIError(f"Portfolio API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise PortfolioAPIError(str(e) or type(e).__name__) from e
            except httpx.InvalidURL as e:
                raise PortfolioAPIError(f"Invalid portfolio API URL: {e}") from e
            except (ValueError, RecursionError) as e:
                raise InvalidPortfolioDataError(f"Portfolio API returned invalid JSON: {e}") from e

        try:
            return self._parse_payload(data)
        except (KeyError, ValueError, TypeError, RecursionError) as e:
            raise InvalidPortfolioDataError(f"Invalid portfolio data: {e}") from e

    def _parse_payload(self, data: object) -> PortfolioPayload:
        """Validate the JSON body and map it onto domain models"""
        parsed = PortfolioPayloadSchema.model_validate(data)
        metrics = parsed.portfolio_metrics

        # Rejected counts are derived as cohort_size - approved
        for name in ("traditional_approved_count", "cashflow_approved_count"):
            count = getattr(metrics, name)
            if count > self.cohort_size:
                raise ValueError(f"{name}={count} exceeds cohort size {self.cohort_size}")

        if len(parsed.data) != self.cohort_size:
            logger.warning(
                "Portfolio size differs from cohort size",
                extra={"record_count": len(parsed.data), "cohort_size": self.cohort_size},
            )

        return PortfolioPayload(
            portfolio_metrics=PortfolioMetrics(**metrics.model_dump()),
            data=[MsmeRecord(**record.model_dump()) for record in parsed.data],
        )
