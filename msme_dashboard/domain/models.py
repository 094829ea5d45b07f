"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from typing import List, Union


@dataclass(frozen=True)
class PortfolioMetrics:
    """Aggregate outcome of both scoring models over the cohort"""

    traditional_approved_count: int
    cashflow_approved_count: int
    traditional_approval_rate_pct: float
    cashflow_approval_rate_pct: float
    traditional_credit_lakh: float
    cashflow_credit_lakh: float
    extra_credit_unlocked_lakh: float


@dataclass(frozen=True)
class MsmeRecord:
    """Single scored business from the upstream portfolio"""

    business_name: str
    business_age_years: float
    monthly_revenue_lakhs: float
    gst_compliance_score: float  # 0.0 - 1.0
    cashflow_risk_score: float
    traditional_approved: bool
    cashflow_approved: bool


@dataclass(frozen=True)
class PortfolioPayload:
    """Response body of GET /sample-portfolio"""

    portfolio_metrics: PortfolioMetrics
    data: List[MsmeRecord] = field(default_factory=list)


# Fetch state: exactly one variant is active for a mounted view


@dataclass(frozen=True)
class Loading:
    """Request in flight"""


@dataclass(frozen=True)
class LoadFailed:
    """Request failed; message is shown verbatim"""

    message: str


@dataclass(frozen=True)
class Loaded:
    """Payload fetched and validated"""

    payload: PortfolioPayload


FetchState = Union[Loading, LoadFailed, Loaded]


# Derived presentation models


@dataclass(frozen=True)
class ChartRow:
    """One bar group in the approval comparison chart"""

    name: str
    approved: int
    rejected: int
    credit: float


@dataclass(frozen=True)
class MetricCard:
    """Headline number shown above the chart"""

    title: str
    value: str
    caption: str
    accent: str  # red | green | blue


@dataclass(frozen=True)
class ApprovalBadge:
    """Approved/Rejected pill for one scoring model"""

    label: str
    color: str
    css_class: str


@dataclass(frozen=True)
class TableRow:
    """Formatted cells for one MSME"""

    business_name: str
    age_years: str
    monthly_revenue: str
    gst_score: str
    risk_score: str
    traditional: ApprovalBadge
    cashflow: ApprovalBadge


@dataclass(frozen=True)
class DashboardContext:
    """Everything the loaded dashboard template needs"""

    title: str
    subtitle: str
    cards: List[MetricCard]
    chart_rows: List[ChartRow]
    chart_summary: str
    table_rows: List[TableRow]
