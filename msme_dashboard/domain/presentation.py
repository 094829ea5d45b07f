"""Data shaping - turns a fetched portfolio into chart, card and table rows"""

from typing import List
from msme_dashboard.config import settings
from msme_dashboard.domain.models import (
    ApprovalBadge,
    ChartRow,
    DashboardContext,
    MetricCard,
    MsmeRecord,
    PortfolioMetrics,
    PortfolioPayload,
    TableRow,
)
from msme_dashboard.domain.formatting import (
    format_number,
    format_risk_score,
    format_rupee_lakh,
    format_score_percent,
    get_approval_color,
)


DASHBOARD_TITLE = "MSME Cash Flow Credit Scoring"
DASHBOARD_SUBTITLE = "Addressing India's ₹30 lakh crore credit gap through cash-flow based lending"

TRADITIONAL_MODEL_NAME = "Traditional (Collateral)"
CASHFLOW_MODEL_NAME = "Cash Flow Model"

_BADGE_CLASSES = {
    True: "bg-green-100 text-green-800",
    False: "bg-red-100 text-red-800",
}


def _resolve_cohort_size(cohort_size: int | None) -> int:
    return cohort_size if cohort_size is not None else settings.cohort_size


def build_chart_rows(metrics: PortfolioMetrics, cohort_size: int | None = None) -> List[ChartRow]:
    """
    Build the two bar groups for the approval comparison chart.

    Rejected counts assume every model scored the same fixed cohort:
    rejected = cohort_size - approved. The cohort size is configuration,
    not derived from the payload.
    """
    cohort_size = _resolve_cohort_size(cohort_size)
    return [
        ChartRow(
            name=TRADITIONAL_MODEL_NAME,
            approved=metrics.traditional_approved_count,
            rejected=cohort_size - metrics.traditional_approved_count,
            credit=metrics.traditional_credit_lakh,
        ),
        ChartRow(
            name=CASHFLOW_MODEL_NAME,
            approved=metrics.cashflow_approved_count,
            rejected=cohort_size - metrics.cashflow_approved_count,
            credit=metrics.cashflow_credit_lakh,
        ),
    ]


def build_metric_cards(metrics: PortfolioMetrics, cohort_size: int | None = None) -> List[MetricCard]:
    """Three headline cards: traditional rate, cash-flow rate, extra credit"""
    cohort_size = _resolve_cohort_size(cohort_size)
    return [
        MetricCard(
            title="Traditional Approvals",
            value=f"{format_number(metrics.traditional_approval_rate_pct)}%",
            caption=f"{metrics.traditional_approved_count}/{cohort_size} MSMEs",
            accent="red",
        ),
        MetricCard(
            title="Cash Flow Approvals",
            value=f"{format_number(metrics.cashflow_approval_rate_pct)}%",
            caption=f"{metrics.cashflow_approved_count}/{cohort_size} MSMEs",
            accent="green",
        ),
        MetricCard(
            title="Extra Credit Unlocked",
            value=format_rupee_lakh(metrics.extra_credit_unlocked_lakh),
            caption="Additional financing enabled",
            accent="blue",
        ),
    ]


def build_chart_summary(metrics: PortfolioMetrics) -> str:
    return (
        f"Traditional banks approve {format_number(metrics.traditional_approval_rate_pct)}% "
        f"based on collateral. Cash flow model approves "
        f"{format_number(metrics.cashflow_approval_rate_pct)}%, unlocking "
        f"₹{format_number(metrics.extra_credit_unlocked_lakh)} lakh in additional credit."
    )


def approval_badge(approved: bool) -> ApprovalBadge:
    """Direct boolean mapping: True → green Approved, False → red Rejected"""
    return ApprovalBadge(
        label="Approved" if approved else "Rejected",
        color=get_approval_color(approved),
        css_class=_BADGE_CLASSES[approved],
    )


def build_table_row(record: MsmeRecord) -> TableRow:
    return TableRow(
        business_name=record.business_name,
        age_years=format_number(record.business_age_years),
        monthly_revenue=format_number(record.monthly_revenue_lakhs),
        gst_score=format_score_percent(record.gst_compliance_score),
        risk_score=format_risk_score(record.cashflow_risk_score),
        traditional=approval_badge(record.traditional_approved),
        cashflow=approval_badge(record.cashflow_approved),
    )


def build_table_rows(records: List[MsmeRecord]) -> List[TableRow]:
    """One row per record, payload order preserved (no sorting or filtering)"""
    return [build_table_row(record) for record in records]


def build_dashboard(payload: PortfolioPayload, cohort_size: int | None = None) -> DashboardContext:
    """
    Main entry point: shape a loaded payload for the dashboard template.

    Returns header text, 3 metric cards, 2 chart rows, the chart summary
    sentence, and one table row per MSME.
    """
    metrics = payload.portfolio_metrics

    return DashboardContext(
        title=DASHBOARD_TITLE,
        subtitle=DASHBOARD_SUBTITLE,
        cards=build_metric_cards(metrics, cohort_size),
        chart_rows=build_chart_rows(metrics, cohort_size),
        chart_summary=build_chart_summary(metrics),
        table_rows=build_table_rows(payload.data),
    )
