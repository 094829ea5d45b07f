"""Unit tests for dashboard data shaping"""

import pytest
from msme_dashboard.config import settings
from msme_dashboard.domain.models import MsmeRecord, PortfolioMetrics, PortfolioPayload
from msme_dashboard.domain.presentation import (
    approval_badge,
    build_chart_rows,
    build_chart_summary,
    build_dashboard,
    build_metric_cards,
    build_table_rows,
)


def _metrics(**overrides) -> PortfolioMetrics:
    values = dict(
        traditional_approved_count=3,
        cashflow_approved_count=8,
        traditional_approval_rate_pct=30,
        cashflow_approval_rate_pct=80,
        traditional_credit_lakh=45,
        cashflow_credit_lakh=120,
        extra_credit_unlocked_lakh=75,
    )
    values.update(overrides)
    return PortfolioMetrics(**values)


def test_build_chart_rows_end_to_end_scenario():
    """Traditional{3, 7} and Cash Flow{8, 2} with their credit amounts"""
    rows = build_chart_rows(_metrics())

    assert len(rows) == 2
    traditional, cashflow = rows

    assert traditional.name == "Traditional (Collateral)"
    assert (traditional.approved, traditional.rejected, traditional.credit) == (3, 7, 45)

    assert cashflow.name == "Cash Flow Model"
    assert (cashflow.approved, cashflow.rejected, cashflow.credit) == (8, 2, 120)


@pytest.mark.parametrize("approved", [0, 5, 10])
def test_build_chart_rows_rejected_complements_cohort(approved: int):
    """Rejected = 10 - Approved for both models"""
    rows = build_chart_rows(_metrics(traditional_approved_count=approved, cashflow_approved_count=approved))

    for row in rows:
        assert row.approved + row.rejected == 10
        assert row.rejected == 10 - approved


def test_build_chart_rows_custom_cohort_size():
    rows = build_chart_rows(_metrics(), cohort_size=20)
    assert [row.rejected for row in rows] == [17, 12]


def test_build_metric_cards_end_to_end_scenario():
    """Cards read 30%, 80% and ₹75L"""
    cards = build_metric_cards(_metrics())

    assert [card.value for card in cards] == ["30%", "80%", "₹75L"]
    assert [card.title for card in cards] == [
        "Traditional Approvals",
        "Cash Flow Approvals",
        "Extra Credit Unlocked",
    ]
    assert cards[0].caption == "3/10 MSMEs"
    assert cards[1].caption == "8/10 MSMEs"
    assert [card.accent for card in cards] == ["red", "green", "blue"]


def test_build_metric_cards_float_payload_values():
    """Float payload values that are integral print without a decimal point"""
    cards = build_metric_cards(
        _metrics(traditional_approval_rate_pct=30.0, extra_credit_unlocked_lakh=62.5)
    )
    assert cards[0].value == "30%"
    assert cards[2].value == "₹62.5L"


def test_build_chart_summary():
    summary = build_chart_summary(_metrics())
    assert "approve 30% based on collateral" in summary
    assert "approves 80%" in summary
    assert "₹75 lakh" in summary


def test_approval_badge_mapping():
    approved = approval_badge(True)
    assert approved.label == "Approved"
    assert approved.color == "green"
    assert "green" in approved.css_class

    rejected = approval_badge(False)
    assert rejected.label == "Rejected"
    assert rejected.color == "red"
    assert "red" in rejected.css_class


def test_build_table_rows_preserves_order_and_formats_cells():
    records = [
        MsmeRecord("Zeta Foods", 7, 12.5, 0.87, 3.456, False, True),
        MsmeRecord("Alpha Metals", 2.5, 3, 1.0, 1.0, True, False),
    ]

    rows = build_table_rows(records)

    # Payload order, no sorting
    assert [row.business_name for row in rows] == ["Zeta Foods", "Alpha Metals"]

    zeta, alpha = rows
    assert zeta.age_years == "7"
    assert zeta.monthly_revenue == "12.5"
    assert zeta.gst_score == "87%"
    assert zeta.risk_score == "3.5"
    assert zeta.traditional.label == "Rejected"
    assert zeta.cashflow.label == "Approved"

    assert alpha.age_years == "2.5"
    assert alpha.gst_score == "100%"
    assert alpha.risk_score == "1.0"
    assert alpha.traditional.color == "green"
    assert alpha.cashflow.color == "red"


def test_build_dashboard_counts(sample_payload: PortfolioPayload):
    """3 cards, 2 chart rows, one table row per record"""
    dashboard = build_dashboard(sample_payload)

    assert dashboard.title == "MSME Cash Flow Credit Scoring"
    assert len(dashboard.cards) == 3
    assert len(dashboard.chart_rows) == 2
    assert len(dashboard.table_rows) == len(sample_payload.data)
    assert [row.business_name for row in dashboard.table_rows] == [
        record.business_name for record in sample_payload.data
    ]


def test_build_dashboard_empty_portfolio():
    dashboard = build_dashboard(PortfolioPayload(portfolio_metrics=_metrics(), data=[]))
    assert dashboard.table_rows == []
    assert len(dashboard.chart_rows) == 2


def test_cohort_size_defaults_to_settings(monkeypatch):
    monkeypatch.setattr(settings, "cohort_size", 20)

    rows = build_chart_rows(_metrics())
    cards = build_metric_cards(_metrics())

    assert [row.rejected for row in rows] == [17, 12]
    assert cards[0].caption == "3/20 MSMEs"


def test_explicit_zero_cohort_size_is_kept():
    metrics = _metrics(traditional_approved_count=0, cashflow_approved_count=0)

    rows = build_chart_rows(metrics, cohort_size=0)
    cards = build_metric_cards(metrics, cohort_size=0)

    assert [row.rejected for row in rows] == [0, 0]
    assert cards[1].caption == "0/0 MSMEs"
