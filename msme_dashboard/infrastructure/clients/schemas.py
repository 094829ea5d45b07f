"""Pydantic schemas validating the upstream portfolio payload"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List

# json.loads accepts Infinity and NaN; the dashboard cannot display them
FINITE_NUMBERS = ConfigDict(allow_inf_nan=False)


class PortfolioMetricsSchema(BaseModel):
    """portfolio_metrics object of GET /sample-portfolio"""

    model_config = FINITE_NUMBERS

    traditional_approved_count: int = Field(..., ge=0)
    cashflow_approved_count: int = Field(..., ge=0)
    traditional_approval_rate_pct: float = Field(..., ge=0, le=100)
    cashflow_approval_rate_pct: float = Field(..., ge=0, le=100)
    traditional_credit_lakh: float = Field(..., ge=0)
    cashflow_credit_lakh: float = Field(..., ge=0)
    extra_credit_unlocked_lakh: float = Field(..., ge=0)


class MsmeRecordSchema(BaseModel):
    """Single entry of the data array"""

    model_config = FINITE_NUMBERS

    business_name: str
    business_age_years: float
    monthly_revenue_lakhs: float
    gst_compliance_score: float = Field(..., ge=0, le=1)
    cashflow_risk_score: float
    traditional_approved: bool
    cashflow_approved: bool


class PortfolioPayloadSchema(BaseModel):
    """Response body of GET /sample-portfolio"""

    model_config = FINITE_NUMBERS

    portfolio_metrics: PortfolioMetricsSchema
    data: List[MsmeRecordSchema]
