"""Number formatting and colour helpers for the dashboard display"""

from decimal import Decimal, ROUND_HALF_UP, localcontext

APPROVED_COLOR = "#10b981"
REJECTED_COLOR = "#ef4444"


def format_number(value: float) -> str:
    """
    Print a payload number as given: integral values without a decimal point.

    e.g. 30 → "30", 30.0 → "30", 12.5 → "12.5"
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _round_half_up(value: Decimal, exponent: str) -> Decimal:
    # quantize needs room for every integer digit plus the kept decimals
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(Decimal(exponent), rounding=ROUND_HALF_UP)


def format_score_percent(score: float) -> str:
    """
    Render a [0, 1] score as a whole percentage, rounding half up.

    e.g. 0.87 → "87%", 1.0 → "100%"
    """
    pct = _round_half_up(Decimal(str(score)) * 100, "1")
    return f"{pct}%"


def format_risk_score(score: float) -> str:
    """Round half up to one decimal: 3.456 → "3.5", 3.45 → "3.5" """
    return str(_round_half_up(Decimal(str(score)), "0.1"))


def format_rupee_lakh(value: float) -> str:
    """75 → "₹75L" """
    return f"₹{format_number(value)}L"


def get_approval_color(approved: bool) -> str:
    return "green" if approved else "red"
