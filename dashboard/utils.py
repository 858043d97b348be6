"""
Formatting helpers for dashboard values
"""
from decimal import Decimal, InvalidOperation


def format_currency(amount) -> str:
    """Cents (int, Decimal, numeric string or None) -> "$1,234.56"."""
    try:
        cents = Decimal(str(amount if amount is not None else 0))
    except InvalidOperation:
        cents = Decimal(0)
    if not cents.is_finite():
        cents = Decimal(0)
    dollars = cents / 100
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"
