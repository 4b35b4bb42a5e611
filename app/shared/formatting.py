# app/shared/formatting.py
from decimal import Decimal


def format_amount(amount: Decimal) -> str:
    """Thousands-separated amount, without decimals when they are zero"""
    amount = Decimal(amount)
    if amount == amount.to_integral_value():
        return f"{int(amount):,}"
    return f"{amount:,}"
