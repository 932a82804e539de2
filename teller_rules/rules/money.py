"""Decimal money helpers."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def as_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert to Decimal without binary float artefacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(amount: Decimal, quantum: Decimal = CENT) -> Decimal:
    return amount.quantize(quantum, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal, currency: str = "LKR") -> str:
    """Render an amount for operator messages, e.g. ``LKR 1,000.00``."""
    return f"{currency} {quantize(amount):,.2f}"
