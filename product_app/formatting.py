# product_app/formatting.py

"""
Display formatting for prices and timestamps (Indonesian conventions).
Only used when rendering; stored prices keep full precision.
"""
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

# Python's grouping output is en-US style; Indonesian swaps both separators.
_ID_SEPARATORS = str.maketrans({",": ".", ".": ","})


def format_price(value: float, fraction_digits: int = 2) -> str:
    """
    Group thousands with '.' and use ',' for decimals.
    Halves round away from zero, as browsers' locale formatting does.

    >>> format_price(12500.5)
    '12.500,50'
    >>> format_price(2.5, fraction_digits=0)
    '3'
    """
    # str() first so 0.125 rounds as written rather than as its binary value
    amount = Decimal(str(float(value))).quantize(
        Decimal(1).scaleb(-fraction_digits), rounding=ROUND_HALF_UP
    )
    return f"{amount:,.{fraction_digits}f}".translate(_ID_SEPARATORS)


def format_currency(value: float, prefix: str = "Rp", fraction_digits: int = 2) -> str:
    return f"{prefix} {format_price(value, fraction_digits)}"


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%d/%m/%Y %H:%M:%S")
