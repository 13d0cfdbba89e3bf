"""
Price and date arithmetic shared by the product service.

Prices are fixed-point decimals with two places; every discounted price is
rounded half-up to the cent. Date windows are inclusive calendar ranges.
"""
import calendar
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple, Union

from app.exceptions import InvalidArgumentError

CENT = Decimal("0.01")
HUNDRED = Decimal(100)

Number = Union[int, float, Decimal, str]


def validate_percentage(percentage: Number) -> Decimal:
    """
    Check that a discount percentage lies in [0, 100].

    Returns:
        The percentage as a Decimal

    Raises:
        InvalidArgumentError: If the percentage is out of range
    """
    value = Decimal(str(percentage))
    if value < 0 or value > HUNDRED:
        raise InvalidArgumentError(
            f"Invalid discount percentage: {percentage}. Must be between 0 and 100"
        )
    return value


def discounted_price(price: Number, percentage: Number) -> Decimal:
    """
    Apply a percentage discount to a price.

    Computes ``round2(price * (1 - percentage / 100))``, rounding half-up.
    """
    factor = 1 - validate_percentage(percentage) / HUNDRED
    return (Decimal(str(price)) * factor).quantize(CENT, rounding=ROUND_HALF_UP)


def month_bounds(today: date) -> Tuple[date, date]:
    """Return the first and last day of the month containing ``today``."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def expiration_window(today: date, min_days: int, max_days: int) -> Tuple[date, date]:
    """
    Return the inclusive date range ``[today + min_days, today + max_days]``.

    Both ends are whole days, so a product expiring on either boundary date
    falls inside the window.
    """
    return today + timedelta(days=min_days), today + timedelta(days=max_days)
