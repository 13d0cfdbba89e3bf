"""Tests for discount arithmetic and date windows."""
from datetime import date
from decimal import Decimal

import pytest

from app.exceptions import InvalidArgumentError
from app.services.pricing import (
    discounted_price,
    expiration_window,
    month_bounds,
    validate_percentage,
)


@pytest.mark.parametrize("price, percentage, expected", [
    ("10.00", 20, "8.00"),
    ("8.00", 20, "6.40"),
    ("19.99", 15, "16.99"),  # 16.9915
    ("0.05", 50, "0.03"),  # 0.025 rounds half-up
    ("123456.78", 10, "111111.10"),
])
def test_discounted_price(price, percentage, expected):
    """Test the discounted price is rounded half-up to the cent."""
    assert discounted_price(Decimal(price), percentage) == Decimal(expected)


def test_zero_percent_keeps_price():
    """Test a zero percent discount leaves the price unchanged."""
    assert discounted_price(Decimal("12.34"), 0) == Decimal("12.34")


def test_hundred_percent_makes_price_zero():
    """Test a full discount brings the price to zero."""
    result = discounted_price(Decimal("12.34"), 100)

    assert result == Decimal("0.00")
    assert str(result) == "0.00"


def test_discount_accepts_float_prices():
    """Float prices are converted through their string form, not their binary value."""
    assert discounted_price(2.675, 0) == Decimal("2.68")


@pytest.mark.parametrize("percentage", [-1, 101, -100, 1000])
def test_out_of_range_percentage_rejected(percentage):
    """Test percentages outside 0..100 are rejected."""
    with pytest.raises(InvalidArgumentError):
        validate_percentage(percentage)

    with pytest.raises(InvalidArgumentError):
        discounted_price(Decimal("10.00"), percentage)


@pytest.mark.parametrize("percentage", [0, 1, 50, 100])
def test_boundary_percentages_accepted(percentage):
    """Test the 0 and 100 bounds are accepted."""
    assert validate_percentage(percentage) == Decimal(percentage)


@pytest.mark.parametrize("today, first, last", [
    (date(2024, 2, 10), date(2024, 2, 1), date(2024, 2, 29)),  # leap year
    (date(2023, 2, 28), date(2023, 2, 1), date(2023, 2, 28)),
    (date(2024, 12, 31), date(2024, 12, 1), date(2024, 12, 31)),
    (date(2024, 4, 1), date(2024, 4, 1), date(2024, 4, 30)),
])
def test_month_bounds(today, first, last):
    """Test the first and last day of the current month."""
    assert month_bounds(today) == (first, last)


def test_expiration_window_offsets_from_today():
    """Test the window is offset from today by the given days."""
    assert expiration_window(date(2024, 1, 15), 30, 60) == (date(2024, 2, 14), date(2024, 3, 15))


def test_expiration_window_zero_days_is_today_only():
    """Test a zero-day window covers only today."""
    today = date(2024, 6, 1)
    assert expiration_window(today, 0, 0) == (today, today)
