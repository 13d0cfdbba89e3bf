"""Tests for the Celery product tasks, run eagerly against the test database."""
from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest

from app.models import Product
from app.tasks.product_tasks import apply_expiration_discount, report_expiring_products


@pytest.fixture
def task_session(session_factory):
    """Make the tasks open sessions on the test database."""
    with patch("app.tasks.product_tasks.SessionLocal", session_factory):
        yield


def test_report_expiring_products(db_session, task_session, make_category, make_product):
    """Test the report lists products expiring this month."""
    category = make_category()
    today = date.today()
    soon = make_product(category, name="Soon", expiration_date=today)
    make_product(category, name="Later", expiration_date=today + timedelta(days=400))

    result = report_expiring_products.apply().get()

    assert result == {"status": "success", "count": 1, "product_ids": [soon.id]}


def test_apply_expiration_discount(db_session, task_session, make_category, make_product):
    """Test the task discounts products inside the window."""
    product = make_product(make_category(), expiration_date=date.today() + timedelta(days=40))

    result = apply_expiration_discount.apply(args=(20,)).get()

    assert result == {"status": "success", "percentage": 20, "product_ids": [product.id]}
    db_session.expire_all()
    assert db_session.get(Product, product.id).price == Decimal("8.00")


def test_apply_expiration_discount_nothing_in_window(db_session, task_session, make_category, make_product):
    """Test the task reports when no product is in the window."""
    make_product(make_category(), expiration_date=date.today() + timedelta(days=5))

    result = apply_expiration_discount.apply(args=(20,)).get()

    assert result["status"] == "not_found"


def test_apply_expiration_discount_invalid_percentage(db_session, task_session):
    """Test the task reports an invalid percentage."""
    result = apply_expiration_discount.apply(args=(120,), kwargs={"min_days": 0, "max_days": 10}).get()

    assert result["status"] == "invalid"
