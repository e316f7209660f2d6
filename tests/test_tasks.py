"""Tests for the low-stock background task."""
from kombu.exceptions import OperationalError

from inventory_api.models.product import ProductCategory
from inventory_api.repositories.product_repository import ProductRepository
from inventory_api.tasks.stock_tasks import check_low_stock, schedule_low_stock_check


def _make_product(db, stock, min_stock):
    return ProductRepository(db).create({
        "name": "Envelope C5",
        "category": ProductCategory.PAPER,
        "unit": "box",
        "price": 4.0,
        "cost": 2.0,
        "stock": stock,
        "min_stock": min_stock,
    })


def test_low_stock_detected(db_session):
    product = _make_product(db_session, stock=2, min_stock=5)

    result = check_low_stock(product.id)

    assert result["status"] == "low_stock"
    assert result["stock"] == 2
    assert result["min_stock"] == 5


def test_stock_ok(db_session):
    product = _make_product(db_session, stock=20, min_stock=5)

    assert check_low_stock(product.id)["status"] == "ok"


def test_missing_product_skipped(db_session):
    assert check_low_stock("missing")["status"] == "skipped"


def test_schedule_survives_broker_outage(low_stock_task):
    low_stock_task.side_effect = OperationalError("broker unreachable")

    schedule_low_stock_check("p1")

    low_stock_task.assert_called_once_with("p1")
